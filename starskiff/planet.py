"""Planets: round bodies whose size follows their mass."""

from __future__ import annotations

import copy
import logging
import math

from .collider import Collider
from .color_palette import random_color
from .ecs import App, AppState, Name, World
from .geometry import Transform, Vec2, Vec3
from .graphic import Mesh2d, MeshMaterial2d
from .health import Health, Mass
from .primitive import Circle
from .space import Gravitated, GravitySource
from .velocity import Velocity

log = logging.getLogger(__name__)

_MASS_PER_RADIUS = 100.0
_PLANET_HEALTH = 1000.0


def determine_radius(mass: Mass) -> float:
    """Radius grows by one for every full hundred units of mass."""
    radius = float(math.trunc(mass.value / _MASS_PER_RADIUS)) + 1.0
    log.info("radius is %s", radius)
    return radius


def make_planet(world: World, transform: Transform, mass: Mass, velocity: Velocity) -> int:
    """Spawn a randomly coloured planet sized by ``mass``."""
    radius = determine_radius(mass)
    return world.spawn(
        Name("Planet"),
        transform,
        copy.deepcopy(velocity),
        GravitySource(),
        Gravitated(),
        MeshMaterial2d(random_color()),
        Mesh2d(Circle(radius)),
        Collider.new_circle(radius),
        Health.full(_PLANET_HEALTH),
    )


def setup_planets(world: World) -> list[int]:
    """Spawn the two starting planets."""
    return [
        make_planet(
            world,
            Transform.from_translation(Vec3(-50.0, 0.0, 0.0)),
            Mass(10.0),
            Velocity(Vec2(0.0, -10.0)),
        ),
        make_planet(
            world,
            Transform.from_translation(Vec3(100.0, 0.0, 0.0)),
            Mass(100.0),
            Velocity(Vec2(-10.0, 0.0)),
        ),
    ]


def build(app: App) -> None:
    app.add_on_enter(AppState.GAME_READY, setup_planets)