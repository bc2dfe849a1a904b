"""Gravity between bodies."""

from __future__ import annotations

from dataclasses import dataclass

from .ecs import App, SystemUpdateSet, Time, UpdateSchedule, World
from .geometry import Transform, Vec2
from .health import Mass
from .velocity import Velocity


@dataclass
class Gravitated:
    """Marks an entity affected by gravity."""


@dataclass
class GravitySource:
    """Marks an entity that attracts others."""


@dataclass
class GravityConst:
    value: float = 0.0


def apply_gravity(world: World) -> None:
    """Accelerate every gravitated body toward every gravity source."""
    gravity = world.resource(GravityConst).value
    delta = world.resource(Time).delta
    sources = [
        (transform.translation, transform.rotation, mass.value)
        for _, transform, mass, _ in world.query(Transform, Mass, GravitySource)
    ]
    for translation, rotation, mass in sources:
        for _, transform, velocity, _ in world.query(Transform, Velocity, Gravitated):
            if transform.translation == translation and transform.rotation == rotation:
                continue
            distance_squared = translation.distance_squared(transform.translation)
            if distance_squared == 0.0:
                continue
            acceleration = gravity * mass / distance_squared
            direction = (translation.xy() - transform.translation.xy()).normalize_or(Vec2())
            velocity.value = velocity.value + direction * acceleration * delta


def build(app: App) -> None:
    app.add_system(UpdateSchedule.UPDATE, apply_gravity, SystemUpdateSet.MAIN)
    app.world.insert_resource(GravityConst(100.0))