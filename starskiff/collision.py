"""Pairwise collision detection between collider entities."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any

from .collider import Collider
from .ecs import App, SystemUpdateSet, UpdateSchedule, World
from .geometry import GlobalTransform


@dataclass(frozen=True)
class CollisionEvent:
    first: int
    second: int

    def has_component(self, world: World, component_type: type) -> tuple[bool, bool]:
        return world.has(self.first, component_type), world.has(self.second, component_type)

    def get_component(self, world: World, component_type: type) -> tuple[Any, Any]:
        return world.get(self.first, component_type), world.get(self.second, component_type)


def has_collided(collider1: Collider, collider2: Collider) -> bool:
    return collider1.volume.intersects(collider2.volume)


def determine_collisions(world: World) -> None:
    bodies = list(world.query(Collider, GlobalTransform))
    for (e1, c1, g1), (e2, c2, g2) in itertools.combinations(bodies, 2):
        if has_collided(
            c1.convert_to_global(g1.translation), c2.convert_to_global(g2.translation)
        ):
            world.send(CollisionEvent(e1, e2))


def build(app: App) -> None:
    app.add_system(UpdateSchedule.UPDATE, determine_collisions, SystemUpdateSet.MAIN)