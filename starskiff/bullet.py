"""Bullets and what happens when they hit."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .collision import CollisionEvent
from .color_palette import Color, PalColor
from .ecs import App, AppState, SystemUpdateSet, UpdateSchedule, World
from .health import Damage, Health
from .lifetime import Lifetime
from .primitive import Circle, Primitive
from .velocity import Velocity

log = logging.getLogger(__name__)


class BulletType(Enum):
    LASER = "Laser"
    MISSILE = "Missile"


@dataclass
class BulletData:
    """Carried by a gun and copied onto each bullet it fires."""

    bullet_type: BulletType
    speed: float
    damage: float


@dataclass
class Bullet:
    bullet_data: BulletData
    shooter: int
    """Top-level entity that fired; its own hierarchy is never hit."""


@dataclass
class BulletAssets:
    meshes: dict[BulletType, Primitive] = field(default_factory=dict)
    materials: dict[BulletType, Color] = field(default_factory=dict)


def setup_bullet_assets(world: World) -> None:
    world.insert_resource(
        BulletAssets(
            meshes={BulletType.LASER: Circle(2.0), BulletType.MISSILE: Circle(3.0)},
            materials={
                BulletType.LASER: PalColor.RED.color(),
                BulletType.MISSILE: PalColor.WHITE.color(),
            },
        )
    )


def apply_bullet_hit(world: World, bullet_entity: int, bullet: Bullet, other: int) -> None:
    """Destroy the bullet and damage ``other``, unless ``other`` belongs to the shooter."""
    if bullet.shooter == other or other in world.children(bullet.shooter):
        return
    world.despawn(bullet_entity)
    log.info("bullet collided w/ entity %s!", other)
    if world.has(other, Health):
        world.insert(other, Damage(bullet.bullet_data.damage))


def bullet_collide(world: World) -> None:
    hits = [(event, event.get_component(world, Bullet)) for event in world.events(CollisionEvent)]
    for event, (first, second) in hits:
        if first is not None and second is not None:
            world.despawn(event.first)
            world.despawn(event.second)
            log.info("bullet collided w/ bullet!")
        elif first is not None:
            apply_bullet_hit(world, event.first, first, event.second)
        elif second is not None:
            apply_bullet_hit(world, event.second, second, event.first)


def _require_for_bullet(world: World, entity: int) -> None:
    if not world.has(entity, Velocity):
        world.insert(entity, Velocity())
    if not world.has(entity, Lifetime):
        world.insert(entity, Lifetime())


def build(app: App) -> None:
    app.add_on_enter(AppState.GAME_READY, setup_bullet_assets)
    app.add_system(UpdateSchedule.UPDATE, bullet_collide, SystemUpdateSet.MAIN)
    app.world.on_add(Bullet, _require_for_bullet)