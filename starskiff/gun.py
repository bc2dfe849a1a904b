"""Guns that fire bullets."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .bullet import Bullet, BulletAssets, BulletData
from .collider import Collider
from .ecs import App, SystemUpdateSet, Time, UpdateSchedule, World
from .geometry import GlobalTransform, Transform, Vec3
from .global_motion import GlobalVelocity
from .health import Mass
from .lifetime import Lifetime, Timer, TimerMode
from .rotation import rad_to_vec2
from .velocity import Velocity


class GunType(Enum):
    LASER = "Laser"
    """Rapid fire, moderate damage, good accuracy."""
    PULSE_LASER = "PulseLaser"
    """Short bursts, less accuracy."""
    HOMING_MISSILE = "HomingMissile"
    """Locks onto enemy ships."""


@dataclass
class GunData:
    gun_type: GunType
    fire_rate: float
    """Seconds the gun needs before it can fire."""


@dataclass
class Gun:
    gun_data: GunData
    bullet_data: BulletData
    cooldown: Timer = field(init=False)

    def __post_init__(self) -> None:
        self.cooldown = Timer(self.gun_data.fire_rate, TimerMode.ONCE)

    def can_shoot(self) -> bool:
        return self.cooldown.finished()

    def try_shoot(
        self,
        shooter: int,
        world: World,
        g_transform: GlobalTransform,
        g_velocity: GlobalVelocity,
    ) -> int | None:
        """Fire if the gun is ready; return the bullet entity, or None."""
        if not self.can_shoot():
            return None
        # Every gun type currently fires a single bullet straight ahead.
        return self._spawn_bullet(shooter, world, g_transform, g_velocity)

    def _spawn_bullet(
        self,
        shooter: int,
        world: World,
        g_transform: GlobalTransform,
        g_velocity: GlobalVelocity,
    ) -> int:
        assets = world.resource(BulletAssets)
        bullet_type = self.bullet_data.bullet_type
        mesh = assets.meshes[bullet_type]
        material = assets.materials[bullet_type]
        position = g_transform.translation.xy()
        heading = rad_to_vec2(g_transform.rotation.z_angle())
        velocity = heading * self.bullet_data.speed + g_velocity.value
        return world.spawn(
            Bullet(self.bullet_data, shooter),
            Transform.from_translation(Vec3(position.x, position.y, 0.0)),
            Mass(1.0),
            Velocity(velocity),
            Collider.new_rect(2.0, 2.0),
            Lifetime(5.0),
            material,
            mesh,
        )


def gun_cooldown(world: World) -> None:
    delta = world.resource(Time).delta
    for _, gun in world.query(Gun):
        gun.cooldown.tick(delta)


def build(app: App) -> None:
    """Register the gun systems; bullets and engines have their own ``build``."""
    app.add_system(UpdateSchedule.UPDATE, gun_cooldown, SystemUpdateSet.MAIN)