"""Linear and angular velocity applied to transforms."""

from __future__ import annotations

from dataclasses import dataclass

from .ecs import App, SystemUpdateSet, Time, UpdateSchedule, World
from .geometry import Transform, Vec2, Vec3
from .global_motion import GlobalAngularVelocity, GlobalVelocity
from .rotation import rad_to_quat


@dataclass
class Velocity:
    """Local velocity in units per second; needs a Transform and a GlobalVelocity."""

    value: Vec2 = Vec2()


@dataclass
class AngularVelocity:
    """Rotation speed about z in radians per second."""

    value: float = 0.0


def update_velocity(world: World) -> None:
    """Move each transform by its velocity over the elapsed time."""
    delta = world.resource(Time).delta
    for _, velocity, transform in world.query(Velocity, Transform):
        step = velocity.value * delta
        transform.translation = transform.translation + Vec3(step.x, step.y, 0.0)


def update_angular_velocity(world: World) -> None:
    """Turn each transform by its angular velocity over the elapsed time."""
    delta = world.resource(Time).delta
    for _, angular_velocity, transform in world.query(AngularVelocity, Transform):
        transform.rotation = transform.rotation * rad_to_quat(angular_velocity.value * delta)


def add_velocity_to_transform(world: World, entity: int) -> None:
    """Give an entity a zero Velocity if it has none."""
    if not world.has(entity, Velocity):
        world.insert(entity, Velocity())


def add_angular_velocity_to_transform(world: World, entity: int) -> None:
    """Give an entity a zero AngularVelocity if it has none."""
    if not world.has(entity, AngularVelocity):
        world.insert(entity, AngularVelocity())


def _require_for_velocity(world: World, entity: int) -> None:
    if not world.has(entity, Transform):
        world.insert(entity, Transform())
    if not world.has(entity, GlobalVelocity):
        world.insert(entity, GlobalVelocity())


def _require_for_angular_velocity(world: World, entity: int) -> None:
    if not world.has(entity, Transform):
        world.insert(entity, Transform())
    if not world.has(entity, GlobalAngularVelocity):
        world.insert(entity, GlobalAngularVelocity())


def build(app: App) -> None:
    app.add_system(UpdateSchedule.UPDATE, update_velocity, SystemUpdateSet.BODY)
    app.add_system(UpdateSchedule.UPDATE, update_angular_velocity, SystemUpdateSet.BODY)
    app.world.on_add(Velocity, _require_for_velocity)
    app.world.on_add(AngularVelocity, _require_for_angular_velocity)
    app.world.on_add(Transform, add_velocity_to_transform)
    app.world.on_add(Transform, add_angular_velocity_to_transform)