"""World-space transforms and velocities derived from recorded history."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial

from .ecs import App, SystemUpdateSet, Time, UpdateSchedule, World
from .geometry import GlobalTransform, Transform, Vec2
from .record import Record, record_fixed_update, record_update
from .rotation import quat_to_vec2


@dataclass
class GlobalVelocity:
    """World-space velocity; read only, derived from the transform history."""

    value: Vec2 = Vec2()


@dataclass
class GlobalAngularVelocity:
    """World-space rotation speed; read only, derived from the transform history."""

    value: float = 0.0


def _propagate(world: World, entity: int, global_transform: GlobalTransform) -> None:
    world.insert(entity, global_transform)
    for child in world.children(entity):
        local = world.get(child, Transform)
        if local is not None:
            _propagate(world, child, global_transform.mul_transform(local))


def propagate_transforms(world: World) -> None:
    """Compute every entity's GlobalTransform from its Transform and its ancestors'."""
    for entity, transform in world.query(Transform):
        parent = world.parent(entity)
        if parent is None or not world.has(parent, Transform):
            _propagate(world, entity, GlobalTransform.from_transform(transform))


def _last_two(record: Record) -> tuple[GlobalTransform, GlobalTransform] | None:
    history = record.deq(UpdateSchedule.FIXED_UPDATE)
    newest = history[0]
    previous = history[1] if len(history) > 1 else newest
    if not isinstance(newest, GlobalTransform) or not isinstance(previous, GlobalTransform):
        return None
    return newest, previous


def update_g_velocity(world: World) -> None:
    """Velocity from the difference of the last two recorded positions."""
    delta = world.resource(Time).delta
    if delta == 0.0:
        return
    for _, g_velocity, record in world.query(GlobalVelocity, Record):
        pair = _last_two(record)
        if pair is None:
            continue
        newest, previous = pair
        moved = newest.translation.xy() - previous.translation.xy()
        g_velocity.value = moved / delta


def update_g_angular_velocity(world: World) -> None:
    """Angular velocity from the difference of the last two recorded headings."""
    delta = world.resource(Time).delta
    if delta == 0.0:
        return
    for _, g_velocity, record in world.query(GlobalAngularVelocity, Record):
        pair = _last_two(record)
        if pair is None:
            continue
        newest, previous = pair
        turned = quat_to_vec2(newest.rotation) - quat_to_vec2(previous.rotation)
        g_velocity.value = (turned / delta).to_angle()


def _require_global_transform(world: World, entity: int) -> None:
    if not world.has(entity, GlobalTransform):
        world.insert(entity, GlobalTransform.from_transform(world.get(entity, Transform)))


def build(app: App) -> None:
    app.world.on_add(Transform, _require_global_transform)
    app.add_system(
        UpdateSchedule.FIXED_UPDATE,
        partial(record_fixed_update, component_type=GlobalTransform),
        SystemUpdateSet.BODY,
    )
    app.add_system(UpdateSchedule.FIXED_UPDATE, update_g_velocity, SystemUpdateSet.BODY)
    app.add_system(UpdateSchedule.FIXED_UPDATE, update_g_angular_velocity, SystemUpdateSet.BODY)
    app.add_system(
        UpdateSchedule.UPDATE,
        partial(record_update, component_type=GlobalTransform),
        SystemUpdateSet.BODY,
    )
    app.add_system(UpdateSchedule.UPDATE, propagate_transforms, SystemUpdateSet.CAMERA)