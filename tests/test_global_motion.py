import math

import pytest

from starskiff.ecs import App, AppState, Time, UpdateSchedule, World
from starskiff.geometry import GlobalTransform, Quat, Transform, Vec2, Vec3
from starskiff.global_motion import (
    GlobalAngularVelocity,
    GlobalVelocity,
    build,
    propagate_transforms,
    update_g_angular_velocity,
    update_g_velocity,
)
from starskiff.record import Record


def _world(delta):
    world = World()
    world.insert_resource(Time(delta))
    return world


def test_root_global_matches_local():
    world = World()
    local = Transform.from_translation(Vec3(1.0, 2.0, 0.0))
    entity = world.spawn(local)
    propagate_transforms(world)
    assert world.get(entity, GlobalTransform) == GlobalTransform.from_transform(local)


def test_child_global_composes_with_parent():
    world = World()
    parent_local = Transform.from_translation(Vec3(1.0, 2.0, 0.0))
    child_local = Transform.from_translation(Vec3(3.0, 0.0, 0.0))
    parent = world.spawn(parent_local)
    child = world.spawn(child_local)
    world.add_child(parent, child)
    propagate_transforms(world)
    parent_global = world.get(parent, GlobalTransform)
    assert world.get(child, GlobalTransform) == parent_global.mul_transform(child_local)
    assert world.get(child, GlobalTransform).translation == Vec3(4.0, 2.0, 0.0)


def test_g_velocity_from_fixed_history():
    world = _world(1.0)
    record = Record(GlobalTransform())
    record.push(GlobalTransform(Vec3(2.0, -1.0, 0.0)), UpdateSchedule.FIXED_UPDATE)
    entity = world.spawn(GlobalVelocity(), record)
    update_g_velocity(world)
    assert world.get(entity, GlobalVelocity).value == Vec2(2.0, -1.0)


def test_g_velocity_single_entry_is_zero():
    world = _world(0.5)
    entity = world.spawn(GlobalVelocity(Vec2(5.0, 5.0)), Record(GlobalTransform(Vec3(3.0, 3.0, 0.0))))
    update_g_velocity(world)
    assert world.get(entity, GlobalVelocity).value == Vec2(0.0, 0.0)


def test_g_velocity_ignores_update_history():
    world = _world(1.0)
    record = Record(GlobalTransform())
    record.push(GlobalTransform(Vec3(9.0, 0.0, 0.0)), UpdateSchedule.UPDATE)
    entity = world.spawn(GlobalVelocity(), record)
    update_g_velocity(world)
    assert world.get(entity, GlobalVelocity).value == Vec2(0.0, 0.0)


def test_g_velocity_zero_delta_leaves_value():
    world = _world(0.0)
    record = Record(GlobalTransform())
    record.push(GlobalTransform(Vec3(2.0, 0.0, 0.0)), UpdateSchedule.FIXED_UPDATE)
    entity = world.spawn(GlobalVelocity(Vec2(7.0, 7.0)), record)
    update_g_velocity(world)
    assert world.get(entity, GlobalVelocity).value == Vec2(7.0, 7.0)


def test_g_angular_velocity_unchanged_rotation_is_zero_angle():
    world = _world(1.0)
    record = Record(GlobalTransform())
    record.push(GlobalTransform(), UpdateSchedule.FIXED_UPDATE)
    entity = world.spawn(GlobalAngularVelocity(1.0), record)
    update_g_angular_velocity(world)
    assert world.get(entity, GlobalAngularVelocity).value == 0.0


def test_g_angular_velocity_quarter_turn():
    world = _world(1.0)
    record = Record(GlobalTransform())
    record.push(GlobalTransform(rotation=Quat.from_rotation_z(math.pi / 2)), UpdateSchedule.FIXED_UPDATE)
    entity = world.spawn(GlobalAngularVelocity(), record)
    update_g_angular_velocity(world)
    assert world.get(entity, GlobalAngularVelocity).value == pytest.approx(3 * math.pi / 4)


def test_build_adds_global_transform_and_records_history():
    app = App()
    build(app)
    entity = app.world.spawn(Transform.from_translation(Vec3(1.0, 1.0, 0.0)))
    assert app.world.get(entity, GlobalTransform).translation == Vec3(1.0, 1.0, 0.0)
    app.set_state(AppState.GAME_READY)
    app.fixed_update(0.1)
    assert app.world.has(entity, Record)


def test_build_update_propagates_moved_transform():
    app = App()
    build(app)
    entity = app.world.spawn(Transform())
    app.set_state(AppState.GAME_READY)
    app.world.get(entity, Transform).translation = Vec3(5.0, 0.0, 0.0)
    app.update(0.1)
    assert app.world.get(entity, GlobalTransform).translation == Vec3(5.0, 0.0, 0.0)