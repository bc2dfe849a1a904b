import pytest

from starskiff.ecs import App, Time, World
from starskiff.geometry import Transform, Vec2, Vec3
from starskiff.health import Mass
from starskiff.space import GravityConst, Gravitated, GravitySource, apply_gravity, build
from starskiff.velocity import Velocity


def _world(gravity=1.0, delta=1.0):
    world = World()
    world.insert_resource(Time(delta))
    world.insert_resource(GravityConst(gravity))
    return world


def _pull(distance):
    world = _world()
    world.spawn(Transform.from_translation(Vec3(distance, 0.0, 0.0)), Mass(4.0), GravitySource())
    body = world.spawn(Transform(), Velocity(), Gravitated())
    apply_gravity(world)
    return world.get(body, Velocity).value


def test_body_is_pulled_toward_source():
    velocity = _pull(10.0)
    assert velocity.x > 0.0
    assert velocity.y == 0.0


def test_acceleration_value():
    assert _pull(2.0) == Vec2(1.0, 0.0)


def test_inverse_square_law():
    assert _pull(2.0).x / _pull(4.0).x == pytest.approx(4.0)


def test_source_does_not_pull_itself():
    world = _world()
    entity = world.spawn(Transform(), Mass(50.0), GravitySource(), Gravitated(), Velocity(Vec2(1.0, 0.0)))
    apply_gravity(world)
    assert world.get(entity, Velocity).value == Vec2(1.0, 0.0)


def test_ungravitated_body_is_untouched():
    world = _world()
    world.spawn(Transform.from_translation(Vec3(3.0, 0.0, 0.0)), Mass(10.0), GravitySource())
    body = world.spawn(Transform(), Velocity())
    apply_gravity(world)
    assert world.get(body, Velocity).value == Vec2(0.0, 0.0)


def test_zero_gravity_constant_has_no_effect():
    world = _world(gravity=0.0)
    world.spawn(Transform.from_translation(Vec3(3.0, 0.0, 0.0)), Mass(10.0), GravitySource())
    body = world.spawn(Transform(), Velocity(), Gravitated())
    apply_gravity(world)
    assert world.get(body, Velocity).value == Vec2(0.0, 0.0)


def test_build_inserts_default_constant():
    app = App()
    build(app)
    assert app.world.resource(GravityConst).value == 100.0