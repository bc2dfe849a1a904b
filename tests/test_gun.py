import math

import pytest

from starskiff.bullet import Bullet, BulletData, BulletType, setup_bullet_assets
from starskiff.collider import Collider
from starskiff.color_palette import Color
from starskiff.ecs import App, AppState, Time, World
from starskiff.geometry import GlobalTransform, Quat, Transform, Vec2, Vec3
from starskiff.global_motion import GlobalVelocity
from starskiff.gun import Gun, GunData, GunType, build, gun_cooldown
from starskiff.health import Mass
from starskiff.lifetime import Lifetime
from starskiff.primitive import Circle
from starskiff.velocity import Velocity


def _gun(fire_rate=0.5, speed=10.0):
    return Gun(GunData(GunType.LASER, fire_rate), BulletData(BulletType.LASER, speed, 3.0))


def _ready_world(gun):
    world = World()
    setup_bullet_assets(world)
    world.insert_resource(Time(gun.gun_data.fire_rate))
    world.spawn(gun)
    gun_cooldown(world)
    return world


def test_gun_starts_cooling_down():
    assert _gun().can_shoot() is False


def test_cooldown_finishes_after_fire_rate():
    gun = _gun()
    _ready_world(gun)
    assert gun.can_shoot() is True


def test_try_shoot_when_not_ready_spawns_nothing():
    world = World()
    setup_bullet_assets(world)
    gun = _gun()
    assert gun.try_shoot(0, world, GlobalTransform(), GlobalVelocity()) is None
    assert list(world.query(Bullet)) == []


def test_shot_bullet_components():
    gun = _gun(speed=10.0)
    world = _ready_world(gun)
    shooter = world.spawn()
    g_transform = GlobalTransform(Vec3(4.0, 5.0, 9.0))
    bullet = gun.try_shoot(shooter, world, g_transform, GlobalVelocity())
    assert world.get(bullet, Bullet).shooter == shooter
    assert world.get(bullet, Transform).translation == Vec3(4.0, 5.0, 0.0)
    assert world.get(bullet, Velocity).value == Vec2(10.0, 0.0)
    assert world.get(bullet, Collider) == Collider.new_rect(2.0, 2.0)
    assert world.get(bullet, Lifetime).seconds == 5.0
    assert world.get(bullet, Mass) == Mass(1.0)
    assert world.get(bullet, Circle) == Circle(2.0)
    assert world.get(bullet, Color) == Color(1.0, 0.0, 0.0)


def test_bullet_follows_gun_heading():
    gun = _gun(speed=10.0)
    world = _ready_world(gun)
    g_transform = GlobalTransform(rotation=Quat.from_rotation_z(math.pi / 2))
    bullet = gun.try_shoot(0, world, g_transform, GlobalVelocity())
    velocity = world.get(bullet, Velocity).value
    assert velocity.x == pytest.approx(0.0, abs=1e-9)
    assert velocity.y == pytest.approx(10.0)


def test_gun_velocity_is_added():
    gun = _gun()
    world = _ready_world(gun)
    still = gun.try_shoot(0, world, GlobalTransform(), GlobalVelocity())
    moving = gun.try_shoot(0, world, GlobalTransform(), GlobalVelocity(Vec2(1.0, 2.0)))
    difference = world.get(moving, Velocity).value - world.get(still, Velocity).value
    assert difference == Vec2(1.0, 2.0)


def test_missing_assets_raise():
    gun = _gun()
    world = World()
    world.insert_resource(Time(gun.gun_data.fire_rate))
    world.spawn(gun)
    gun_cooldown(world)
    with pytest.raises(KeyError):
        gun.try_shoot(0, world, GlobalTransform(), GlobalVelocity())


def test_build_ticks_cooldown_when_ready():
    app = App()
    build(app)
    gun = _gun(fire_rate=0.25)
    app.world.spawn(gun)
    app.set_state(AppState.GAME_READY)
    app.update(0.25)
    assert gun.can_shoot() is True