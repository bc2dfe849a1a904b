import pytest

from starskiff.blueprint import BlueprintRegistry, BlueprintTable
from starskiff.bullet import Bullet, BulletData, BulletType, setup_bullet_assets
from starskiff.data import DataRegistry, DataTable
from starskiff.ecs import Name, World
from starskiff.engine import Engine, EngineType
from starskiff.geometry import GlobalTransform, Vec2
from starskiff.global_motion import GlobalVelocity
from starskiff.gun import Gun, GunData, GunType
from starskiff.player import (
    ButtonInput,
    Key,
    Player,
    player_accelerate,
    player_rotate,
    player_shoot,
    setup_player,
)
from starskiff.ship import Ship
from starskiff.velocity import Velocity

ENGINES = """[
    (name: "main", components: [
        Engine(engine_type: Main, reverse_percent: 0.0, max_thrust: 10.0, max_acceleration: 5.0),
        Health(max: 10.0),
    ]),
]"""

SHIPS = """[
    (name: "ship_1", components: [], modules: [], children: [(Engine, "main")]),
]"""


def make_world(*engines):
    world = World()
    world.insert_resource(ButtonInput())
    player = world.spawn(Player())
    for engine in engines:
        world.add_child(player, world.spawn(engine))
    return world, player


def main_engine():
    return Engine(engine_type=EngineType.MAIN, max_thrust=10.0)


def thruster():
    return Engine(engine_type=EngineType.THRUSTER, max_thrust=4.0, reverse_percent=1.0)


def test_button_input_press_and_clear():
    keys = ButtonInput()
    keys.press(Key.W)
    assert keys.pressed(Key.W) and keys.just_pressed(Key.W)
    keys.clear()
    assert keys.pressed(Key.W) and not keys.just_pressed(Key.W)
    keys.press(Key.W)
    assert not keys.just_pressed(Key.W)
    keys.release(Key.W)
    assert not keys.pressed(Key.W)


def test_accelerate_full_throttle_on_w():
    engine = main_engine()
    world, _ = make_world(engine)
    world.resource(ButtonInput).press(Key.W)
    player_accelerate(world)
    assert engine.desired_thrust == engine.max_thrust


def test_accelerate_cut_on_s():
    engine = main_engine()
    engine.desired_thrust = 5.0
    world, _ = make_world(engine)
    world.resource(ButtonInput).press(Key.S)
    player_accelerate(world)
    assert engine.desired_thrust == 0.0


@pytest.mark.parametrize("keys", [(), (Key.W, Key.S)])
def test_accelerate_holds(keys):
    engine = main_engine()
    engine.actual_thrust = 3.0
    world, _ = make_world(engine)
    for key in keys:
        world.resource(ButtonInput).press(key)
    player_accelerate(world)
    assert engine.desired_thrust == engine.actual_thrust


def test_accelerate_ignores_thrusters():
    engine = thruster()
    world, _ = make_world(engine)
    world.resource(ButtonInput).press(Key.W)
    player_accelerate(world)
    assert engine.desired_thrust == 0.0


def test_rotate_left_and_right():
    engine = thruster()
    world, _ = make_world(engine)
    keys = world.resource(ButtonInput)
    keys.press(Key.A)
    player_rotate(world)
    assert engine.desired_thrust == engine.max_thrust
    keys.release(Key.A)
    keys.press(Key.D)
    player_rotate(world)
    assert engine.desired_thrust == -engine.max_thrust


def test_rotate_without_keys_holds_current():
    engine = thruster()
    engine.actual_thrust = 0.005
    engine.desired_thrust = 2.0
    world, _ = make_world(engine)
    player_rotate(world)
    assert engine.desired_thrust == engine.actual_thrust


def test_rotate_ignores_main_engine():
    engine = main_engine()
    world, _ = make_world(engine)
    world.resource(ButtonInput).press(Key.A)
    player_rotate(world)
    assert engine.desired_thrust == 0.0


def test_missing_player_raises():
    world = World()
    world.insert_resource(ButtonInput())
    with pytest.raises(LookupError):
        player_accelerate(world)


def test_two_players_raise():
    world, _ = make_world()
    world.spawn(Player())
    with pytest.raises(LookupError):
        player_rotate(world)


def armed_world(ready=True):
    world, player = make_world()
    setup_bullet_assets(world)
    gun = Gun(GunData(GunType.LASER, 0.5), BulletData(BulletType.LASER, 100.0, 5.0))
    if ready:
        gun.cooldown.tick(1.0)
    child = world.spawn(gun, GlobalTransform(), GlobalVelocity(Vec2(0.0, 5.0)))
    world.add_child(player, child)
    return world, player, gun


def test_shoot_spawns_bullet():
    world, player, gun = armed_world()
    assert gun.can_shoot()
    world.resource(ButtonInput).press(Key.SPACE)
    bullets = player_shoot(world)
    assert len(bullets) == 1
    assert world.get(bullets[0], Bullet).shooter == player
    velocity = world.get(bullets[0], Velocity).value
    assert velocity.x == pytest.approx(100.0)
    assert velocity.y == pytest.approx(5.0)


def test_shoot_needs_fresh_press():
    world, _, _ = armed_world()
    keys = world.resource(ButtonInput)
    keys.press(Key.SPACE)
    keys.clear()
    assert player_shoot(world) == []
    assert list(world.query(Bullet)) == []


def test_shoot_waits_for_cooldown():
    world, _, _ = armed_world(ready=False)
    world.resource(ButtonInput).press(Key.SPACE)
    assert player_shoot(world) == []


def registry_world(ships=SHIPS):
    world = World()
    world.insert_resource(DataRegistry(tables={"engine": DataTable.from_ron(ENGINES)}))
    world.insert_resource(BlueprintRegistry(tables={"ship": BlueprintTable.from_ron(ships)}))
    return world


def test_setup_player_spawns_ship():
    world = registry_world()
    ship = setup_player(world)
    assert world.get(ship, Name) == Name("Player")
    assert world.has(ship, Player)
    assert world.has(ship, Ship)
    children = world.children(ship)
    assert len(children) == 1
    assert world.get(children[0], Engine).engine_type is EngineType.MAIN


def test_setup_player_without_blueprint():
    world = registry_world("[]")
    assert setup_player(world) is None
    assert list(world.query(Player)) == []