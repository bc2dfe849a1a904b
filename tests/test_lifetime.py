import pytest

from starskiff.ecs import App, AppState, Time, World
from starskiff.lifetime import Lifetime, Timer, TimerMode, build, lifetime_system


def test_once_timer_finishes_and_clamps():
    t = Timer(1.0)
    t.tick(0.4)
    assert not t.finished()
    t.tick(5.0)
    assert t.finished()
    assert t.elapsed == 1.0
    t.reset()
    assert not t.finished() and t.elapsed == 0.0


def test_repeating_timer_wraps():
    t = Timer(1.0, TimerMode.REPEATING)
    t.tick(1.5)
    assert t.finished()
    assert t.elapsed == pytest.approx(0.5)
    t.tick(0.1)
    assert not t.finished()


def test_lifetime_default():
    assert Lifetime().timer.duration == 10.0


def test_lifetime_system_despawns():
    world = World()
    world.insert_resource(Time(1.0))
    short = world.spawn(Lifetime(0.5))
    long = world.spawn(Lifetime(3.0))
    lifetime_system(world)
    assert not world.exists(short)
    assert world.exists(long)


def test_build():
    app = App()
    build(app)
    app.set_state(AppState.GAME_READY)
    e = app.world.spawn(Lifetime(0.2))
    app.update(0.3)
    assert not app.world.exists(e)