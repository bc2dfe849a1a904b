"""The player's ship and its keyboard controls."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from dataclasses import dataclass

from .blueprint import BlueprintType, spawn_ship_from_blueprint
from .ecs import App, AppState, Name, SystemUpdateSet, UpdateSchedule, World
from .engine import Engine, EngineType
from .geometry import GlobalTransform, Transform
from .global_motion import GlobalVelocity
from .gun import Gun
from .velocity import AngularVelocity, Velocity

log = logging.getLogger(__name__)

_ROTATE_THRESHOLD = 0.01


class Key(Enum):
    W = "w"
    A = "a"
    S = "s"
    D = "d"
    SPACE = "space"


class ButtonInput:
    """Which keys are held, and which went down since the last clear."""

    def __init__(self) -> None:
        self._pressed: set[Key] = set()
        self._just_pressed: set[Key] = set()

    def press(self, key: Key) -> None:
        if key not in self._pressed:
            self._just_pressed.add(key)
        self._pressed.add(key)

    def release(self, key: Key) -> None:
        self._pressed.discard(key)

    def pressed(self, key: Key) -> bool:
        return key in self._pressed

    def just_pressed(self, key: Key) -> bool:
        return key in self._just_pressed

    def clear(self) -> None:
        """Forget which keys were just pressed; held keys stay held."""
        self._just_pressed.clear()


@dataclass
class Player:
    """Marks the player's ship."""


def _single_player(world: World, *components: type) -> tuple[Any, ...]:
    """Return ``(entity, *components)`` of the only player, or raise LookupError."""
    matches = list(world.query(Player, *components))
    if len(matches) != 1:
        raise LookupError(f"expected exactly one player, found {len(matches)}")
    entity, _player, *rest = matches[0]
    return (entity, *rest)


def setup_player(world: World) -> int | None:
    """Spawn the player's ship from the ``ship_1`` blueprint."""
    ship = spawn_ship_from_blueprint(
        world, "ship_1", BlueprintType(Transform(), Velocity(), AngularVelocity(0.0))
    )
    if ship is None:
        log.warning("player ship unable to spawn!")
        return None
    world.insert(ship, Name("Player"), Player())
    return ship


def _engines(world: World, player: int, engine_type: EngineType) -> list[Engine]:
    found = (world.get(child, Engine) for child in world.children(player))
    return [engine for engine in found if engine is not None and engine.engine_type is engine_type]


def player_accelerate(world: World) -> None:
    """W throttles the main engines up, S cuts them, both or neither holds."""
    keys = world.resource(ButtonInput)
    (player,) = _single_player(world)
    forward, back = keys.pressed(Key.W), keys.pressed(Key.S)
    for engine in _engines(world, player, EngineType.MAIN):
        if forward == back:
            engine.hold_throttle()
        elif forward:
            engine.full_throttle()
        else:
            engine.no_throttle()


def player_rotate(world: World) -> None:
    """A turns one way at full thrust, D the other way, both or neither holds."""
    keys = world.resource(ButtonInput)
    (player,) = _single_player(world)
    left, right = keys.pressed(Key.A), keys.pressed(Key.D)
    for engine in _engines(world, player, EngineType.THRUSTER):
        if left == right:
            if engine.current_thrust() < _ROTATE_THRESHOLD:
                engine.no_throttle()
            engine.hold_throttle()
        elif left:
            engine.full_throttle()
        else:
            engine.min_throttle()


def player_shoot(world: World) -> list[int]:
    """On a fresh space press, fire every ready gun on the player; return the bullets."""
    keys = world.resource(ButtonInput)
    if not keys.just_pressed(Key.SPACE):
        return []
    (player,) = _single_player(world)
    bullets = []
    for child in world.children(player):
        gun = world.get(child, Gun)
        g_transform = world.get(child, GlobalTransform)
        g_velocity = world.get(child, GlobalVelocity)
        if gun is None or g_transform is None or g_velocity is None:
            continue
        bullet = gun.try_shoot(player, world, g_transform, g_velocity)
        if bullet is not None:
            bullets.append(bullet)
    return bullets


def build(app: App) -> None:
    app.world.insert_resource(ButtonInput())
    app.add_on_enter(AppState.GAME_READY, setup_player)
    app.add_system(UpdateSchedule.UPDATE, player_accelerate, SystemUpdateSet.MAIN)
    app.add_system(UpdateSchedule.UPDATE, player_rotate, SystemUpdateSet.MAIN)
    app.add_system(UpdateSchedule.UPDATE, player_shoot, SystemUpdateSet.MAIN)