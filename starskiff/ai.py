"""Computer-controlled ships."""

from __future__ import annotations

from dataclasses import dataclass

from .blueprint import BlueprintType, spawn_ship_from_blueprint
from .ecs import App, AppState, SystemUpdateSet, UpdateSchedule, World
from .geometry import Transform, Vec2, Vec3
from .player import _single_player
from .ship import Ship
from .velocity import AngularVelocity, Velocity


@dataclass
class Ai:
    """Marks a ship steered by the computer."""


_STARTING_SHIPS = (
    ("ship_1", Vec3(-200.0, 0.0, 0.0), Vec2(10.0, 0.0)),
    ("ship_2", Vec3(200.0, 0.0, 0.0), Vec2(10.0, 0.0)),
    ("ship_1", Vec3(0.0, 10.0, 0.0), Vec2(0.0, 0.0)),
)


def setup_ai(world: World) -> list[int]:
    """Spawn the starting computer ships; return those that could be built."""
    spawned = (
        spawn_ship_from_blueprint(
            world,
            blueprint,
            BlueprintType(
                Transform.from_translation(position), Velocity(velocity), AngularVelocity(0.0)
            ),
        )
        for blueprint, position, velocity in _STARTING_SHIPS
    )
    return [ship for ship in spawned if ship is not None]


def move_ai(world: World) -> dict[int, Vec2]:
    """Direction from each computer ship toward its enemy, the player."""
    _, enemy = _single_player(world, Transform)
    target = enemy.translation.xy()
    return {
        entity: (target - transform.translation.xy()).normalize_or(Vec2())
        for entity, _ship, transform, _ai in world.query(Ship, Transform, Ai)
    }


def build(app: App) -> None:
    app.add_on_enter(AppState.GAME_READY, setup_ai)
    app.add_system(UpdateSchedule.UPDATE, move_ai, SystemUpdateSet.MAIN)