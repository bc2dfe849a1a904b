"""A camera that follows the player."""

from __future__ import annotations

from dataclasses import dataclass

from .ecs import App, AppState, SystemUpdateSet, UpdateSchedule, World
from .geometry import Transform, Vec3
from .player import _single_player


@dataclass
class Camera:
    """Marks the 2D camera."""


def setup_camera(world: World) -> int:
    return world.spawn(Camera(), Transform())


def follow_cam(world: World) -> None:
    """Centre every camera on the player, keeping the camera's depth."""
    _, player_transform = _single_player(world, Transform)
    position = player_transform.translation
    for _, _camera, transform in world.query(Camera, Transform):
        transform.translation = Vec3(position.x, position.y, transform.translation.z)


def build(app: App) -> None:
    app.add_on_enter(AppState.GAME_READY, setup_camera)
    app.add_system(UpdateSchedule.UPDATE, follow_cam, SystemUpdateSet.CAMERA)