"""Assembles the game and runs it in a window."""

from __future__ import annotations

import argparse
import dataclasses
import math
from pathlib import Path
from typing import Any

import pygame

from . import (
    ai,
    blueprint,
    bullet,
    camera,
    collision,
    data,
    engine,
    global_motion,
    graphic,
    gun,
    health,
    lifetime,
    planet,
    player,
    space,
    velocity,
)
from .color_palette import Color
from .debug import Line, debug_lines, grid_lines
from .ecs import App, World
from .geometry import GlobalTransform, Transform, Vec2
from .graphic import Mesh2d, MeshMaterial2d
from .player import ButtonInput, Key
from .primitive import Circle, Rectangle

FIXED_STEP = 1.0 / 64.0
_BACKGROUND = (43, 43, 43)
_KEYMAP = {
    pygame.K_w: Key.W,
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
    pygame.K_SPACE: Key.SPACE,
}


def build_app(asset_root: Path | str) -> App:
    """Create the app with every game system registered."""
    app = App()
    camera.build(app)
    space.build(app)
    velocity.build(app)
    global_motion.build(app)
    planet.build(app)
    player.build(app)
    lifetime.build(app)
    collision.build(app)
    health.build(app)
    ai.build(app)
    bullet.build(app)
    engine.build(app)
    gun.build(app)
    data.build(app, asset_root)
    blueprint.build(app, asset_root)
    graphic.build(app)
    return app


def world_to_screen(
    position: Vec2, camera_position: Vec2, screen_size: tuple[int, int]
) -> tuple[float, float]:
    """Pixel coordinates of a world point, with y pointing up in the world."""
    width, height = screen_size
    return (
        width / 2.0 + (position.x - camera_position.x),
        height / 2.0 - (position.y - camera_position.y),
    )


def _rgb(color: Any) -> tuple[int, int, int]:
    values = dataclasses.astuple(color) if dataclasses.is_dataclass(color) else tuple(color)
    r, g, b = (round(min(max(float(v), 0.0), 1.0) * 255) for v in values[:3])
    return r, g, b


def _camera_position(world: World) -> Vec2:
    for _, _camera, transform in world.query(camera.Camera, Transform):
        return transform.translation.xy()
    return Vec2()


def _draw_shape(
    screen: Any, shape: Any, color: Any, g_transform: GlobalTransform, view: Vec2
) -> None:
    size = screen.get_size()
    center = world_to_screen(g_transform.translation.xy(), view, size)
    rgb = _rgb(color)
    if isinstance(shape, Circle):
        pygame.draw.circle(screen, rgb, center, max(1, round(shape.radius)))
    elif isinstance(shape, Rectangle):
        angle = g_transform.rotation.z_angle()
        cos, sin = math.cos(angle), math.sin(angle)
        hw, hh = shape.width / 2.0, shape.height / 2.0
        corners = [
            (center[0] + x * cos - y * sin, center[1] - (x * sin + y * cos))
            for x, y in ((-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh))
        ]
        pygame.draw.polygon(screen, rgb, corners)


def _visible(line: Line, view: Vec2, size: tuple[int, int]) -> bool:
    half_w, half_h = size[0] / 2.0, size[1] / 2.0
    return not (
        max(line.start.x, line.end.x) < view.x - half_w
        or min(line.start.x, line.end.x) > view.x + half_w
        or max(line.start.y, line.end.y) < view.y - half_h
        or min(line.start.y, line.end.y) > view.y + half_h
    )


def _draw_lines(screen: Any, lines: list[Line], view: Vec2) -> None:
    size = screen.get_size()
    for line in lines:
        if _visible(line, view, size):
            pygame.draw.line(
                screen,
                _rgb(line.color.color()),
                world_to_screen(line.start, view, size),
                world_to_screen(line.end, view, size),
            )


def _draw(screen: Any, world: World, grid: list[Line]) -> None:
    view = _camera_position(world)
    screen.fill(_BACKGROUND)
    _draw_lines(screen, grid, view)
    for _, mesh, material, g_transform in world.query(Mesh2d, MeshMaterial2d, GlobalTransform):
        _draw_shape(screen, mesh.shape, material.color, g_transform, view)
    for _, shape, color, g_transform in world.query(Circle, Color, GlobalTransform):
        _draw_shape(screen, shape, color, g_transform, view)
    _draw_lines(screen, debug_lines(world), view)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="starskiff", description="Top-down space shooter.")
    parser.add_argument("--assets", default="assets", help="folder holding data and blueprints")
    parser.add_argument("--width", type=int, default=1280)
    parser.add_argument("--height", type=int, default=720)
    parser.add_argument("--frames", type=int, default=None, help="stop after this many frames")
    args = parser.parse_args(argv)

    app = build_app(args.assets)
    pygame.init()
    try:
        screen = pygame.display.set_mode((args.width, args.height))
        pygame.display.set_caption("starskiff")
        clock = pygame.time.Clock()
        keys = app.world.resource(ButtonInput)
        grid = grid_lines()
        accumulator = 0.0
        frame = 0
        running = True
        while running and (args.frames is None or frame < args.frames):
            delta = clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key in _KEYMAP:
                    keys.press(_KEYMAP[event.key])
                elif event.type == pygame.KEYUP and event.key in _KEYMAP:
                    keys.release(_KEYMAP[event.key])
            accumulator += delta
            while accumulator >= FIXED_STEP:
                app.fixed_update(FIXED_STEP)
                accumulator -= FIXED_STEP
            app.update(delta)
            keys.clear()
            _draw(screen, app.world, grid)
            pygame.display.flip()
            frame += 1
    finally:
        pygame.quit()
    return 0