"""Debug overlay lines: a world grid, headings and collider outlines."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .collider import Aabb2d, Collider
from .color_palette import PalColor
from .ecs import World
from .geometry import GlobalTransform, Transform, Vec2
from .rotation import rad_to_vec2

_HEADING_LENGTH = 20.0
_CIRCLE_SEGMENTS = 32
_FAR = 1e30


@dataclass(frozen=True)
class Line:
    start: Vec2
    end: Vec2
    color: PalColor


def grid_lines(grid_size: float = 100_000.0, grid_spacing: float = 100.0) -> list[Line]:
    """Vertical then horizontal lines of a square grid centred on the origin."""
    half = grid_size / 2.0
    steps = range(int(-half), int(half) + 1, int(grid_spacing))
    vertical = [Line(Vec2(x, -half), Vec2(x, half), PalColor.WHITE) for x in steps]
    horizontal = [Line(Vec2(-half, y), Vec2(half, y), PalColor.WHITE) for y in steps]
    return vertical + horizontal


def rotation_line(transform: Transform) -> Line:
    """A short line from the entity along its heading."""
    rotation = transform.rotation
    angle = math.atan2(rotation.z, rotation.w) * 2.0
    start = transform.translation.xy()
    return Line(start, start + rad_to_vec2(angle) * _HEADING_LENGTH, PalColor.BLACK)


def _turn(vector: Vec2, angle: float) -> Vec2:
    cos, sin = math.cos(angle), math.sin(angle)
    return Vec2(vector.x * cos - vector.y * sin, vector.x * sin + vector.y * cos)


def collider_outline(g_transform: GlobalTransform, collider: Collider) -> list[Line]:
    """Closed outline of a collider placed at the entity's world position."""
    center = g_transform.translation.xy()
    volume = collider.volume
    if isinstance(volume, Aabb2d):
        low = volume.closest_point(Vec2(-_FAR, -_FAR))
        high = volume.closest_point(Vec2(_FAR, _FAR))
        half = (high - low) / 2.0
        angle = g_transform.rotation.z_angle()
        corners = [
            center + _turn(Vec2(sx * half.x, sy * half.y), angle)
            for sx, sy in ((-1, -1), (1, -1), (1, 1), (-1, 1))
        ]
    else:
        corners = [
            center + rad_to_vec2(2.0 * math.pi * i / _CIRCLE_SEGMENTS) * volume.radius
            for i in range(_CIRCLE_SEGMENTS)
        ]
    return [
        Line(start, end, PalColor.GREEN) for start, end in zip(corners, corners[1:] + corners[:1])
    ]


def debug_lines(world: World) -> list[Line]:
    """Heading lines for every transform and outlines for every collider."""
    lines = [rotation_line(transform) for _, transform in world.query(Transform)]
    for _, g_transform, collider in world.query(GlobalTransform, Collider):
        lines.extend(collider_outline(g_transform, collider))
    return lines