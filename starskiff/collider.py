"""Collision volumes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .geometry import Vec2, Vec3
from .primitive import Circle, Primitive, Rectangle


@dataclass(frozen=True)
class Aabb2d:
    center: Vec2
    half_size: Vec2

    @property
    def min(self) -> Vec2:
        return self.center - self.half_size

    @property
    def max(self) -> Vec2:
        return self.center + self.half_size

    def closest_point(self, point: Vec2) -> Vec2:
        lo, hi = self.min, self.max
        return Vec2(min(max(point.x, lo.x), hi.x), min(max(point.y, lo.y), hi.y))

    def intersects(self, other: Aabb2d | BoundingCircle) -> bool:
        if isinstance(other, BoundingCircle):
            closest = self.closest_point(other.center)
            return closest.distance_squared(other.center) <= other.radius**2
        a_min, a_max, b_min, b_max = self.min, self.max, other.min, other.max
        return (
            a_min.x <= b_max.x and a_max.x >= b_min.x and a_min.y <= b_max.y and a_max.y >= b_min.y
        )


@dataclass(frozen=True)
class BoundingCircle:
    center: Vec2
    radius: float

    def intersects(self, other: Aabb2d | BoundingCircle) -> bool:
        if isinstance(other, Aabb2d):
            return other.intersects(self)
        return self.center.distance_squared(other.center) <= (self.radius + other.radius) ** 2


Volume = Union[Aabb2d, BoundingCircle]


@dataclass(frozen=True)
class Collider:
    """A rectangle or circle collision volume."""

    volume: Volume

    @classmethod
    def new_rect(cls, width: float, height: float) -> Collider:
        return cls(Aabb2d(Vec2(0.0, 0.0), Vec2(width / 2.0, height / 2.0)))

    @classmethod
    def new_circle(cls, radius: float) -> Collider:
        return cls(BoundingCircle(Vec2(0.0, 0.0), radius))

    @classmethod
    def from_primitive(cls, primitive: Primitive) -> Collider:
        if isinstance(primitive, Rectangle):
            return cls.new_rect(primitive.width, primitive.height)
        if isinstance(primitive, Circle):
            return cls.new_circle(primitive.radius)
        raise TypeError(f"unsupported primitive: {primitive!r}")

    def convert_to_global(self, translation: Vec3) -> Collider:
        offset = translation.xy()
        volume = self.volume
        if isinstance(volume, Aabb2d):
            return Collider(Aabb2d(volume.center + offset, volume.half_size))
        return Collider(BoundingCircle(volume.center + offset, volume.radius))