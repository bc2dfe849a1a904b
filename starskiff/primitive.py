"""Primitive 2D shapes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .geometry import Vec2


@dataclass(frozen=True)
class Rectangle:
    width: float
    height: float

    def size(self) -> Vec2:
        return Vec2(self.width, self.height)


@dataclass(frozen=True)
class Circle:
    radius: float

    def size(self) -> Vec2:
        return Vec2(self.radius * 2.0, self.radius * 2.0)


Primitive = Union[Rectangle, Circle]