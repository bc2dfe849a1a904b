"""Named palette colours."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterator


@dataclass(frozen=True)
class Color:
    """sRGB colour with channels in [0, 1]."""

    r: float
    g: float
    b: float

    def to_rgb255(self) -> tuple[int, int, int]:
        return tuple(round(c * 255) for c in (self.r, self.g, self.b))  # type: ignore[return-value]


def random_color() -> Color:
    return Color(random.random(), random.random(), random.random())


class PalColor(Enum):
    RANDOM = "Random"
    BLACK = "Black"
    WHITE = "White"
    RED = "Red"
    GREEN = "Green"
    BLUE = "Blue"

    def color(self) -> Color:
        if self is PalColor.RANDOM:
            return random_color()
        return _FIXED[self]

    @classmethod
    def iter(cls) -> Iterator[PalColor]:
        """The fixed colours, without Random."""
        return iter([cls.BLACK, cls.WHITE, cls.RED, cls.GREEN, cls.BLUE])


_FIXED = {
    PalColor.BLACK: Color(0.0, 0.0, 0.0),
    PalColor.WHITE: Color(1.0, 1.0, 1.0),
    PalColor.RED: Color(1.0, 0.0, 0.0),
    PalColor.GREEN: Color(0.0, 1.0, 0.0),
    PalColor.BLUE: Color(0.0, 0.0, 1.0),
}