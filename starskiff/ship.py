"""Ship kinds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ShipType(Enum):
    INTERCEPTOR = "Interceptor"
    """Hit and run, fast and agile."""
    GUNSHIP = "Gunship"
    """A flying tank: less manoeuvrable but full of weapons."""
    MISSILE_BOAT = "MissileBoat"
    """Long range missile attacks with long reloads."""


@dataclass
class Ship:
    ship_type: ShipType