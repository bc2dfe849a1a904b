"""Engines that push and turn ships."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .ecs import App, SystemUpdateSet, Time, UpdateSchedule, World
from .geometry import Transform
from .health import Health
from .rotation import quat_to_vec2
from .ship import Ship
from .velocity import AngularVelocity, Velocity


class EngineType(Enum):
    MAIN = "Main"
    """Pushes the ship forward."""
    THRUSTER = "Thruster"
    """Turns the ship."""


def _clamp(value: float, low: float, high: float) -> float:
    if low > high:
        raise ValueError(f"invalid range: {low} > {high}")
    return min(max(value, low), high)


@dataclass
class Engine:
    engine_type: EngineType = EngineType.MAIN
    reverse_percent: float = 0.0
    """Share of forward thrust available in reverse."""
    max_thrust: float = 10.0
    max_acceleration: float = 10.0
    """Largest change in thrust per second of a healthy engine."""
    actual_thrust: float = 0.0
    desired_thrust: float = 0.0

    @property
    def _min_thrust(self) -> float:
        return -self.max_thrust * self.reverse_percent

    def set_throttle(self, desired_thrust: float) -> None:
        self.desired_thrust = _clamp(desired_thrust, self._min_thrust, self.max_thrust)

    def add_throttle(self, desired_thrust: float) -> None:
        self.desired_thrust = _clamp(
            self.desired_thrust + desired_thrust, self._min_thrust, self.max_thrust
        )

    def no_throttle(self) -> None:
        self.desired_thrust = 0.0

    def full_throttle(self) -> None:
        self.desired_thrust = self.max_thrust

    def min_throttle(self) -> None:
        """Full reverse, or zero thrust if the engine cannot reverse."""
        self.desired_thrust = self._min_thrust

    def hold_throttle(self) -> None:
        self.desired_thrust = self.actual_thrust

    def current_thrust(self) -> float:
        return self.actual_thrust

    def thrust(
        self,
        transform: Transform,
        velocity: Velocity,
        angular_velocity: AngularVelocity,
        delta: float,
    ) -> None:
        """Apply the current thrust to the ship's motion."""
        if self.engine_type is EngineType.MAIN:
            heading = quat_to_vec2(transform.rotation)
            velocity.value = velocity.value + heading * (self.actual_thrust * delta)
        else:
            angular_velocity.value += self.actual_thrust * delta


def engine_thrust(world: World) -> None:
    """Move each engine's thrust toward its target, limited by health, then apply it."""
    delta = world.resource(Time).delta
    for ship, _, transform, velocity, angular_velocity in world.query(
        Ship, Transform, Velocity, AngularVelocity
    ):
        for child in world.children(ship):
            engine = world.get(child, Engine)
            health = world.get(child, Health)
            if engine is None or health is None:
                continue
            percent = health.percent()
            available = engine.max_acceleration * percent
            difference = engine.desired_thrust - engine.actual_thrust
            if abs(difference) > 0.0:
                acceleration = math.copysign(1.0, difference) * available * delta
            else:
                acceleration = 0.0
            limit = engine.max_thrust * percent
            engine.actual_thrust += _clamp(acceleration, -limit, limit)
            engine.thrust(transform, velocity, angular_velocity, delta)


def build(app: App) -> None:
    app.add_system(UpdateSchedule.UPDATE, engine_thrust, SystemUpdateSet.MAIN)