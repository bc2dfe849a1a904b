"""Timers and entities that expire."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .ecs import App, SystemUpdateSet, Time, UpdateSchedule, World


class TimerMode(Enum):
    ONCE = "once"
    REPEATING = "repeating"


@dataclass
class Timer:
    duration: float
    mode: TimerMode = TimerMode.ONCE
    elapsed: float = 0.0
    _finished: bool = field(default=False, repr=False)

    def tick(self, delta: float) -> None:
        if self.mode is TimerMode.ONCE:
            self.elapsed = min(self.elapsed + delta, self.duration)
            self._finished = self.elapsed >= self.duration
            return
        self.elapsed += delta
        self._finished = self.elapsed >= self.duration
        if self._finished:
            self.elapsed = self.elapsed % self.duration if self.duration > 0 else 0.0

    def finished(self) -> bool:
        return self._finished

    def reset(self) -> None:
        self.elapsed = 0.0
        self._finished = False


@dataclass
class Lifetime:
    """Entity is despawned once its timer runs out."""

    seconds: float = 10.0
    timer: Timer = field(init=False)

    def __post_init__(self) -> None:
        self.timer = Timer(self.seconds, TimerMode.ONCE)


def lifetime_system(world: World) -> None:
    delta = world.resource(Time).delta
    for entity, lifetime in world.query(Lifetime):
        lifetime.timer.tick(delta)
        if lifetime.timer.finished():
            world.despawn(entity)


def build(app: App) -> None:
    app.add_system(UpdateSchedule.UPDATE, lifetime_system, SystemUpdateSet.MAIN)