"""Health, damage and other physical attributes of entities."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .ecs import App, AppState, SystemUpdateSet, UpdateSchedule, World

log = logging.getLogger(__name__)


@dataclass
class Mass:
    value: float


@dataclass
class Health:
    max: float = 0.0
    current: float = 0.0

    @classmethod
    def full(cls, amount: float) -> Health:
        return cls(amount, amount)

    def damage(self, amount: float) -> bool:
        """Apply damage; return True if this killed the entity."""
        if self.current <= amount:
            self.current = 0.0
            log.info("entity is now dead!")
            return True
        self.current -= amount
        return False

    def percent(self) -> float:
        return self.current / self.max


@dataclass
class Damage:
    amount: float


@dataclass
class Killed:
    """Marks an entity with no health left."""


@dataclass
class PropagateHealth:
    """Health summed over an entity's direct children."""

    current: float = 0.0
    max: float = 0.0


@dataclass
class Durability:
    max: float
    decay_rate: float
    current: float = field(init=False)

    def __post_init__(self) -> None:
        self.current = self.max


@dataclass
class Heater:
    rate: float


@dataclass
class Heat:
    max: float
    current: float = 0.0


@dataclass
class OnFire:
    """Marks an entity that is burning."""


def apply_damage(world: World) -> None:
    for entity, damage, health in world.query(Damage, Health):
        if world.has(entity, Killed):
            continue
        if health.damage(damage.amount):
            world.insert(entity, Killed())
        world.remove(entity, Damage)


def _child_health(world: World, entity: int) -> float:
    total = 0.0
    for child in world.children(entity):
        health = world.get(child, Health)
        if health is not None:
            total += health.current
    return total


def max_propagate_health(world: World) -> None:
    for entity, propagate in world.query(PropagateHealth):
        propagate.max = _child_health(world, entity)


def propagate_health(world: World) -> None:
    for entity, propagate in world.query(PropagateHealth):
        propagate.current = _child_health(world, entity)


def build(app: App) -> None:
    app.add_on_enter(AppState.GAME_READY, max_propagate_health)
    app.add_system(UpdateSchedule.UPDATE, propagate_health, SystemUpdateSet.MAIN)
    app.add_system(UpdateSchedule.UPDATE, apply_damage, SystemUpdateSet.MAIN)