"""History of a component's past values."""

from __future__ import annotations

import copy
from collections import deque
from typing import Any, Generic, TypeVar

from .ecs import UpdateSchedule, World

T = TypeVar("T")

HISTORY_LEN = 20


class Record(Generic[T]):
    """Past values, newest first, kept separately per schedule."""

    def __init__(self, init_val: T) -> None:
        self.update_deq: deque[T] = deque([copy.copy(init_val)])
        self.fixed_deq: deque[T] = deque([copy.copy(init_val)])

    def deq(self, schedule: UpdateSchedule) -> deque[T]:
        return self.update_deq if schedule == UpdateSchedule.UPDATE else self.fixed_deq

    def newest(self, schedule: UpdateSchedule) -> T:
        return self.deq(schedule)[0]

    def newest_2(self, schedule: UpdateSchedule) -> tuple[T, T]:
        first, second = self.elements_at([0, 1], schedule)
        return first, second

    def oldest(self, schedule: UpdateSchedule) -> T:
        return self.deq(schedule)[-1]

    def elements_at(self, indexes: list[int], schedule: UpdateSchedule) -> list[T]:
        values = self.deq(schedule)
        return [values[i] for i in indexes]

    def push(self, value: T, schedule: UpdateSchedule) -> None:
        values = self.deq(schedule)
        values.appendleft(copy.copy(value))
        if len(values) > HISTORY_LEN:
            values.pop()


def _record(world: World, component_type: type, schedule: UpdateSchedule) -> None:
    for entity, component in world.query(component_type):
        record: Any = world.get(entity, Record)
        if record is None:
            world.insert(entity, Record(component))
            continue
        record.push(component, schedule)


def record_update(world: World, component_type: type) -> None:
    """Push each entity's current component into its record, creating one if absent."""
    _record(world, component_type, UpdateSchedule.UPDATE)


def record_fixed_update(world: World, component_type: type) -> None:
    """Same as :func:`record_update`, run from the fixed schedule; it also writes the Update history."""
    _record(world, component_type, UpdateSchedule.UPDATE)