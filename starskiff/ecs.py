"""A minimal entity-component world and application loop."""

from __future__ import annotations

import itertools
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator


class AppState(Enum):
    LOADING_ASSETS = "loading_assets"
    GAME_READY = "game_ready"


class SystemUpdateSet(Enum):
    """Ordered system sets; they run only when the game is ready."""

    MAIN = 0
    BODY = 1
    CAMERA = 2


class UpdateSchedule(Enum):
    UPDATE = "update"
    FIXED_UPDATE = "fixed_update"


@dataclass
class Name:
    value: str


@dataclass
class Time:
    """Seconds elapsed in the current step."""

    delta: float = 0.0


System = Callable[["World"], Any]


class World:
    """Entities, their components, resources and events."""

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._entities: dict[int, dict[type, Any]] = {}
        self._children: dict[int, list[int]] = {}
        self._parent: dict[int, int] = {}
        self._on_add: dict[type, list[Callable[[World, int], Any]]] = defaultdict(list)
        self._resources: dict[type, Any] = {}
        self._events: dict[type, list[Any]] = defaultdict(list)

    def spawn(self, *args: Any) -> int:
        entity = next(self._ids)
        self._entities[entity] = {}
        self.insert(entity, *args)
        return entity

    def _components(self, entity: int) -> dict[type, Any]:
        try:
            return self._entities[entity]
        except KeyError:
            raise KeyError(f"entity {entity} does not exist") from None

    def insert(self, entity: int, *args: Any) -> None:
        components = self._components(entity)
        added = []
        for component in args:
            kind = type(component)
            if kind not in components:
                added.append(kind)
            components[kind] = component
        for kind in added:
            for callback in list(self._on_add[kind]):
                if entity in self._entities:
                    callback(self, entity)

    def remove(self, entity: int, component_type: type) -> Any:
        return self._components(entity).pop(component_type, None)

    def get(self, entity: int, component_type: type) -> Any:
        components = self._entities.get(entity)
        return None if components is None else components.get(component_type)

    def has(self, entity: int, component_type: type) -> bool:
        components = self._entities.get(entity)
        return components is not None and component_type in components

    def despawn(self, entity: int) -> None:
        """Remove an entity together with all its descendants."""
        if entity not in self._entities:
            return
        for child in self._children.pop(entity, []):
            self._parent.pop(child, None)
            self.despawn(child)
        parent = self._parent.pop(entity, None)
        if parent is not None and parent in self._children:
            self._children[parent].remove(entity)
        del self._entities[entity]

    def exists(self, entity: int) -> bool:
        return entity in self._entities

    def query(self, *args: type) -> Iterator[tuple]:
        """Yield ``(entity, *components)`` for entities holding every given type."""
        snapshot = list(self._entities.items())
        for entity, components in snapshot:
            if entity in self._entities and all(t in components for t in args):
                yield (entity, *(components[t] for t in args))

    def add_child(self, parent: int, child: int) -> None:
        self._components(parent)
        self._components(child)
        old = self._parent.get(child)
        if old is not None:
            self._children[old].remove(child)
        self._parent[child] = parent
        self._children.setdefault(parent, []).append(child)

    def children(self, entity: int) -> list[int]:
        return list(self._children.get(entity, []))

    def parent(self, entity: int) -> int | None:
        return self._parent.get(entity)

    def on_add(self, component_type: type, callback: Callable[[World, int], Any]) -> None:
        self._on_add[component_type].append(callback)

    def insert_resource(self, resource: Any) -> None:
        self._resources[type(resource)] = resource

    def resource(self, resource_type: type) -> Any:
        try:
            return self._resources[resource_type]
        except KeyError:
            raise KeyError(f"resource {resource_type.__name__} is missing") from None

    def send(self, event: Any) -> None:
        self._events[type(event)].append(event)

    def events(self, event_type: type) -> list[Any]:
        return list(self._events.get(event_type, []))

    def clear_events(self) -> None:
        self._events.clear()


class App:
    """Runs systems against a world in ordered schedules."""

    def __init__(self) -> None:
        self.world = World()
        self.state = AppState.LOADING_ASSETS
        self._systems: dict[UpdateSchedule, list[tuple[SystemUpdateSet | None, System]]] = (
            defaultdict(list)
        )
        self._on_enter: dict[AppState, list[System]] = defaultdict(list)
        self._started = False

    def add_system(
        self, schedule: UpdateSchedule, system: System, system_set: SystemUpdateSet | None = None
    ) -> App:
        self._systems[schedule].append((system_set, system))
        return self

    def add_on_enter(self, state: AppState, system: System) -> App:
        self._on_enter[state].append(system)
        return self

    def set_state(self, state: AppState) -> None:
        if state == self.state and self._started:
            return
        self.state = state
        self._started = True
        for system in self._on_enter[state]:
            system(self.world)

    def _start(self) -> None:
        if not self._started:
            self.set_state(self.state)

    def _run(self, schedule: UpdateSchedule, delta: float) -> None:
        self._start()
        self.world.insert_resource(Time(delta))
        ordered = sorted(
            self._systems[schedule], key=lambda item: -1 if item[0] is None else item[0].value
        )
        for system_set, system in ordered:
            if system_set is not None and self.state != AppState.GAME_READY:
                continue
            system(self.world)

    def update(self, delta: float) -> None:
        self._run(UpdateSchedule.UPDATE, delta)
        self.world.clear_events()

    def fixed_update(self, delta: float) -> None:
        self._run(UpdateSchedule.FIXED_UPDATE, delta)