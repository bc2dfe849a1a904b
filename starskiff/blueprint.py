"""Blueprints: recipes for entities made of data entries and child parts."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .component_data import DataFormatError, add_components_to_entity
from .data import (
    DataKey,
    _component_list,
    _ensure_loading,
    _entry_fields,
    _entry_name,
    _load_tables,
    _table_list,
    insert_from_data,
)
from .ecs import App, AppState, Name, World
from .geometry import Transform
from .ron import Named
from .ship import Ship, ShipType
from .velocity import AngularVelocity, Velocity

log = logging.getLogger(__name__)


class BlueprintKey(Enum):
    SHIP = "ship"

    def string(self) -> str:
        return self.value


def _parts(fields: dict, key: str) -> list[tuple[DataKey, str]]:
    raw = fields.get(key)
    if not isinstance(raw, list):
        raise DataFormatError(f"blueprint entry: field {key!r} must be a list")
    parts = []
    for item in raw:
        if not (isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], Named)
                and item[0].args is None and isinstance(item[1], str)):
            raise DataFormatError(f"blueprint entry: malformed part {item!r}")
        try:
            data_key = DataKey(item[0].name.lower())
        except ValueError:
            raise DataFormatError(f"unknown data key {item[0].name!r}") from None
        parts.append((data_key, item[1]))
    return parts


@dataclass
class BlueprintEntry:
    name: str
    components: list[Any] = field(default_factory=list)
    """Components the parent entity has directly."""
    modules: list[tuple[DataKey, str]] = field(default_factory=list)
    """Data entries added to the parent entity."""
    children: list[tuple[DataKey, str]] = field(default_factory=list)
    """Data entries each made into a child entity."""


@dataclass
class BlueprintTable:
    entries: list[BlueprintEntry] = field(default_factory=list)

    @classmethod
    def from_ron(cls, text: str) -> BlueprintTable:
        entries = []
        for raw in _table_list(text, "blueprint table"):
            fields = _entry_fields(raw, "blueprint entry")
            entries.append(
                BlueprintEntry(
                    _entry_name(fields, "blueprint entry"),
                    _component_list(fields, "components", "blueprint entry"),
                    _parts(fields, "modules"),
                    _parts(fields, "children"),
                )
            )
        return cls(entries)


@dataclass
class BlueprintRegistry:
    tables: dict[str, BlueprintTable] = field(default_factory=dict)

    def load(self, asset_root: Path | str) -> dict[Path, bool]:
        """Read ``blueprint/<key>.ron`` for every key; map each path to whether it loaded."""
        status = _load_tables(
            self.tables, list(BlueprintKey), "blueprint", BlueprintTable.from_ron, Path(asset_root)
        )
        log.info("blueprint registry loading")
        return status


@dataclass
class BlueprintType:
    """Extra components given to a blueprint's entity and its children."""

    transform: Transform | None = None
    velocity: Velocity | None = None
    angular_velocity: AngularVelocity | None = None

    def __post_init__(self) -> None:
        moving = self.velocity is not None or self.angular_velocity is not None
        if moving and (self.transform is None or self.velocity is None or self.angular_velocity is None):
            raise ValueError("velocities need a transform, a velocity and an angular velocity")

    def add_components(self, world: World, entity: int) -> None:
        extras = [c for c in (self.transform, self.velocity, self.angular_velocity) if c is not None]
        if extras:
            world.insert(entity, *(copy.deepcopy(c) for c in extras))


def access_blueprint_entry(registry: BlueprintRegistry, key: str, value: str) -> BlueprintEntry | None:
    table = registry.tables.get(key)
    if table is None:
        log.warning('blueprint table "%s" not found! Current entries: %s', key, list(registry.tables))
        return None
    entry = next((e for e in table.entries if e.name == value), None)
    if entry is None:
        log.warning(
            'blueprint entry "%s" not found! Current entries: %s',
            value,
            [e.name for e in table.entries],
        )
    return entry


def entity_from_blueprint(
    world: World, key: BlueprintKey, value: str, blueprint_type: BlueprintType
) -> int | None:
    """Spawn an entity and its children from a blueprint, or return None if it is missing."""
    entry = access_blueprint_entry(world.resource(BlueprintRegistry), key.string(), value)
    if entry is None:
        return None
    entity = world.spawn()
    add_components_to_entity(world, entity, entry.components)
    for data_key, name in entry.modules:
        insert_from_data(world, entity, data_key, name)
    children = []
    for data_key, name in entry.children:
        child = world.spawn()
        insert_from_data(world, child, data_key, name)
        children.append(child)
    for child in children:
        world.add_child(entity, child)
        blueprint_type.add_components(world, child)
    world.insert(entity, Name(value))
    blueprint_type.add_components(world, entity)
    return entity


def spawn_ship_from_blueprint(world: World, value: str, blueprint_type: BlueprintType) -> int | None:
    ship = entity_from_blueprint(world, BlueprintKey.SHIP, value, blueprint_type)
    if ship is not None:
        world.insert(ship, Ship(ShipType.INTERCEPTOR))
    return ship


def spawn_ship_from_data(world: World, parts: list[tuple[DataKey, str]]) -> list[int]:
    """Spawn one loose entity per data entry (older way of building ships)."""
    entities = []
    for data_key, name in parts:
        entity = world.spawn()
        insert_from_data(world, entity, data_key, name)
        entities.append(entity)
    return entities


def build(app: App, asset_root: Path | str) -> None:
    app.world.insert_resource(BlueprintRegistry())
    _ensure_loading(app.world)

    def load(world: World) -> None:
        _ensure_loading(world).track(world.resource(BlueprintRegistry).load(asset_root))

    app.add_on_enter(AppState.LOADING_ASSETS, load)