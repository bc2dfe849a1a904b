"""Tables of named component sets loaded from asset files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .component_data import DataFormatError, add_components_to_entity, component_from_ron
from .ecs import App, AppState, Name, UpdateSchedule, World
from .ron import Named, RonError, loads

log = logging.getLogger(__name__)


class DataKey(Enum):
    ENGINE = "engine"
    GUN = "gun"

    def string(self) -> str:
        return self.value


@dataclass
class DataEntry:
    name: str
    components: list[Any] = field(default_factory=list)
    """Parsed component descriptions, turned into components on use."""


def _entry_fields(value: Any, what: str) -> dict:
    if isinstance(value, Named) and isinstance(value.args, dict):
        value = value.args
    if not isinstance(value, dict):
        raise DataFormatError(f"{what}: expected a struct, got {value!r}")
    return value


def _entry_name(fields: dict, what: str) -> str:
    name = fields.get("name", fields.get("id"))
    if not isinstance(name, str):
        raise DataFormatError(f"{what}: entry needs a string name")
    return name


def _component_list(fields: dict, key: str, what: str) -> list[Any]:
    components = fields.get(key)
    if not isinstance(components, list):
        raise DataFormatError(f"{what}: field {key!r} must be a list")
    for description in components:
        component_from_ron(description)
    return list(components)


def _table_list(text: str, what: str) -> list:
    try:
        value = loads(text)
    except RonError as exc:
        raise DataFormatError(f"{what}: {exc}") from exc
    if isinstance(value, tuple) and len(value) == 1:
        value = value[0]
    if isinstance(value, Named) and isinstance(value.args, tuple) and len(value.args) == 1:
        value = value.args[0]
    if not isinstance(value, list):
        raise DataFormatError(f"{what}: expected a list of entries")
    return value


@dataclass
class DataTable:
    entries: list[DataEntry] = field(default_factory=list)

    @classmethod
    def from_ron(cls, text: str) -> DataTable:
        entries = []
        for raw in _table_list(text, "data table"):
            fields = _entry_fields(raw, "data entry")
            entries.append(
                DataEntry(
                    _entry_name(fields, "data entry"),
                    _component_list(fields, "components", "data entry"),
                )
            )
        return cls(entries)


def _load_tables(tables: dict, keys: list, folder: str, factory: Any, asset_root: Path) -> dict[Path, bool]:
    status: dict[Path, bool] = {}
    for key in keys:
        path = Path(asset_root) / folder / f"{key.string()}.ron"
        try:
            tables[key.string()] = factory(path.read_text(encoding="utf-8"))
            status[path] = True
        except (OSError, DataFormatError) as exc:
            log.warning("failed to load %s: %s", path, exc)
            status[path] = False
    return status


@dataclass
class DataRegistry:
    tables: dict[str, DataTable] = field(default_factory=dict)

    def load(self, asset_root: Path | str) -> dict[Path, bool]:
        """Read ``data/<key>.ron`` for every key; map each path to whether it loaded."""
        status = _load_tables(self.tables, list(DataKey), "data", DataTable.from_ron, Path(asset_root))
        log.info("data registry loading")
        return status


@dataclass
class AssetsLoading:
    paths: list[Path] = field(default_factory=list)
    loaded: set[Path] = field(default_factory=set)

    def track(self, status: dict[Path, bool]) -> None:
        for path, ok in status.items():
            self.paths.append(path)
            if ok:
                self.loaded.add(path)


def access_data_entry(registry: DataRegistry, key: str, value: str) -> DataEntry | None:
    table = registry.tables.get(key)
    if table is None:
        log.warning('data table "%s" not found! Current entries: %s', key, list(registry.tables))
        return None
    entry = next((e for e in table.entries if e.name == value), None)
    if entry is None:
        log.warning(
            'data entry "%s" not found! Current entries: %s', value, [e.name for e in table.entries]
        )
    return entry


def insert_from_data(world: World, entity: int, key: DataKey, value: str) -> None:
    """Insert the entry's components and its name into ``entity``, if the entry exists."""
    entry = access_data_entry(world.resource(DataRegistry), key.string(), value)
    if entry is not None:
        add_components_to_entity(world, entity, entry.components)
        world.insert(entity, Name(value))


def check_all_assets_loaded(app: App) -> None:
    """Switch to GAME_READY once every tracked asset has loaded."""
    if app.state != AppState.LOADING_ASSETS:
        return
    loading = app.world.resource(AssetsLoading)
    if not loading.paths:
        log.info("No assets to load. Transitioning to GameReady.")
        app.set_state(AppState.GAME_READY)
    elif all(path in loading.loaded for path in loading.paths):
        log.info("All assets loaded. Transitioning to GameReady.")
        app.set_state(AppState.GAME_READY)


def _ensure_loading(world: World) -> AssetsLoading:
    try:
        return world.resource(AssetsLoading)
    except KeyError:
        loading = AssetsLoading()
        world.insert_resource(loading)
        return loading


def build(app: App, asset_root: Path | str) -> None:
    app.world.insert_resource(DataRegistry())
    _ensure_loading(app.world)

    def load(world: World) -> None:
        _ensure_loading(world).track(world.resource(DataRegistry).load(asset_root))

    app.add_on_enter(AppState.LOADING_ASSETS, load)
    app.add_system(UpdateSchedule.UPDATE, lambda world: check_all_assets_loaded(app))