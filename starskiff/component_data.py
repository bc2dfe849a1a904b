"""Components described in data files and turned into live components."""

from __future__ import annotations

from typing import Any, Iterable

from .bullet import BulletData, BulletType
from .collider import Collider
from .color_palette import PalColor
from .ecs import World
from .engine import Engine, EngineType
from .graphic import Graphic
from .gun import Gun, GunData, GunType
from .health import Health
from .primitive import Circle, Primitive, Rectangle
from .ron import Named


class DataFormatError(ValueError):
    """Raised for a data value that does not describe a known component."""


def _unwrap(value: Any) -> Any:
    """Strip one-element tuples and newtype wrappers."""
    while True:
        if isinstance(value, tuple) and len(value) == 1:
            value = value[0]
        elif isinstance(value, Named) and isinstance(value.args, tuple) and len(value.args) == 1 and not isinstance(value.args[0], (int, float)):
            value = value.args[0]
        else:
            return value


def _fields(value: Any, what: str) -> dict:
    if isinstance(value, Named) and isinstance(value.args, dict):
        return value.args
    value = _unwrap(value)
    if isinstance(value, Named) and isinstance(value.args, dict):
        return value.args
    if isinstance(value, dict):
        return value
    raise DataFormatError(f"{what}: expected a struct, got {value!r}")


def _field(fields: dict, key: str, what: str) -> Any:
    try:
        return fields[key]
    except KeyError:
        raise DataFormatError(f"{what}: missing field {key!r}") from None


def _number(fields: dict, key: str, what: str) -> float:
    value = _field(fields, key, what)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DataFormatError(f"{what}: field {key!r} must be a number")
    return float(value)


def _enum(enum_type: type, value: Any, what: str) -> Any:
    if not isinstance(value, Named) or value.args is not None:
        raise DataFormatError(f"{what}: expected a variant name, got {value!r}")
    try:
        return enum_type(value.name)
    except ValueError:
        raise DataFormatError(f"{what}: unknown variant {value.name!r}") from None


def _primitive(value: Any) -> Primitive:
    value = _unwrap(value)
    if isinstance(value, Named) and value.name == "Rectangle":
        args = value.args
        if not isinstance(args, tuple) or len(args) != 2:
            raise DataFormatError("Rectangle needs two numbers")
        return Rectangle(float(args[0]), float(args[1]))
    if isinstance(value, Named) and value.name == "Circle":
        args = value.args
        if isinstance(args, tuple) and len(args) == 1 and isinstance(args[0], (int, float)):
            return Circle(float(args[0]))
        return Circle(_number(_fields(args, "Circle"), "radius", "Circle"))
    raise DataFormatError(f"unknown primitive {value!r}")


def _engine(payload: Any) -> Engine:
    fields = _fields(payload, "Engine")
    return Engine(
        engine_type=_enum(EngineType, _field(fields, "engine_type", "Engine"), "Engine"),
        reverse_percent=_number(fields, "reverse_percent", "Engine"),
        max_thrust=_number(fields, "max_thrust", "Engine"),
        max_acceleration=_number(fields, "max_acceleration", "Engine"),
    )


def _health(payload: Any) -> Health:
    return Health.full(_number(_fields(payload, "Health"), "max", "Health"))


def _gun(payload: Any) -> Gun:
    fields = _fields(payload, "Gun")
    gun_fields = _fields(_field(fields, "gun_data", "Gun"), "GunData")
    bullet_fields = _fields(_field(fields, "bullet_data", "Gun"), "BulletData")
    gun_data = GunData(
        _enum(GunType, _field(gun_fields, "gun_type", "GunData"), "GunData"),
        _number(gun_fields, "fire_rate", "GunData"),
    )
    bullet_data = BulletData(
        _enum(BulletType, _field(bullet_fields, "bullet_type", "BulletData"), "BulletData"),
        _number(bullet_fields, "speed", "BulletData"),
        _number(bullet_fields, "damage", "BulletData"),
    )
    return Gun(gun_data, bullet_data)


def _graphic(payload: Any) -> Graphic:
    fields = _fields(payload, "Graphic")
    return Graphic(
        _primitive(_field(fields, "shape", "Graphic")),
        _enum(PalColor, _field(fields, "color", "Graphic"), "Graphic"),
    )


def _collider(payload: Any) -> Collider:
    return Collider.from_primitive(_primitive(payload))


_BUILDERS = {
    "Engine": _engine,
    "Health": _health,
    "Gun": _gun,
    "Graphic": _graphic,
    "Collider": _collider,
}


def component_from_ron(value: Any) -> Any:
    """Build a fresh component from a parsed ``Variant(payload)`` value."""
    if not isinstance(value, Named) or value.args is None:
        raise DataFormatError(f"expected a component variant, got {value!r}")
    builder = _BUILDERS.get(value.name)
    if builder is None:
        raise DataFormatError(f"unknown component {value.name!r}")
    payload = value.args
    if isinstance(payload, tuple) and len(payload) == 1:
        payload = payload[0]
    return builder(payload)


def add_components_to_entity(world: World, entity: int, components: Iterable[Any]) -> None:
    """Insert a fresh component for each parsed description."""
    for description in components:
        world.insert(entity, component_from_ron(description))