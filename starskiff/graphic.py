"""Shape and colour of an entity, and the render components derived from them."""

from __future__ import annotations

from dataclasses import dataclass

from .color_palette import Color, PalColor
from .ecs import App, UpdateSchedule, World
from .primitive import Primitive


@dataclass
class Mesh2d:
    shape: Primitive


@dataclass
class MeshMaterial2d:
    color: Color


@dataclass
class Graphic:
    """Mesh and colour; adding it to an entity gives it the render components."""

    shape: Primitive
    color: PalColor

    def mesh_and_material(self) -> tuple[Mesh2d, MeshMaterial2d]:
        return Mesh2d(self.shape), MeshMaterial2d(self.color.color())


def add_mesh_and_material(world: World) -> None:
    """Give each newly graphic entity its mesh and material."""
    for entity, graphic in world.query(Graphic):
        if world.has(entity, Mesh2d):
            continue
        world.insert(entity, *graphic.mesh_and_material())


def build(app: App) -> None:
    app.add_system(UpdateSchedule.UPDATE, add_mesh_and_material)