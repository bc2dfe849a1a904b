from starskiff.color_palette import PalColor
from starskiff.ecs import App, AppState, World
from starskiff.graphic import Graphic, Mesh2d, MeshMaterial2d, add_mesh_and_material, build
from starskiff.primitive import Circle, Rectangle


def test_mesh_and_material():
    mesh, material = Graphic(Rectangle(4.0, 2.0), PalColor.RED).mesh_and_material()
    assert mesh.shape == Rectangle(4.0, 2.0)
    assert material.color == PalColor.RED.color()


def test_system_adds_once():
    world = World()
    entity = world.spawn(Graphic(Circle(3.0), PalColor.BLUE))
    add_mesh_and_material(world)
    mesh = world.get(entity, Mesh2d)
    assert mesh.shape == Circle(3.0)
    assert world.get(entity, MeshMaterial2d).color == PalColor.BLUE.color()
    add_mesh_and_material(world)
    assert world.get(entity, Mesh2d) is mesh


def test_build_runs_outside_game_ready():
    app = App()
    build(app)
    entity = app.world.spawn(Graphic(Circle(1.0), PalColor.WHITE))
    app.update(0.1)
    assert app.state == AppState.LOADING_ASSETS
    assert app.world.has(entity, Mesh2d)