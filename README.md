# starskiff

A small top-down 2D space shooter drawn with pygame. Ships are assembled
from data tables (engines, guns, health, colliders and graphics). Planets
pull on everything around them through gravity, and bullets damage whatever
they hit that does not belong to the ship that fired them.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Playing

```
starskiff --assets path/to/assets
```

Options:

- `--assets`: folder holding the data and blueprint tables (default `assets`)
- `--width`, `--height`: window size in pixels (default 1280 x 720)
- `--frames`: stop after this many frames

Controls:

- `W`: main engines to full throttle
- `S`: main engines to no throttle
- `W` and `S` together, or neither: main engines hold their current thrust
- `A`: thrusters to full throttle; `D`: thrusters to full reverse (zero if
  they cannot reverse)
- `Space`: fire every ready gun on the player's ship

The camera follows the player's ship. A grid, heading lines for every entity
and green collider outlines are drawn over the scene.

## Data tables

Ship parts and ships are read from RON files under the asset folder:

- `data/engine.ron` and `data/gun.ron` hold named entries of components
  (`starskiff.data.DataTable`, looked up by `DataKey`).
- `blueprint/ship.ron` holds ship blueprints (`starskiff.blueprint.BlueprintTable`,
  looked up by `BlueprintKey`). A blueprint lists components for the ship
  itself, `modules` merged into the ship and `children` spawned as separate
  parts attached to it.

Component descriptions are `Engine(...)`, `Health(...)`, `Gun(...)`,
`Graphic(...)` and `Collider(...)`. For example, `data/engine.ron`:

```
[
    (
        name: "main",
        components: [
            Engine((engine_type: Main, reverse_percent: 0.0, max_thrust: 10.0, max_acceleration: 10.0)),
            Health((max: 100.0)),
            Collider(Rectangle(4.0, 6.0)),
            Graphic((shape: Rectangle(4.0, 6.0), color: Red)),
        ],
    ),
]
```

and `blueprint/ship.ron`:

```
[
    (
        name: "ship_1",
        components: [Health((max: 200.0)), Collider(Circle(10.0))],
        modules: [],
        children: [(Engine, "main"), (Gun, "basic")],
    ),
]
```

A gun entry looks like
`Gun((gun_data: (gun_type: Laser, fire_rate: 0.5), bullet_data: (bullet_type: Laser, speed: 300.0, damage: 10.0)))`.
Engines only produce thrust when the part that carries them also has a
`Health` component. `starskiff.ron.loads` parses the RON subset these files use.

`starskiff.game.build_app(asset_root)` builds an `App` from such a folder.
The game enters the `GAME_READY` state only once every table has loaded;
then it spawns the player (`ship_1`), the computer ships (`ship_1` and
`ship_2`), two planets and the camera.

## Using the pieces

The simulation runs on a small entity-component system in `starskiff.ecs`:
a `World` holds entities, components, resources and events, and an `App`
runs systems by schedule (`UPDATE` and `FIXED_UPDATE`) and by
`SystemUpdateSet` (`MAIN`, then `BODY`, then `CAMERA`).

```python
from starskiff.collider import Collider
from starskiff.collision import has_collided
from starskiff.geometry import Vec3

a = Collider.new_circle(5.0).convert_to_global(Vec3(0.0, 0.0, 0.0))
b = Collider.new_rect(4.0, 4.0).convert_to_global(Vec3(6.0, 0.0, 0.0))
print(has_collided(a, b))  # True
```

## What it does not do

- No asset files ship with the package; without tables in the asset folder
  no ships are spawned. If a table is missing or malformed, a warning is
  logged and the game stays in the loading state, showing only the grid.
- Computer ships do not steer or shoot: `starskiff.ai.move_ai` only works out
  the direction from each of them toward the player.
- There is no sound, menu, score or saved game.