# cubed

A ray-casting first-person explorer. It reads a `.cub` scene file that
describes wall textures, floor and ceiling colours and a grid map, then opens
a pygame window where you walk through the maze, open doors and watch
animated sprites, with a round minimap in the top-left corner.

## Installing

```
pip install .
```

## Running

```
cubed path/to/scene.cub
```

The command expects exactly one argument, a file whose name ends in `.cub`;
otherwise it prints a usage line and exits with status 1. If the scene file
or one of its textures is invalid, the problems found are reported on
standard error and the command exits with status 1.

## Controls

| Key          | Action                                   |
|--------------|------------------------------------------|
| W / S        | move forward / backward                  |
| A / D        | strafe left / right                      |
| Left / Right | turn                                     |
| Space        | open or close the door in front of you   |
| C            | toggle mouse-look (hides the cursor)     |
| Escape       | quit                                     |

Closing the window also quits.

## Scene files

A scene file holds configuration lines first and the map last:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0
DOOR ./textures/door.png
SPRITE ./textures/sprite.png

111111
1N0A01
10C001
111111
```

- `NO`, `SO`, `WE`, `EA` give the PNG textures for each wall side; `F` and
  `C` give the floor and ceiling colours as three numbers from 0 to 255.
  All six are required, and each may appear only once.
- `DOOR` and `SPRITE` are optional. A door texture needs at least one door
  (`C` closed or `O` open) in the map, and doors in the map need a door
  texture; the same pairing holds between `SPRITE` and `A` tiles.
- The sprite texture is a sheet of four animation frames side by side, so
  its width must be at least four and a multiple of four.
- The map uses `1` for walls, `0` for floor, and exactly one of `N`, `S`,
  `E`, `W` for the starting position and facing. Spaces stand for nothing.
  Every walkable tile must be enclosed by walls, the map must come last in
  the file, and it may not contain blank lines.
- Any line that is not one of the keys above, a blank line or part of the
  map is rejected.

## Using the library

The pieces are usable on their own:

```python
from cubed.parser import parse
from cubed.textures import load_textures
from cubed.raycaster import cast_rays
from cubed.render import Canvas, render_walls

scene = parse("maps/room.cub")
textures = load_textures(scene.paths)
rays = cast_rays(scene.player, scene.grid, textures, 640, 360)

canvas = Canvas(640, 360)
render_walls(canvas, rays, scene.paths.floor, scene.paths.ceiling)
pixels = canvas.to_rgba_bytes()
```

- `cubed.parser` reads and validates a scene (`parse`, `parse_lines`) into a
  `Scene` holding the `TexturePaths`, the `Player`, the map grid and the
  sprite positions.
- `cubed.checks` holds the individual validation steps.
- `cubed.textures` loads PNG files into `Texture` objects with Pillow.
- `cubed.raycaster` casts one `Ray` per screen column.
- `cubed.render` draws walls, sprites (`render_sprites`) and the minimap
  (`render_minimap`) onto a `Canvas` of packed RGBA pixels.
- `cubed.game.Game` keeps the running state and reacts to keys
  (`handle_key`) and cursor movement (`handle_cursor`); `draw` redraws its
  scene and minimap canvases.

Scene problems are raised as `cubed.errors.MapError` and texture problems as
`cubed.errors.TextureError`; both derive from `cubed.errors.CubError`. Both
carry the `ErrorFlags` mask in `flags` and the list of messages describing
what went wrong in `messages`.