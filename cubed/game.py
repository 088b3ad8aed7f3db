"""Interactive game state, input handling and the main program loop."""

from __future__ import annotations

import enum
import math
import sys

from cubed.errors import NC, RED, CubError
from cubed.model import HEIGHT, WIDTH, AnimationState, Vector
from cubed.parser import Scene, parse
from cubed.raycaster import cast_rays
from cubed.render import (
    MINI_FRAC,
    MINI_TILE,
    Canvas,
    render_minimap,
    render_sprites,
    render_walls,
)
from cubed.textures import Textures, load_textures

ROT_FACTOR = 48
MV_FACTOR = 0.2
_ROT_SIN = math.sin(math.pi / ROT_FACTOR)
_ROT_COS = math.cos(math.pi / ROT_FACTOR)
_PASSABLE = ("0", "O")
USAGE = "usage: cub3D [PATH TO MAP]"


class Key(enum.IntEnum):
    """Keys the game reacts to."""

    SPACE = 32
    A = 65
    C = 67
    D = 68
    S = 83
    W = 87
    ESCAPE = 256
    RIGHT = 262
    LEFT = 263


class Game:
    """A running scene: the player, the map and the images drawn from them."""

    def __init__(
        self,
        scene: Scene,
        textures: Textures | None,
        width: int = WIDTH,
        height: int = HEIGHT,
    ) -> None:
        self.scene = scene
        self.textures = textures
        self.width = width
        self.height = height
        self.player = scene.player
        self.grid = scene.grid
        self.anim = AnimationState()
        self.mouse_movement = False
        self.running = True
        self.scene_canvas = Canvas(width, height)
        mini = height // MINI_FRAC
        self.minimap_canvas = Canvas(mini, mini)
        self._last_x = 0.0

    def _cell(self, x: int, y: int) -> str:
        if 0 <= y < len(self.grid) and 0 <= x < len(self.grid[y]):
            return self.grid[y][x]
        return ""

    def rotate(self, key: int) -> None:
        """Turn the player one step right or left."""
        old = self.player.direction
        if key == Key.RIGHT:
            direction = Vector(
                _ROT_COS * old.x - _ROT_SIN * old.y,
                _ROT_SIN * old.x + _ROT_COS * old.y,
            )
        else:
            direction = Vector(
                _ROT_COS * old.x + _ROT_SIN * old.y,
                -_ROT_SIN * old.x + _ROT_COS * old.y,
            )
        self.player.direction = direction
        self.player.camera = Vector(-direction.y * 2 / 3, direction.x * 2 / 3)

    def move(self, key: int) -> bool:
        """Step forward, back or sideways if the way is free; return whether it moved."""
        d = self.player.direction
        steps = {
            Key.W: Vector(d.x, d.y),
            Key.S: Vector(-d.x, -d.y),
            Key.A: Vector(d.y, -d.x),
            Key.D: Vector(-d.y, d.x),
        }
        if key not in steps:
            return False
        pos = self.player.position
        target = steps[Key(key)] * MV_FACTOR + pos
        tx, ty = int(target.x), int(target.y)
        px, py = int(pos.x), int(pos.y)
        if (
            self._cell(tx, ty) in _PASSABLE
            and self._cell(px, ty) in _PASSABLE
            and self._cell(tx, py) in _PASSABLE
        ):
            self.player.position = target
            return True
        return False

    def toggle_door(self) -> None:
        """Open or close the door in the cell the player faces."""
        pos, d = self.player.position, self.player.direction
        x, y = int(pos.x + d.x), int(pos.y + d.y)
        tile = self._cell(x, y)
        if tile == "C":
            self.grid[y][x] = "O"
        elif tile == "O":
            self.grid[y][x] = "C"

    def toggle_mouse(self) -> bool:
        """Switch mouse-look on or off and return the new state."""
        self.mouse_movement = not self.mouse_movement
        return self.mouse_movement

    def handle_key(self, key: int, pressed: bool) -> None:
        """React to a key being pressed (True) or released (False)."""
        if key == Key.ESCAPE:
            self.running = False
        if not pressed:
            return
        if key == Key.C:
            self.toggle_mouse()
            return
        if key in (Key.LEFT, Key.RIGHT):
            self.rotate(key)
        if key == Key.SPACE:
            self.toggle_door()
        else:
            self.move(key)

    def handle_cursor(self, xpos: float) -> None:
        """Turn the player when the cursor moves horizontally in mouse-look mode."""
        if not self.mouse_movement:
            return
        last, self._last_x = self._last_x, xpos
        if xpos > last:
            self.handle_key(Key.RIGHT, True)
        elif xpos < last:
            self.handle_key(Key.LEFT, True)

    def draw(self) -> None:
        """Render walls, sprites and minimap for the current state."""
        rays = cast_rays(self.player, self.grid, self.textures, self.width, self.height)
        paths = self.scene.paths
        render_walls(self.scene_canvas, rays, paths.floor, paths.ceiling)
        frame = self.anim.tick()
        sprite = self.textures.sprite if self.textures is not None else None
        render_sprites(self.scene_canvas, rays, self.scene.sprites, self.player, sprite, frame)
        render_minimap(self.minimap_canvas, self.player, self.grid)


def _key_map(pygame) -> dict[int, Key]:
    return {
        pygame.K_SPACE: Key.SPACE,
        pygame.K_a: Key.A,
        pygame.K_c: Key.C,
        pygame.K_d: Key.D,
        pygame.K_s: Key.S,
        pygame.K_w: Key.W,
        pygame.K_ESCAPE: Key.ESCAPE,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_LEFT: Key.LEFT,
    }


def _surface(pygame, canvas: Canvas):
    return pygame.image.frombuffer(
        canvas.to_rgba_bytes(), (canvas.width, canvas.height), "RGBA"
    )


def _run(game: Game) -> None:
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((game.width, game.height))
        pygame.display.set_caption("cub3D")
        pygame.key.set_repeat(200, 30)
        keys = _key_map(pygame)
        game.draw()
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type in (pygame.KEYDOWN, pygame.KEYUP) and event.key in keys:
                    key = keys[event.key]
                    game.handle_key(key, event.type == pygame.KEYDOWN)
                    if key == Key.C and event.type == pygame.KEYDOWN:
                        pygame.mouse.set_visible(not game.mouse_movement)
                elif event.type == pygame.MOUSEMOTION and game.mouse_movement:
                    x = event.pos[0]
                    if x > game.width or x < 0:
                        x = game.width // 2
                    pygame.mouse.set_pos((x, game.height // 2))
                    game.handle_cursor(event.pos[0])
            if not game.running:
                break
            game.draw()
            screen.blit(_surface(pygame, game.scene_canvas), (0, 0))
            screen.blit(_surface(pygame, game.minimap_canvas), (MINI_TILE, MINI_TILE))
            pygame.display.flip()
    finally:
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Load the scene named on the command line and play it."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        return 1
    try:
        scene = parse(args[0])
        textures = load_textures(scene.paths)
    except CubError as exc:
        print(f"{RED}Error{NC}", file=sys.stderr)
        print(exc, file=sys.stderr)
        return 1
    _run(Game(scene, textures))
    return 0


if __name__ == "__main__":
    sys.exit(main())