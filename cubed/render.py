"""Drawing walls, sprites and the minimap onto RGBA pixel canvases."""

from __future__ import annotations

from dataclasses import dataclass

from cubed.model import Player, Vector
from cubed.raycaster import Ray, WallSide
from cubed.textures import Texture, sprite_color

SWALLCOL = 0x008080FF
NWALLCOL = 0x008080FF
WWALLCOL = 0x004040FF
EWALLCOL = 0x00B0B0FF

MINI_FRAC = 4
MINI_H = 5
MINI_W = 10
MINI_TILE = 20
MINI_WALL_COL = 0x7A9CC6FF
MINI_FLOO_COL = 0x9FBBCCFF
MINI_VOID_COL = 0x9FBBCC80
MINI_PLAY_COL = 0xBDE4A7FF

_SIDE_COLORS = {
    WallSide.N: NWALLCOL,
    WallSide.S: SWALLCOL,
    WallSide.W: WWALLCOL,
    WallSide.E: EWALLCOL,
}
_BPP = 4


class Canvas:
    """A width by height image of packed RGBA pixels, stored row by row."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("canvas dimensions must not be negative")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height * _BPP)

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} canvas")
        return (y * self.width + x) * _BPP

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at ``(x, y)`` to the packed RGBA ``color``."""
        offset = self._offset(x, y)
        self._pixels[offset:offset + _BPP] = (color & 0xFFFFFFFF).to_bytes(_BPP, "big")

    def get_pixel(self, x: int, y: int) -> int:
        """Return the packed RGBA colour of the pixel at ``(x, y)``."""
        offset = self._offset(x, y)
        return int.from_bytes(self._pixels[offset:offset + _BPP], "big")

    def to_rgba_bytes(self) -> bytes:
        """Return the pixels as raw RGBA bytes, row by row."""
        return bytes(self._pixels)


@dataclass(frozen=True)
class SpriteInfo:
    """Where a sprite lands on screen and how large it is drawn."""

    distance: Vector
    xy_prop: float
    center_x: int
    sprite_h: int
    sprite_w: int


def _wall_color(ray: Ray, wall_y: int) -> int:
    texture = ray.texture
    if texture is None:
        return _SIDE_COLORS[ray.side]
    tex_x = int(texture.width * ray.wall_x)
    tex_y = int(texture.height / ray.wall_len * wall_y)
    return texture.color_at(tex_x, tex_y)


def _draw_column(canvas: Canvas, col: int, ray: Ray, floor: int, ceiling: int) -> None:
    height = canvas.height
    offset = int((height - ray.wall_len) / 2)
    start = max(offset, 0)
    end = min(offset + ray.wall_len, height)
    for y in range(start):
        canvas.put_pixel(col, y, ceiling)
    for y in range(start, end):
        canvas.put_pixel(col, y, _wall_color(ray, y - offset))
    for y in range(max(end, 0), height):
        canvas.put_pixel(col, y, floor)


def render_walls(canvas: Canvas, rays: list[Ray], floor: int, ceiling: int) -> None:
    """Draw ceiling, textured wall slice and floor for every ray's column."""
    for col, ray in enumerate(rays):
        _draw_column(canvas, col, ray, floor, ceiling)


def _door_color(x: float, y: float, tile: str) -> int:
    tile_x = int((x - int(x)) * 10)
    tile_y = int((y - int(y)) * 10)
    crossing = 3 <= tile_x <= 5 or 3 <= tile_y <= 5
    if tile == "O":
        return MINI_FLOO_COL if crossing else MINI_WALL_COL
    return MINI_WALL_COL if crossing else MINI_FLOO_COL


def minimap_color(x: float, y: float, grid: list[list[str]]) -> int:
    """Return the minimap colour for the map point ``(x, y)``."""
    if x <= 0 or y <= 0:
        return MINI_VOID_COL
    row_index = int(y)
    if row_index >= len(grid):
        return MINI_VOID_COL
    row = grid[row_index]
    col_index = int(x)
    if col_index >= len(row):
        return MINI_VOID_COL
    tile = row[col_index]
    if tile == "0":
        return MINI_FLOO_COL
    if tile == "1":
        return MINI_WALL_COL
    if tile in ("C", "O"):
        return _door_color(x, y, tile)
    return MINI_VOID_COL


def _rotate_map(point: Vector, direction: Vector, position: Vector) -> Vector:
    cx = point.x - position.x
    cy = point.y - position.y
    return Vector(
        (-direction.x * cy - direction.y * cx) + position.x,
        (direction.x * cx - direction.y * cy) + position.y,
    )


def _draw_player_marker(canvas: Canvas, cam_w: int) -> None:
    size = MINI_TILE // 2
    first = (cam_w - size) // 2
    if first < 0:
        return
    last = (cam_w + size) // 2
    for i in range(first, last):
        for j in range(first, last):
            canvas.put_pixel(i, j, MINI_PLAY_COL)


def render_minimap(canvas: Canvas, player: Player, grid: list[list[str]]) -> None:
    """Draw a round minimap centred on and turned with the player."""
    cam_w = min(canvas.width, canvas.height)
    half = cam_w // 2
    pos = player.position
    for i in range(cam_w):
        for j in range(cam_w):
            if (i - half) ** 2 + (j - half) ** 2 > half ** 2:
                continue
            point = Vector(
                pos.x + (i + 1 - cam_w / 2) / MINI_TILE,
                pos.y + (j + 1 - cam_w / 2) / MINI_TILE,
            )
            point = _rotate_map(point, player.direction, pos)
            canvas.put_pixel(i, j, minimap_color(point.x, point.y, grid))
    _draw_player_marker(canvas, cam_w)


def sort_sprites(sprites: list[Vector], position: Vector) -> list[Vector]:
    """Return the sprites ordered from farthest to nearest to ``position``."""
    return sorted(
        sprites,
        key=lambda s: (s.x - position.x) ** 2 + (s.y - position.y) ** 2,
        reverse=True,
    )


def _rotate_distance(offset: Vector, direction: Vector) -> Vector:
    return Vector(
        -direction.x * offset.y - direction.y * offset.x,
        direction.x * offset.x - direction.y * offset.y,
    )


def render_sprites(
    canvas: Canvas,
    rays: list[Ray],
    sprites: list[Vector],
    player: Player,
    texture: Texture | None,
    frame: int,
) -> None:
    """Draw every sprite in front of the player, farthest first."""
    if not sprites or texture is None:
        return
    pos = player.position
    for sprite in sort_sprites(sprites, pos):
        distance = _rotate_distance(
            Vector(sprite.x - pos.x, -sprite.y + pos.y), player.direction
        )
        if distance.y <= 0:
            continue
        xy_prop = distance.y * 4 / 3
        info = SpriteInfo(
            distance=distance,
            xy_prop=xy_prop,
            center_x=int((canvas.width / xy_prop) * distance.x + canvas.width // 2),
            sprite_h=int(canvas.height / distance.y),
            sprite_w=int(canvas.width / xy_prop),
        )
        render_one_sprite(canvas, rays, info, texture, frame)


def _wall_distance(canvas: Canvas, ray: Ray) -> float:
    if ray.wall_len == 0:
        return float("inf")
    return canvas.height / ray.wall_len


def _draw_sprite_column(
    canvas: Canvas, info: SpriteInfo, i: int, x: int, texture: Texture, frame: int
) -> None:
    top = canvas.height // 2 - info.sprite_h // 2
    first = max(0, -top)
    last = min(info.sprite_h, canvas.height - top)
    tex_x = int((i / info.sprite_w) * texture.width / 4)
    for j in range(first, last):
        tex_y = int((j / info.sprite_h) * texture.height)
        color = sprite_color(texture, frame, tex_x, tex_y)
        if color & 0xFF:
            canvas.put_pixel(x, top + j, color)


def render_one_sprite(
    canvas: Canvas, rays: list[Ray], info: SpriteInfo, texture: Texture, frame: int
) -> None:
    """Draw the visible, unoccluded columns of one sprite."""
    left = info.center_x - info.sprite_w // 2
    for i in range(info.sprite_w):
        x = left + i
        if x < 0 or x >= canvas.width or x >= len(rays):
            continue
        if _wall_distance(canvas, rays[x]) < info.distance.y:
            continue
        _draw_sprite_column(canvas, info, i, x, texture, frame)