"""Casting one ray per screen column through the map grid."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from cubed.model import HEIGHT, WIDTH, Player, Vector
from cubed.textures import Texture, Textures

_SOLID = ("1", "C")
_MIN_DISTANCE = 1e-6


class WallSide(enum.Enum):
    """Which wall texture a ray's hit uses."""

    N = 0
    S = 1
    W = 2
    E = 3


@dataclass
class Ray:
    """Everything known about one screen column after casting its ray."""

    wall_len: int
    wall_x: float
    texture: Texture | None
    side: WallSide
    vertical: bool
    position: Vector
    direction: Vector
    lengths: Vector
    advance: Vector


def ray_direction(ray_num: int, player: Player, width: int = WIDTH) -> Vector:
    """Return the direction of the ray for screen column ``ray_num``."""
    offset = (2 * ray_num) / width - 1
    return Vector(
        player.direction.x + player.camera.x * offset,
        player.direction.y + player.camera.y * offset,
    )


def ray_step(ray_num: int, player: Player, width: int = WIDTH) -> Vector:
    """Return the sign (-1 or 1) of the ray's movement along each axis."""
    direction = ray_direction(ray_num, player, width)
    return Vector(-1 if direction.x < 0 else 1, -1 if direction.y < 0 else 1)


def _divide(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator > 0:
            return math.inf
        if numerator < 0:
            return -math.inf
        return math.nan
    return numerator / denominator


def _inverse(value: float) -> float:
    return math.inf if value == 0 else abs(1 / value)


def first_distances(
    player: Player, ray_pos: Vector, ray_dir: Vector, step: Vector
) -> Vector:
    """Return the ray lengths to the first grid line along each axis."""
    pos = player.position
    if step.x == -1:
        x = _divide(pos.x - ray_pos.x, abs(ray_dir.x))
    else:
        x = _divide(ray_pos.x - pos.x + 1, abs(ray_dir.x))
    if step.y == -1:
        y = _divide(pos.y - ray_pos.y, abs(ray_dir.y))
    else:
        y = _divide(ray_pos.y - pos.y + 1, abs(ray_dir.y))
    return Vector(x, y)


def _cell(grid: list[list[str]], x: float, y: float) -> str:
    xi, yi = int(x), int(y)
    if yi < 0 or yi >= len(grid) or xi < 0 or xi >= len(grid[yi]):
        return "1"
    return grid[yi][xi]


def cast_ray(
    player: Player,
    grid: list[list[str]],
    ray_num: int,
    textures: Textures | None,
    width: int = WIDTH,
    height: int = HEIGHT,
) -> Ray:
    """Cast the ray of screen column ``ray_num`` until it hits a wall or closed door."""
    start = Vector(float(int(player.position.x)), float(int(player.position.y)))
    direction = ray_direction(ray_num, player, width)
    advance = Vector(_inverse(direction.x), _inverse(direction.y))
    step = ray_step(ray_num, player, width)
    first = first_distances(player, start, direction, step)

    px, py = start.x, start.y
    lx, ly = first.x, first.y
    vertical = False
    while True:
        if lx < ly:
            lx += advance.x
            px += step.x
            vertical = True
        else:
            ly += advance.y
            py += step.y
            vertical = False
        if _cell(grid, px, py) in _SOLID:
            break

    distance = lx - advance.x if vertical else ly - advance.y
    wall_len = int(height / max(distance, _MIN_DISTANCE))

    if vertical:
        side = WallSide.E if step.x == -1 else WallSide.W
        wall_x = player.position.y + distance * direction.y
    else:
        side = WallSide.N if step.y == -1 else WallSide.S
        wall_x = player.position.x + distance * direction.x
    wall_x = abs(wall_x - int(wall_x))

    texture = None
    if textures is not None:
        texture = {
            WallSide.N: textures.north,
            WallSide.S: textures.south,
            WallSide.W: textures.west,
            WallSide.E: textures.east,
        }[side]
        if _cell(grid, px, py) == "C":
            texture = textures.door

    return Ray(
        wall_len=wall_len,
        wall_x=wall_x,
        texture=texture,
        side=side,
        vertical=vertical,
        position=Vector(px, py),
        direction=direction,
        lengths=Vector(lx, ly),
        advance=advance,
    )


def cast_rays(
    player: Player,
    grid: list[list[str]],
    textures: Textures | None,
    width: int = WIDTH,
    height: int = HEIGHT,
) -> list[Ray]:
    """Cast one ray for every screen column, left to right."""
    return [
        cast_ray(player, grid, ray_num, textures, width, height)
        for ray_num in range(width)
    ]