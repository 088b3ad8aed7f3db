"""Turning a validated scene file into the data the game runs on."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from cubed.checks import check_file_content
from cubed.errors import CubError
from cubed.mapfile import check_file_type, generate_map, goto_map, read_file
from cubed.model import Player, Vector

_SPACE = " \t\n\v\f\r"
_DIGITS = "0123456789"
_TRIM = " \t\v\n"
_PATH_PADDING = " \t\r"

_DIRECTIONS = {
    "N": Vector(0, -1),
    "S": Vector(0, 1),
    "W": Vector(-1, 0),
    "E": Vector(1, 0),
}
_CAMERAS = {
    "N": Vector(2 / 3, 0),
    "S": Vector(-2 / 3, 0),
    "W": Vector(0, -2 / 3),
    "E": Vector(0, 2 / 3),
}


@dataclass
class TexturePaths:
    """Texture file paths and packed RGBA floor and ceiling colours."""

    north: str | None = None
    south: str | None = None
    west: str | None = None
    east: str | None = None
    door: str | None = None
    sprite: str | None = None
    floor: int = 0
    ceiling: int = 0


@dataclass
class Scene:
    """Everything read from a scene file."""

    paths: TexturePaths
    player: Player
    grid: list[list[str]]
    sprites: list[Vector] = field(default_factory=list)


def _comma_count(text: str) -> int:
    commas = 0
    for char in text:
        if char in _SPACE or char in _DIGITS:
            continue
        if char == ",":
            commas += 1
        else:
            break
    return commas


def parse_color(text: str) -> int:
    """Parse ``R,G,B`` into a packed RGBA integer with full opacity.

    Raises ValueError when the text is not a valid colour.
    """
    if _comma_count(text) != 2:
        raise ValueError(f"expected three comma separated components: {text!r}")
    color = 0
    for piece in (part for part in text.split(",") if part):
        value = piece.strip(_TRIM)
        if not value or any(char not in _DIGITS for char in value):
            raise ValueError(f"not a number: {value!r}")
        component = int(value)
        if component > 255:
            raise ValueError(f"component out of range: {component}")
        color = (color << 8) | (component & 0xFF)
    return ((color << 8) | 0xFF) & 0xFFFFFFFF


def _find_prefixed(lines: list[str], prefix: str) -> str | None:
    return next((line for line in lines if line.startswith(prefix)), None)


def get_colors(lines: list[str]) -> tuple[int, int]:
    """Return the floor and ceiling colours declared in ``lines``."""
    floor_line = _find_prefixed(lines, "F ")
    if floor_line is None:
        raise CubError("There is no Floor color")
    errors = []
    floor = ceiling = 0
    try:
        floor = parse_color(floor_line[1:])
    except ValueError:
        errors.append("Bad input at floor instruction")
    ceiling_line = _find_prefixed(lines, "C ")
    if ceiling_line is None:
        raise CubError("There is no Ceiling color")
    try:
        ceiling = parse_color(ceiling_line[1:])
    except ValueError:
        errors.append("Bad input at ceiling instruction")
    if errors:
        raise CubError("\n".join(errors))
    return floor, ceiling


def _get_path(lines: list[str], key: str) -> str | None:
    line = _find_prefixed(lines, key)
    if line is None:
        return None
    path = line[len(key):].lstrip(_PATH_PADDING)
    return path[:-1] if path.endswith("\n") else path


def get_texture_paths(lines: list[str]) -> TexturePaths:
    """Collect the texture paths and colours; paths are not checked."""
    floor, ceiling = get_colors(lines)
    return TexturePaths(
        north=_get_path(lines, "NO"),
        south=_get_path(lines, "SO"),
        west=_get_path(lines, "WE"),
        east=_get_path(lines, "EA"),
        door=_get_path(lines, "DOOR"),
        sprite=_get_path(lines, "SPRITE"),
        floor=floor,
        ceiling=ceiling,
    )


def get_player(grid: list[list[str]]) -> Player:
    """Locate the player, replace its cell with floor and return it."""
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if char in _DIRECTIONS:
                row[x] = "0"
                return Player(
                    position=Vector(x + 0.5, y + 0.5),
                    direction=_DIRECTIONS[char],
                    camera=_CAMERAS[char],
                )
    raise CubError("There is no player")


def get_sprites(grid: list[list[str]]) -> list[Vector]:
    """Return the centres of every sprite cell, turning those cells into floor."""
    sprites = []
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if char == "A":
                row[x] = "0"
                sprites.append(Vector(x + 0.5, y + 0.5))
    return sprites


def parse_lines(lines: list[str]) -> Scene:
    """Validate the lines of a scene file and build the scene from them."""
    check_file_content(lines)
    start = goto_map(lines)
    grid = generate_map(lines[start:] if start is not None else [])
    player = get_player(grid)
    paths = get_texture_paths(lines)
    sprites = get_sprites(grid)
    return Scene(paths=paths, player=player, grid=grid, sprites=sprites)


def parse(path: str | os.PathLike[str]) -> Scene:
    """Read, validate and parse the ``.cub`` file at ``path``."""
    name = check_file_type(os.fspath(path))
    return parse_lines(read_file(name))