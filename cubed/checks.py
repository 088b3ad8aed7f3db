"""Validation of a scene file: texture keys, layout and the map itself."""

from __future__ import annotations

from cubed.errors import ErrorFlags, MapError
from cubed.mapfile import (
    MAP_VALID_CHARS,
    generate_map,
    goto_map,
    is_map_line,
    search_key,
)

TEXTURE_KEYS = ("NO", "SO", "WE", "EA", "F", "C", "DOOR", "SPRITE")
_KEY_FLAGS = (
    ("NO", ErrorFlags.F_NORTH),
    ("SO", ErrorFlags.F_SOUTH),
    ("WE", ErrorFlags.F_WEST),
    ("EA", ErrorFlags.F_EAST),
    ("F", ErrorFlags.F_FLOOR),
    ("C", ErrorFlags.F_CEILING),
)
_SPACE = " \t\n\v\f\r"
_WALKABLE = "0NSEWOCA"
_PLAYER = "NSWE"


def _map_lines(lines: list[str]) -> list[str]:
    start = goto_map(lines)
    return [] if start is None else lines[start:]


def _count_blank_lines(lines: list[str]) -> int:
    start = goto_map(lines)
    if start is None:
        return sum(1 for line in lines if line == "")
    blanks = sum(1 for line in lines[:start] if line == "")
    rest = iter(lines[start:])
    for line in rest:
        if not is_map_line(line):
            break
    blanks += sum(1 for line in rest if line == "")
    return blanks


def _count_map_data(lines: list[str]) -> int:
    count = 0
    for line in _map_lines(lines):
        if not is_map_line(line):
            break
        count += 1
    return count


def check_correct_data(lines: list[str]) -> ErrorFlags:
    """Flag lines that are neither a texture key, a blank line nor part of the map."""
    keys = sum(1 for key in TEXTURE_KEYS if search_key(lines, key) is not None)
    accounted = keys + _count_map_data(lines) + _count_blank_lines(lines)
    if accounted != len(lines):
        return ErrorFlags.FAILURE | ErrorFlags.WRONG_DATA
    return ErrorFlags.NONE


def _cell(row: list[str], j: int) -> str:
    return row[j] if 0 <= j < len(row) else ""


def _is_space(char: str) -> bool:
    return char != "" and char in _SPACE


def _surrounded(grid: list[list[str]], i: int, j: int) -> bool:
    row = grid[i]
    if row[j] not in _WALKABLE:
        return True
    if j == 0 or j == len(row) - 1 or i == 0 or len(grid[i - 1]) < j:
        return False
    if _is_space(row[j - 1]) or _is_space(_cell(row, j + 1)):
        return False
    if _is_space(_cell(grid[i - 1], j)):
        return False
    below = grid[i + 1] if i + 1 < len(grid) else None
    if below is None or len(below) < j:
        return False
    return not _is_space(_cell(below, j))


def check_map_closed(grid: list[list[str]]) -> ErrorFlags:
    """Flag a map whose walkable cells touch its border or empty space."""
    for i, row in enumerate(grid):
        for j in range(len(row)):
            if not _surrounded(grid, i, j):
                return ErrorFlags.FAILURE | ErrorFlags.MAP_NOT_CLOSED
    return ErrorFlags.NONE


def _check_map_chars(grid: list[list[str]]) -> ErrorFlags:
    mask = ErrorFlags.NONE
    for row in grid:
        for char in row:
            if char not in MAP_VALID_CHARS:
                return ErrorFlags.FAILURE | ErrorFlags.FORBIDDEN_MAP
            if char == "A":
                mask |= ErrorFlags.F_SPRITE_MAP
            elif char in "CO":
                mask |= ErrorFlags.F_DOOR_MAP
    return mask


def _check_unique_player(grid: list[list[str]]) -> ErrorFlags:
    players = sum(1 for row in grid for char in row if char in _PLAYER)
    if players > 1:
        return ErrorFlags.FAILURE | ErrorFlags.REPEATED_PLAYER
    if players == 0:
        return ErrorFlags.FAILURE | ErrorFlags.NO_PLAYER
    return ErrorFlags.NONE


def _check_not_break(grid: list[list[str]]) -> ErrorFlags:
    mask = ErrorFlags.NONE
    i = 0
    while i < len(grid):
        if grid[i]:
            i += 1
            continue
        while i < len(grid) and not grid[i]:
            i += 1
        if i < len(grid):
            mask |= ErrorFlags.FAILURE | ErrorFlags.MAP_BREAK
        else:
            mask |= ErrorFlags.FAILURE | ErrorFlags.BAD_SITE_MAP
    return mask


def check_map(lines: list[str]) -> ErrorFlags:
    """Check the map that starts at the first of ``lines``."""
    grid = generate_map(lines)
    mask = _check_map_chars(grid)
    mask |= check_map_closed(grid)
    mask |= _check_unique_player(grid)
    mask |= _check_not_break(grid)
    return mask


def _check_correct_order(lines: list[str]) -> ErrorFlags:
    start = goto_map(lines)
    if start is None:
        return ErrorFlags.FAILURE | ErrorFlags.NO_MAP
    for line in lines[start:]:
        if not is_map_line(line):
            return ErrorFlags.FAILURE | ErrorFlags.BAD_SITE_MAP
    return ErrorFlags.NONE


def _check_all_textures(lines: list[str]) -> ErrorFlags:
    mask = ErrorFlags.NONE
    for key, flag in _KEY_FLAGS:
        if search_key(lines, key) is not None:
            mask |= flag
    if mask & ErrorFlags.ALL_TEXTURES != ErrorFlags.ALL_TEXTURES:
        mask |= ErrorFlags.FAILURE
    if search_key(lines, "DOOR") is not None:
        mask |= ErrorFlags.F_DOOR
    if search_key(lines, "SPRITE") is not None:
        mask |= ErrorFlags.F_SPRITE
    return mask


def _occurrences(lines: list[str], key: str) -> int:
    count = 0
    index = search_key(lines, key)
    while index is not None:
        count += 1
        index = search_key(lines, key, index + 1)
    return count


def _check_unique_textures(lines: list[str]) -> ErrorFlags:
    if any(_occurrences(lines, key) > 1 for key in TEXTURE_KEYS):
        return ErrorFlags.FAILURE | ErrorFlags.REPEATED_TEXTURE
    return ErrorFlags.NONE


def _incomplete(mask: ErrorFlags, composite: ErrorFlags) -> bool:
    part = mask & composite
    return part != 0 and part != composite


def check_file_content(lines: list[str]) -> ErrorFlags:
    """Validate a whole scene file; return its mask or raise MapError."""
    mask = _check_correct_order(lines)
    mask |= _check_all_textures(lines)
    mask |= _check_unique_textures(lines)
    mask |= check_correct_data(lines)
    mask |= check_map(_map_lines(lines))
    if mask & ErrorFlags.FAILURE:
        raise MapError(mask)
    if _incomplete(mask, ErrorFlags.DOOR_COMP) or _incomplete(mask, ErrorFlags.SPRITE_COMP):
        raise MapError(mask)
    return mask