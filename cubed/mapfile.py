"""Reading a scene description file and locating its map section."""

from __future__ import annotations

import os

from cubed.errors import CubError

MAP_VALID_CHARS = "\t 01NSEWOCA"
_SPACE = " \t\n\v\f\r"


def is_map_line(line: str) -> bool:
    """Return True if every character of the line may appear in a map."""
    return all(char in MAP_VALID_CHARS for char in line)


def check_file_type(name: str | None) -> str:
    """Return the name if it is a usable ``.cub`` path, else raise CubError."""
    if name is None or len(name) < 5 or not name.endswith(".cub"):
        raise CubError("Bad file type")
    return name


def read_file(path: str | os.PathLike[str]) -> list[str]:
    """Read a scene file and return its lines without their line feeds."""
    if os.path.isdir(path):
        raise CubError(f"'{os.fspath(path)}': is a directory")
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as handle:
            content = handle.read()
    except OSError as exc:
        raise CubError(str(exc)) from exc
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def search_key(lines: list[str], key: str, start: int = 0) -> int | None:
    """Return the index of the first line from ``start`` holding ``key`` followed by whitespace."""
    for index in range(start, len(lines)):
        line = lines[index]
        if line.startswith(key) and len(line) > len(key) and line[len(key)] in _SPACE:
            return index
    return None


def goto_map(lines: list[str]) -> int | None:
    """Return the index of the first non-empty map line, or None if there is none."""
    for index, line in enumerate(lines):
        if line and is_map_line(line):
            return index
    return None


def generate_map(lines: list[str]) -> list[list[str]]:
    """Build a mutable grid from the leading map lines of ``lines``."""
    grid: list[list[str]] = []
    for line in lines:
        if not is_map_line(line):
            break
        grid.append(list(line))
    return grid