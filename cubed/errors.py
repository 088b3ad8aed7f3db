"""Error flags, diagnostic messages and exceptions for map and texture loading."""

from __future__ import annotations

import enum

BLACK = "\033[1;30m"
RED = "\033[1;31m"
GREEN = "\033[1;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[1;34m"
MAGENTA = "\033[1;35m"
CYAN = "\033[1;36m"
WHITE = "\033[1;37m"
NC = "\033[0m"


class ErrorFlags(enum.IntFlag):
    """Bit mask describing what was found, or what went wrong, in a map file."""

    NONE = 0
    F_NORTH = 0x1
    F_SOUTH = 0x2
    F_WEST = 0x4
    F_EAST = 0x8
    F_FLOOR = 0x10
    F_CEILING = 0x20
    ALL_TEXTURES = 0x3F
    REPEATED_TEXTURE = 0x80
    F_DOOR = 0x100
    F_DOOR_MAP = 0x200
    DOOR_COMP = 0x300
    F_SPRITE = 0x400
    F_SPRITE_MAP = 0x800
    SPRITE_COMP = 0xC00
    F_SPRITE_SIZE = 0x1000
    MAP_BREAK = 0x400000
    NO_PLAYER = 0x800000
    REPEATED_PLAYER = 0x1000000
    MAP_NOT_CLOSED = 0x2000000
    NO_MAP = 0x4000000
    FORBIDDEN_MAP = 0x4000000
    BAD_SITE_MAP = 0x10000000
    WRONG_DATA = 0x20000000
    FAILURE = 0x40000000


def _has(flags: int, flag: ErrorFlags) -> bool:
    return int(flags) & flag == flag


def _incomplete(flags: int, composite: ErrorFlags) -> bool:
    part = int(flags) & composite
    return part != 0 and part != composite


# (flag, message shown when the flag is set?, message)
_PARSE_CHECKS = (
    (ErrorFlags.WRONG_DATA, True, "There is wrong data in the file"),
    (ErrorFlags.REPEATED_TEXTURE, True, "There is a more than one path for a texture"),
    (ErrorFlags.F_NORTH, False, "There is no North path"),
    (ErrorFlags.F_SOUTH, False, "There is no South path"),
    (ErrorFlags.F_WEST, False, "There is no West path"),
    (ErrorFlags.F_EAST, False, "There is no East path"),
    (ErrorFlags.F_FLOOR, False, "There is no Floor color"),
    (ErrorFlags.F_CEILING, False, "There is no Ceiling color"),
    (ErrorFlags.BAD_SITE_MAP, True, "The map is not at the end of the file"),
    (ErrorFlags.NO_MAP, True, "No correct map was found"),
    (ErrorFlags.FORBIDDEN_MAP, True, "The map has forbidden char"),
    (ErrorFlags.MAP_NOT_CLOSED, True, "The map is not closed"),
    (ErrorFlags.REPEATED_PLAYER, True, "There is more than one player"),
    (ErrorFlags.NO_PLAYER, True, "There is no player"),
    (ErrorFlags.MAP_BREAK, True, "The map is break"),
)

_TEXTURE_CHECKS = (
    (ErrorFlags.F_NORTH, "Failed to load north texture"),
    (ErrorFlags.F_SOUTH, "Failed to load south texture"),
    (ErrorFlags.F_WEST, "Failed to load west texture"),
    (ErrorFlags.F_EAST, "Failed to load east texture"),
    (ErrorFlags.F_DOOR, "Failed to load door texture"),
    (ErrorFlags.F_SPRITE, "Failed to load sprite texture"),
    (
        ErrorFlags.F_SPRITE_SIZE,
        "The sprite sheet has incorrect format\n"
        "Correct format: | sprite 1 | sprite 2 | sprite 3 | sprite 4 |",
    ),
)


def parse_error_messages(flags: int) -> list[str]:
    """Return the diagnostics for a map-file check mask, in reporting order."""
    messages = [
        message
        for flag, when_set, message in _PARSE_CHECKS
        if _has(flags, flag) == when_set
    ]
    if _incomplete(flags, ErrorFlags.DOOR_COMP):
        if _has(flags, ErrorFlags.F_DOOR):
            messages.append("There is a door texture without an instance in the map")
        else:
            messages.append("There is a door instance in the map without texture")
    if _incomplete(flags, ErrorFlags.SPRITE_COMP):
        if _has(flags, ErrorFlags.F_SPRITE):
            messages.append("There is a sprite texture without an instance in the map")
        else:
            messages.append("There is a sprite instance in the map without texture")
    return messages


def texture_error_messages(flags: int) -> list[str]:
    """Return the diagnostics for a texture-loading failure mask."""
    return [message for flag, message in _TEXTURE_CHECKS if _has(flags, flag)]


class CubError(Exception):
    """Base class for every error reported while loading or running a scene."""


class MapError(CubError):
    """The map file failed validation."""

    def __init__(self, flags: int) -> None:
        self.flags = ErrorFlags(int(flags))
        self.messages = parse_error_messages(flags)
        super().__init__("\n".join(self.messages) or "Invalid map file")


class TextureError(CubError):
    """One or more textures could not be loaded."""

    def __init__(self, flags: int) -> None:
        self.flags = ErrorFlags(int(flags))
        self.messages = texture_error_messages(flags)
        super().__init__("\n".join(self.messages) or "Failed to load textures")