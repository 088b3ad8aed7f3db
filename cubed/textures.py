"""Loading wall, door and sprite textures and reading their pixels."""

from __future__ import annotations

import os
from dataclasses import dataclass

from PIL import Image

from cubed.errors import CubError, ErrorFlags, TextureError
from cubed.parser import TexturePaths

TILE_SIZE = 128
SPRITE_FRAMES = 4


@dataclass(frozen=True)
class Texture:
    """An RGBA image held as raw bytes, four bytes per pixel."""

    width: int
    height: int
    pixels: bytes
    bytes_per_pixel: int = 4

    @classmethod
    def from_image(cls, image: Image.Image) -> Texture:
        """Build a texture from a Pillow image, converting it to RGBA."""
        rgba = image.convert("RGBA")
        return cls(width=rgba.width, height=rgba.height, pixels=rgba.tobytes())

    def _pack(self, index: int) -> int:
        end = index + self.bytes_per_pixel
        if index < 0 or end > len(self.pixels):
            raise IndexError(f"pixel offset {index} outside texture data")
        return int.from_bytes(self.pixels[index:end], "big")

    def color_at(self, x: int, y: int) -> int:
        """Return the packed RGBA colour of the pixel at ``(x, y)``."""
        return self._pack((y * self.width + x) * self.bytes_per_pixel)


@dataclass
class Textures:
    """Every texture a scene uses; door and sprite are optional."""

    north: Texture
    south: Texture
    west: Texture
    east: Texture
    door: Texture | None = None
    sprite: Texture | None = None


def load_texture(path: str | os.PathLike[str] | None) -> Texture:
    """Load a PNG file as a texture, raising CubError if that fails."""
    if path is None:
        raise CubError("No texture path given")
    try:
        with Image.open(path) as image:
            if image.format != "PNG":
                raise CubError(f"'{os.fspath(path)}': not a PNG image")
            return Texture.from_image(image)
    except (OSError, ValueError) as exc:
        raise CubError(f"'{os.fspath(path)}': {exc}") from exc


def sprite_color(texture: Texture, frame: int, x: int, y: int) -> int:
    """Return the colour at ``(x, y)`` of one frame of a four-frame sprite sheet.

    ``x`` runs from 0 to a quarter of the sheet's width.
    """
    bpp = texture.bytes_per_pixel
    index = bpp * texture.width * y + bpp * x + texture.width * frame
    return texture._pack(index)


def _attempt(path: str | None, flag: ErrorFlags) -> tuple[Texture | None, ErrorFlags]:
    try:
        return load_texture(path), ErrorFlags.NONE
    except CubError:
        return None, flag


def load_textures(paths: TexturePaths) -> Textures:
    """Load every texture named in ``paths``; raise TextureError on any failure."""
    flags = ErrorFlags.NONE
    walls = {}
    for name, flag in (
        ("north", ErrorFlags.F_NORTH),
        ("south", ErrorFlags.F_SOUTH),
        ("west", ErrorFlags.F_WEST),
        ("east", ErrorFlags.F_EAST),
    ):
        walls[name], error = _attempt(getattr(paths, name), flag)
        flags |= error
    door = None
    if paths.door:
        door, error = _attempt(paths.door, ErrorFlags.F_DOOR)
        flags |= error
    sprite = None
    if paths.sprite:
        sprite, error = _attempt(paths.sprite, ErrorFlags.F_SPRITE)
        flags |= error
        if sprite is not None and (
            sprite.width < SPRITE_FRAMES or sprite.width % SPRITE_FRAMES
        ):
            sprite = None
            flags |= ErrorFlags.F_SPRITE_SIZE
    if flags:
        raise TextureError(flags)
    return Textures(door=door, sprite=sprite, **walls)