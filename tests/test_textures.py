import pytest
from PIL import Image

from cubed.errors import CubError, ErrorFlags, TextureError
from cubed.parser import TexturePaths
from cubed.textures import (
    Texture,
    Textures,
    load_texture,
    load_textures,
    sprite_color,
)


def _save(tmp_path, name, size, color=(10, 20, 30, 255)):
    path = tmp_path / name
    Image.new("RGBA", size, color).save(path, format="PNG")
    return str(path)


def test_load_texture_reads_rgba_pixels(tmp_path):
    image = Image.new("RGBA", (2, 1))
    image.putpixel((0, 0), (255, 0, 0, 255))
    image.putpixel((1, 0), (0, 0, 255, 128))
    path = tmp_path / "wall.png"
    image.save(path, format="PNG")
    texture = load_texture(str(path))
    assert (texture.width, texture.height) == (2, 1)
    assert texture.color_at(0, 0) == 0xFF0000FF
    assert texture.color_at(1, 0) == 0x0000FF80


def test_from_image_adds_opaque_alpha():
    texture = Texture.from_image(Image.new("RGB", (3, 2), (1, 2, 3)))
    assert texture.bytes_per_pixel == 4
    assert len(texture.pixels) == 3 * 2 * 4
    assert texture.color_at(2, 1) & 0xFF == 0xFF


def test_color_at_uses_row_major_order():
    texture = Texture(width=2, height=2, pixels=bytes(range(16)))
    assert texture.color_at(1, 1) == int.from_bytes(bytes([12, 13, 14, 15]), "big")
    assert texture.color_at(0, 1) == int.from_bytes(bytes([8, 9, 10, 11]), "big")


def test_color_at_outside_raises():
    texture = Texture(width=1, height=1, pixels=bytes(4))
    with pytest.raises(IndexError):
        texture.color_at(0, 1)


def test_sprite_color_selects_frame_column():
    image = Image.new("RGBA", (8, 2))
    for x in range(8):
        for y in range(2):
            image.putpixel((x, y), (x * 20, y * 50, x + y, 255))
    sheet = Texture.from_image(image)
    for frame in range(4):
        for x in range(2):
            for y in range(2):
                assert sprite_color(sheet, frame, x, y) == sheet.color_at(
                    x + frame * 2, y
                )


def test_load_texture_missing_file(tmp_path):
    with pytest.raises(CubError):
        load_texture(str(tmp_path / "absent.png"))


def test_load_texture_rejects_non_png(tmp_path):
    path = tmp_path / "wall.png"
    path.write_text("not an image")
    with pytest.raises(CubError):
        load_texture(str(path))


def test_load_texture_none_path():
    with pytest.raises(CubError):
        load_texture(None)


def test_load_textures_success(tmp_path):
    wall = _save(tmp_path, "wall.png", (4, 4))
    door = _save(tmp_path, "door.png", (4, 4), (1, 1, 1, 255))
    sprite = _save(tmp_path, "sprite.png", (8, 2))
    textures = load_textures(
        TexturePaths(north=wall, south=wall, west=wall, east=wall, door=door, sprite=sprite)
    )
    assert isinstance(textures, Textures)
    assert textures.north.width == 4
    assert textures.door.color_at(0, 0) == Texture.from_image(
        Image.new("RGBA", (1, 1), (1, 1, 1, 255))
    ).color_at(0, 0)
    assert textures.sprite.width == 8


def test_load_textures_optional_absent(tmp_path):
    wall = _save(tmp_path, "wall.png", (2, 2))
    textures = load_textures(TexturePaths(north=wall, south=wall, west=wall, east=wall))
    assert textures.door is None
    assert textures.sprite is None


def test_load_textures_reports_missing_walls(tmp_path):
    wall = _save(tmp_path, "wall.png", (2, 2))
    missing = str(tmp_path / "missing.png")
    with pytest.raises(TextureError) as info:
        load_textures(TexturePaths(north=missing, south=wall, west=wall, east=missing))
    assert info.value.flags == ErrorFlags.F_NORTH | ErrorFlags.F_EAST
    assert "Failed to load north texture" in info.value.messages
    assert "Failed to load east texture" in info.value.messages


def test_load_textures_rejects_bad_sprite_width(tmp_path):
    wall = _save(tmp_path, "wall.png", (2, 2))
    sprite = _save(tmp_path, "sprite.png", (6, 2))
    with pytest.raises(TextureError) as info:
        load_textures(
            TexturePaths(north=wall, south=wall, west=wall, east=wall, sprite=sprite)
        )
    assert info.value.flags == ErrorFlags.F_SPRITE_SIZE


def test_load_textures_reports_missing_door(tmp_path):
    wall = _save(tmp_path, "wall.png", (2, 2))
    with pytest.raises(TextureError) as info:
        load_textures(
            TexturePaths(
                north=wall, south=wall, west=wall, east=wall,
                door=str(tmp_path / "nope.png"),
            )
        )
    assert info.value.flags == ErrorFlags.F_DOOR