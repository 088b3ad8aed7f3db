import pytest

from cubed.errors import CubError, ErrorFlags, MapError
from cubed.model import Vector
from cubed.parser import (
    Scene,
    TexturePaths,
    get_colors,
    get_player,
    get_sprites,
    get_texture_paths,
    parse,
    parse_color,
    parse_lines,
)


def scene_lines():
    return [
        "NO ./north.png",
        "SO ./south.png",
        "WE ./west.png",
        "EA ./east.png",
        "",
        "F 220,100,0",
        "C 225,30,0",
        "",
        "SPRITE ./sprite.png",
        "111111",
        "100001",
        "10N0A1",
        "111111",
    ]


def test_parse_color_black_is_opaque():
    assert parse_color(" 0,0,0") == 0xFF


def test_parse_color_white():
    assert parse_color(" 255,255,255") == 0xFFFFFFFF


def test_parse_color_byte_order():
    assert parse_color(" 1,2,3").to_bytes(4, "big") == bytes([1, 2, 3, 255])


def test_parse_color_allows_spaces():
    assert parse_color("  10 , 20 ,30 ") == parse_color(" 10,20,30")


@pytest.mark.parametrize("text", [" 256,0,0", " 1,2", " 1,2,3x", " 1,2,3,4", " a,b,c", " 1, ,3"])
def test_parse_color_rejects(text):
    with pytest.raises(ValueError):
        parse_color(text)


def test_get_colors():
    floor, ceiling = get_colors(scene_lines())
    assert floor == parse_color(" 220,100,0")
    assert ceiling == parse_color(" 225,30,0")


def test_get_colors_bad_floor():
    lines = ["F 300,0,0", "C 1,2,3"]
    with pytest.raises(CubError, match="Bad input at floor instruction"):
        get_colors(lines)


def test_get_colors_bad_both():
    with pytest.raises(CubError) as info:
        get_colors(["F x", "C y"])
    assert "floor" in str(info.value)
    assert "ceiling" in str(info.value)


def test_get_colors_missing_floor():
    with pytest.raises(CubError):
        get_colors(["C 1,2,3"])


def test_get_texture_paths():
    paths = get_texture_paths(scene_lines())
    assert paths.north == "./north.png"
    assert paths.south == "./south.png"
    assert paths.west == "./west.png"
    assert paths.east == "./east.png"
    assert paths.sprite == "./sprite.png"
    assert paths.door is None
    assert paths.floor == parse_color(" 220,100,0")


def test_get_texture_paths_skips_padding():
    lines = ["NO \t ./a.png", "F 0,0,0", "C 0,0,0"]
    assert get_texture_paths(lines).north == "./a.png"


def test_get_player_north():
    grid = [list("111"), list("1N1"), list("111")]
    player = get_player(grid)
    assert player.position == Vector(1.5, 1.5)
    assert player.direction == Vector(0, -1)
    assert player.camera == Vector(2 / 3, 0)
    assert grid[1][1] == "0"


@pytest.mark.parametrize(
    "char, direction, camera",
    [
        ("S", Vector(0, 1), Vector(-2 / 3, 0)),
        ("W", Vector(-1, 0), Vector(0, -2 / 3)),
        ("E", Vector(1, 0), Vector(0, 2 / 3)),
    ],
)
def test_get_player_directions(char, direction, camera):
    player = get_player([list("111"), list("10" + char + "1")])
    assert player.direction == direction
    assert player.camera == camera
    assert player.position == Vector(2.5, 1.5)


def test_get_player_missing():
    with pytest.raises(CubError):
        get_player([list("111"), list("101")])


def test_get_sprites():
    grid = [list("1A1"), list("0A0")]
    sprites = get_sprites(grid)
    assert sprites == [Vector(1.5, 0.5), Vector(1.5, 1.5)]
    assert all("A" not in row for row in grid)


def test_get_sprites_none():
    assert get_sprites([list("101")]) == []


def test_parse_lines():
    scene = parse_lines(scene_lines())
    assert isinstance(scene.paths, TexturePaths)
    assert scene.player.position == Vector(2.5, 2.5)
    assert scene.sprites == [Vector(4.5, 2.5)]
    assert "".join(scene.grid[2]) == "100001"
    assert len(scene.grid) == 4


def test_parse_lines_open_map():
    lines = scene_lines()
    lines[-1] = "11111"
    lines[-2] = "10N0A0"
    with pytest.raises(MapError) as info:
        parse_lines(lines)
    assert info.value.flags & ErrorFlags.MAP_NOT_CLOSED


def test_parse_lines_sprite_without_texture():
    lines = [line for line in scene_lines() if not line.startswith("SPRITE")]
    with pytest.raises(MapError):
        parse_lines(lines)


def test_parse_file(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text("\n".join(scene_lines()) + "\n")
    scene = parse(path)
    assert isinstance(scene, Scene)
    assert scene.paths.east == "./east.png"
    assert scene.player.direction == Vector(0, -1)


def test_parse_bad_extension(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text("\n".join(scene_lines()))
    with pytest.raises(CubError):
        parse(path)


def test_parse_directory(tmp_path):
    folder = tmp_path / "dir.cub"
    folder.mkdir()
    with pytest.raises(CubError):
        parse(folder)


def test_parse_missing_file(tmp_path):
    with pytest.raises(CubError):
        parse(tmp_path / "absent.cub")