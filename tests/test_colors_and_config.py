"""颜色解析、数据模型、尺寸表与配置构造的单元测试。"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from favicon_generator.core.config import GeneratorConfig, TileConfig
from favicon_generator.core.exceptions import ConfigError, InvalidFormatError
from favicon_generator.core.models import Color, GenerationManifest, ScaleTarget, SizeEntry, TileSpec
from favicon_generator.core.output_manager import clean_path
from favicon_generator.core.sizes import CORE_SIZES, resolve_sizes, size_entries
from favicon_generator.utils.colors import expand_hex, parse_hex_color


@pytest.mark.parametrize("short", ["fff", "000", "a1b", "#C0f", "9e3"])
def test_short_hex_equals_expanded_form(short: str) -> None:
    digits = short.lstrip("#")
    expanded = "".join(ch * 2 for ch in digits)

    assert parse_hex_color(short) == parse_hex_color(expanded)
    assert parse_hex_color(short) == parse_hex_color("#" + expanded)


def test_hex_digits_are_doubled() -> None:
    assert parse_hex_color("#abc") == Color(0xAA, 0xBB, 0xCC)
    assert parse_hex_color("123456").rgb == (0x12, 0x34, 0x56)
    assert expand_hex("#FfF") == "ffffff"


@pytest.mark.parametrize("value", ["", "#", "ff", "ffff", "fffff", "fffffff", "#ggg", "12345z", " fff", "fff\n", "##fff"])
def test_invalid_hex_is_rejected(value: str) -> None:
    with pytest.raises(InvalidFormatError) as excinfo:
        parse_hex_color(value)

    assert excinfo.value.value == value
    assert repr(value) in str(excinfo.value)


def test_tile_spec_padding_invariant() -> None:
    TileSpec(width=70, height=70, padding=34, background="#fff")

    with pytest.raises(ConfigError):
        TileSpec(width=70, height=70, padding=35, background="#fff")
    with pytest.raises(ConfigError):
        TileSpec(width=310, height=150, padding=75, background="#fff")
    with pytest.raises(ConfigError):
        TileSpec(width=70, height=70, padding=-1, background="#fff")


def test_scale_target_must_be_positive() -> None:
    with pytest.raises(ConfigError):
        ScaleTarget(0, 10)


def test_size_entry_normalisation_and_tile_rule() -> None:
    assert SizeEntry.from_value("favicon-32x32.png", 32) == SizeEntry("favicon-32x32.png", 32, 32)
    assert SizeEntry.from_value("mstile-310x150.png", (310, 150)).height == 150

    assert SizeEntry.from_value("mstile-70x70.png", 70).is_tile
    assert SizeEntry.from_value("mstile-310x150.png", (310, 150)).is_tile
    assert not SizeEntry.from_value("mstile-144x144.png", 144).is_tile
    assert not SizeEntry.from_value("android-chrome-144x144.png", 144).is_tile


def test_resolve_sizes_respects_exclusion_flags() -> None:
    only_core = resolve_sizes(True, True, True)
    assert only_core == CORE_SIZES

    everything = resolve_sizes(False, False, False)
    names = list(everything)
    assert names[: len(CORE_SIZES)] == list(CORE_SIZES)
    assert "apple-touch-icon-57x57.png" in everything
    assert "android-chrome-192x192.png" in everything
    assert everything["mstile-310x150.png"] == (310, 150)

    entries = size_entries(True, False, True)
    assert all(not entry.name.startswith("mstile") for entry in entries)
    assert any(entry.name.startswith("android-chrome") for entry in entries)


def test_resolve_sizes_rejects_non_bool_flags() -> None:
    with pytest.raises(ConfigError):
        resolve_sizes("yes", True, True)  # type: ignore[arg-type]


def test_generation_manifest_is_append_only_list(tmp_path: Path) -> None:
    manifest = GenerationManifest()
    manifest.append(tmp_path / "a.png")
    manifest.append(tmp_path / "b.png")

    assert len(manifest) == 2
    assert tmp_path / "a.png" in manifest
    assert list(manifest) == [tmp_path / "a.png", tmp_path / "b.png"]
    assert isinstance(manifest.paths, tuple)


def test_clean_path_normalises_separators() -> None:
    assert clean_path("  out//favicons\\\\web/ ") == Path("out", "favicons", "web")
    assert str(clean_path("a\\b")) == f"a{os.sep}b"


def test_config_from_mapping_accepts_flat_keys(tmp_path: Path) -> None:
    config = GeneratorConfig.from_mapping(
        {
            "filePath": str(tmp_path / "logo.png"),
            "destPath": str(tmp_path / "out") + "//",
            "use48Icon": True,
            "noMs": False,
            "tileColor": "#000",
            "tilePadding": 4,
            "appName": "Demo",
            "theme_color": "#123456",
        }
    )

    assert config.source == tmp_path / "logo.png"
    assert config.destination == tmp_path / "out"
    assert config.favicon_dir == tmp_path / "out" / "favicon"
    assert config.use_48_icon is True
    assert config.exclude_ms is False
    assert config.exclude_old_apple is True
    assert config.tile == TileConfig(color="#000", padding=4)
    assert config.manifest.name == "Demo"
    assert config.manifest.theme_color == "#123456"


def test_config_rejects_unknown_keys(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as excinfo:
        GeneratorConfig.from_mapping({"destPath": str(tmp_path), "tileColour": "#fff"})

    assert "tileColour" in str(excinfo.value)


def test_config_validates_values(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        GeneratorConfig(source=None, destination=tmp_path, exclude_ms="no")  # type: ignore[arg-type]
    with pytest.raises(ConfigError):
        GeneratorConfig(source=None, destination="  ")
    with pytest.raises(ConfigError):
        TileConfig(padding=-2)
    with pytest.raises(InvalidFormatError):
        TileConfig(color="white")


def test_tile_padding_checked_against_smallest_tile(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        GeneratorConfig(source=None, destination=tmp_path, exclude_ms=False, tile=TileConfig(padding=35))

    config = GeneratorConfig(source=None, destination=tmp_path, exclude_ms=False, tile=TileConfig(padding=34))
    assert config.tile.padding == 34
    # 不生成 tile 时不限制内边距
    GeneratorConfig(source=None, destination=tmp_path, exclude_ms=True, tile=TileConfig(padding=35))


def test_tile_padding_checked_before_any_file_is_written(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        GeneratorConfig.from_mapping({"destPath": str(tmp_path / "site"), "noMs": False, "tilePadding": 40})

    assert not (tmp_path / "site").exists()
