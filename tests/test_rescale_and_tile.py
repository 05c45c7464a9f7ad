"""缩放与 tile 合成的单元测试。"""

from __future__ import annotations

import pytest
from PIL import Image

from favicon_generator.core.models import ScaleTarget, TileSpec
from favicon_generator.processing.icon import _render_frame
from favicon_generator.processing.rescale import compute_square_target, resize, square
from favicon_generator.processing.tile import compute_tile_placement, tile


def _make_image(size: tuple[int, int], color=(255, 0, 0, 255)) -> Image.Image:
    return Image.new("RGBA", size, color)


@pytest.mark.parametrize("side,target", [(64, 16), (100, 180), (512, 310), (7, 7)])
def test_square_source_gives_exact_square(side: int, target: int) -> None:
    result = square(_make_image((side, side)), target)

    assert result.size == (target, target)
    assert result.mode == "RGBA"


@pytest.mark.parametrize(
    "source_size,target",
    [((800, 400), 100), ((400, 800), 100), ((300, 200), 57), ((123, 457), 192), ((1000, 3), 16)],
)
def test_non_square_source_keeps_aspect_ratio(source_size: tuple[int, int], target: int) -> None:
    width, height = source_size
    result = square(_make_image(source_size), target)

    shorter = max(1, round(target * min(width, height) / max(width, height)))
    expected = (target, shorter) if width > height else (shorter, target)
    assert result.size == expected


def test_landscape_scenario() -> None:
    assert compute_square_target((800, 400), 100) == ScaleTarget(100, 50)
    assert square(_make_image((800, 400)), 100).size == (100, 50)


def test_resize_preserves_alpha_and_source() -> None:
    source = _make_image((40, 40), (0, 0, 255, 0))

    result = resize(source, ScaleTarget(10, 10))

    assert result is not source
    assert source.size == (40, 40)
    assert result.getpixel((5, 5))[3] == 0

    opaque = resize(_make_image((40, 20), (0, 128, 0, 255)), ScaleTarget(20, 10))
    assert opaque.getpixel((10, 5)) == (0, 128, 0, 255)


def test_resize_converts_non_rgba_sources() -> None:
    source = Image.new("RGB", (30, 30), (10, 20, 30))

    result = resize(source, ScaleTarget(15, 15))

    assert result.mode == "RGBA"
    assert result.getpixel((7, 7)) == (10, 20, 30, 255)


def test_tile_scenario_with_equal_aspect() -> None:
    spec = TileSpec(width=300, height=150, padding=10, background="#FFFFFF")

    placement = compute_tile_placement((1000, 500), spec)

    assert placement.size == (260, 130)
    assert placement.offset == (20, 10)

    result = tile(_make_image((1000, 500)), spec)
    assert result.size == (300, 150)
    assert result.mode == "RGB"
    assert result.getpixel((5, 5)) == (255, 255, 255)
    assert result.getpixel((19, 75)) == (255, 255, 255)
    assert result.getpixel((150, 75)) == (255, 0, 0)


@pytest.mark.parametrize(
    "source_size,tile_size,padding",
    [
        ((1000, 500), (300, 150), 10),
        ((500, 1000), (310, 150), 20),
        ((640, 480), (70, 70), 5),
        ((480, 640), (150, 150), 30),
        ((1001, 500), (300, 150), 10),
        ((2000, 300), (310, 310), 0),
        ((100, 100), (310, 150), 70),
        ((300, 100), (100, 200), 40),
    ],
)
def test_tile_placement_fits_and_is_centered(
    source_size: tuple[int, int], tile_size: tuple[int, int], padding: int
) -> None:
    width, height = tile_size
    spec = TileSpec(width=width, height=height, padding=padding, background="#000")

    placement = compute_tile_placement(source_size, spec)

    assert 0 < placement.width <= width - 2 * padding
    assert 0 < placement.height <= height - 2 * padding
    assert abs(placement.x - (width - placement.width) / 2) < 1
    assert abs(placement.y - (height - placement.height) / 2) < 1

    result = tile(_make_image(source_size), spec)
    assert result.size == tile_size


def test_tile_is_flattened_onto_background() -> None:
    transparent = _make_image((50, 50), (0, 0, 0, 0))
    spec = TileSpec(width=70, height=70, padding=5, background="#0a0")

    result = tile(transparent, spec)

    assert result.mode == "RGB"
    assert result.getpixel((35, 35)) == (0, 170, 0)
    assert result.getpixel((0, 0)) == (0, 170, 0)


def test_ico_frame_fit_never_collapses_to_zero() -> None:
    frame = _render_frame(_make_image((1000, 20)), (16, 16))

    assert frame.size == (16, 16)
    assert frame.getpixel((8, 7))[3] == 255
    assert frame.getpixel((8, 0))[3] == 0
