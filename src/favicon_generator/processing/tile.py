"""Windows tile 合成：纯色背景 + 居中、留白的源图。"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from PIL import Image

from favicon_generator.core.models import TileSpec
from favicon_generator.utils.colors import parse_hex_color

_RESAMPLING = getattr(Image, "Resampling", Image)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TilePlacement:
    """源图在 tile 画布中的位置与尺寸。"""

    x: int
    y: int
    width: int
    height: int

    @property
    def offset(self) -> tuple[int, int]:
        return self.x, self.y

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height


def compute_tile_placement(source_size: tuple[int, int], spec: TileSpec) -> TilePlacement:
    """按宽高比选择贴合方向，计算居中后的位置。

    比例相同时按高度贴合。结果始终落在扣除内边距后的区域内。
    """

    source_w, source_h = source_size
    max_w, max_h = spec.inner_box

    source_aspect = source_w / source_h
    tile_aspect = spec.width / spec.height

    if source_aspect > tile_aspect:
        inner_w = float(max_w)
        inner_h = inner_w / source_aspect
    else:
        inner_h = float(max_h)
        inner_w = inner_h * source_aspect

    # 内边距较大时另一条边可能越界，此时整体等比收缩。
    overflow = max(inner_w / max_w, inner_h / max_h)
    if overflow > 1:
        inner_w /= overflow
        inner_h /= overflow

    width = min(max_w, max(1, round(inner_w)))
    height = min(max_h, max(1, round(inner_h)))

    x = math.floor((spec.width - width) / 2)
    y = math.floor((spec.height - height) / 2)
    return TilePlacement(x=x, y=y, width=width, height=height)


def tile(source: Image.Image, spec: TileSpec) -> Image.Image:
    """生成不透明的 tile 图片。"""

    background = parse_hex_color(spec.background)
    canvas = Image.new("RGB", (spec.width, spec.height), background.rgb)

    placement = compute_tile_placement(source.size, spec)
    LOGGER.debug(
        "合成 tile %sx%s，源图 %sx%s 置于 (%s, %s)",
        spec.width,
        spec.height,
        placement.width,
        placement.height,
        placement.x,
        placement.y,
    )

    working = source if source.mode == "RGBA" else source.convert("RGBA")
    resized = working.resize(placement.size, _RESAMPLING.LANCZOS)
    try:
        canvas.paste(resized, placement.offset, mask=resized)
    finally:
        resized.close()
        if working is not source:
            working.close()
    return canvas
