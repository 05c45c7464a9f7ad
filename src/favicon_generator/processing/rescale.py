"""按长边等比缩放，保留 Alpha 通道。"""

from __future__ import annotations

import logging

from PIL import Image

from favicon_generator.core.models import ScaleTarget

_RESAMPLING = getattr(Image, "Resampling", Image)

LOGGER = logging.getLogger(__name__)

TRANSPARENT = (255, 255, 255, 0)


def compute_square_target(source_size: tuple[int, int], size: int) -> ScaleTarget:
    """计算长边等于 ``size`` 的目标尺寸。

    非正方形的源图得到的结果并不是正方形：长边为 ``size``，短边按原比例取整。
    """

    width, height = source_size
    if width > height:
        ratio = size / width
        return ScaleTarget(size, max(1, round(height * ratio)))
    if width < height:
        ratio = size / height
        return ScaleTarget(max(1, round(width * ratio)), size)
    return ScaleTarget(size, size)


def resize(source: Image.Image, target: ScaleTarget) -> Image.Image:
    """将源图完整重采样到一张全新的透明画布上。"""

    canvas = Image.new("RGBA", target.size, TRANSPARENT)
    working = source if source.mode == "RGBA" else source.convert("RGBA")
    try:
        resampled = working.resize(target.size, _RESAMPLING.LANCZOS)
    finally:
        if working is not source:
            working.close()

    # 直接覆盖像素（含 Alpha），不与透明底色混合。
    canvas.paste(resampled, (0, 0))
    resampled.close()
    return canvas


def square(source: Image.Image, size: int) -> Image.Image:
    """缩放为长边等于 ``size`` 的图标。"""

    target = compute_square_target(source.size, size)
    LOGGER.debug("缩放 %sx%s -> %sx%s", source.width, source.height, target.width, target.height)
    return resize(source, target)
