"""多分辨率 ICO 容器。"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from favicon_generator.core.exceptions import ConfigError
from favicon_generator.core.models import ScaleTarget
from favicon_generator.core.output_manager import ImageWriteError
from favicon_generator.processing.image_loader import load_image
from favicon_generator.processing.rescale import TRANSPARENT, resize

LOGGER = logging.getLogger(__name__)

MAX_ICO_SIZE = 256


@dataclass(frozen=True, slots=True)
class IconEntry:
    source_path: Path
    size: tuple[int, int]


class IconContainer:
    """收集若干尺寸的源图，保存为单个 .ico 文件。"""

    def __init__(self) -> None:
        self._entries: list[IconEntry] = []

    @property
    def sizes(self) -> list[tuple[int, int]]:
        return [entry.size for entry in self._entries]

    def add(self, source_path: Path, size: tuple[int, int]) -> None:
        width, height = size
        if not (0 < width <= MAX_ICO_SIZE and 0 < height <= MAX_ICO_SIZE):
            raise ConfigError(f"ICO 尺寸必须在 1..{MAX_ICO_SIZE} 之间: {width}x{height}")
        self._entries.append(IconEntry(source_path=Path(source_path), size=(width, height)))

    def save(self, path: Path) -> None:
        """渲染所有尺寸并写入 ``path``。"""

        if not self._entries:
            raise ConfigError("ICO 中至少需要一个尺寸")

        frames: dict[tuple[int, int], Image.Image] = {}
        try:
            for entry in self._entries:
                if entry.size in frames:
                    continue
                with load_image(entry.source_path) as source:
                    frames[entry.size] = _render_frame(source, entry.size)

            ordered = sorted(frames.values(), key=lambda frame: frame.width * frame.height, reverse=True)
            base, others = ordered[0], ordered[1:]
            try:
                base.save(
                    path,
                    format="ICO",
                    sizes=[frame.size for frame in ordered],
                    append_images=others,
                )
            except OSError as exc:
                raise ImageWriteError(f"写入 ICO 失败: {path}") from exc
        finally:
            for frame in frames.values():
                frame.close()

        LOGGER.info("已生成 ICO（%s）: %s", ", ".join(f"{w}x{h}" for w, h in self.sizes), path)


def _render_frame(source: Image.Image, size: tuple[int, int]) -> Image.Image:
    """等比缩放后居中放在透明画布上，保证帧尺寸与声明一致。"""

    canvas = Image.new("RGBA", size, TRANSPARENT)
    resized = resize(source, _fit_target(source.size, size))
    offset = (
        (size[0] - resized.width) // 2,
        (size[1] - resized.height) // 2,
    )
    canvas.paste(resized, offset)
    resized.close()
    return canvas


def _fit_target(source_size: tuple[int, int], size: tuple[int, int]) -> ScaleTarget:
    """等比放入 ``size``，每条边至少 1 像素。"""

    source_w, source_h = source_size
    width, height = size
    scale = min(width / source_w, height / source_h)
    return ScaleTarget(
        min(width, max(1, round(source_w * scale))),
        min(height, max(1, round(source_h * scale))),
    )
