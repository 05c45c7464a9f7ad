"""生成流水线：ICO、PNG 尺寸集、manifest.json 与 browserconfig.xml。"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional

from PIL import Image

from favicon_generator.core.config import GeneratorConfig
from favicon_generator.core.exceptions import FaviconError, GeneratorError
from favicon_generator.core.models import GenerationManifest, SizeEntry, TileSpec
from favicon_generator.core.output_manager import (
    copy_file,
    ensure_directory,
    save_png,
    verify_written,
    write_text,
)
from favicon_generator.core.progress import ProgressUpdate
from favicon_generator.core.sizes import size_entries
from favicon_generator.processing.documents import render_browserconfig, render_manifest
from favicon_generator.processing.icon import IconContainer
from favicon_generator.processing.image_loader import check_capabilities, load_image
from favicon_generator.processing.rescale import square
from favicon_generator.processing.tile import tile

LOGGER = logging.getLogger(__name__)

ProgressCallback = Optional[Callable[[ProgressUpdate], None]]

ICO_NAME = "favicon.ico"
MANIFEST_NAME = "manifest.json"
BROWSERCONFIG_NAME = "browserconfig.xml"


class FaviconGenerator:
    """按配置生成整套 favicon 文件，遇到第一个错误即终止。

    已生成的文件路径记录在 ``produced`` 中，失败时不会回滚。
    """

    def __init__(self, config: GeneratorConfig, progress_callback: ProgressCallback = None) -> None:
        self.config = config
        self.progress_callback = progress_callback
        self.produced = GenerationManifest()
        self._total = 0

    @property
    def favicon_dir(self) -> Path:
        return self.config.favicon_dir

    def execute(self) -> GenerationManifest:
        """执行完整流程并返回已生成文件列表。"""

        self._prepare()

        entries = self._resolve_entries()
        self._total = 2 + len(entries)
        if not self.config.exclude_android:
            self._total += 1
        if not self.config.exclude_ms:
            self._total += 1

        self._generate_ico()
        for entry in entries:
            self._generate_png(entry)

        if not self.config.exclude_android:
            self._generate_manifest()
        if not self.config.exclude_ms:
            self._generate_browserconfig()

        LOGGER.info("favicon 生成完成，共 %d 个文件", len(self.produced))
        return self.produced

    def _prepare(self) -> None:
        destination = Path(self.config.destination)
        ensure_directory(destination)
        ensure_directory(self.favicon_dir)
        LOGGER.debug("输出目录: %s", destination)

        source = self.config.source
        if not source or not Path(source).is_file():
            raise GeneratorError(f"输入文件不存在: {source or ''}", source)

        try:
            check_capabilities()
        except FaviconError as exc:
            raise GeneratorError(str(exc), source) from exc

    def _resolve_entries(self) -> list[SizeEntry]:
        try:
            return size_entries(
                self.config.exclude_old_apple,
                self.config.exclude_android,
                self.config.exclude_ms,
            )
        except FaviconError as exc:
            raise GeneratorError(f"尺寸表配置错误: {exc}", self.config.source) from exc

    def _generate_ico(self) -> None:
        ico_path = self.favicon_dir / ICO_NAME
        with self._artifact(f"favicon/{ICO_NAME}", ico_path):
            container = IconContainer()
            for size in self._icon_sizes():
                container.add(Path(self.config.source), size)
            container.save(ico_path)
        self._record(verify_written(ico_path, f"favicon/{ICO_NAME}"))

        root_copy = Path(self.config.destination) / ICO_NAME
        with self._artifact(ICO_NAME, root_copy):
            copy_file(ico_path, root_copy)
        self._record(verify_written(root_copy, ICO_NAME))

    def _icon_sizes(self) -> list[tuple[int, int]]:
        sizes = [(16, 16)]
        if self.config.use_48_icon:
            sizes.append((48, 48))
        if self.config.use_64_icon:
            sizes.append((64, 64))
        return sizes

    def _generate_png(self, entry: SizeEntry) -> None:
        destination = self.favicon_dir / entry.name
        with self._artifact(entry.name, destination):
            source = load_image(Path(self.config.source))
            rendered: Optional[Image.Image] = None
            try:
                if entry.is_tile:
                    spec = TileSpec(
                        width=entry.width,
                        height=entry.height,
                        padding=self.config.tile.padding,
                        background=self.config.tile.color,
                    )
                    rendered = tile(source, spec)
                else:
                    rendered = square(source, entry.width)
                save_png(rendered, destination)
            finally:
                _close_if_needed(source, rendered)
        self._record(verify_written(destination, entry.name))

    def _generate_manifest(self) -> None:
        destination = self.favicon_dir / MANIFEST_NAME
        with self._artifact(MANIFEST_NAME, destination):
            write_text(destination, render_manifest(self.config.manifest))
        self._record(verify_written(destination, MANIFEST_NAME))

    def _generate_browserconfig(self) -> None:
        destination = self.favicon_dir / BROWSERCONFIG_NAME
        with self._artifact(BROWSERCONFIG_NAME, destination):
            write_text(destination, render_browserconfig(self.config.manifest.theme_color))
        self._record(verify_written(destination, BROWSERCONFIG_NAME))

    @contextmanager
    def _artifact(self, name: str, path: Path) -> Iterator[None]:
        """把底层异常统一包装为带路径的 GeneratorError。"""

        try:
            yield
        except GeneratorError:
            raise
        except (FaviconError, OSError, ValueError) as exc:
            LOGGER.error("生成 %s 失败: %s", name, exc)
            raise GeneratorError(f"生成 {name} 失败: {exc}", path) from exc

    def _record(self, path: Path) -> None:
        self.produced.append(path)
        LOGGER.info("已生成 %s", path)
        if self.progress_callback:
            self.progress_callback(
                ProgressUpdate(total=self._total, completed=len(self.produced), artifact=path)
            )


def generate_favicons(config: GeneratorConfig, progress_callback: ProgressCallback = None) -> GenerationManifest:
    """便捷入口：构造生成器并执行。"""

    return FaviconGenerator(config, progress_callback=progress_callback).execute()


def _close_if_needed(*images: Optional[Image.Image]) -> None:
    for img in images:
        if img is not None:
            img.close()
