"""输出目录、文件写入与写入校验。"""

from __future__ import annotations

import logging
import os
import re
import shutil
from pathlib import Path
from typing import Union

from PIL import Image

from favicon_generator.core.exceptions import FaviconError, GeneratorError

LOGGER = logging.getLogger(__name__)

_SEPARATORS_RE = re.compile(r"[/\\]+")


class ImageWriteError(FaviconError):
    """输出写入失败。"""


def clean_path(value: Union[str, Path]) -> Path:
    """去除首尾空白，并把连续的 / 与 \\ 统一为当前平台的分隔符。"""

    text = str(value).strip()
    if text:
        text = _SEPARATORS_RE.sub(lambda _: os.sep, text)
    return Path(text)


def ensure_directory(path: Path) -> Path:
    """幂等地创建目录，已存在时直接返回。"""

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise GeneratorError(f"无法创建目录: {path}", path) from exc

    if not path.is_dir():
        raise GeneratorError(f"路径已存在且不是目录: {path}", path)
    return path


def save_png(image: Image.Image, destination: Path) -> None:
    """将 PIL Image 编码为 PNG 写入磁盘。"""

    image_to_save = image
    if image.mode not in {"RGB", "RGBA"}:
        image_to_save = image.convert("RGBA")

    try:
        image_to_save.save(destination, format="PNG", optimize=True)
    except OSError as exc:
        raise ImageWriteError(f"写入文件失败: {destination}") from exc
    finally:
        if image_to_save is not image:
            image_to_save.close()


def write_text(destination: Path, content: str) -> None:
    """以 UTF-8 写入文本文件。"""

    try:
        destination.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ImageWriteError(f"写入文件失败: {destination}") from exc


def copy_file(source: Path, destination: Path) -> None:
    """复制文件内容，目标已存在时覆盖。"""

    try:
        shutil.copyfile(source, destination)
    except OSError as exc:
        raise ImageWriteError(f"复制文件失败: {source} -> {destination}") from exc


def verify_written(path: Path, artifact: str) -> Path:
    """确认文件已写出，否则终止流程。"""

    if not path.is_file():
        raise GeneratorError(f"写入 {artifact} 失败: {path}", path)
    LOGGER.debug("已写入 %s", path)
    return path
