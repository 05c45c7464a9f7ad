"""源图片加载与 Pillow 能力检查。"""

from __future__ import annotations

import logging
from pathlib import Path

import PIL
from PIL import Image, ImageOps, UnidentifiedImageError, features

from favicon_generator.core.exceptions import MissingCapabilityError, UnsupportedFormatError

LOGGER = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("JPEG", "GIF", "PNG")
REQUIRED_ENCODERS = ("PNG", "ICO")
REQUIRED_CODECS = ("jpg", "zlib")


def load_image(path: Path) -> Image.Image:
    """加载源图片，执行 EXIF 旋转并统一转换为 RGBA。

    格式由文件签名判断，与扩展名无关。返回值为新的 Image 对象，调用者负责关闭。
    """

    try:
        with Image.open(path) as img:
            if img.format not in SUPPORTED_FORMATS:
                raise UnsupportedFormatError(f"不支持的图片格式 {img.format}: {path}")

            # 动图只取第一帧
            img.seek(0)
            img.load()

            img = ImageOps.exif_transpose(img)
            if img.mode != "RGBA":
                img = img.convert("RGBA")

            return img.copy()
    except UnidentifiedImageError as exc:
        LOGGER.debug("无法识别图像文件 %s: %s", path, exc)
        raise UnsupportedFormatError(f"无法识别的图片格式: {path}") from exc
    except Image.DecompressionBombError as exc:
        LOGGER.debug("图像尺寸超过 Pillow 限制 %s: %s", path, exc)
        raise UnsupportedFormatError(f"图像尺寸过大，拒绝解码: {path}") from exc


def check_capabilities() -> None:
    """确认当前 Pillow 构建可以解码 JPEG/GIF/PNG 并编码 PNG/ICO。"""

    Image.init()
    missing: list[str] = []

    for image_format in SUPPORTED_FORMATS:
        if image_format not in Image.OPEN:
            missing.append(f"decode:{image_format}")
    for image_format in REQUIRED_ENCODERS:
        if image_format not in Image.SAVE:
            missing.append(f"encode:{image_format}")
    for codec in REQUIRED_CODECS:
        if not features.check_codec(codec):
            missing.append(f"codec:{codec}")

    if missing:
        raise MissingCapabilityError(missing)
    LOGGER.debug("Pillow %s 能力检查通过", PIL.__version__)
