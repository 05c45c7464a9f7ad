"""项目内使用的自定义异常定义。"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union


class FaviconError(Exception):
    """基础异常类型。"""


class ConfigError(FaviconError):
    """配置不合法时抛出（尺寸表开关、Tile 参数、未知配置键等）。"""


class UnsupportedFormatError(FaviconError):
    """源图片不是 JPEG/GIF/PNG 时抛出。"""


class InvalidFormatError(FaviconError):
    """HEX 颜色字符串格式错误。"""

    def __init__(self, value: str) -> None:
        super().__init__(f"无法解析颜色值: {value!r}")
        self.value = value


class MissingCapabilityError(FaviconError):
    """Pillow 缺少所需的编解码能力。"""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = tuple(missing)
        super().__init__("缺少图像处理能力: " + ", ".join(self.missing))


class GeneratorError(FaviconError):
    """生成流程失败，始终携带出错的路径。"""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None and str(path) != "" else None
