"""核心数据模型定义。"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Tuple, Union

from favicon_generator.core.exceptions import ConfigError

SizeValue = Union[int, Tuple[int, int]]

TILE_PREFIX = "mstile"
# 144x144 的 Windows tile 直接复用方形缩放结果，不做背景合成。
SQUARE_TILE_WIDTH = 144


@dataclass(frozen=True, slots=True)
class Color:
    """8 位 RGB(A) 颜色。"""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ConfigError(f"颜色通道超出范围: {channel}")

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    @property
    def rgba(self) -> Tuple[int, int, int, int]:
        return self.r, self.g, self.b, self.a


@dataclass(frozen=True, slots=True)
class ScaleTarget:
    """一次缩放请求的目标宽高。"""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"目标尺寸必须为正整数: {self.width}x{self.height}")

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height


@dataclass(frozen=True, slots=True)
class TileSpec:
    """Windows tile 画布参数。"""

    width: int
    height: int
    padding: int
    background: str

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"Tile 尺寸必须为正整数: {self.width}x{self.height}")
        if self.padding < 0:
            raise ConfigError(f"Tile 内边距不能为负数: {self.padding}")
        if 2 * self.padding >= min(self.width, self.height):
            raise ConfigError(
                f"Tile 内边距过大: {self.padding}（画布 {self.width}x{self.height}）"
            )

    @property
    def inner_box(self) -> Tuple[int, int]:
        """扣除内边距后可容纳源图的最大区域。"""

        return self.width - 2 * self.padding, self.height - 2 * self.padding


@dataclass(frozen=True, slots=True)
class SizeEntry:
    """尺寸表中的一项输出。"""

    name: str
    width: int
    height: int

    @classmethod
    def from_value(cls, name: str, value: SizeValue) -> "SizeEntry":
        """将标量尺寸规范化为 (size, size)。"""

        if isinstance(value, int):
            return cls(name=name, width=value, height=value)
        if len(value) == 1:
            return cls(name=name, width=value[0], height=value[0])
        width, height = value
        return cls(name=name, width=width, height=height)

    @property
    def is_tile(self) -> bool:
        return self.name.startswith(TILE_PREFIX) and self.width != SQUARE_TILE_WIDTH


@dataclass(slots=True)
class GenerationManifest:
    """已生成文件的审计列表，只追加。"""

    _paths: list[Path] = field(default_factory=list)

    def append(self, path: Path) -> None:
        self._paths.append(Path(path))

    @property
    def paths(self) -> tuple[Path, ...]:
        return tuple(self._paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths
