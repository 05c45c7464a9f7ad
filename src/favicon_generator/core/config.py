"""生成任务的配置模型。"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from favicon_generator.core.exceptions import ConfigError
from favicon_generator.core.models import SizeEntry
from favicon_generator.core.output_manager import clean_path
from favicon_generator.core.sizes import MS_SIZES
from favicon_generator.utils.colors import parse_hex_color

PathLike = Union[str, Path]

# 扁平键 -> (子配置, 字段)。子配置为 None 表示 GeneratorConfig 自身的字段。
_FLAT_KEYS: dict[str, tuple[Optional[str], str]] = {
    "filePath": (None, "source"),
    "destPath": (None, "destination"),
    "use48Icon": (None, "use_48_icon"),
    "use64Icon": (None, "use_64_icon"),
    "noOldApple": (None, "exclude_old_apple"),
    "noAndroid": (None, "exclude_android"),
    "noMs": (None, "exclude_ms"),
    "tileColor": ("tile", "color"),
    "tilePadding": ("tile", "padding"),
    "appName": ("manifest", "name"),
    "appShortName": ("manifest", "short_name"),
    "appLanguage": ("manifest", "language"),
    "appStartUrl": ("manifest", "start_url"),
    "appThemeColor": ("manifest", "theme_color"),
    "appBgColor": ("manifest", "background_color"),
    "appDisplay": ("manifest", "display"),
    "tile_color": ("tile", "color"),
    "tile_padding": ("tile", "padding"),
    "app_name": ("manifest", "name"),
    "app_short_name": ("manifest", "short_name"),
    "app_language": ("manifest", "language"),
    "app_start_url": ("manifest", "start_url"),
    "theme_color": ("manifest", "theme_color"),
    "background_color": ("manifest", "background_color"),
    "display": ("manifest", "display"),
}

_FLAG_FIELDS = ("use_48_icon", "use_64_icon", "exclude_old_apple", "exclude_android", "exclude_ms")


@dataclass(slots=True)
class ManifestConfig:
    """manifest.json 中的应用信息，空字符串表示不写入该字段。"""

    name: str = ""
    short_name: str = ""
    language: str = ""
    start_url: str = ""
    theme_color: str = ""
    background_color: str = ""
    display: str = ""


@dataclass(slots=True)
class TileConfig:
    """Windows tile 背景色与内边距。"""

    color: str = "#FFFFFF"
    padding: int = 0

    def __post_init__(self) -> None:
        parse_hex_color(self.color)
        if isinstance(self.padding, bool) or not isinstance(self.padding, int):
            raise ConfigError(f"tile padding 必须为整数: {self.padding!r}")
        if self.padding < 0:
            raise ConfigError(f"tile padding 不能为负数: {self.padding}")


@dataclass(slots=True)
class GeneratorConfig:
    """单次 favicon 生成任务的配置集合。"""

    source: Optional[PathLike]
    destination: PathLike
    use_48_icon: bool = False
    use_64_icon: bool = False
    exclude_old_apple: bool = True
    exclude_android: bool = False
    exclude_ms: bool = True
    tile: TileConfig = field(default_factory=TileConfig)
    manifest: ManifestConfig = field(default_factory=ManifestConfig)

    def __post_init__(self) -> None:
        self.source = clean_path(self.source) if self.source else None
        if not self.destination or not str(self.destination).strip():
            raise ConfigError("输出目录不能为空")
        self.destination = clean_path(self.destination)

        for name in _FLAG_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(f"{name} 必须为布尔值: {value!r}")

        if not self.exclude_ms:
            _check_tile_padding(self.tile.padding)

    @property
    def favicon_dir(self) -> Path:
        return Path(self.destination) / "favicon"

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "GeneratorConfig":
        """由扁平的键值对构造配置，未知键直接拒绝。"""

        own_fields = {f.name for f in fields(cls)} - {"tile", "manifest"}
        top: dict[str, Any] = {}
        nested: dict[str, dict[str, Any]] = {"tile": {}, "manifest": {}}
        unknown: list[str] = []

        for key, value in mapping.items():
            if key in own_fields:
                top[key] = value
                continue
            target = _FLAT_KEYS.get(key)
            if target is None:
                unknown.append(key)
                continue
            section, name = target
            if section is None:
                top[name] = value
            else:
                nested[section][name] = value

        if unknown:
            raise ConfigError("未知的配置项: " + ", ".join(sorted(unknown)))
        if "destination" not in top:
            raise ConfigError("缺少配置项: destination")

        return cls(
            source=top.pop("source", None),
            tile=TileConfig(**nested["tile"]),
            manifest=ManifestConfig(**nested["manifest"]),
            **top,
        )


def _check_tile_padding(padding: int) -> None:
    """内边距必须小于最小 tile 边长的一半，否则该 tile 无处放置源图。"""

    entries = [SizeEntry.from_value(name, value) for name, value in MS_SIZES.items()]
    smallest = min(min(entry.width, entry.height) for entry in entries if entry.is_tile)
    if 2 * padding >= smallest:
        raise ConfigError(f"tile padding 过大: {padding}（最小 tile 边长 {smallest}）")
