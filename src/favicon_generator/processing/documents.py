"""manifest.json 与 browserconfig.xml 的内容生成。"""

from __future__ import annotations

import json
from typing import Any
from xml.sax.saxutils import escape

from favicon_generator.core.config import ManifestConfig

ANDROID_ICON_SIZES = (36, 48, 72, 96, 144, 192)

MS_TILE_LOGOS = (
    ("square70x70logo", "/favicon/mstile-70x70.png"),
    ("square144x144logo", "/favicon/mstile-144x144.png"),
    ("square150x150logo", "/favicon/mstile-150x150.png"),
    ("square310x310logo", "/favicon/mstile-310x310.png"),
    ("wide310x150logo", "/favicon/mstile-310x150.png"),
)


def manifest_density(size: int) -> float:
    return round(size / 48.0, 2)


def build_manifest(config: ManifestConfig) -> dict[str, Any]:
    """生成 manifest 字典，空字段不写入。"""

    manifest: dict[str, Any] = {}
    for key, value in (
        ("name", config.name),
        ("short_name", config.short_name),
        ("lang", config.language),
        ("start_url", config.start_url),
    ):
        if value:
            manifest[key] = value

    manifest["icons"] = [
        {
            "src": f"/favicon/android-chrome-{size}x{size}.png",
            "sizes": f"{size}x{size}",
            "type": "image/png",
            "density": manifest_density(size),
        }
        for size in ANDROID_ICON_SIZES
    ]

    for key, value in (
        ("theme_color", config.theme_color),
        ("background_color", config.background_color),
        ("display", config.display),
    ):
        if value:
            manifest[key] = value
    return manifest


def render_manifest(config: ManifestConfig) -> str:
    return json.dumps(build_manifest(config), indent=4, ensure_ascii=False) + "\n"


def render_browserconfig(theme_color: str = "") -> str:
    """固定模板；设置了主题色时附加 TileColor。"""

    lines = [
        '<?xml version="1.0" encoding="utf-8"?>',
        "<browserconfig>",
        "\t<msapplication>",
        "\t\t<tile>",
    ]
    lines.extend(f'\t\t\t<{tag} src="{src}" />' for tag, src in MS_TILE_LOGOS)
    if theme_color:
        lines.append(f"\t\t\t<TileColor>{escape(theme_color)}</TileColor>")
    lines.extend(["\t\t</tile>", "\t</msapplication>", "</browserconfig>"])
    return "\n".join(lines) + "\n"
