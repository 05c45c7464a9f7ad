"""颜色工具函数。"""

from __future__ import annotations

import re

from favicon_generator.core.exceptions import InvalidFormatError
from favicon_generator.core.models import Color

HEX_COLOR_RE = re.compile(r"#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


def expand_hex(value: str) -> str:
    """返回 6 位小写形式的 HEX 字符串（不含 #）。"""

    match = HEX_COLOR_RE.fullmatch(value or "")
    if not match:
        raise InvalidFormatError(value)

    hex_value = match.group(1).lower()
    if len(hex_value) == 3:
        hex_value = "".join(ch * 2 for ch in hex_value)
    return hex_value


def parse_hex_color(value: str) -> Color:
    """将 HEX 字符串解析为 RGB 颜色。"""

    hex_value = expand_hex(value)
    return Color(
        r=int(hex_value[0:2], 16),
        g=int(hex_value[2:4], 16),
        b=int(hex_value[4:6], 16),
    )
