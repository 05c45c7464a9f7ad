"""各平台需要输出的 PNG 尺寸表。"""

from __future__ import annotations

from favicon_generator.core.exceptions import ConfigError
from favicon_generator.core.models import SizeEntry, SizeValue

CORE_SIZES: dict[str, SizeValue] = {
    "favicon-16x16.png": 16,
    "favicon-32x32.png": 32,
    "favicon-96x96.png": 96,
    "apple-touch-icon.png": 180,
    "apple-touch-icon-152x152.png": 152,
    "apple-touch-icon-180x180.png": 180,
}

OLD_APPLE_SIZES: dict[str, SizeValue] = {
    "apple-touch-icon-57x57.png": 57,
    "apple-touch-icon-60x60.png": 60,
    "apple-touch-icon-72x72.png": 72,
    "apple-touch-icon-76x76.png": 76,
    "apple-touch-icon-114x114.png": 114,
    "apple-touch-icon-120x120.png": 120,
    "apple-touch-icon-144x144.png": 144,
}

ANDROID_SIZES: dict[str, SizeValue] = {
    "android-chrome-36x36.png": 36,
    "android-chrome-48x48.png": 48,
    "android-chrome-72x72.png": 72,
    "android-chrome-96x96.png": 96,
    "android-chrome-144x144.png": 144,
    "android-chrome-192x192.png": 192,
}

MS_SIZES: dict[str, SizeValue] = {
    "mstile-70x70.png": 70,
    "mstile-144x144.png": 144,
    "mstile-150x150.png": 150,
    "mstile-310x310.png": 310,
    "mstile-310x150.png": (310, 150),
}


def resolve_sizes(exclude_old_apple: bool, exclude_android: bool, exclude_ms: bool) -> dict[str, SizeValue]:
    """根据排除开关返回有序的 文件名 -> 尺寸 映射。"""

    flags = {
        "exclude_old_apple": exclude_old_apple,
        "exclude_android": exclude_android,
        "exclude_ms": exclude_ms,
    }
    invalid = [name for name, value in flags.items() if not isinstance(value, bool)]
    if invalid:
        raise ConfigError("尺寸表开关必须为布尔值: " + ", ".join(invalid))

    sizes = dict(CORE_SIZES)
    if not exclude_old_apple:
        sizes.update(OLD_APPLE_SIZES)
    if not exclude_android:
        sizes.update(ANDROID_SIZES)
    if not exclude_ms:
        sizes.update(MS_SIZES)
    return sizes


def size_entries(exclude_old_apple: bool, exclude_android: bool, exclude_ms: bool) -> list[SizeEntry]:
    """与 resolve_sizes 相同，但返回规范化后的 SizeEntry 列表。"""

    sizes = resolve_sizes(exclude_old_apple, exclude_android, exclude_ms)
    return [SizeEntry.from_value(name, value) for name, value in sizes.items()]
