"""命令行入口。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from favicon_generator.core.config import GeneratorConfig, ManifestConfig, TileConfig
from favicon_generator.core.exceptions import FaviconError, GeneratorError
from favicon_generator.core.progress import ProgressUpdate
from favicon_generator.processing.pipeline import FaviconGenerator
from favicon_generator.utils.logging import setup_logging

app = typer.Typer(help="由单张图片生成整套网站 favicon。")


@app.callback()
def main() -> None:
    """favicon 生成工具。"""


def _build_progress_callback(progress: Progress):
    task_id: Optional[int] = None

    def callback(update: ProgressUpdate) -> None:
        nonlocal task_id
        if update.total == 0:
            return
        if task_id is None:
            task_id = progress.add_task("生成 favicon", total=update.total)
        progress.update(task_id, completed=update.completed)
        if update.artifact is not None:
            progress.log(f"已生成 {update.artifact}")

    return callback


@app.command("generate")
def generate_cli(  # noqa: PLR0913
    source: Path = typer.Argument(..., help="源图片（JPEG/GIF/PNG）"),
    output: Path = typer.Option(..., "--output", "-o", help="输出根目录"),
    ico_48: bool = typer.Option(False, "--ico-48", help="ICO 中包含 48x48"),
    ico_64: bool = typer.Option(False, "--ico-64", help="ICO 中包含 64x64"),
    old_apple: bool = typer.Option(False, "--old-apple/--no-old-apple", help="生成旧版 Apple touch 图标"),
    android: bool = typer.Option(True, "--android/--no-android", help="生成 Android 图标与 manifest.json"),
    ms: bool = typer.Option(False, "--ms/--no-ms", help="生成 Windows tile 与 browserconfig.xml"),
    tile_color: str = typer.Option("#FFFFFF", "--tile-color", help="tile 背景色 (HEX)"),
    tile_padding: int = typer.Option(0, "--tile-padding", help="tile 内边距（像素）"),
    app_name: str = typer.Option("", "--app-name", help="manifest name"),
    app_short_name: str = typer.Option("", "--app-short-name", help="manifest short_name"),
    app_language: str = typer.Option("", "--app-language", help="manifest lang"),
    app_start_url: str = typer.Option("", "--app-start-url", help="manifest start_url"),
    theme_color: str = typer.Option("", "--theme-color", help="主题色，同时用作 TileColor"),
    background_color: str = typer.Option("", "--background-color", help="manifest background_color"),
    display: str = typer.Option("", "--display", help="manifest display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """生成 favicon.ico、PNG 图标以及可选的 manifest/browserconfig。"""

    setup_logging(logging.DEBUG if verbose else logging.INFO)

    try:
        config = GeneratorConfig(
            source=source.expanduser(),
            destination=output.expanduser(),
            use_48_icon=ico_48,
            use_64_icon=ico_64,
            exclude_old_apple=not old_apple,
            exclude_android=not android,
            exclude_ms=not ms,
            tile=TileConfig(color=tile_color, padding=tile_padding),
            manifest=ManifestConfig(
                name=app_name,
                short_name=app_short_name,
                language=app_language,
                start_url=app_start_url,
                theme_color=theme_color,
                background_color=background_color,
                display=display,
            ),
        )
    except FaviconError as exc:
        raise typer.BadParameter(str(exc)) from exc

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TimeElapsedColumn(),
    )

    generator = FaviconGenerator(config, progress_callback=_build_progress_callback(progress))
    try:
        with progress:
            produced = generator.execute()
    except GeneratorError as exc:
        typer.echo(f"生成失败：{exc}", err=True)
        if generator.produced:
            typer.echo(f"失败前已生成 {len(generator.produced)} 个文件", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"生成完成：共 {len(produced)} 个文件，输出目录 {config.destination}")
    for path in produced:
        typer.echo(str(path))


if __name__ == "__main__":
    app()
