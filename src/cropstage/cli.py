"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core.geometry import Rect, StageBounds
from .crop.model import initial_box
from .crop.sizing import FixedOutput, Free, RatioLocked, SizingMode
from .errors import CropStageError, ImageLoadError, InvalidSizingModeError, ReplayScriptError
from .replay import load_script, run_script
from .settings.manager import SettingsManager

app = typer.Typer(help="Interactive crop box geometry engine")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (InvalidSizingModeError, ReplayScriptError, ImageLoadError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except CropStageError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _parse_size(text: str) -> tuple[float, float]:
    try:
        width, height = (float(part) for part in text.lower().split("x"))
    except ValueError as exc:
        raise typer.BadParameter(f"expected WIDTHxHEIGHT, got {text!r}") from exc
    if width <= 0 or height <= 0:
        raise typer.BadParameter(f"size must be positive, got {text!r}")
    return width, height


def _format_rect(rect: Rect) -> str:
    return ", ".join(f"{value:.2f}" for value in rect.as_tuple())


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    """Configure logging for every command."""

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
            force=True,
        )


@app.command("init-box")
@_handle_errors
def init_box(
    stage: Optional[str] = typer.Option(None, help="Stage size as WIDTHxHEIGHT"),
    ratio: Optional[float] = typer.Option(None, help="Lock the crop box to width/height"),
    fixed: Optional[str] = typer.Option(None, help="Fixed output size as WIDTHxHEIGHT"),
    size: Optional[float] = typer.Option(None, help="Longer side of the initial box"),
    options: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Options file"),
) -> None:
    """Print the crop box a fresh session starts with."""

    if ratio is not None and fixed is not None:
        raise typer.BadParameter("--ratio and --fixed are mutually exclusive")

    stage_bounds: StageBounds | None = None
    mode: SizingMode = Free()
    preferred = None
    if options is not None:
        settings = SettingsManager(options)
        settings.load(write_defaults=False)
        stage_bounds = settings.stage_bounds()
        mode = settings.sizing_mode()
        preferred = settings.default_box_size()

    if stage is not None:
        stage_bounds = StageBounds(*_parse_size(stage))
    if stage_bounds is None:
        raise typer.BadParameter("--stage is required without --options")
    if ratio is not None:
        mode = RatioLocked(ratio)
    elif fixed is not None:
        width, height = _parse_size(fixed)
        mode = FixedOutput(width, height)
    if size is not None:
        preferred = size

    box = initial_box(stage_bounds, mode) if preferred is None else initial_box(stage_bounds, mode, preferred)
    print(f"[green]{mode.name}[/green] box: {_format_rect(box)}")


@app.command()
@_handle_errors
def replay(script: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Replay a JSON pointer event script and print the resulting geometry."""

    session = run_script(load_script(script), base_dir=script.parent)

    table = Table(title="Replay result")
    table.add_column("Property")
    table.add_column("Value")
    table.add_row("Mode", session.sizing_mode.name)
    table.add_row("Box", _format_rect(session.current_box()))
    region = session.try_projected_image_region()
    if region is None:
        table.add_row("Image", "none")
    else:
        transform = session.current_image_transform()
        table.add_row(
            "Image",
            f"{transform.x:.2f}, {transform.y:.2f} @ {transform.scale_x:.4f} x {transform.scale_y:.4f}",
        )
        table.add_row("Region", _format_rect(region))
        table.add_row("Output", session.size_label() or "")
    Console().print(table)


if __name__ == "__main__":  # pragma: no cover
    app()
