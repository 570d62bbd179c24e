from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from airquality.config import AppConfig, load_config
from airquality.core.buffer import IntBuffer
from airquality.core.errors import AllocationError
from airquality.data.csv_loader import CsvColumnLoader, LoaderError
from airquality.report import render_json, render_text, summarize
from airquality.utils.logging import setup_logging


app = typer.Typer(add_completion=False)
logger = logging.getLogger("airquality.cli")


def _load_or_exit(config_path: Optional[Path]) -> AppConfig:
    try:
        return load_config(config_path)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)


@app.command()
def analyze(
    path: Optional[Path] = typer.Argument(None, help="Readings export (defaults to $DATA_FILE)"),
    threshold: Optional[int] = typer.Option(None, help="Readings strictly above this are critical"),
    min_ceiling: Optional[float] = typer.Option(None, help="Starting value of the running minimum"),
    max_floor: Optional[float] = typer.Option(None, help="Starting value of the running maximum"),
    true_extrema: bool = typer.Option(False, "--true-extrema", help="Report the true min/max"),
    list_values: bool = typer.Option(False, "--list-values", help="Print every loaded reading"),
    as_json: bool = typer.Option(False, "--json", help="Emit the summary as JSON"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML config file"),
    log_level: Optional[str] = typer.Option(None, help="Overrides LOG_LEVEL"),
) -> None:
    """Load NO2 readings and print average, max, min and critical values."""
    cfg = _load_or_exit(config)
    setup_logging(log_level or cfg.env.LOG_LEVEL, cfg.env.LOG_FORMAT)

    source = path or (Path(cfg.env.DATA_FILE) if cfg.env.DATA_FILE else None)
    if source is None:
        typer.echo("Error: no input file given and DATA_FILE is not set", err=True)
        raise typer.Exit(code=2)

    analysis = cfg.runtime.analysis
    threshold = analysis.critical_threshold if threshold is None else threshold
    floor: Optional[float] = analysis.max_floor if max_floor is None else max_floor
    ceiling: Optional[float] = analysis.min_ceiling if min_ceiling is None else min_ceiling
    if true_extrema or analysis.true_extrema:
        floor, ceiling = None, None

    loader = CsvColumnLoader(cfg.runtime.loader)
    try:
        with IntBuffer(analysis.initial_capacity) as readings:
            loader.load(source, readings)
            summary = summarize(readings, threshold, max_floor=floor, min_ceiling=ceiling)
            values = readings.to_list() if list_values else None
    except FileNotFoundError:
        typer.echo(f"Error: file not found: {source}", err=True)
        raise typer.Exit(code=1)
    except (LoaderError, AllocationError, OSError) as exc:
        logger.error("Analysis of %s failed: %s", source, exc)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(render_json(summary))
    else:
        typer.echo(render_text(summary, values))


@app.command("show-config")
def show_config(config: Optional[Path] = typer.Option(None, "--config", help="YAML config file")) -> None:
    """Print the effective runtime configuration."""
    cfg = _load_or_exit(config)
    typer.echo(cfg.runtime.model_dump_json(indent=2))


if __name__ == "__main__":
    app()
