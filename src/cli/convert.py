#!/usr/bin/env python3
"""
CLI for tank table conversions.

Usage:
    python -m cli.convert tanks
    python -m cli.convert reading 1 1203
    python -m cli.convert volume 41 2500 --tables /path/to/calibration_tables.json
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import click

from config import Config
from services.calibration_store import CalibrationError, CalibrationStore
from services.conversion_service import ConversionRequest, ConversionService, Direction
from services.input_parser import parse_whole_number
from services.range_metadata import bounds
from services.tank_catalog import TankCatalog


@click.group()
@click.option(
    "--tables",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to calibration tables JSON (default: from CALIBRATION_TABLES_PATH env or config)",
)
@click.pass_context
def cli(ctx: click.Context, tables: Path | None) -> None:
    """Convert between dipstick readings (mm) and volumes (L)."""
    if tables is None:
        tables = Config.CALIBRATION_TABLES_PATH
    try:
        ctx.obj = CalibrationStore.from_json(tables)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Cannot load calibration tables from {tables}: {e}")


@cli.command()
@click.pass_obj
def tanks(store: CalibrationStore) -> None:
    """List tanks with their full volume and maximum reading."""
    for option in TankCatalog(store).grouped_display_options():
        try:
            tank_bounds = bounds(store, option.value)
        except CalibrationError as e:
            click.echo(f"{option.label:>10}  {e}", err=True)
            continue
        click.echo(
            f"{option.label:>10}  full {tank_bounds['max_volume_l']:>8,} L"
            f"  max reading {tank_bounds['max_reading_mm']:>5} mm"
        )


def _run(store: CalibrationStore, tank_id: str, raw_value: str, direction: Direction) -> None:
    parsed = parse_whole_number(raw_value)
    if not parsed.ok:
        click.echo(f"Error: {parsed.error}", err=True)
        raise SystemExit(1)

    result = ConversionService(store).convert(
        ConversionRequest(tank_id=tank_id, direction=direction, value=parsed.value)
    )
    if not result.ok:
        click.echo(f"Error: {result.message}", err=True)
        raise SystemExit(1)

    click.echo(f"{result.display_value} {result.unit}")
    if result.note:
        click.echo(result.note)


@cli.command()
@click.argument("tank_id")
@click.argument("value")
@click.pass_obj
def reading(store: CalibrationStore, tank_id: str, value: str) -> None:
    """Convert a dipstick reading in mm to liters."""
    _run(store, tank_id, value, Direction.READING_TO_VOLUME)


@cli.command()
@click.argument("tank_id")
@click.argument("value")
@click.pass_obj
def volume(store: CalibrationStore, tank_id: str, value: str) -> None:
    """Convert a volume in liters to a dipstick reading in mm."""
    _run(store, tank_id, value, Direction.VOLUME_TO_READING)


if __name__ == "__main__":
    cli()
