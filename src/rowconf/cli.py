"""CLI for rowconf."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from rowconf import __version__
from rowconf.editing.commands import apply_preset, set_front_wheel
from rowconf.layout import (
    RowLayout,
    compute_layout,
    describe_configuration,
    optimize_wheel_spacing,
    validate_configuration,
)
from rowconf.layout.validator import Severity, check_row_count
from rowconf.parser import (
    FrontWheelKind,
    RowConfiguration,
    dump_configuration,
    parse_configuration,
)
from rowconf.presets import CROP_PRESETS


def _load(input_file: Path) -> RowConfiguration:
    try:
        return parse_configuration(input_file.read_text())
    except ValueError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)


def _layout(config: RowConfiguration) -> RowLayout:
    for err in check_row_count(config):
        click.echo(f"Cannot lay out: {err.message}", err=True)
        raise SystemExit(1)
    return compute_layout(config)


def _cm(mm: float) -> str:
    return f"{mm / 10:g} cm"


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log refused edits and search details")
def cli(verbose: bool) -> None:
    """rowconf: Derive and check row layouts for multi-row field robots."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show the derived layout of a row configuration."""
    config = _load(input_file)
    layout = _layout(config)

    click.echo(f"Seed size: {config.seed_size.value}")
    click.echo(f"Front wheel: {config.front_wheel.value}")
    click.echo(f"Active rows: {config.active_rows}")
    click.echo(f"Row spacings: {', '.join(_cm(s) for s in layout.spacings) or '(none)'}")
    click.echo(f"Row span: {_cm(layout.row_span)}")
    click.echo(
        f"Passive rows: {layout.passive.total} "
        f"({layout.passive.inner_count} inner, {layout.passive.outer_count} outer)"
    )
    click.echo(f"Width mode: {config.width_mode.label}")
    click.echo(f"Pass spacing: {_cm(layout.pass_spacing)}")
    click.echo(f"Working width: {_cm(layout.working_width)}")

    wheels = layout.geometry.wheels
    click.echo(f"Wheels: {_cm(wheels.left)} / {_cm(wheels.right)}"
               + (f", front {_cm(wheels.front)}" if wheels.front is not None else ""))
    for i, (pos, close) in enumerate(zip(layout.row_positions, layout.geometry.too_close)):
        marker = "  (near wheel)" if close else ""
        click.echo(f"  row {i + 1}: {_cm(pos)}{marker}")
    for line in describe_configuration(config):
        click.echo(f"Summary: {line}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def validate(input_file: Path) -> None:
    """Validate a row configuration against the hardware limits."""
    config = _load(input_file)
    result = validate_configuration(config)

    for warning in result.warnings:
        click.echo(f"Warning: {warning.message}", err=True)

    if not result.valid:
        click.echo("Validation errors:", err=True)
        for err in result.violations:
            if err.severity == Severity.ERROR:
                click.echo(f"  - {err.message}", err=True)
        raise SystemExit(1)

    layout = compute_layout(config)
    click.echo(f"Valid: {config.active_rows} active rows, "
               f"{layout.passive.total} passive rows, "
               f"working width {_cm(layout.working_width)}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def optimize(input_file: Path) -> None:
    """Suggest a wheel spacing that keeps the wheels off the rows."""
    config = _load(input_file)
    layout = _layout(config)
    suggestion = optimize_wheel_spacing(
        layout.row_positions, config.wheel_spacing, config.row_distance
    )

    if suggestion.is_optimal:
        click.echo(f"Current wheel spacing {_cm(config.wheel_spacing)} is optimal")
    else:
        click.echo(f"Suggested wheel spacing: {_cm(suggestion.spacing)} "
                   f"(current {_cm(config.wheel_spacing)})")
    if suggestion.conflicts:
        click.echo(f"  {suggestion.conflicts} rows remain close to a wheel")
    click.echo(f"  {suggestion.recommendation}")
    for option in suggestion.options:
        notes = []
        if option.spacing == suggestion.spacing:
            notes.append("suggested")
        if option.is_optimal:
            notes.append("best aligned")
        marker = f" ({', '.join(notes)})" if notes else ""
        click.echo(f"  {_cm(option.spacing)}: {option.conflicts} conflicts, "
                   f"score {option.score}{marker}")


@cli.command()
def presets() -> None:
    """List crop presets."""
    for key, preset in CROP_PRESETS.items():
        click.echo(f"{key}: {preset.name}, {preset.active_rows} rows "
                   f"({preset.seed_size.value}) at {_cm(preset.row_distance)}")


@cli.command()
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output file path. Defaults to rowconfig.json")
@click.option("--preset", type=click.Choice(list(CROP_PRESETS.keys())), default=None,
              help="Start from a crop preset")
@click.option("--front-wheel", type=click.Choice([k.value for k in FrontWheelKind]),
              default=FrontWheelKind.SINGLE_CENTERED.value,
              help="Front wheel arrangement (default: 3-wheel)")
def new(output: Path | None, preset: str | None, front_wheel: str) -> None:
    """Write a new row configuration file."""
    config = set_front_wheel(RowConfiguration(), FrontWheelKind(front_wheel))
    if preset is not None:
        updated = apply_preset(config, CROP_PRESETS[preset])
        if updated is config:
            click.echo(f"Preset '{preset}' does not fit a {front_wheel} robot", err=True)
            raise SystemExit(1)
        config = updated

    if output is None:
        output = Path("rowconfig.json")

    output.write_text(dump_configuration(config))
    click.echo(f"Wrote {config.active_rows} rows -> {output}")
