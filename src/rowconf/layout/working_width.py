"""Working width and pass-to-pass spacing.

Working width = row span + pass-to-pass spacing. The pass-to-pass spacing
comes from the width mode (FollowWheels, ManualWidth, PatternWidth) and is
then clamped so the next pass never overlaps this one.
"""

from __future__ import annotations

from dataclasses import dataclass

from rowconf.layout.constants import DEFAULT_CONSTRAINTS, ConstraintTable
from rowconf.layout.spacing import resolve_spacings, round_to_step, row_span
from rowconf.parser.model import (
    FollowWheels,
    ManualWidth,
    PatternWidth,
    RowConfiguration,
    WidthMode,
)


@dataclass
class WorkingWidth:
    """Resolved working width for one configuration."""

    pass_spacing: float
    working_width: float
    mode: WidthMode


def pattern_pass_spacing(spacings: tuple[int, ...] | list[int], row_distance: int) -> int:
    """Pass-to-pass spacing that continues the gap pattern.

    A uniform pattern repeats its gap. An alternating two-value pattern
    continues the alternation across the pass boundary. Any other pattern,
    or a layout without gaps, falls back to the nominal row distance.
    """
    if not spacings:
        return row_distance
    if len(set(spacings)) == 1:
        return spacings[0]
    first, second = spacings[0], spacings[1]
    if all(s == (first if i % 2 == 0 else second) for i, s in enumerate(spacings)):
        return first if len(spacings) % 2 == 0 else second
    return row_distance


def raw_pass_spacing(config: RowConfiguration, spacings: tuple[int, ...]) -> float:
    """Pass-to-pass spacing before clamping, by width-mode priority."""
    span = row_span(spacings)
    mode = config.width_mode
    if isinstance(mode, FollowWheels):
        return config.wheel_spacing - span
    if isinstance(mode, ManualWidth):
        return mode.value - span
    return pattern_pass_spacing(spacings, config.row_distance)


def clamp_working_width(
    width: float,
    span: int,
    min_distance: int,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> float:
    """Clamp a working width to [span + min_distance, max_working_width].

    The ceiling wins over the pass-spacing minimum, and the span itself is
    the final floor when the ceiling leaves no room for a positive pass
    spacing.
    """
    width = max(width, span + min_distance)
    width = min(width, constraints.max_working_width)
    return max(width, span)


def resolve_working_width(
    config: RowConfiguration,
    spacings: tuple[int, ...] | None = None,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> WorkingWidth:
    """Resolve pass-to-pass spacing and working width for a configuration."""
    if spacings is None:
        spacings = resolve_spacings(config)
    if config.active_rows <= 0:
        return WorkingWidth(pass_spacing=0, working_width=0, mode=config.width_mode)

    span = row_span(spacings)
    min_distance = constraints.min_distance(config.seed_size)
    width = clamp_working_width(
        span + raw_pass_spacing(config, spacings), span, min_distance, constraints
    )
    return WorkingWidth(
        pass_spacing=width - span, working_width=width, mode=config.width_mode
    )


def pattern_working_width(
    config: RowConfiguration,
    spacings: tuple[int, ...] | None = None,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> float:
    """Working width the configuration would have in pattern mode."""
    return resolve_working_width(
        config.evolve(width_mode=PatternWidth()), spacings, constraints
    ).working_width


def width_mode_for_override(
    config: RowConfiguration,
    width: float,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> WidthMode:
    """Width mode for a manually entered working width.

    The value is rounded to the row grid and clamped first. A value equal
    to what pattern mode yields clears the override instead of storing it.
    """
    spacings = resolve_spacings(config)
    span = row_span(spacings)
    min_distance = constraints.min_distance(config.seed_size)
    width = clamp_working_width(
        round_to_step(width, constraints.row_step), span, min_distance, constraints
    )
    if width == pattern_working_width(config, spacings, constraints):
        return PatternWidth()
    return ManualWidth(int(round(width)))
