"""Discrete mutation commands.

Each command maps a RowConfiguration to a new RowConfiguration in one step.
Out-of-range values are clamped; structurally invalid requests are refused
by returning the input configuration unchanged.
"""

from __future__ import annotations

import logging

from rowconf.layout.constants import (
    DEFAULT_CONSTRAINTS,
    MAX_PLANT_SPACING,
    MIN_PLANT_SPACING,
    ConstraintTable,
)
from rowconf.layout.spacing import (
    clamp,
    generate_row_spacings,
    max_gap_value,
    mirror_index,
    resolve_spacings,
    round_to_step,
    row_span,
    set_gap_mirrored,
)
from rowconf.layout.working_width import width_mode_for_override
from rowconf.parser.model import (
    FrontWheelKind,
    ManualWidth,
    RowConfiguration,
    SeedSize,
    WidthMode,
)
from rowconf.presets import CropPreset

logger = logging.getLogger(__name__)


def _fits_toolbeam(
    spacings: tuple[int, ...], seed_size: SeedSize, constraints: ConstraintTable
) -> bool:
    if not spacings:
        return True
    required = row_span(spacings) + constraints.min_distance(seed_size)
    return required <= constraints.max_toolbeam_span


def _remove_row(spacings: tuple[int, ...], index: int, total: int) -> tuple[int, ...]:
    """Drop one row; an interior row's two gaps merge into one."""
    if total <= 1:
        return ()
    if index == 0:
        return spacings[1:]
    if index == total - 1:
        return spacings[:-1]
    merged = spacings[index - 1] + spacings[index]
    return spacings[: index - 1] + (merged,) + spacings[index + 1 :]


def insert_pair_at_gap(
    config: RowConfiguration,
    gap_index: int,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Insert a row into a gap and another into its mirror gap.

    Both gaps are split in two. The center gap is its own mirror, so it is
    split in three instead, adding the pair inside it.
    """
    spacings = resolve_spacings(config)
    if not 0 <= gap_index < len(spacings):
        logger.debug("Refusing insert: no gap %d", gap_index)
        return config
    if config.active_rows + 2 > constraints.max_active_rows:
        logger.debug("Refusing insert: %d rows is the maximum", constraints.max_active_rows)
        return config

    min_distance = constraints.min_distance(config.seed_size)
    step = constraints.row_step
    gap = spacings[gap_index]
    mirror = mirror_index(gap_index, len(spacings))

    if mirror == gap_index:
        outer = max(min_distance, (gap // 3 // step) * step)
        middle = max(min_distance, gap - 2 * outer)
        new = spacings[:gap_index] + (outer, middle, outer) + spacings[gap_index + 1 :]
    else:
        lo, hi = sorted((gap_index, mirror))
        first = max(min_distance, round_to_step(gap / 2, step))
        second = max(min_distance, gap - first)
        new = (
            spacings[:lo]
            + (first, second)
            + spacings[lo + 1 : hi]
            + (second, first)
            + spacings[hi + 1 :]
        )

    if not _fits_toolbeam(new, config.seed_size, constraints):
        logger.debug("Refusing insert: span %d exceeds toolbeam", row_span(new))
        return config
    return config.evolve(active_rows=config.active_rows + 2, row_spacings=new)


def insert_pair_at_edges(
    config: RowConfiguration,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Add one row beyond each outer row, one row distance out."""
    if config.active_rows + 2 > constraints.max_active_rows:
        logger.debug("Refusing edge insert: %d rows is the maximum", constraints.max_active_rows)
        return config

    spacings = resolve_spacings(config)
    distance = max(config.row_distance, constraints.min_distance(config.seed_size))
    if config.active_rows == 0:
        new: tuple[int, ...] = (distance,)
    else:
        new = (distance,) + spacings + (distance,)

    if not _fits_toolbeam(new, config.seed_size, constraints):
        logger.debug("Refusing edge insert: span %d exceeds toolbeam", row_span(new))
        return config
    return config.evolve(active_rows=config.active_rows + 2, row_spacings=new)


def remove_pair(
    config: RowConfiguration,
    row_index: int,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Remove a row together with its mirror row.

    The center row of an odd layout is its own mirror and is removed alone.
    """
    total = config.active_rows
    if not 0 <= row_index < total:
        logger.debug("Refusing remove: no row %d", row_index)
        return config
    if total < config.front_wheel.min_removable_rows:
        logger.debug("Refusing remove: %d rows is below the minimum", total)
        return config

    spacings = resolve_spacings(config)
    mirror = total - 1 - row_index
    if mirror == row_index:
        return config.evolve(
            active_rows=total - 1,
            row_spacings=_remove_row(spacings, row_index, total),
        )

    lo, hi = sorted((row_index, mirror))
    # Higher index first so the lower index stays valid
    new = _remove_row(spacings, hi, total)
    new = _remove_row(new, lo, total - 1)
    return config.evolve(active_rows=total - 2, row_spacings=new)


def set_row_count(
    config: RowConfiguration,
    count: int,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Set the row count and regenerate uniform spacings from row_distance."""
    if count < 0 or count > constraints.max_active_rows:
        logger.debug("Refusing row count %d: out of range", count)
        return config
    if config.front_wheel.requires_even_rows and count % 2 != 0:
        logger.debug("Refusing row count %d: front wheel needs even rows", count)
        return config

    spacings = generate_row_spacings(count, config.row_distance)
    if not _fits_toolbeam(spacings, config.seed_size, constraints):
        logger.debug("Refusing row count %d: span exceeds toolbeam", count)
        return config
    return config.evolve(active_rows=count, row_spacings=spacings)


def max_row_distance(
    config: RowConfiguration,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> int:
    """Largest uniform row distance the toolbeam allows for the current count."""
    upper = constraints.max_edit_spacing
    gaps = config.gap_count
    if gaps:
        budget = constraints.max_toolbeam_span - constraints.min_distance(config.seed_size)
        step = constraints.row_step
        upper = min(upper, (budget // gaps // step) * step)
    return upper


def set_row_distance(
    config: RowConfiguration,
    value: float,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Set the nominal row distance; discards custom gaps."""
    distance = clamp(
        round_to_step(value, constraints.row_step),
        constraints.min_distance(config.seed_size),
        max_row_distance(config, constraints),
    )
    return config.evolve(
        row_distance=distance,
        row_spacings=generate_row_spacings(config.active_rows, distance),
    )


def set_gap(
    config: RowConfiguration,
    gap_index: int,
    value: float,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Set one gap (and its mirror), clamped to the seed minimum and the toolbeam."""
    spacings = resolve_spacings(config)
    if not 0 <= gap_index < len(spacings):
        logger.debug("Refusing gap edit: no gap %d", gap_index)
        return config

    min_distance = constraints.min_distance(config.seed_size)
    upper = min(
        constraints.max_edit_spacing,
        max_gap_value(
            spacings,
            gap_index,
            min_distance,
            constraints.max_toolbeam_span,
            constraints.row_step,
        ),
    )
    gap = clamp(round_to_step(value, constraints.row_step), min_distance, upper)
    return config.evolve(row_spacings=set_gap_mirrored(spacings, gap_index, gap))


def set_wheel_spacing(
    config: RowConfiguration,
    value: float,
    step: int | None = None,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Set the rear wheel spacing, rounded to ``step`` and clamped into range."""
    if step is None:
        step = constraints.row_step
    spacing = clamp(
        round_to_step(value, step),
        constraints.min_wheel_spacing,
        constraints.max_wheel_spacing,
    )
    return config.evolve(wheel_spacing=spacing)


def set_working_width(
    config: RowConfiguration,
    value: float,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Override the working width; leaves wheel-following mode."""
    return config.evolve(width_mode=width_mode_for_override(config, value, constraints))


def set_width_mode(
    config: RowConfiguration,
    mode: WidthMode,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    if isinstance(mode, ManualWidth):
        return set_working_width(config, mode.value, constraints)
    return config.evolve(width_mode=mode)


def set_plant_spacing(config: RowConfiguration, value: float) -> RowConfiguration:
    """Set the in-row plant spacing (cm)."""
    spacing = clamp(int(round(value)), MIN_PLANT_SPACING, MAX_PLANT_SPACING)
    return config.evolve(plant_spacing=spacing)


def set_seed_size(
    config: RowConfiguration,
    seed_size: SeedSize,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Switch seed size, raising the row distance and gaps to its minimum."""
    min_distance = constraints.min_distance(seed_size)
    spacings = tuple(max(g, min_distance) for g in resolve_spacings(config))
    if not _fits_toolbeam(spacings, seed_size, constraints):
        logger.debug("Refusing seed size %s: span exceeds toolbeam", seed_size.value)
        return config
    return config.evolve(
        seed_size=seed_size,
        row_distance=max(config.row_distance, min_distance),
        row_spacings=spacings,
    )


def set_front_wheel(config: RowConfiguration, kind: FrontWheelKind) -> RowConfiguration:
    """Switch front-wheel kind.

    A centered front wheel cannot run between an odd number of rows, so the
    center row is removed when switching to it.
    """
    if kind.requires_even_rows and config.active_rows % 2 != 0:
        total = config.active_rows
        spacings = _remove_row(resolve_spacings(config), total // 2, total)
        return config.evolve(front_wheel=kind, active_rows=total - 1, row_spacings=spacings)
    return config.evolve(front_wheel=kind)


def apply_preset(
    config: RowConfiguration,
    preset: CropPreset,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Apply a crop preset with uniform spacing."""
    if config.front_wheel.requires_even_rows and preset.active_rows % 2 != 0:
        logger.debug("Refusing preset %s: front wheel needs even rows", preset.name)
        return config
    if preset.active_rows > constraints.max_active_rows:
        logger.debug("Refusing preset %s: too many rows", preset.name)
        return config
    distance = max(preset.row_distance, constraints.min_distance(preset.seed_size))
    spacings = generate_row_spacings(preset.active_rows, distance)
    if not _fits_toolbeam(spacings, preset.seed_size, constraints):
        logger.debug("Refusing preset %s: span exceeds toolbeam", preset.name)
        return config
    return config.evolve(
        seed_size=preset.seed_size,
        active_rows=preset.active_rows,
        row_distance=distance,
        row_spacings=spacings,
    )
