"""Inter-row gap sequences.

Gap sequences are kept mirror-symmetric: gap ``i`` always equals gap
``len - 1 - i``. Every mutation that changes a single gap goes through
``set_gap_mirrored`` so the mirror side is written in the same step.
"""

from __future__ import annotations

import math

from rowconf.parser.model import RowConfiguration

__all__ = [
    "clamp",
    "generate_row_spacings",
    "is_mirror_symmetric",
    "max_gap_value",
    "mirror_index",
    "resolve_spacings",
    "round_to_step",
    "row_span",
    "set_gap_mirrored",
]


def generate_row_spacings(active_rows: int, row_distance: int) -> tuple[int, ...]:
    """Uniform gap sequence: ``active_rows - 1`` copies of ``row_distance``."""
    if active_rows <= 1:
        return ()
    return (row_distance,) * (active_rows - 1)


def resolve_spacings(config: RowConfiguration) -> tuple[int, ...]:
    """Return the configuration's gaps, regenerating them when stale."""
    if config.has_stale_spacings:
        return generate_row_spacings(config.active_rows, config.row_distance)
    return config.row_spacings


def row_span(spacings: tuple[int, ...] | list[int]) -> int:
    """Distance from the first to the last row."""
    return sum(spacings)


def round_to_step(value: float, step: int) -> int:
    """Round half away from zero to the nearest multiple of ``step``."""
    if step <= 0:
        return int(round(value))
    scaled = value / step
    rounded = math.floor(abs(scaled) + 0.5)
    return int(math.copysign(rounded, scaled)) * step


def clamp(value, lower, upper):
    """Clamp into [lower, upper]; the lower bound wins if they cross."""
    return max(lower, min(upper, value))


def mirror_index(index: int, length: int) -> int:
    return length - 1 - index


def is_mirror_symmetric(spacings: tuple[int, ...] | list[int]) -> bool:
    n = len(spacings)
    return all(spacings[i] == spacings[n - 1 - i] for i in range(n // 2))


def set_gap_mirrored(
    spacings: tuple[int, ...], index: int, value: int
) -> tuple[int, ...]:
    """Set gap ``index`` and its mirror gap to ``value``."""
    new = list(spacings)
    new[index] = value
    new[mirror_index(index, len(new))] = value
    return tuple(new)


def max_gap_value(
    spacings: tuple[int, ...],
    index: int,
    min_distance: int,
    max_span: int,
    step: int = 1,
) -> int:
    """Largest value for gap ``index`` (and its mirror) within the toolbeam.

    The other gaps are held at their current values; the result keeps
    ``row_span + min_distance <= max_span``.
    """
    mirror = mirror_index(index, len(spacings))
    affected = {index, mirror}
    rest = sum(s for i, s in enumerate(spacings) if i not in affected)
    budget = max_span - min_distance - rest
    per_gap = budget // len(affected)
    if step > 1:
        per_gap = (per_gap // step) * step
    return per_gap
