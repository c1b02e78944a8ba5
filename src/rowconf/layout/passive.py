"""Passive row calculation.

Passive rows are unpowered rows riding in gaps that are wide enough. The
count depends only on gap size, never on seed size: a gap of
``2 * passive_unit`` carries exactly one, and every further full
``passive_unit`` adds another.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rowconf.layout.constants import DEFAULT_CONSTRAINTS, ConstraintTable

__all__ = ["PassiveRows", "compute_passive_rows", "passive_rows_in_gap"]


@dataclass
class PassiveRows:
    """Passive rows derived from a gap sequence."""

    per_gap: list[int] = field(default_factory=list)
    positions: list[float] = field(default_factory=list)
    outer_position: float | None = None

    @property
    def inner_count(self) -> int:
        return sum(self.per_gap)

    @property
    def outer_count(self) -> int:
        return 1 if self.inner_count > 0 else 0

    @property
    def total(self) -> int:
        return self.inner_count + self.outer_count


def passive_rows_in_gap(gap: int, passive_unit: int = DEFAULT_CONSTRAINTS.passive_unit) -> int:
    """Number of passive rows that fit in a single gap."""
    # Integer comparison keeps the threshold exact
    if gap < 2 * passive_unit:
        return 0
    return int(gap // passive_unit) - 1


def compute_passive_rows(
    spacings: tuple[int, ...] | list[int],
    row_positions: list[float] | None = None,
    row_distance: int | None = None,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> PassiveRows:
    """Count passive rows per gap and, given row positions, place them.

    Inner passive rows are spread evenly inside their gap. When any inner
    passive row exists, one outer passive row is reported half a row
    distance beyond the last active row.
    """
    result = PassiveRows(
        per_gap=[passive_rows_in_gap(g, constraints.passive_unit) for g in spacings]
    )
    if not row_positions:
        return result

    for i, count in enumerate(result.per_gap):
        if count == 0:
            continue
        left = row_positions[i]
        step = spacings[i] / (count + 1)
        for j in range(1, count + 1):
            result.positions.append(left + j * step)

    if result.outer_count and row_distance is not None:
        result.outer_position = row_positions[-1] + row_distance / 2

    return result
