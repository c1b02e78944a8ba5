"""Pointer gestures and the interactive editing session.

A gesture keeps the configuration captured when it started plus the pointer
origin. Every pointer move recomputes the result from that snapshot and the
cumulative delta, so rounding never compounds across a drag.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from rowconf.editing import commands
from rowconf.editing.fields import EditableField, commit_field, format_field
from rowconf.layout.constants import DEFAULT_CONSTRAINTS, ConstraintTable
from rowconf.layout.engine import RowLayout, compute_layout
from rowconf.layout.spacing import (
    clamp,
    max_gap_value,
    resolve_spacings,
    round_to_step,
    set_gap_mirrored,
)
from rowconf.layout.working_width import resolve_working_width
from rowconf.parser.model import (
    FrontWheelKind,
    RowConfiguration,
    SeedSize,
    WidthMode,
)
from rowconf.presets import CROP_PRESETS, CropPreset

logger = logging.getLogger(__name__)


class WheelSide(Enum):
    LEFT = "left"
    RIGHT = "right"


def drag_row(
    start: RowConfiguration,
    row_index: int,
    delta: float,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Move a row by ``delta`` mm from its position in ``start``.

    The gap between the row and the centerline side changes, together with
    its mirror gap; rows further out move with the dragged row. The center
    row of an odd layout is pinned to the centerline and cannot be dragged.
    """
    total = start.active_rows
    if total < 2 or not 0 <= row_index < total:
        return start
    center = (total - 1) / 2
    if row_index == center:
        return start

    spacings = resolve_spacings(start)
    if row_index < center:
        gap_index = row_index
        raw = spacings[gap_index] - delta
    else:
        gap_index = row_index - 1
        raw = spacings[gap_index] + delta

    min_distance = constraints.min_distance(start.seed_size)
    upper = max_gap_value(
        spacings,
        gap_index,
        min_distance,
        constraints.max_toolbeam_span,
        constraints.row_step,
    )
    gap = clamp(round_to_step(raw, constraints.row_step), min_distance, upper)
    return start.evolve(row_spacings=set_gap_mirrored(spacings, gap_index, gap))


def drag_wheel(
    start: RowConfiguration,
    side: WheelSide,
    delta: float,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Move one rear wheel; the spacing changes by twice the lateral delta."""
    change = 2 * delta if side is WheelSide.RIGHT else -2 * delta
    return commands.set_wheel_spacing(
        start,
        start.wheel_spacing + change,
        step=constraints.wheel_spacing_step,
        constraints=constraints,
    )


def drag_working_width(
    start: RowConfiguration,
    delta: float,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Move the pass boundary; always leaves wheel-following mode."""
    width = resolve_working_width(start, constraints=constraints).working_width
    return commands.set_working_width(start, width + delta, constraints)


@dataclass(frozen=True)
class RowDrag:
    start: RowConfiguration
    origin: float
    row_index: int

    def apply(self, pointer: float, constraints: ConstraintTable) -> RowConfiguration:
        return drag_row(self.start, self.row_index, pointer - self.origin, constraints)


@dataclass(frozen=True)
class WheelDrag:
    start: RowConfiguration
    origin: float
    side: WheelSide

    def apply(self, pointer: float, constraints: ConstraintTable) -> RowConfiguration:
        return drag_wheel(self.start, self.side, pointer - self.origin, constraints)


@dataclass(frozen=True)
class WidthDrag:
    start: RowConfiguration
    origin: float

    def apply(self, pointer: float, constraints: ConstraintTable) -> RowConfiguration:
        return drag_working_width(self.start, pointer - self.origin, constraints)


Gesture = RowDrag | WheelDrag | WidthDrag


@dataclass
class FieldEdit:
    field: EditableField
    index: int | None
    text: str


class LayoutSession:
    """Single-writer holder of the current configuration.

    Pointer positions are lateral positions in mm; converting from screen
    coordinates is the renderer's job. At most one gesture or text edit is
    active at a time. Listeners are called with the new configuration after
    every change.
    """

    def __init__(
        self,
        config: RowConfiguration | None = None,
        constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
    ) -> None:
        self.config = config if config is not None else RowConfiguration()
        self.constraints = constraints
        self.gesture: Gesture | None = None
        self.edit: FieldEdit | None = None
        self._listeners: list[Callable[[RowConfiguration], None]] = []

    # -- observation -------------------------------------------------------

    def subscribe(self, listener: Callable[[RowConfiguration], None]) -> None:
        self._listeners.append(listener)

    @property
    def layout(self) -> RowLayout:
        return compute_layout(self.config, self.constraints)

    def _commit(self, config: RowConfiguration) -> RowConfiguration:
        if config != self.config:
            self.config = config
            for listener in self._listeners:
                listener(config)
        return self.config

    # -- gestures ----------------------------------------------------------

    def _begin(self, gesture: Gesture) -> None:
        self.commit_edit()
        self.gesture = gesture

    def begin_row_drag(self, row_index: int, pointer: float) -> None:
        self._begin(RowDrag(self.config, pointer, row_index))

    def begin_wheel_drag(self, side: WheelSide, pointer: float) -> None:
        self._begin(WheelDrag(self.config, pointer, side))

    def begin_width_drag(self, pointer: float) -> None:
        self._begin(WidthDrag(self.config, pointer))

    def drag_to(self, pointer: float) -> RowConfiguration:
        if self.gesture is None:
            return self.config
        if not math.isfinite(pointer):
            return self.config
        return self._commit(self.gesture.apply(pointer, self.constraints))

    def end_drag(self) -> None:
        self.gesture = None

    def cancel(self) -> RowConfiguration:
        """Abort the active gesture or edit, restoring its start state."""
        if self.gesture is not None:
            start = self.gesture.start
            self.gesture = None
            self._commit(start)
        self.edit = None
        return self.config

    # -- text edits --------------------------------------------------------

    def begin_edit(self, field: EditableField, index: int | None = None) -> str:
        self.end_drag()
        self.commit_edit()
        text = format_field(self.config, field, index, self.constraints)
        self.edit = FieldEdit(field, index, text)
        return text

    def update_edit(self, text: str) -> None:
        if self.edit is not None:
            self.edit.text = text

    def commit_edit(self) -> RowConfiguration:
        edit, self.edit = self.edit, None
        if edit is None:
            return self.config
        return self._commit(
            commit_field(self.config, edit.field, edit.text, edit.index, self.constraints)
        )

    # -- discrete commands -------------------------------------------------

    def _prepare(self) -> None:
        self.end_drag()
        self.commit_edit()

    def insert_pair_at_gap(self, gap_index: int) -> RowConfiguration:
        self._prepare()
        return self._commit(
            commands.insert_pair_at_gap(self.config, gap_index, self.constraints)
        )

    def insert_pair_at_edges(self) -> RowConfiguration:
        self._prepare()
        return self._commit(commands.insert_pair_at_edges(self.config, self.constraints))

    def remove_pair(self, row_index: int) -> RowConfiguration:
        self._prepare()
        return self._commit(commands.remove_pair(self.config, row_index, self.constraints))

    def set_row_count(self, count: int) -> RowConfiguration:
        self._prepare()
        return self._commit(commands.set_row_count(self.config, count, self.constraints))

    def set_width_mode(self, mode: WidthMode) -> RowConfiguration:
        self._prepare()
        return self._commit(commands.set_width_mode(self.config, mode, self.constraints))

    def set_seed_size(self, seed_size: SeedSize) -> RowConfiguration:
        self._prepare()
        return self._commit(commands.set_seed_size(self.config, seed_size, self.constraints))

    def set_front_wheel(self, kind: FrontWheelKind) -> RowConfiguration:
        self._prepare()
        return self._commit(commands.set_front_wheel(self.config, kind))

    def apply_preset(self, preset: CropPreset | str) -> RowConfiguration:
        self._prepare()
        if isinstance(preset, str):
            found = CROP_PRESETS.get(preset)
            if found is None:
                logger.debug("Unknown preset %r", preset)
                return self.config
            preset = found
        return self._commit(commands.apply_preset(self.config, preset, self.constraints))

    def reset(self, config: RowConfiguration | None = None) -> RowConfiguration:
        """Replace the configuration wholesale, dropping any gesture or edit."""
        self.gesture = None
        self.edit = None
        return self._commit(config if config is not None else RowConfiguration())
