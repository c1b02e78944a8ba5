"""Direct numeric field edits.

Lengths are typed in centimetres and stored in millimetres; plant spacing is
typed and stored in centimetres. Text that does not parse to a positive
number is discarded and the configuration is left unchanged.
"""

from __future__ import annotations

import logging
import math
from enum import Enum

from rowconf.editing.commands import (
    set_gap,
    set_plant_spacing,
    set_row_distance,
    set_wheel_spacing,
    set_working_width,
)
from rowconf.layout.constants import DEFAULT_CONSTRAINTS, ConstraintTable
from rowconf.layout.spacing import resolve_spacings
from rowconf.layout.working_width import resolve_working_width
from rowconf.parser.model import RowConfiguration

logger = logging.getLogger(__name__)

MM_PER_CM = 10


class EditableField(Enum):
    ROW_DISTANCE = "row_distance"
    GAP = "gap"
    WHEEL_SPACING = "wheel_spacing"
    WORKING_WIDTH = "working_width"
    PLANT_SPACING = "plant_spacing"


def parse_decimal(text: str) -> float | None:
    """Parse a positive decimal, accepting ``.`` or ``,`` as separator.

    When both appear, the last one is the decimal separator and the other
    groups thousands ("1.234,5" and "1,234.5" both give 1234.5).
    """
    cleaned = text.strip().replace(" ", "").replace("\u00a0", "")
    if not cleaned:
        return None
    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    else:
        cleaned = cleaned.replace(",", ".")
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def _cm(mm: float) -> str:
    return f"{mm / MM_PER_CM:g}"


def format_field(
    config: RowConfiguration,
    field: EditableField,
    index: int | None = None,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> str:
    """Current value of a field as edit text."""
    if field is EditableField.ROW_DISTANCE:
        return _cm(config.row_distance)
    if field is EditableField.GAP:
        spacings = resolve_spacings(config)
        if index is None or not 0 <= index < len(spacings):
            return ""
        return _cm(spacings[index])
    if field is EditableField.WHEEL_SPACING:
        return _cm(config.wheel_spacing)
    if field is EditableField.WORKING_WIDTH:
        return _cm(resolve_working_width(config, constraints=constraints).working_width)
    return str(config.plant_spacing)


def commit_field(
    config: RowConfiguration,
    field: EditableField,
    text: str,
    index: int | None = None,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowConfiguration:
    """Apply typed text to a field, clamping into bounds."""
    value = parse_decimal(text)
    if value is None:
        logger.debug("Discarding unparseable %s text %r", field.value, text)
        return config

    if field is EditableField.PLANT_SPACING:
        return set_plant_spacing(config, value)

    mm = value * MM_PER_CM
    if field is EditableField.ROW_DISTANCE:
        return set_row_distance(config, mm, constraints)
    if field is EditableField.GAP:
        if index is None:
            logger.debug("Discarding gap edit without a gap index")
            return config
        return set_gap(config, index, mm, constraints)
    if field is EditableField.WHEEL_SPACING:
        return set_wheel_spacing(config, mm, constraints=constraints)
    return set_working_width(config, mm, constraints)
