"""Interactive mutation engine: commands, text edits and pointer gestures."""

from rowconf.editing.fields import EditableField, commit_field, parse_decimal
from rowconf.editing.gestures import (
    LayoutSession,
    WheelSide,
    drag_row,
    drag_wheel,
    drag_working_width,
)

__all__ = [
    "EditableField",
    "LayoutSession",
    "WheelSide",
    "commit_field",
    "drag_row",
    "drag_wheel",
    "drag_working_width",
    "parse_decimal",
]
