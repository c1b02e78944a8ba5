"""Reader and writer for row-configuration JSON files.

Both the snake_case keys written here and the camelCase keys of saved
configurator state are accepted on load. Derived values are never written.
"""

from __future__ import annotations

import json
import math

from rowconf.parser.model import (
    FollowWheels,
    FrontWheelKind,
    ManualWidth,
    PatternWidth,
    RowConfiguration,
    SeedSize,
    WidthMode,
)

_ALIASES = {
    "seedSize": "seed_size",
    "activeRows": "active_rows",
    "rowDistance": "row_distance",
    "rowSpacings": "row_spacings",
    "wheelSpacing": "wheel_spacing",
    "frontWheel": "front_wheel",
    "plantSpacing": "plant_spacing",
    "widthMode": "width_mode",
}

# Front wheel product codes: passive/active single wheel, dual wheels
_FRONT_WHEEL_CODES = {
    "PFW": FrontWheelKind.SINGLE_CENTERED,
    "AFW": FrontWheelKind.SINGLE_CENTERED,
    "DFW": FrontWheelKind.DUAL,
}


def _int(data: dict, key: str, default: int) -> int:
    return _whole(data.get(key, default), key)


def _whole(value, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"'{key}' must be a finite number, got {value!r}")
    if value != int(value):
        raise ValueError(f"'{key}' must be a whole number of mm, got {value!r}")
    return int(value)


def _seed_size(value) -> SeedSize:
    try:
        return SeedSize(value)
    except ValueError:
        choices = ", ".join(s.value for s in SeedSize)
        raise ValueError(f"'seed_size' must be one of {choices}, got {value!r}") from None


def _front_wheel(value) -> FrontWheelKind:
    if value in _FRONT_WHEEL_CODES:
        return _FRONT_WHEEL_CODES[value]
    try:
        return FrontWheelKind(value)
    except ValueError:
        raise ValueError(f"'front_wheel' is not a known front wheel: {value!r}") from None


def _width_mode(data: dict) -> WidthMode:
    # Saved configurator state uses two flags; wheel-following wins
    if data.get("followWheelSpacing"):
        return FollowWheels()
    if data.get("workingWidthOverride") is not None:
        return ManualWidth(_int(data, "workingWidthOverride", 0))

    mode = data.get("width_mode", "pattern")
    if mode == "pattern":
        return PatternWidth()
    if mode == "follow-wheels":
        return FollowWheels()
    if isinstance(mode, dict) and "manual" in mode:
        return ManualWidth(_int(mode, "manual", 0))
    raise ValueError(f"'width_mode' is not a known width mode: {mode!r}")


def configuration_from_dict(data: dict) -> RowConfiguration:
    """Build a configuration from a decoded JSON object.

    Missing keys take defaults. Spacings whose count does not match the row
    count are regenerated by the engine, not rejected here.
    """
    if not isinstance(data, dict):
        raise ValueError("Configuration must be a JSON object")
    data = {_ALIASES.get(k, k): v for k, v in data.items()}
    default = RowConfiguration()

    spacings = data.get("row_spacings") or []
    if not isinstance(spacings, list):
        raise ValueError("'row_spacings' must be a list of numbers")
    row_spacings = tuple(_whole(s, "row_spacings") for s in spacings)

    return RowConfiguration(
        seed_size=_seed_size(data.get("seed_size", default.seed_size.value)),
        active_rows=_int(data, "active_rows", default.active_rows),
        row_distance=_int(data, "row_distance", default.row_distance),
        row_spacings=row_spacings,
        wheel_spacing=_int(data, "wheel_spacing", default.wheel_spacing),
        front_wheel=_front_wheel(data.get("front_wheel", default.front_wheel.value)),
        width_mode=_width_mode(data),
        plant_spacing=_int(data, "plant_spacing", default.plant_spacing),
    )


def configuration_to_dict(config: RowConfiguration) -> dict:
    mode = config.width_mode
    if isinstance(mode, ManualWidth):
        width_mode: str | dict = {"manual": mode.value}
    else:
        width_mode = mode.label
    return {
        "seed_size": config.seed_size.value,
        "active_rows": config.active_rows,
        "row_distance": config.row_distance,
        "row_spacings": list(config.row_spacings),
        "wheel_spacing": config.wheel_spacing,
        "front_wheel": config.front_wheel.value,
        "width_mode": width_mode,
        "plant_spacing": config.plant_spacing,
    }


def parse_configuration(text: str) -> RowConfiguration:
    """Parse a row configuration from JSON text."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from None
    return configuration_from_dict(data)


def dump_configuration(config: RowConfiguration) -> str:
    """Serialize a configuration to JSON text with a trailing newline."""
    return json.dumps(configuration_to_dict(config), indent=2) + "\n"
