"""Configuration model and file parsing."""

from rowconf.parser.config_file import dump_configuration, parse_configuration
from rowconf.parser.model import (
    FollowWheels,
    FrontWheelKind,
    ManualWidth,
    PatternWidth,
    RowConfiguration,
    SeedSize,
    WidthMode,
)

__all__ = [
    "FollowWheels",
    "FrontWheelKind",
    "ManualWidth",
    "PatternWidth",
    "RowConfiguration",
    "SeedSize",
    "WidthMode",
    "dump_configuration",
    "parse_configuration",
]
