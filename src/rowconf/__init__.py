"""rowconf: row-configuration geometry engine for multi-row field robots."""

__version__ = "0.1.0"
