"""Crop presets."""

from __future__ import annotations

from dataclasses import dataclass

from rowconf.parser.model import SeedSize


@dataclass(frozen=True)
class CropPreset:
    name: str
    seed_size: SeedSize
    active_rows: int
    row_distance: int


CROP_PRESETS: dict[str, CropPreset] = {
    p.name.lower().replace(" ", "-"): p
    for p in [
        CropPreset("Sugar Beet", SeedSize.SMALL, 6, 500),
        CropPreset("Carrot", SeedSize.SMALL, 10, 250),
        CropPreset("Onion", SeedSize.LARGE, 8, 300),
        CropPreset("Cabbage", SeedSize.LARGE, 6, 500),
        CropPreset("Parsnip", SeedSize.SMALL, 8, 300),
    ]
}

__all__ = ["CROP_PRESETS", "CropPreset"]
