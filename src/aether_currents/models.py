from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Territory:
    """One row of the territory sheet, reduced to what marker extraction needs."""

    key: int
    bg: str
    place_name: str
    intended_use: int
    map_id: int | None = None


@dataclass(frozen=True, slots=True)
class MarkerPosition:
    x: int
    z: int


@dataclass(frozen=True, slots=True)
class PixelPoint:
    x: int
    y: int


TerritoryMarkerIndex = dict[Territory, list[MarkerPosition]]
