"""World (x, z) to map-image pixel conversion."""

from __future__ import annotations

from typing import Iterable

from aether_currents.models import MarkerPosition, PixelPoint


def project(position: MarkerPosition, width: int, height: int) -> PixelPoint:
    """Offset a marker by half the image size; world units already match map pixels."""
    if width < 0 or height < 0:
        raise ValueError(f"Image size must be non-negative, got {width}x{height}")
    return PixelPoint(x=position.x + width // 2, y=position.z + height // 2)


def project_all(positions: Iterable[MarkerPosition], width: int, height: int) -> list[PixelPoint]:
    return [project(position, width, height) for position in positions]
