"""Drawing marker points onto map images."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from typing import Iterable

from PIL import Image, ImageDraw

from aether_currents.models import PixelPoint

DEFAULT_RADIUS = 3
DEFAULT_COLOR = "red"


@dataclass(slots=True)
class MapOverlayCompositor:
    """Draws a filled circle per point on a copy of a base map image."""

    radius: int = DEFAULT_RADIUS
    color: str | tuple[int, ...] = DEFAULT_COLOR

    def composite(self, base: Image.Image, points: Iterable[PixelPoint]) -> Image.Image:
        if base.mode in ("RGB", "RGBA"):
            canvas = base.copy()
        else:
            canvas = base.convert("RGBA")

        draw = ImageDraw.Draw(canvas)
        width, height = canvas.size
        r = self.radius
        for point in points:
            # Circles entirely off the image are skipped; partial ones are clipped by Pillow.
            if point.x + r < 0 or point.y + r < 0 or point.x - r >= width or point.y - r >= height:
                continue
            draw.ellipse((point.x - r, point.y - r, point.x + r, point.y + r), fill=self.color)
        return canvas

    def compose(self, base: Image.Image, points: Iterable[PixelPoint]) -> bytes:
        """Return the marked-up map as PNG bytes."""
        return encode_png(self.composite(base, points))


def encode_png(image: Image.Image) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
