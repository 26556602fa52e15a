from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Mapping

from PIL import Image

from .context import GameContext
from .indexer import TerritoryIndexer
from .models import MarkerPosition, PixelPoint, Territory
from .overlay import MapOverlayCompositor
from .projection import project_all


class UnknownTerritory(KeyError):
    """Raised when a territory has no entry in the marker index."""


class CurrentsLocator:
    """Facade the presentation layer calls: index once, then query and render."""

    def __init__(
        self,
        context: GameContext,
        *,
        compositor: MapOverlayCompositor | None = None,
        indexer: TerritoryIndexer | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.context = context
        self.compositor = compositor or MapOverlayCompositor()
        self._indexer = indexer or TerritoryIndexer(context)
        self._logger = logger or logging.getLogger("aether_currents.locator")
        self._eligible: list[Territory] = []
        self._index: dict[Territory, list[MarkerPosition]] = {}

    def build_index(self, territories: Iterable[Territory]) -> list[Territory]:
        result = self._indexer.index(territories)
        self._index = result.index
        self._eligible = result.eligible
        return list(self._eligible)

    @property
    def eligible(self) -> list[Territory]:
        return list(self._eligible)

    @property
    def index(self) -> Mapping[Territory, list[MarkerPosition]]:
        return MappingProxyType(self._index)

    def find_territory(self, key: int) -> Territory:
        for territory in self._eligible:
            if territory.key == key:
                return territory
        raise UnknownTerritory(key)

    def markers_for(self, territory: Territory) -> list[MarkerPosition]:
        try:
            return list(self._index[territory])
        except KeyError as exc:
            raise UnknownTerritory(territory.key) from exc

    def pixel_positions(self, territory: Territory, width: int, height: int) -> list[PixelPoint]:
        return project_all(self.markers_for(territory), width, height)

    def render(self, territory: Territory, map_image: Image.Image) -> bytes:
        """Return a PNG of ``map_image`` with the territory's markers drawn on it."""
        points = self.pixel_positions(territory, map_image.width, map_image.height)
        self._logger.info("territory_rendered", extra={"territory": territory.key, "markers": len(points)})
        return self.compositor.compose(map_image, points)
