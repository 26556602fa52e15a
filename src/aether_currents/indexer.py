"""Builds the territory -> marker positions index."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable

from aether_currents.adapters.files import LookupFailed
from aether_currents.context import SCENE_EVENT_FILE, GameContext
from aether_currents.models import MarkerPosition, Territory, TerritoryMarkerIndex
from aether_currents.placement import filter_placements
from aether_currents.scene import MalformedContainer, decode_scene


def scene_event_path(bg: str, file_name: str = SCENE_EVENT_FILE) -> str | None:
    """Path of the event placement file sitting next to a territory's background.

    ``ffxiv/sea_s1/fld/s1f1/level/s1f1`` -> ``bg/ffxiv/sea_s1/fld/s1f1/level/planevent.lgb``.
    Returns None when the background path has no directory part.
    """
    head, sep, _ = bg.rpartition("/")
    if not sep or not head:
        return None
    return f"bg/{head}/{file_name}"


@dataclass(slots=True)
class IndexResult:
    eligible: list[Territory] = field(default_factory=list)
    index: TerritoryMarkerIndex = field(default_factory=dict)


class TerritoryIndexer:
    """Selects displayable field territories and records their marker positions."""

    def __init__(
        self,
        context: GameContext,
        *,
        memoize: bool = False,
        max_workers: int = 1,
        logger: logging.Logger | None = None,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self._context = context
        self._memoize = memoize
        self._max_workers = max_workers
        self._logger = logger or logging.getLogger("aether_currents.indexer")
        self._memo: dict[str, list[MarkerPosition]] = {}

    def index(self, territories: Iterable[Territory]) -> IndexResult:
        candidates = [territory for territory in territories if self._is_candidate(territory)]

        # Event files depend only on the background, so each distinct one is scanned once.
        backgrounds = list(dict.fromkeys(territory.bg for territory in candidates))
        if self._max_workers > 1 and len(backgrounds) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="territory-scan") as pool:
                scans = dict(zip(backgrounds, pool.map(self._safe_scan, backgrounds)))
        else:
            scans = {}

        result = IndexResult()
        accepted: set[str] = set()
        for territory in candidates:
            if territory.bg in accepted:
                self._skip(territory, "duplicate_background")
                continue

            if territory.bg not in scans:
                scans[territory.bg] = self._safe_scan(territory.bg)
            markers = scans[territory.bg]
            if not markers:
                self._skip(territory, "no_markers")
                continue

            accepted.add(territory.bg)
            result.index[territory] = list(markers)
            result.eligible.append(territory)
            self._logger.info(
                "territory_indexed",
                extra={"territory": territory.key, "place_name": territory.place_name, "markers": len(markers)},
            )

        self._logger.info(
            "territory_index_built",
            extra={"candidates": len(candidates), "eligible": len(result.eligible)},
        )
        return result

    def scan(self, bg: str) -> list[MarkerPosition]:
        """Decode the event file for ``bg`` and return its marker positions.

        Raises LookupFailed when the file cannot be resolved and MalformedContainer
        when it does not decode.
        """
        if self._memoize and bg in self._memo:
            return self._memo[bg]

        path = scene_event_path(bg, self._context.scene_event_file)
        if path is None:
            raise LookupFailed(f"Background path has no directory part: {bg!r}")

        scene = decode_scene(self._context.files.lookup(path))
        markers = filter_placements(scene, self._context.catalog)
        if self._memoize:
            self._memo[bg] = markers
        return markers

    def _is_candidate(self, territory: Territory) -> bool:
        if not territory.place_name.strip():
            return False
        if territory.intended_use != self._context.field_intended_use:
            return False
        return True

    def _safe_scan(self, bg: str) -> list[MarkerPosition]:
        try:
            return self.scan(bg)
        except LookupFailed as exc:
            self._logger.debug("scene_lookup_failed", extra={"bg": bg, "error": str(exc)})
        except MalformedContainer as exc:
            self._logger.warning("scene_malformed", extra={"bg": bg, "error": str(exc)})
        return []

    def _skip(self, territory: Territory, reason: str) -> None:
        self._logger.debug(
            "territory_skipped",
            extra={"territory": territory.key, "bg": territory.bg, "reason": reason},
        )
