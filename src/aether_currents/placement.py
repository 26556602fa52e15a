"""Selection of marker placements out of a decoded scene."""

from __future__ import annotations

from aether_currents.catalog import MarkerIdentifierCatalog
from aether_currents.models import MarkerPosition
from aether_currents.scene import EventObjectEntry, OpaqueEntry, SceneFile


def filter_placements(scene: SceneFile, catalog: MarkerIdentifierCatalog) -> list[MarkerPosition]:
    """Return the (x, z) of every event object whose id is in ``catalog``, in file order.

    Coordinates are truncated toward zero, not rounded; the map pixel grid relies on it.
    """
    positions: list[MarkerPosition] = []
    for group in scene.groups:
        for entry in group.entries:
            match entry:
                case EventObjectEntry(event_object_id=object_id, translation=translation) if object_id in catalog:
                    positions.append(MarkerPosition(x=int(translation.x), z=int(translation.z)))
                case EventObjectEntry() | OpaqueEntry():
                    continue
    return positions
