"""Process-wide collaborators, built once at startup and passed explicitly."""

from __future__ import annotations

from dataclasses import dataclass

from aether_currents.adapters.files import FileLookup
from aether_currents.catalog import MarkerIdentifierCatalog

FIELD_INTENDED_USE = 1
SCENE_EVENT_FILE = "planevent.lgb"


@dataclass(frozen=True, slots=True)
class GameContext:
    """What the indexing pass needs to know about the installed game."""

    catalog: MarkerIdentifierCatalog
    files: FileLookup
    field_intended_use: int = FIELD_INTENDED_USE
    scene_event_file: str = SCENE_EVENT_FILE
