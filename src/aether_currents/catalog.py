"""Set of event-object ids that denote aether currents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from aether_currents.adapters.sheets import SheetRow

MARKER_LABEL = "aether current"
LABEL_COLUMN = "Singular"


@dataclass(frozen=True, slots=True)
class MarkerIdentifierCatalog:
    ids: frozenset[int] = frozenset()

    @classmethod
    def build(
        cls,
        rows: Iterable[SheetRow | None],
        *,
        label: str = MARKER_LABEL,
        column: str = LABEL_COLUMN,
    ) -> MarkerIdentifierCatalog:
        """Collect the keys of naming-sheet rows whose singular label equals ``label``."""
        ids: set[int] = set()
        for row in rows:
            if row is None:
                continue
            if row.as_string(column) == label:
                ids.add(row.key & 0xFFFFFFFF)
        return cls(frozenset(ids))

    def contains(self, identifier: int) -> bool:
        return identifier in self.ids

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.ids

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self.ids))

    def __len__(self) -> int:
        return len(self.ids)
