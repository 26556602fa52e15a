"""Read-only access to game data sheets exported as CSV."""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Protocol

from aether_currents.models import Territory

_KEY_COLUMNS = ("#", "key")


class SheetRow(Protocol):
    """A keyed sheet row with typed field accessors."""

    key: int

    def as_string(self, column: str) -> str | None:
        """Return the cell as text, or None when the cell is empty or absent."""

    def as_int(self, column: str) -> int | None:
        """Return the cell as an integer, or None when the cell is empty or absent."""


@dataclass(slots=True)
class CsvRow:
    key: int
    values: Mapping[str, str] = field(default_factory=dict)

    def as_string(self, column: str) -> str | None:
        value = self.values.get(column)
        if value is None or value == "":
            return None
        return value

    def as_int(self, column: str) -> int | None:
        value = self.as_string(column)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            # Sheet exports write booleans as True/False.
            if value in ("True", "False"):
                return int(value == "True")
            raise


@dataclass(slots=True)
class CsvSheet:
    """Rows of one sheet export.

    Two layouts are accepted: the game-data export layout (``key,0,1,...`` index
    row, ``#,Name,...`` column row, then an optional row of type names) and a
    plain CSV whose header row starts with ``#`` or ``key``.
    """

    name: str
    columns: list[str]
    rows: list[CsvRow]

    def __iter__(self) -> Iterator[CsvRow]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    @classmethod
    def load(cls, path: str | Path) -> CsvSheet:
        path = Path(path)
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            return cls.parse(handle, name=path.stem)

    @classmethod
    def parse(cls, lines: Iterable[str], name: str = "sheet") -> CsvSheet:
        records = [record for record in csv.reader(lines) if record]
        if not records:
            return cls(name=name, columns=[], rows=[])

        header, body = records[0], records[1:]
        if header[0] == "key" and body and body[0] and body[0][0] == "#":
            header, body = body[0], body[1:]
            if body and body[0] and body[0][0] in ("int32", "uint32"):
                body = body[1:]

        if header[0] not in _KEY_COLUMNS:
            raise ValueError(f"Sheet {name!r} has no key column (first header cell: {header[0]!r})")

        columns = header[1:]
        rows = [
            CsvRow(key=int(record[0]), values=dict(zip(columns, record[1:])))
            for record in body
        ]
        return cls(name=name, columns=columns, rows=rows)


def load_name_lookup(rows: Iterable[SheetRow], column: str = "Name") -> dict[int, str]:
    """Map row keys to a text column, e.g. PlaceName keys to display names."""
    names: dict[int, str] = {}
    for row in rows:
        if row is None:
            continue
        names[row.key] = row.as_string(column) or ""
    return names


def load_territories(rows: Iterable[SheetRow], place_names: Mapping[int, str] | None = None) -> list[Territory]:
    """Build Territory records from territory sheet rows.

    When ``place_names`` is given the ``PlaceName`` cell is treated as a row
    reference into that lookup; otherwise it is taken as the display name.
    """
    territories: list[Territory] = []
    for row in rows:
        if row is None:
            continue
        if place_names is not None:
            place_name = place_names.get(row.as_int("PlaceName") or 0, "")
        else:
            place_name = row.as_string("PlaceName") or ""
        territories.append(
            Territory(
                key=row.key,
                bg=row.as_string("Bg") or "",
                place_name=place_name,
                intended_use=row.as_int("TerritoryIntendedUse") or 0,
                map_id=row.as_int("Map"),
            )
        )
    return territories
