"""LGB scene container decoding.

An LGB file lists the objects placed in one map area, organised in groups
(layers). Only event-object entries are decoded field by field; every other
entry kind is kept as an opaque tag so callers can skip it.

Layout (little-endian)::

    0x00  "LGB1"            0x04  file size
    0x08  chunk count       0x0C  "LGP1"
    0x10  chunk size        0x14  layer group id
    0x18  name offset       0x1C  layers offset
    0x20  group count
    0x24  int32[group count] group offsets, relative to 0x24

Each group header holds its name offset, the offset of its entry table and
the entry count; entry offsets are relative to the start of that table.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from enum import IntEnum

FILE_MAGIC = b"LGB1"
CHUNK_MAGIC = b"LGP1"

HEADER_SIZE = 0x24
GROUP_HEADER_SIZE = 0x10
EVENT_OBJECT_SIZE = 0x38

_FILE_HEADER = struct.Struct("<4sii4si3ii")
_GROUP_HEADER = struct.Struct("<4i")
_EVENT_OBJECT = struct.Struct("<iIi3f3f3fII")
_INT32 = struct.Struct("<i")


class MalformedContainer(ValueError):
    """Raised when a buffer does not follow the LGB container layout."""


class EntryKind(IntEnum):
    """Known entry kind tags. Only EVENT_OBJECT is decoded."""

    BG_PARTS = 1
    LIGHT = 3
    VFX = 4
    POSITION_MARKER = 5
    SHARED_GROUP = 6
    SOUND = 7
    EVENT_NPC = 8
    BATTLE_NPC = 9
    AETHERYTE = 12
    ENV_SET = 13
    GATHERING = 14
    TREASURE = 16
    EVENT_OBJECT = 45


@dataclass(frozen=True, slots=True)
class Vector3:
    x: float
    y: float
    z: float


@dataclass(slots=True)
class EventObjectEntry:
    instance_id: int
    event_object_id: int
    translation: Vector3
    rotation: Vector3
    scale: Vector3
    gimmick_id: int


@dataclass(slots=True)
class OpaqueEntry:
    """Entry of a kind this decoder does not interpret."""

    kind: int
    offset: int


SceneEntry = EventObjectEntry | OpaqueEntry


@dataclass(slots=True)
class Group:
    name: str
    entries: list[SceneEntry] = field(default_factory=list)


@dataclass(slots=True)
class SceneFile:
    file_size: int
    groups: list[Group] = field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return sum(len(group.entries) for group in self.groups)


def decode_scene(data: bytes) -> SceneFile:
    """Decode an LGB buffer, raising MalformedContainer on any layout violation."""
    data = bytes(data)
    if len(data) < HEADER_SIZE:
        raise MalformedContainer(f"Buffer too small for LGB header: {len(data)} < {HEADER_SIZE} bytes")

    magic, file_size, _chunk_count, chunk_magic, _chunk_size, _group_id, _name_off, _layers_off, group_count = (
        _FILE_HEADER.unpack_from(data, 0)
    )
    if magic != FILE_MAGIC:
        raise MalformedContainer(f"Not an LGB file (magic: {magic!r})")
    if chunk_magic != CHUNK_MAGIC:
        raise MalformedContainer(f"Unexpected chunk magic: {chunk_magic!r}")
    if file_size < HEADER_SIZE or file_size > len(data):
        raise MalformedContainer(f"Declared file size {file_size} does not fit buffer of {len(data)} bytes")
    if group_count < 0:
        raise MalformedContainer(f"Invalid group count: {group_count}")

    # Declared size bounds every later read; trailing bytes are ignored.
    data = data[:file_size]
    group_offsets = _read_int_table(data, HEADER_SIZE, group_count, "group offset table")

    groups = [_decode_group(data, HEADER_SIZE + offset, index) for index, offset in enumerate(group_offsets)]
    return SceneFile(file_size=file_size, groups=groups)


def _decode_group(data: bytes, base: int, index: int) -> Group:
    _require(data, base, GROUP_HEADER_SIZE, f"group {index} header")
    _group_id, name_offset, entries_offset, entry_count = _GROUP_HEADER.unpack_from(data, base)
    if entry_count < 0:
        raise MalformedContainer(f"Group {index} has invalid entry count: {entry_count}")

    name = _read_c_string(data, base + name_offset, f"group {index} name")
    table = base + entries_offset
    entry_offsets = _read_int_table(data, table, entry_count, f"group {index} entry table")
    entries = [_decode_entry(data, table + offset, index) for offset in entry_offsets]
    return Group(name=name, entries=entries)


def _decode_entry(data: bytes, offset: int, group_index: int) -> SceneEntry:
    _require(data, offset, _INT32.size, f"group {group_index} entry kind at 0x{offset:X}")
    (kind,) = _INT32.unpack_from(data, offset)
    if kind != EntryKind.EVENT_OBJECT:
        return OpaqueEntry(kind=kind, offset=offset)

    _require(data, offset, EVENT_OBJECT_SIZE, f"group {group_index} event object at 0x{offset:X}")
    (
        _kind,
        instance_id,
        _name_offset,
        tx, ty, tz,
        rx, ry, rz,
        sx, sy, sz,
        event_object_id,
        gimmick_id,
    ) = _EVENT_OBJECT.unpack_from(data, offset)
    if not all(math.isfinite(value) for value in (tx, ty, tz)):
        raise MalformedContainer(f"group {group_index} event object at 0x{offset:X} has a non-finite translation")
    return EventObjectEntry(
        instance_id=instance_id,
        event_object_id=event_object_id,
        translation=Vector3(tx, ty, tz),
        rotation=Vector3(rx, ry, rz),
        scale=Vector3(sx, sy, sz),
        gimmick_id=gimmick_id,
    )


def _require(data: bytes, offset: int, size: int, what: str) -> None:
    if offset < 0 or offset + size > len(data):
        raise MalformedContainer(f"{what} out of bounds (offset {offset}, size {size}, buffer {len(data)})")


def _read_int_table(data: bytes, offset: int, count: int, what: str) -> tuple[int, ...]:
    _require(data, offset, count * _INT32.size, what)
    return struct.unpack_from(f"<{count}i", data, offset)


def _read_c_string(data: bytes, offset: int, what: str) -> str:
    _require(data, offset, 1, what)
    end = data.find(b"\x00", offset)
    if end < 0:
        raise MalformedContainer(f"{what} is not NUL-terminated")
    return data[offset:end].decode("utf-8", errors="replace")
