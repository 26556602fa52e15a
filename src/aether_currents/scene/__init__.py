"""Scene container decoding."""

from .container import (
    EntryKind,
    EventObjectEntry,
    Group,
    MalformedContainer,
    OpaqueEntry,
    SceneEntry,
    SceneFile,
    Vector3,
    decode_scene,
)

__all__ = [
    "EntryKind",
    "EventObjectEntry",
    "Group",
    "MalformedContainer",
    "OpaqueEntry",
    "SceneEntry",
    "SceneFile",
    "Vector3",
    "decode_scene",
]
