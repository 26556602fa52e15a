"""Collaborator boundaries: game file lookup and sheet access."""

from .files import DirectoryFileLookup, FileLookup, InMemoryFileLookup, LookupFailed
from .sheets import CsvRow, CsvSheet, SheetRow, load_name_lookup, load_territories

__all__ = [
    "CsvRow",
    "CsvSheet",
    "DirectoryFileLookup",
    "FileLookup",
    "InMemoryFileLookup",
    "LookupFailed",
    "SheetRow",
    "load_name_lookup",
    "load_territories",
]
