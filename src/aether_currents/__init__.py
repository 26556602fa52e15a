"""Locate aether current markers in extracted game data."""
