"""CLI entrypoint for Aether Currents."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

import typer
from PIL import Image
from rich import print

from aether_currents.adapters import CsvSheet, DirectoryFileLookup, load_name_lookup, load_territories
from aether_currents.catalog import MarkerIdentifierCatalog
from aether_currents.config import settings
from aether_currents.context import GameContext
from aether_currents.indexer import TerritoryIndexer
from aether_currents.locator import CurrentsLocator, UnknownTerritory
from aether_currents.models import Territory
from aether_currents.overlay import MapOverlayCompositor
from aether_currents.telemetry import configure_logging

app = typer.Typer(help="Locate aether currents in extracted game data")

DataDirOption = typer.Option(None, "--data-dir", help="Extracted game files root (defaults to AETHER_CURRENTS_GAME_DATA_DIR)")


def _data_dir(data_dir: Path | None) -> Path:
    root = data_dir or (Path(settings.game_data_dir) if settings.game_data_dir else None)
    if root is None:
        raise typer.BadParameter("Provide --data-dir or set AETHER_CURRENTS_GAME_DATA_DIR")
    if not root.is_dir():
        raise typer.BadParameter(f"Data directory does not exist: {root}")
    return root


def _sheet_path(root: Path, configured: str) -> Path:
    path = Path(configured)
    return path if path.is_absolute() else root / path


def _load_sheet(root: Path, configured: str) -> CsvSheet:
    path = _sheet_path(root, configured)
    if not path.exists():
        raise typer.BadParameter(f"Sheet export not found: {path}")
    return CsvSheet.load(path)


def _build_locator(data_dir: Path | None) -> tuple[CurrentsLocator, list[Territory]]:
    configure_logging(settings.log_level)
    root = _data_dir(data_dir)

    catalog = MarkerIdentifierCatalog.build(_load_sheet(root, settings.marker_name_sheet), label=settings.marker_label)
    place_names = None
    if _sheet_path(root, settings.place_name_sheet).exists():
        place_names = load_name_lookup(_load_sheet(root, settings.place_name_sheet))
    territories = load_territories(_load_sheet(root, settings.territory_sheet), place_names=place_names)

    context = GameContext(
        catalog=catalog,
        files=DirectoryFileLookup(root),
        field_intended_use=settings.field_intended_use,
        scene_event_file=settings.scene_event_file,
    )
    locator = CurrentsLocator(
        context,
        compositor=MapOverlayCompositor(radius=settings.marker_radius, color=settings.marker_color),
        indexer=TerritoryIndexer(context, max_workers=settings.index_workers),
    )
    return locator, locator.build_index(territories)


def _select(locator: CurrentsLocator, territory_key: int) -> Territory:
    try:
        return locator.find_territory(territory_key)
    except UnknownTerritory:
        print({"error": f"Territory {territory_key} has no aether currents or is not a field area"})
        raise typer.Exit(code=1)


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(settings.model_dump())


@app.command()
def territories(data_dir: Path = DataDirOption) -> None:
    """List field territories that contain aether currents."""
    locator, eligible = _build_locator(data_dir)
    print(
        [
            {"key": territory.key, "place_name": territory.place_name, "bg": territory.bg, "currents": len(locator.index[territory])}
            for territory in eligible
        ]
    )


@app.command()
def markers(
    territory_key: int = typer.Argument(..., help="Territory sheet row key"),
    width: int = typer.Option(2048, min=0, help="Map image width in pixels"),
    height: int = typer.Option(2048, min=0, help="Map image height in pixels"),
    data_dir: Path = DataDirOption,
) -> None:
    """Print a territory's current positions in world and map pixel space."""
    locator, _ = _build_locator(data_dir)
    territory = _select(locator, territory_key)
    print(
        {
            "territory": asdict(territory),
            "world": [asdict(position) for position in locator.markers_for(territory)],
            "pixels": [asdict(point) for point in locator.pixel_positions(territory, width, height)],
        }
    )


@app.command()
def render(
    territory_key: int = typer.Argument(..., help="Territory sheet row key"),
    map_image: Path = typer.Option(..., "--map-image", help="Decoded map image for the territory"),
    output: Path = typer.Option(..., "--output", help="Where to write the PNG"),
    data_dir: Path = DataDirOption,
) -> None:
    """Draw a territory's currents onto its map image."""
    if not map_image.exists():
        raise typer.BadParameter(f"Map image not found: {map_image}")
    locator, _ = _build_locator(data_dir)
    territory = _select(locator, territory_key)

    with Image.open(map_image) as base:
        base.load()
        png = locator.render(territory, base)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(png)
    print({"output": str(output), "currents": len(locator.markers_for(territory))})


if __name__ == "__main__":
    app()
