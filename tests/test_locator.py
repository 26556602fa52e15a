from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image

from aether_currents.adapters import InMemoryFileLookup
from aether_currents.catalog import MarkerIdentifierCatalog
from aether_currents.context import GameContext
from aether_currents.locator import CurrentsLocator, UnknownTerritory
from aether_currents.models import MarkerPosition, PixelPoint, Territory
from scene_builders import build_lgb, event_object

FIELD = Territory(key=148, bg="ffxiv/fst_f1/fld/f1f1/level/f1f1", place_name="Central Shroud", intended_use=1)
TOWN = Territory(key=132, bg="ffxiv/fst_f1/twn/f1t1/level/f1t1", place_name="New Gridania", intended_use=0)


@pytest.fixture
def locator() -> CurrentsLocator:
    files = {
        "bg/ffxiv/fst_f1/fld/f1f1/level/planevent.lgb": build_lgb(
            [("Currents", [event_object(2007968, (120.7, 5.0, -40.2)), event_object(2007968, (-10.0, 0.0, 10.0))])]
        )
    }
    context = GameContext(catalog=MarkerIdentifierCatalog(frozenset({2007968})), files=InMemoryFileLookup(files))
    located = CurrentsLocator(context)
    located.build_index([TOWN, FIELD])
    return located


def test_build_index_exposes_eligible_territories(locator: CurrentsLocator) -> None:
    assert locator.eligible == [FIELD]
    assert locator.find_territory(148) == FIELD
    assert locator.markers_for(FIELD) == [MarkerPosition(120, -40), MarkerPosition(-10, 10)]


def test_index_is_read_only(locator: CurrentsLocator) -> None:
    with pytest.raises(TypeError):
        locator.index[TOWN] = []  # type: ignore[index]


def test_unknown_territories_raise(locator: CurrentsLocator) -> None:
    with pytest.raises(UnknownTerritory):
        locator.find_territory(132)
    with pytest.raises(UnknownTerritory):
        locator.markers_for(TOWN)


def test_pixel_positions_and_render(locator: CurrentsLocator) -> None:
    assert locator.pixel_positions(FIELD, 2048, 2048) == [PixelPoint(1144, 984), PixelPoint(1014, 1034)]

    base = Image.new("RGB", (2048, 2048), "white")
    rendered = Image.open(BytesIO(locator.render(FIELD, base)))

    assert rendered.getpixel((1144, 984)) == (255, 0, 0)
    assert rendered.getpixel((1014, 1034)) == (255, 0, 0)
    assert base.getpixel((1144, 984)) == (255, 255, 255)
