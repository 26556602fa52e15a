from __future__ import annotations

from aether_currents.adapters import CsvRow
from aether_currents.catalog import MarkerIdentifierCatalog
from aether_currents.models import MarkerPosition
from aether_currents.placement import filter_placements
from aether_currents.scene import decode_scene
from scene_builders import build_lgb, event_object, opaque_entry


def _row(key: int, singular: str | None) -> CsvRow:
    values = {} if singular is None else {"Singular": singular}
    return CsvRow(key=key, values=values)


def test_catalog_collects_exact_label_matches() -> None:
    rows = [
        _row(2007968, "aether current"),
        _row(2007969, "Aether Current"),
        _row(2007970, "aether currents"),
        _row(2007971, None),
        None,
        _row(2008000, "aether current"),
    ]

    catalog = MarkerIdentifierCatalog.build(rows)

    assert set(catalog) == {2007968, 2008000}
    assert catalog.contains(2007968)
    assert 2007969 not in catalog
    assert len(catalog) == 2


def test_catalog_keys_are_unsigned_32_bit() -> None:
    catalog = MarkerIdentifierCatalog.build([_row(-1, "aether current")])
    assert 0xFFFFFFFF in catalog


def test_filter_truncates_translation() -> None:
    catalog = MarkerIdentifierCatalog(frozenset({1000, 1001}))
    scene = decode_scene(build_lgb([("Objects", [event_object(1000, (120.7, 5.0, -40.2))])]))

    assert filter_placements(scene, catalog) == [MarkerPosition(120, -40)]


def test_filter_skips_other_ids_and_kinds() -> None:
    catalog = MarkerIdentifierCatalog(frozenset({1000}))
    scene = decode_scene(
        build_lgb(
            [
                ("First", [opaque_entry(1), event_object(999, (1.0, 0.0, 1.0)), event_object(1000, (-0.9, 0.0, 7.99))]),
                ("Second", [event_object(1000, (300.5, 12.0, 299.5)), opaque_entry(45 + 1)]),
            ]
        )
    )

    positions = filter_placements(scene, catalog)

    assert positions == [MarkerPosition(0, 7), MarkerPosition(300, 299)]
    assert len(positions) <= scene.entry_count


def test_filter_with_empty_catalog_yields_nothing() -> None:
    scene = decode_scene(build_lgb([("Objects", [event_object(1000, (1.0, 1.0, 1.0))])]))
    assert filter_placements(scene, MarkerIdentifierCatalog()) == []
