from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image
from typer.testing import CliRunner

from aether_currents.main import app
from scene_builders import build_lgb, event_object, opaque_entry


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    exd = tmp_path / "exd"
    exd.mkdir()
    (exd / "EObjName.csv").write_text("#,Singular\n2007968,aether current\n2000100,destination\n", encoding="utf-8")
    (exd / "TerritoryType.csv").write_text(
        "#,Bg,PlaceName,TerritoryIntendedUse,Map\n"
        "148,ffxiv/fst_f1/fld/f1f1/level/f1f1,Shroud,1,4\n"
        "149,ffxiv/fst_f1/fld/f1f1/level/f1f1,ShroudCopy,1,4\n"
        "132,ffxiv/fst_f1/twn/f1t1/level/f1t1,Gridania,0,2\n",
        encoding="utf-8",
    )
    scene = tmp_path / "bg" / "ffxiv" / "fst_f1" / "fld" / "f1f1" / "level" / "planevent.lgb"
    scene.parent.mkdir(parents=True)
    scene.write_bytes(
        build_lgb([("Event", [event_object(2007968, (5.5, 0.0, -2.5)), event_object(2000100, (1.0, 0.0, 1.0)), opaque_entry(6)])])
    )
    return tmp_path


def test_territories_lists_field_areas_with_currents(data_dir: Path) -> None:
    result = CliRunner().invoke(app, ["territories", "--data-dir", str(data_dir)])

    assert result.exit_code == 0, result.output
    assert "Shroud" in result.output
    assert "ShroudCopy" not in result.output
    assert "Gridania" not in result.output


def test_markers_reports_unknown_territory(data_dir: Path) -> None:
    result = CliRunner().invoke(app, ["markers", "132", "--data-dir", str(data_dir)])

    assert result.exit_code == 1


def test_render_writes_png(data_dir: Path, tmp_path: Path) -> None:
    map_path = tmp_path / "map.png"
    Image.new("RGB", (64, 64), "white").save(map_path)
    output = tmp_path / "out" / "148.png"

    result = CliRunner().invoke(
        app,
        ["render", "148", "--map-image", str(map_path), "--output", str(output), "--data-dir", str(data_dir)],
    )

    assert result.exit_code == 0, result.output
    with Image.open(output) as rendered:
        assert rendered.getpixel((37, 30)) == (255, 0, 0)
        assert rendered.getpixel((33, 33)) == (255, 255, 255)


def test_missing_data_dir_is_a_usage_error(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["territories", "--data-dir", str(tmp_path / "nope")])

    assert result.exit_code != 0
