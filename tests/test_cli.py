from pathlib import Path

import pytest

from trmap import cli
from trmap.persistence import decode_buffer


def write_settings(tmp_path: Path, editor: str = "") -> Path:
    settings = tmp_path / "settings.yaml"
    settings.write_text(
        f"map:\n  width: 2\n  height: 2\n  floor_value: 0\nstorage:\n  directory: {tmp_path / 'maps'}\n" + editor,
        encoding="utf-8",
    )
    return settings


@pytest.fixture
def run(tmp_path: Path, monkeypatch, capsys):
    settings = write_settings(tmp_path)
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)

    def _run(*argv):
        code = cli.main(["--settings", str(settings), *argv])
        return code, capsys.readouterr().out

    return _run

def test_show_without_stored_map_fails(run):
    code, out = run("show")
    assert code == 1
    assert "trmap new" in out


def test_new_then_show(run, tmp_path: Path):
    code, out = run("new")
    assert code == 0
    assert (tmp_path / "maps" / "tr_map.bin").exists()
    code, out = run("show")
    assert code == 0
    assert out.splitlines() == ["+-+-+", "| | |", "+-+-+", "| | |", "+-+-+"]


def test_toggle_is_persisted(run):
    run("new")
    code, _ = run("toggle", "0", "0", "south")
    assert code == 0
    code, out = run("toggle", "1", "1", "interior")
    assert code == 0
    assert out.splitlines() == ["+-+-+", "| | |", "+ +-+", "| |#|", "+-+-+"]


def test_toggle_out_of_bounds_reports_error(run):
    run("new")
    code, out = run("toggle", "5", "0", "north")
    assert code == 1
    assert "error" in out


def test_fill_layer(run):
    run("new")
    code, out = run("fill", "wall_v", "0")
    assert code == 0
    assert out.splitlines()[1] == "     "


def test_rotate_does_not_change_the_stored_map(run):
    run("new")
    run("toggle", "0", "0", "interior")
    code, out = run("rotate")
    assert code == 0
    assert out.splitlines()[0] == "heading: E"
    assert out.splitlines()[2] == "| |#|"
    _, out = run("show")
    assert out.splitlines()[1] == "|#| |"


def test_export_import_round_trip(run):
    run("new")
    run("toggle", "1", "0", "interior")
    _, exported = run("export")
    text = exported.strip()
    assert len(decode_buffer(text)) == 4 + 6 + 6

    run("new")
    code, out = run("import", text)
    assert code == 0
    assert out.splitlines()[1] == "| |#|"


def test_import_rejects_wrong_size(run):
    code, out = run("import", "AAH/")
    assert code == 1
    assert "error" in out


def test_export_stdout_stays_decodable_with_logging_on(tmp_path: Path, capsys, restore_root_logger, monkeypatch):
    monkeypatch.delenv("TRMAP_LOG_LEVEL", raising=False)
    argv = ["--settings", str(write_settings(tmp_path))]
    assert cli.main([*argv, "new"]) == 0
    capsys.readouterr()

    assert cli.main([*argv, "export"]) == 0
    captured = capsys.readouterr()
    assert len(decode_buffer(captured.out.strip())) == 4 + 6 + 6
    assert "Map loaded" in captured.err
    assert "Map loaded" not in captured.out


def test_click_classifies_with_default_band(run):
    run("new")
    # 50px tiles, 10px band: near the top edge of tile (0, 0)
    code, out = run("click", "0", "0", "25", "5")
    assert code == 0
    assert out.splitlines()[0] == "+ +-+"
    # the middle of tile (1, 1)
    _, out = run("click", "1", "1", "25", "25")
    assert out.splitlines()[3] == "| |#|"


def test_click_uses_configured_edge_band_and_tile_size(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)
    rendered = {}
    for band in ("0.1", "0.4"):
        root = tmp_path / band
        root.mkdir()
        settings = write_settings(root, editor=f"editor:\n  tile_size: 10\n  edge_band: {band}\n")
        assert cli.main(["--settings", str(settings), "new"]) == 0
        capsys.readouterr()
        assert cli.main(["--settings", str(settings), "click", "0", "0", "5", "3"]) == 0
        rendered[band] = capsys.readouterr().out.splitlines()

    # 3px from the top of a 10px tile: interior with a 1px band, north wall with a 4px band
    assert rendered["0.1"][:2] == ["+-+-+", "|#| |"]
    assert rendered["0.4"][:2] == ["+ +-+", "| | |"]
