"""Test the genpinout CLI and output store."""

import pytest

from genpinout.cli import main
from genpinout.config import GenPinoutConfig
from genpinout.errors import OutputExistsError
from genpinout.store import default_output_path, save_png, save_svg

SCRIPT = """\
LABELS,DEFAULT,TYPE,GROUP,NAME
BOX,STD,black,1,white,1,1,80,20
DRAW
ANCHOR,100,100
PINSET,RIGHT
PIN,DIGITAL,IO,,GPIO4
PIN,PWM,OUTPUT,,GPIO5
"""


@pytest.fixture
def script(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "board.csv"
    path.write_text(SCRIPT)
    return path


def test_render_to_default_path(script, capsys):
    main(["render", str(script)])
    out = script.with_suffix(".svg")
    assert out.exists()
    assert "<svg" in out.read_text()
    assert f"SVG: {out.name}" in capsys.readouterr().out


def test_render_refuses_overwrite(script, capsys):
    out = script.parent / "out" / "board.svg"
    main(["render", str(script), str(out)])
    assert out.exists()

    with pytest.raises(SystemExit) as exc:
        main(["render", str(script), str(out)])
    assert exc.value.code == 1
    assert "error [E_OUTPUT_EXISTS]" in capsys.readouterr().err

    main(["render", str(script), str(out), "--overwrite"])


def test_render_error_names_command(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    bad = tmp_path / "bad.csv"
    bad.write_text("DRAW\nPIN,DIGITAL,IO\n")
    with pytest.raises(SystemExit) as exc:
        main(["render", str(bad)])
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "error [E_NO_PINSET]: command #1 (pin):" in err


def test_parse_error(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    bad = tmp_path / "bad.csv"
    bad.write_text("FROB,1\n")
    with pytest.raises(SystemExit):
        main(["stats", str(bad)])
    assert "error [E_PARSE]: line 1" in capsys.readouterr().err


def test_missing_script(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as exc:
        main(["render", "absent.csv"])
    assert exc.value.code == 1


def test_themes(script, capsys):
    main(["themes", str(script)])
    out = capsys.readouterr().out
    assert "Labels: NAME" in out
    assert "BOX_STD" in out
    assert "WIDTH" in out


def test_stats(script, capsys):
    main(["stats", str(script)])
    out = capsys.readouterr().out
    lines = [line.split() for line in out.splitlines()]
    assert "board.csv: 7 commands" in out
    assert ["setup", "3"] in lines
    assert ["draw", "4"] in lines
    assert ["pin", "2"] in lines


def test_no_command(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 0


def test_store(tmp_path):
    config = GenPinoutConfig(output_dir=str(tmp_path / "out"))
    path = default_output_path("boards/esp32.csv", config)
    assert path == tmp_path / "out" / "esp32.svg"

    save_svg("<svg/>", path)
    assert path.read_text() == "<svg/>"
    with pytest.raises(OutputExistsError):
        save_svg("<svg/>", path)
    save_svg("<svg></svg>", path, overwrite=True)
    assert path.read_text() == "<svg></svg>"

    png = save_png(b"\x89PNG", path.with_suffix(".png"))
    assert png.read_bytes() == b"\x89PNG"
