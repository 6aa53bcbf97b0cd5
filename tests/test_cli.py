"""Tests for the ``charview-render`` command line."""

import io
import json

from PIL import Image

from charview import cli


def _write(tmp_path, text: str):
    src = tmp_path / "block.txt"
    src.write_text(text, encoding="utf-8")
    return str(src)


def test_text_output_to_stdout(tmp_path, capsys) -> None:
    src = _write(tmp_path, "title: demo\nA b")
    assert cli.main([src, "--stats", "--space-symbol", "_"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "DEMO"
    assert out[1] == "A_b"
    assert out[2].endswith("Total: 3")


def test_stdin_source(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("x\n\ny"))
    assert cli.main(["-"]) == 0
    assert capsys.readouterr().out.splitlines() == ["x", "␤", "y"]


def test_format_from_extension(tmp_path) -> None:
    src = _write(tmp_path, "Hello 42")
    out = tmp_path / "out.html"
    assert cli.main([src, "-o", str(out), "--preset", "ocean", "--color-key"]) == 0
    html = out.read_text(encoding="utf-8")
    assert "--char-upper-color: #2980b9" in html
    assert "charview-color-key" in html


def test_png_output(tmp_path) -> None:
    src = _write(tmp_path, "abc\n123")
    out = tmp_path / "grid.png"
    assert cli.main([src, "-o", str(out), "--font-size", "12"]) == 0
    with Image.open(out) as img:
        assert img.format == "PNG"
        assert img.size[0] > 0


def test_png_needs_output_file(tmp_path) -> None:
    src = _write(tmp_path, "abc")
    assert cli.main([src, "--format", "png"]) == 2


def test_settings_file_is_read_not_written(tmp_path) -> None:
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"showStatistics": True, "currentPreset": "dark"}), encoding="utf-8")
    before = settings.read_text(encoding="utf-8")

    src = _write(tmp_path, "ab")
    out = tmp_path / "out.txt"
    assert cli.main([src, "-o", str(out), "--settings", str(settings), "--no-space-symbol"]) == 0
    assert out.read_text(encoding="utf-8").splitlines()[-1].endswith("Total: 2")
    assert settings.read_text(encoding="utf-8") == before


def test_missing_source_file(tmp_path) -> None:
    assert cli.main([str(tmp_path / "nope.txt")]) == 2


def test_empty_source_svg_reports_error(tmp_path) -> None:
    src = _write(tmp_path, "")
    assert cli.main([src, "--format", "svg"]) == 1
