"""コマンドライン入口 `qrsvg.cli.main` のテスト。"""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from qrsvg.cli import main
from qrsvg.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def _isolate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    set_config_path(None)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    yield
    set_config_path(None)


def _write_matrix(tmp_path: Path) -> Path:
    path = tmp_path / "m.txt"
    path.write_text("01\n10\n", encoding="utf-8")
    return path


def test_cli_writes_svg_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = main([str(_write_matrix(tmp_path)), "--width", "20", "--color", "#cc6600"])
    out = capsys.readouterr().out

    assert rc == 0
    assert out.startswith('<?xml version="1.0" standalone="yes"?>')
    assert 'width="20" height="20" viewBox="0 0 2 2"' in out
    assert 'fill="#cc6600"' in out


def test_cli_bare_out_name_goes_to_output_dir(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = main([str(_write_matrix(tmp_path)), "--out", "qr.svg", "--viewbox"])
    printed = capsys.readouterr().out.strip()

    assert rc == 0
    expected = Path("data") / "output" / "qr.svg"
    assert Path(printed) == expected
    text = (tmp_path / expected).read_text(encoding="utf-8")
    assert 'width="' not in text
    assert 'viewBox="0 0 2 2"' in text


def test_cli_uses_config_defaults_and_quiet_zone(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = tmp_path / "cfg.yaml"
    config.write_text('render:\n  color: "#123"\n  quiet_zone: 1\n', encoding="utf-8")
    json_path = tmp_path / "m.json"
    json_path.write_text(json.dumps([[1]]), encoding="utf-8")

    rc = main([str(json_path), "--config", str(config)])
    out = capsys.readouterr().out

    assert rc == 0
    assert 'fill="#123"' in out
    assert 'viewBox="0 0 3 3"' in out
    assert 'width="33"' in out


def test_cli_no_viewbox_overrides_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = tmp_path / "cfg.yaml"
    config.write_text("render:\n  viewbox: true\n", encoding="utf-8")
    matrix_path = str(_write_matrix(tmp_path))

    assert main([matrix_path, "--config", str(config)]) == 0
    assert 'width="' not in capsys.readouterr().out

    assert main([matrix_path, "--config", str(config), "--no-viewbox"]) == 0
    assert 'width="22" height="22" viewBox="0 0 2 2"' in capsys.readouterr().out


def test_cli_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n"))
    rc = main(["-"])
    out = capsys.readouterr().out

    assert rc == 0
    assert 'points="0,0 1,0 0,1"' in out


@pytest.mark.parametrize(
    "extra",
    [
        ["--width", "abc"],
        ["--width", "0"],
    ],
)
def test_cli_reports_invalid_width(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], extra: list[str]
) -> None:
    rc = main([str(_write_matrix(tmp_path)), *extra])
    captured = capsys.readouterr()

    assert rc == 2
    assert captured.out == ""
    assert captured.err.startswith("qrsvg: error:")


def test_cli_reports_malformed_matrix(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "bad.txt"
    path.write_text("01\n1\n", encoding="utf-8")

    assert main([str(path)]) == 2
    assert "qrsvg: error:" in capsys.readouterr().err


def test_cli_reports_missing_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(tmp_path / "missing.txt")]) == 2
    assert "qrsvg: error:" in capsys.readouterr().err
