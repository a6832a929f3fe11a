"""Tests for the todomd command line."""

import json
from pathlib import Path

from todomd.cli import main

MESSY = "* [x] [link](#1)   Ship it\n\n\n# 1\n## comment\ndone on friday\n\n"
CLEAN = "* [X] [link](#1) Ship it\n\n# 1\n## comment\ndone on friday\n"


def _write(tmp_path: Path, text: str) -> Path:
    f = tmp_path / "TODO.md"
    f.write_text(text, encoding="utf-8")
    return f


def test_prints_normalized_document(tmp_path, capsys):
    f = _write(tmp_path, MESSY)
    assert main([str(f)]) == 0
    assert capsys.readouterr().out == CLEAN


def test_output_file(tmp_path):
    f = _write(tmp_path, MESSY)
    out = tmp_path / "out.md"
    assert main([str(f), "--output", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == CLEAN


def test_in_place(tmp_path):
    f = _write(tmp_path, MESSY)
    assert main([str(f), "--in-place"]) == 0
    assert f.read_text(encoding="utf-8") == CLEAN


def test_check(tmp_path):
    assert main([str(_write(tmp_path, MESSY)), "--check"]) == 1
    assert main([str(_write(tmp_path, CLEAN)), "--check"]) == 0


def test_parse_error_exit_code(tmp_path, capsys):
    f = _write(tmp_path, "* [ ] [link](#1) a\n\n# 1\n## priority\nhigh\n")
    assert main([str(f)]) == 1
    assert capsys.readouterr().out == ""


def test_missing_file(tmp_path):
    assert main([str(tmp_path / "nope.md")]) == 1


def test_in_place_rejects_stdin():
    assert main(["-", "--in-place"]) == 1


def test_unknown_dialect(tmp_path):
    assert main([str(_write(tmp_path, CLEAN)), "--dialect", "bogus"]) == 1


def test_dialect_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("TODOMD_DIALECT", "strict")
    f = _write(tmp_path, "* [ ] [link](#1) no header\n")
    assert main([str(f)]) == 1
    monkeypatch.delenv("TODOMD_DIALECT")
    assert main([str(f)]) == 0


def test_output_json(tmp_path):
    f = _write(tmp_path, "* [ ] [link](#1) a\n  * [X] [link](#2) b\n\n# 2\n## start-time\n2024-06-01\n")
    out = tmp_path / "tree.json"
    assert main([str(f), "--output-json", str(out), "--check"]) == 0
    data = json.loads(out.read_text())
    assert data["dialect"] == "default"
    assert data["orphan_ids"] == []
    child = data["tasks"][0]["children"][0]
    assert child["id"] == 2
    assert child["is_completed"] is True
    assert child["start_time"] == "2024-06-01T00:00:00"
