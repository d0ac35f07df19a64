"""CLI integration tests for tools/print_splice.py."""

from __future__ import annotations

import json
import os
from pathlib import Path
import subprocess
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
SCRIPT = REPO_ROOT / "tools" / "print_splice.py"
FIXTURES = REPO_ROOT / "tests" / "fixtures"


def _run_cli(*args: str) -> subprocess.CompletedProcess[str]:
    env = dict(os.environ)
    env["PYTHONPATH"] = str(REPO_ROOT)
    return subprocess.run(
        [sys.executable, str(SCRIPT), *args],
        cwd=str(REPO_ROOT),
        env=env,
        text=True,
        capture_output=True,
        check=False,
    )


def test_single_file_prints_rendering() -> None:
    proc = _run_cli(str(FIXTURES / "pattern_5.splice"))
    assert proc.returncode == 0, proc.stderr
    assert proc.stdout == (
        "Saved with HW Version: 0.708-alpha\n"
        "Tempo: 999\n"
        "(1) Kick\t|x---|----|x---|----|\n"
        "(2) HiHat\t|x-x-|x-x-|x-x-|x-x-|\n"
    )


def test_glob_prints_each_file_with_heading() -> None:
    proc = _run_cli(str(FIXTURES / "pattern_[12].splice"))
    assert proc.returncode == 0, proc.stderr
    headings = [line for line in proc.stdout.splitlines() if line.startswith("== ")]
    assert [Path(h[3:]).name for h in headings] == ["pattern_1.splice", "pattern_2.splice"]
    assert "Tempo: 98.4" in proc.stdout


def test_duplicate_paths_are_decoded_once() -> None:
    path = str(FIXTURES / "pattern_1.splice")
    proc = _run_cli(path, path)
    assert proc.returncode == 0, proc.stderr
    assert proc.stdout.count("Saved with HW Version") == 1


def test_json_output() -> None:
    proc = _run_cli("--json", str(FIXTURES / "pattern_2.splice"))
    assert proc.returncode == 0, proc.stderr
    docs = json.loads(proc.stdout)
    assert len(docs) == 1
    doc = docs[0]
    assert Path(doc["path"]).name == "pattern_2.splice"
    assert doc["version"] == "0.808-alpha"
    assert [t["id"] for t in doc["tracks"]] == [0, 1, 3, 5]
    assert doc["tracks"][0]["steps"] == [1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0]


def test_bad_file_reports_error_and_continues() -> None:
    proc = _run_cli(
        str(FIXTURES / "bad_tag.splice"),
        str(FIXTURES / "pattern_1.splice"),
    )
    assert proc.returncode == 1
    assert "bad_tag.splice: ERR" in proc.stderr
    assert "(5) cowbell" in proc.stdout


def test_missing_file_is_reported() -> None:
    proc = _run_cli(str(FIXTURES / "nope.splice"))
    assert proc.returncode == 1
    assert "nope.splice: ERR" in proc.stderr
    assert proc.stdout == ""


def test_verbose_logs_to_stderr() -> None:
    proc = _run_cli("-vv", str(FIXTURES / "pattern_1.splice"))
    assert proc.returncode == 0, proc.stderr
    assert "decoded pattern '0.808-alpha' with 6 tracks" in proc.stderr
    assert "track 5: id=5" in proc.stderr
