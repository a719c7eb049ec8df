"""Shared fixtures: in-memory matches and report directories on disk."""
import copy
import json
import zipfile
from pathlib import Path
from typing import Any, Dict

import pytest

from report_viewer.models.match import Match
from report_viewer.services.comparison_service import ComparisonService

SUBMISSION_FILES = {
    "alice/src/Main.java": "class Main { void run() {} }\n",
    "alice/src/Util.java": "class Util {}\n",
    "bob/Main.java": "class Main { void run() {} }\n",
}

FILE_INDEX = {
    "submission_file_indexes": {
        "alice": ["alice/src/Main.java", "alice\\src\\Util.java"],
        "bob": ["bob/Main.java"],
    }
}

OVERVIEW = {
    "submission_ids_to_comparison_file_name": {
        "alice": {"bob": "alice-bob.json"},
    }
}

COMPARISON = {
    "id1": "alice",
    "id2": "bob",
    "similarities": {"AVG": 0.5, "MAX": 0.75},
    "matches": [
        {"file1": "alice\\src\\Main.java", "file2": "bob/Main.java", "start1": 0, "end1": 9, "start2": 0, "end2": 9, "tokens": 10},
        {"file1": "alice/src/Main.java", "file2": "bob/Main.java", "start1": 20, "end1": 24, "start2": 20, "end2": 24, "tokens": 5},
        {"file1": "alice/src/Main.java", "file2": "bob/Main.java", "start1": 40, "end1": 59, "start2": 40, "end2": 59, "tokens": 20},
    ],
}


def make_match(
    start_in_first: int = 0,
    tokens: int = 10,
    first_file: str = "A.java",
    second_file: str = "B.java",
    start_in_second: int = None,
) -> Match:
    if start_in_second is None:
        start_in_second = start_in_first
    return Match(
        first_file=first_file,
        second_file=second_file,
        start_in_first=start_in_first,
        end_in_first=start_in_first + tokens - 1,
        start_in_second=start_in_second,
        end_in_second=start_in_second + tokens - 1,
        tokens=tokens,
    )


def write_report(root: Path, comparisons: Dict[str, Dict[str, Any]] = None) -> Path:
    """Write a small two-submission report below ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "overview.json").write_text(json.dumps(OVERVIEW), encoding="utf-8")
    (root / "submissionFileIndex.json").write_text(json.dumps(FILE_INDEX), encoding="utf-8")
    for name, data in (comparisons or {"alice-bob.json": COMPARISON}).items():
        (root / name).write_text(json.dumps(data), encoding="utf-8")
    for name, content in SUBMISSION_FILES.items():
        path = root / "files" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def match_factory():
    return make_match


@pytest.fixture
def comparison_data():
    return copy.deepcopy(COMPARISON)


@pytest.fixture
def report_dir(tmp_path):
    return write_report(tmp_path / "report")


@pytest.fixture
def report_zip(tmp_path):
    """The same report packed in a zip under a top-level ``result/`` folder."""
    source = write_report(tmp_path / "unpacked")
    archive = tmp_path / "result.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        for path in source.rglob("*"):
            if path.is_file():
                zf.write(path, "result/" + path.relative_to(source).as_posix())
    return archive


@pytest.fixture
def configured_service(monkeypatch, report_dir):
    """ComparisonService pointed at ``report_dir``."""
    monkeypatch.setenv("REPORT_PATH", str(report_dir))
    monkeypatch.setenv("MATCH_COLOR_COUNT", "7")
    service = ComparisonService()
    service.reload()
    yield service
    monkeypatch.delenv("REPORT_PATH")
    monkeypatch.delenv("MATCH_COLOR_COUNT")
    service.reload()
