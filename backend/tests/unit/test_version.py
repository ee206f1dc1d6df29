"""
Unit tests for version: get_version reads and validates the VERSION file.
"""

from __future__ import annotations

import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from version import DEFAULT_VERSION, SEMVER_PATTERN, get_version


def test_repo_version_is_semver() -> None:
    assert SEMVER_PATTERN.match(get_version())


def test_version_file_first_line(tmp_path) -> None:
    f = tmp_path / "VERSION"
    f.write_text("2.1.3-beta.1\nnotes\n", encoding="utf-8")
    assert get_version(f) == "2.1.3-beta.1"


def test_version_missing_or_invalid(tmp_path) -> None:
    assert get_version(tmp_path / "missing") == DEFAULT_VERSION
    bad = tmp_path / "VERSION"
    bad.write_text("v1.0", encoding="utf-8")
    assert get_version(bad) == DEFAULT_VERSION
    empty = tmp_path / "EMPTY"
    empty.write_text("", encoding="utf-8")
    assert get_version(empty) == DEFAULT_VERSION
