"""
Single source of version: the VERSION file at the repo root.
"""

from __future__ import annotations

import re
from pathlib import Path

DEFAULT_VERSION = "0.0.0"

# major.minor.patch with optional -pre
SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$")


def _version_file_path() -> Path:
    # backend/version.py -> repo root
    return Path(__file__).resolve().parent.parent / "VERSION"


def get_version(path: Path | None = None) -> str:
    """First line of the VERSION file if it is semver, else DEFAULT_VERSION."""
    path = path or _version_file_path()
    try:
        first = path.read_text(encoding="utf-8").strip().splitlines()[0].strip()
    except (OSError, IndexError):
        return DEFAULT_VERSION
    return first if SEMVER_PATTERN.match(first) else DEFAULT_VERSION
