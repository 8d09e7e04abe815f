"""Filesystem locations used by the UI."""

import tempfile
from pathlib import Path


def temp_dir() -> Path:
    """Return the system temporary directory."""
    return Path(tempfile.gettempdir())


def cache_dir(name: str = "finops_ui") -> Path:
    """
    Return a per-application cache directory under the temp dir.

    The directory is created if it does not exist yet.
    """
    path = temp_dir() / name / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path
