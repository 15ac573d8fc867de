"""
Project root detection.

The root is the nearest ancestor holding a version-control directory
(.git, .hg or .svn). Without one, the nearest ancestor with a Cargo.lock
is used as a fallback.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .errors import ProjectRootError

VCS_DIRS = (".git", ".hg", ".svn")
FALLBACK_MARKERS = ("Cargo.lock",)


def has_vcs_dir(directory: Path) -> bool:
    return any((directory / name).is_dir() for name in VCS_DIRS)


def find_project_root(path: Path) -> Path:
    """
    Find the project root by walking upwards from *path*.

    Starts at *path* (or its parent if *path* is a file). VCS directories win
    over fallback markers even when the marker is closer.

    Raises:
        ProjectRootError: If neither a VCS directory nor a marker is found
    """
    start = path.absolute()
    if start.is_file():
        start = start.parent

    fallback: Optional[Path] = None
    for directory in (start, *start.parents):
        if has_vcs_dir(directory):
            return directory
        if fallback is None and any((directory / m).is_file() for m in FALLBACK_MARKERS):
            fallback = directory

    if fallback is not None:
        return fallback

    raise ProjectRootError(f"project root not found (searched upwards from {start})")


__all__ = ["find_project_root", "has_vcs_dir", "VCS_DIRS"]
