"""
GitIgnore service with layered rule loading and caching.

Implements Git semantics for deciding whether a path is ignored:
- Global excludes file (core.excludesFile, or $XDG_CONFIG_HOME/git/ignore)
- Repository excludes (.git/info/exclude)
- Per-directory .gitignore and .ignore files, patterns relative to their location
- Last matching rule wins, so deeper files and negations (!pattern) override
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pathspec import PathSpec

logger = logging.getLogger(__name__)

__all__ = [
    "GitIgnoreService",
    "find_global_excludes_file",
]

# Per-directory ignore files, in increasing priority
IGNORE_FILENAMES: Tuple[str, ...] = (".gitignore", ".ignore")


def _git_config_value(root: Path, key: str) -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", "-C", str(root), "config", "--path", "--get", key],
            text=True, encoding="utf-8", errors="ignore", stderr=subprocess.DEVNULL,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    value = out.strip()
    return value or None


def find_global_excludes_file(root: Path) -> Optional[Path]:
    """
    Locate the user-wide excludes file the way Git does.

    Order: core.excludesFile from git config, then $XDG_CONFIG_HOME/git/ignore,
    then ~/.config/git/ignore. Returns None if no such file exists.
    """
    configured = _git_config_value(root, "core.excludesFile")
    if configured:
        path = Path(configured).expanduser()
        return path if path.is_file() else None

    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    candidate = base / "git" / "ignore"
    return candidate if candidate.is_file() else None


def _last_match(spec: PathSpec, path: str) -> Optional[bool]:
    """
    Verdict of the last pattern in *spec* matching *path*.

    Returns True for an ignore rule, False for a negation, None if nothing matched.
    """
    verdict: Optional[bool] = None
    for pattern in spec.patterns:
        if pattern.include is not None and pattern.match_file(path) is not None:
            verdict = pattern.include
    return verdict


class GitIgnoreService:
    """
    Service for checking paths against layered ignore rules.

    Each per-directory ignore file applies to its directory and subdirectories,
    with patterns matched relative to that directory. Specs are loaded lazily
    and cached for the lifetime of the service (one filesystem walk).

    Usage:
        service = GitIgnoreService(project_root)
        if service.is_ignored("build/out.log"):
            ...
    """

    def __init__(
        self,
        root: Path,
        *,
        global_excludes: Optional[Path] = None,
        discover_global: bool = True,
    ):
        """
        Initialize GitIgnore service.

        Args:
            root: Project root directory; ignore files above it are not read
            global_excludes: Explicit global excludes file (skips discovery)
            discover_global: Look up the global excludes file when not given
        """
        self.root = root

        if global_excludes is None and discover_global:
            global_excludes = find_global_excludes_file(root)

        # Root-level layers applied to full root-relative paths
        self._base_specs: List[PathSpec] = []
        for path in (global_excludes, root / ".git" / "info" / "exclude"):
            if path is not None and path.is_file():
                spec = self._load_spec(path)
                if spec is not None:
                    self._base_specs.append(spec)

        # Key: (directory relative to root, ignore file name)
        self._specs: Dict[Tuple[str, str], Optional[PathSpec]] = {}

    def _read_ignore_file(self, path: Path) -> List[str]:
        """
        Read an ignore file.

        Returns:
            List of non-empty, non-comment patterns
        """
        try:
            content = path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            logger.warning(f"Failed to read {path}: {e}")
            return []
        patterns = []
        for line in content.splitlines():
            line = line.rstrip()
            if line and not line.startswith("#"):
                patterns.append(line)
        return patterns

    def _load_spec(self, path: Path) -> Optional[PathSpec]:
        patterns = self._read_ignore_file(path)
        if not patterns:
            return None
        logger.debug("loaded %d ignore patterns from %s", len(patterns), path)
        return PathSpec.from_lines("gitwildmatch", patterns)

    def _get_spec(self, rel_dir: str, filename: str) -> Optional[PathSpec]:
        key = (rel_dir, filename)
        if key not in self._specs:
            directory = self.root / rel_dir if rel_dir else self.root
            path = directory / filename
            self._specs[key] = self._load_spec(path) if path.is_file() else None
        return self._specs[key]

    def is_ignored(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """
        Check if a path is ignored.

        Args:
            rel_path: Path relative to the root (POSIX format)
            is_dir: Whether the path is a directory (enables "dir/" patterns)

        Returns:
            True if the last matching rule across all layers is an ignore rule
        """
        rel_path = rel_path.strip("/")
        suffix = "/" if is_dir else ""
        ignored = False

        for spec in self._base_specs:
            verdict = _last_match(spec, rel_path + suffix)
            if verdict is not None:
                ignored = verdict

        parts = rel_path.split("/")
        for i in range(len(parts)):
            rel_dir = "/".join(parts[:i])
            remaining = "/".join(parts[i:]) + suffix
            for filename in IGNORE_FILENAMES:
                spec = self._get_spec(rel_dir, filename)
                if spec is None:
                    continue
                verdict = _last_match(spec, remaining)
                if verdict is not None:
                    ignored = verdict

        return ignored

    def should_descend(self, rel_dir: str) -> bool:
        """Check if a traversal should enter a directory."""
        return not self.is_ignored(rel_dir, is_dir=True)
