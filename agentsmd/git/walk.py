from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Callable, Iterator, Optional

from .gitignore import GitIgnoreService

logger = logging.getLogger(__name__)

__all__ = ["iter_project_files", "FileWalker"]

# Factory used by the evaluator: root -> iterator of rel POSIX file paths
FileWalker = Callable[[Path], Iterator[str]]


def iter_project_files(root: Path, ignore: Optional[GitIgnoreService] = None) -> Iterator[str]:
    """
    Recursive iterator over regular files under *root* honoring ignore rules.

    - yields root-relative POSIX paths in a stable (sorted) order
    - includes hidden entries, never enters .git
    - never follows symlinks; symlinked files are not reported
    - prunes ignored directories early
    - unreadable entries are logged and skipped
    """
    if ignore is None:
        ignore = GitIgnoreService(root)

    root_str = os.fspath(root)

    def _on_error(err: OSError) -> None:
        logger.debug("skipping unreadable entry %s: %s", err.filename, err)

    for dirpath, dirnames, filenames in os.walk(root_str, onerror=_on_error, followlinks=False):
        rel_dir = os.path.relpath(dirpath, root_str).replace(os.sep, "/")
        if rel_dir == ".":
            rel_dir = ""
        prefix = rel_dir + "/" if rel_dir else ""

        # Do not enter .git; prune ignored branches (in-place modification)
        keep = []
        for d in sorted(dirnames):
            if d == ".git":
                continue
            if os.path.islink(os.path.join(dirpath, d)):
                continue
            if not ignore.should_descend(prefix + d):
                continue
            keep.append(d)
        dirnames[:] = keep

        for fn in sorted(filenames):
            try:
                st = os.lstat(os.path.join(dirpath, fn))
            except OSError as e:
                logger.debug("skipping %s: %s", prefix + fn, e)
                continue
            if not stat.S_ISREG(st.st_mode):
                continue
            rel_posix = prefix + fn
            if ignore.is_ignored(rel_posix):
                continue
            yield rel_posix
