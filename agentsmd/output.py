"""
Output helpers: target path, change-aware writes and colored diffs.
"""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "AGENTS.md"
CLAUDE_OUTPUT = "CLAUDE.md"

console = Console(highlight=False, emoji=False, soft_wrap=True)


def compute_output_path(root: Path, out: Optional[Path] = None) -> Path:
    """Absolute output paths are used as-is; relative ones live under *root*."""
    if out is None:
        return root / DEFAULT_OUTPUT
    if out.is_absolute():
        return out
    return root / out


def write_if_changed(path: Path, contents: str) -> bool:
    """
    Write *contents* unless the file already holds exactly that text.

    Returns:
        True if the file was written
    """
    try:
        if path.read_text(encoding="utf-8") == contents:
            logger.debug("%s is up to date", path)
            return False
    except (OSError, UnicodeDecodeError):
        pass

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    logger.info("wrote %s", path)
    return True


def unified_diff(current: str, rendered: str, name: str) -> List[str]:
    """Unified diff lines (without line terminators) with 3 lines of context."""
    diff = difflib.unified_diff(
        current.splitlines(),
        rendered.splitlines(),
        fromfile=f"a/{name}",
        tofile=f"b/{name}",
        n=3,
        lineterm="",
    )
    return list(diff)


def print_diff(current: str, rendered: str, target: Path) -> None:
    """
    Print a unified diff of pending changes for *target*.

    Lines are colored on a terminal; otherwise they are written verbatim,
    tabs included.
    """
    if current == rendered:
        console.print("No changes", style="bright_black", markup=False)
        return

    lines = unified_diff(current, rendered, target.name)
    if not console.is_terminal:
        console.file.write("".join(line + "\n" for line in lines))
        return

    for line in lines:
        if line.startswith(("+++", "---")):
            style = "bold"
        elif line.startswith("@@"):
            style = "blue"
        elif line.startswith("+"):
            style = "green"
        elif line.startswith("-"):
            style = "red"
        else:
            style = None
        console.print(line, style=style, markup=False, highlight=False)


__all__ = [
    "compute_output_path",
    "write_if_changed",
    "unified_diff",
    "print_diff",
    "DEFAULT_OUTPUT",
    "CLAUDE_OUTPUT",
]
