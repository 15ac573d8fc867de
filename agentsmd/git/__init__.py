"""
Git integration package for agents-md.

Provides:
- GitIgnoreService: Layered ignore rules (.gitignore, .ignore, info/exclude, global)
- iter_project_files: Ignore-aware walk over regular files of a project
"""

from .gitignore import GitIgnoreService, find_global_excludes_file
from .walk import FileWalker, iter_project_files

__all__ = [
    "GitIgnoreService",
    "FileWalker",
    "find_global_excludes_file",
    "iter_project_files",
]
