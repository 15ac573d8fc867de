"""
Unified test infrastructure for agents-md.

Modules:
- file_utils: Utilities for creating files and directories
- cli_utils: Running the CLI in a subprocess
"""

from .file_utils import write, write_tree, make_template
from .cli_utils import run_cli

__all__ = [
    # File utilities
    "write",
    "write_tree",
    "make_template",

    # CLI
    "run_cli",
]
