from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .config import load_config
from .engine import render_combined, resolve_template_path
from .errors import AgentsUserError
from .output import CLAUDE_OUTPUT, compute_output_path, print_diff, write_if_changed
from .project import find_project_root
from .version import tool_version

DEBUG_ENV = "AGENTS_DEBUG"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="agents",
        description="Render AGENTS.md by combining project and shared templates with simple matchers",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="целевой проект (по умолчанию текущая директория)",
    )
    p.add_argument(
        "--template",
        type=Path,
        metavar="PATH",
        help="общий шаблон (по умолчанию $AGENTS_TEMPLATE или ~/.agents.md)",
    )
    p.add_argument(
        "--root",
        type=Path,
        metavar="PATH",
        help="корень проекта (без автоопределения)",
    )
    p.add_argument(
        "--stdout",
        action="store_true",
        help="вывести результат в stdout вместо записи AGENTS.md",
    )
    p.add_argument(
        "--diff",
        action="store_true",
        help="показать unified diff ожидающих изменений; ничего не записывать",
    )
    p.add_argument(
        "--claude",
        action="store_true",
        help="дополнительно записать CLAUDE.md рядом с AGENTS.md",
    )
    p.add_argument(
        "--out",
        type=Path,
        metavar="PATH",
        help="файл результата (относительный путь считается от корня проекта)",
    )
    p.add_argument(
        "--verbose",
        action="store_true",
        help=f"отладочный лог в stderr (то же, что {DEBUG_ENV}=1)",
    )
    return p


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get(DEBUG_ENV) else logging.WARNING
    log = logging.getLogger("agentsmd")
    log.setLevel(level)
    if not log.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        log.addHandler(h)


def _compute_root(ns: argparse.Namespace) -> Path:
    if ns.root is not None:
        return ns.root
    start = ns.path if ns.path is not None else Path.cwd()
    return find_project_root(start)


def _read_current(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ""


def main(argv: Optional[list[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        root = _compute_root(ns)
        config = load_config(root)
        template_path = resolve_template_path(ns.template, config)
        rendered = render_combined(root, template_path)
    except AgentsUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 1

    target = compute_output_path(root, ns.out if ns.out is not None else config.out)

    if ns.diff:
        print_diff(_read_current(target), rendered, target)
        return 0

    if ns.stdout:
        sys.stdout.write(rendered)
        return 0

    targets = [target]
    if ns.claude or config.claude:
        targets.append(target.parent / CLAUDE_OUTPUT)

    for path in targets:
        try:
            write_if_changed(path, rendered)
        except OSError as e:
            sys.stderr.write(f"write error ({path}): {e}\n")
            return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
