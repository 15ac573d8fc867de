"""
Сборка AGENTS.md из локального и общего шаблонов.

Порядок:
1. <root>/.agents.md (если есть) рендерится первым; из результата
   вырезаются заметки <!-- note: ... -->, и он становится префиксом.
2. Общий шаблон рендерится с этим префиксом.
Если оба пути указывают на один файл, он рендерится один раз.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from .config import AgentsConfig
from .errors import AgentsUserError, TemplateParseError
from .templating import (
    Template,
    TemplateRenderer,
    parse_template,
    strip_note_comments,
)
from .templating.nodes import format_ast_tree

logger = logging.getLogger(__name__)

LOCAL_TEMPLATE = ".agents.md"
SHARED_TEMPLATE_ENV = "AGENTS_TEMPLATE"


def resolve_template_path(
    cli_template: Optional[Path],
    config: AgentsConfig,
    env: Optional[Mapping[str, str]] = None,
) -> Path:
    """
    Путь к общему шаблону: --template > AGENTS_TEMPLATE > .agents.yaml > ~/.agents.md.
    """
    if cli_template is not None:
        return cli_template
    env = os.environ if env is None else env
    from_env = env.get(SHARED_TEMPLATE_ENV)
    if from_env:
        return Path(from_env).expanduser()
    if config.template is not None:
        return config.template
    return Path.home() / LOCAL_TEMPLATE


def load_template(path: Path) -> Template:
    """
    Читает и разбирает шаблон.

    Raises:
        AgentsUserError: Файл не читается
        TemplateParseError: Ошибка синтаксиса (с путём к файлу в сообщении)
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise AgentsUserError(f"template read error ({path}): {e}") from e

    try:
        template = parse_template(text)
    except TemplateParseError as e:
        raise TemplateParseError(f"{path}: {e.message}", e.position) from e
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("template %s:\n%s", path, format_ast_tree(template.blocks))
    return template


def _same_file(a: Path, b: Path) -> bool:
    try:
        return a.resolve() == b.resolve()
    except OSError:
        return a == b


def render_combined(
    root: Path,
    shared_template: Path,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Рендерит локальный шаблон проекта и общий шаблон в один документ.

    Args:
        root: Корень проекта
        shared_template: Путь к общему шаблону
        env: Переменные окружения для env() (по умолчанию os.environ)

    Returns:
        Итоговый текст AGENTS.md
    """
    renderer = TemplateRenderer(root, env=env)
    local_path = root / LOCAL_TEMPLATE

    if _same_file(local_path, shared_template):
        logger.debug("local and shared template are the same file: %s", local_path)
        return renderer.render(load_template(shared_template))

    prefix: Optional[str] = None
    if local_path.is_file():
        local = renderer.render(load_template(local_path))
        prefix = strip_note_comments(local)

    return renderer.render(load_template(shared_template), prefix)


__all__ = [
    "render_combined",
    "resolve_template_path",
    "load_template",
    "LOCAL_TEMPLATE",
    "SHARED_TEMPLATE_ENV",
]
