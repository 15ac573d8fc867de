"""
Рендерер шаблонов AGENTS.md.

Проходит по блокам шаблона, выводит текст как есть и включает тела условных
блоков, чьё условие истинно относительно корня проекта.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Mapping, Optional

from ..conditions.evaluator import ConditionEvaluator
from ..git import FileWalker
from .nodes import Block, IfBlock, Template

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """
    Рендерер шаблона.

    Ошибка вычисления любого условия прерывает весь рендер;
    частичный результат не возвращается.
    """

    def __init__(
        self,
        root: Path,
        *,
        env: Optional[Mapping[str, str]] = None,
        walker: Optional[FileWalker] = None,
    ):
        """
        Args:
            root: Корень проекта для exists() и lang()
            env: Переменные окружения (по умолчанию os.environ)
            walker: Обход файлов проекта (по умолчанию с учётом .gitignore)
        """
        self.root = root
        self.evaluator = ConditionEvaluator(root, env=env, walker=walker)

    def render(self, template: Template, prefix: Optional[str] = None) -> str:
        """
        Рендерит шаблон.

        Args:
            template: Разобранный шаблон
            prefix: Текст, выводимый как есть перед содержимым шаблона

        Returns:
            Итоговый текст

        Raises:
            TemplateEvalError: При ошибке вычисления условия
        """
        out: List[str] = []
        if prefix is not None:
            out.append(prefix)

        # Стек итераторов по телам блоков вместо рекурсии
        stack: List[Iterator[Block]] = [iter(template.blocks)]
        while stack:
            block = next(stack[-1], None)
            if block is None:
                stack.pop()
                continue
            if isinstance(block, IfBlock):
                matched = self.evaluator.evaluate(block.cond)
                logger.debug("if %s -> %s", block.cond, matched)
                if matched:
                    stack.append(iter(block.body))
            else:
                out.append(block.text)

        return "".join(out)


def render_template(
    template: Template,
    root: Path,
    prefix: Optional[str] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Удобная функция для рендера шаблона.

    Raises:
        TemplateEvalError: При ошибке вычисления условия
    """
    return TemplateRenderer(root, env=env).render(template, prefix)


__all__ = ["TemplateRenderer", "render_template"]
