"""
AST-узлы шаблона AGENTS.md.

Шаблон состоит из упорядоченной последовательности блоков: текст как есть
или условный блок <!-- if condition -->...<!-- endif -->.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

from ..conditions.model import Expr


@dataclass(frozen=True)
class TextBlock:
    """
    Литеральный текст шаблона.

    Выводится в результат как есть. Сюда же попадают HTML-комментарии,
    не являющиеся директивами (вместе с ограничителями <!-- и -->).
    """
    text: str


@dataclass(frozen=True)
class IfBlock:
    """
    Условный блок <!-- if condition -->...<!-- endif -->.

    Тело выводится целиком, если условие истинно, иначе опускается целиком.
    """
    cond: Expr
    body: Tuple[Block, ...]


Block = Union[TextBlock, IfBlock]


@dataclass(frozen=True)
class Template:
    """Разобранный шаблон: блоки верхнего уровня в порядке исходного текста."""
    blocks: Tuple[Block, ...]

    @classmethod
    def parse(cls, text: str) -> Template:
        from .parser import parse_template
        return parse_template(text)


def collect_text_content(blocks: Tuple[Block, ...]) -> str:
    """
    Собирает весь текстовый контент из AST, включая тела всех условных блоков
    (для тестирования и отладки).
    """
    parts: List[str] = []
    stack: List[Block] = list(reversed(blocks))
    while stack:
        block = stack.pop()
        if isinstance(block, TextBlock):
            parts.append(block.text)
        else:
            stack.extend(reversed(block.body))
    return "".join(parts)


def format_ast_tree(blocks: Tuple[Block, ...], indent: int = 0) -> str:
    """Форматирует AST как дерево для отладки."""
    lines = []
    stack: List[Tuple[Iterator[Block], int]] = [(iter(blocks), indent)]

    while stack:
        it, level = stack[-1]
        block = next(it, None)
        if block is None:
            stack.pop()
            continue
        prefix = "  " * level
        if isinstance(block, TextBlock):
            text_preview = repr(block.text[:50] + "..." if len(block.text) > 50 else block.text)
            lines.append(f"{prefix}TextBlock({text_preview})")
        else:
            lines.append(f"{prefix}IfBlock(cond='{block.cond}')")
            if block.body:
                stack.append((iter(block.body), level + 1))

    return "\n".join(lines)


__all__ = [
    "Block",
    "TextBlock",
    "IfBlock",
    "Template",
    "collect_text_content",
    "format_ast_tree",
]
