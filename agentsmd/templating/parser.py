"""
Парсер шаблонов AGENTS.md.

Находит HTML-комментарии в тексте и распознаёт директивы:
- <!-- if condition -->  открывает условный блок
- <!-- endif -->         закрывает ближайший открытый блок
- любой другой <!-- ... --> сохраняется как текст вместе с ограничителями

Вложенность обрабатывается явным стеком кадров (условие, тело-родитель),
а не рекурсией, поэтому глубина вложенности ограничена только размером входа.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from ..conditions.model import Expr
from ..conditions.parser import ConditionParser
from ..errors import TemplateParseError
from .nodes import Block, IfBlock, Template, TextBlock

logger = logging.getLogger(__name__)

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"


class TemplateParser:
    """
    Парсер шаблона с курсором по исходному тексту.

    Ошибки фатальны: частично разобранный шаблон не возвращается.
    """

    def __init__(self, text: str):
        """
        Args:
            text: Исходный текст шаблона
        """
        self.text = text
        self._pos = 0
        self._condition_parser = ConditionParser()

    def parse(self) -> Template:
        """
        Разбирает текст в Template.

        Raises:
            TemplateParseError: Незакрытый тег, лишний/незакрытый блок,
                ошибка в условии
        """
        # Кадры открытых if: (условие, тело-родитель, строка тега)
        stack: List[Tuple[Expr, List[Block], int]] = []
        current: List[Block] = []
        text = self.text

        while self._pos < len(text):
            tag_start = text.find(COMMENT_OPEN, self._pos)
            if tag_start < 0:
                current.append(TextBlock(text[self._pos:]))
                self._pos = len(text)
                break

            if tag_start > self._pos:
                current.append(TextBlock(text[self._pos:tag_start]))

            self._pos = tag_start + len(COMMENT_OPEN)
            self._skip_ws()

            if self._consume("if"):
                condition_text = self._read_until_close(tag_start)
                expr = self._parse_condition(condition_text, tag_start)
                stack.append((expr, current, self._line_of(tag_start)))
                current = []

            elif self._consume("endif"):
                rest = self._read_until_close(tag_start)
                if rest.strip():
                    raise TemplateParseError(
                        f"unexpected content after 'endif' on line {self._line_of(tag_start)}",
                        tag_start,
                    )
                if not stack:
                    raise TemplateParseError(
                        f"stray 'endif' on line {self._line_of(tag_start)}", tag_start
                    )
                expr, parent, _line = stack.pop()
                block = IfBlock(cond=expr, body=tuple(current))
                current = parent
                current.append(block)

            else:
                # Обычный комментарий сохраняется целиком
                self._read_until_close(tag_start)
                current.append(TextBlock(text[tag_start:self._pos]))

        if stack:
            _expr, _parent, line = stack[-1]
            raise TemplateParseError(f"unclosed 'if' block opened on line {line}")

        return Template(blocks=tuple(current))

    def _parse_condition(self, condition_text: str, tag_start: int) -> Expr:
        try:
            return self._condition_parser.parse(condition_text)
        except TemplateParseError as e:
            raise TemplateParseError(
                f"invalid condition on line {self._line_of(tag_start)}: {e.message}",
                tag_start,
            ) from e

    def _read_until_close(self, tag_start: int) -> str:
        """Читает содержимое до '-->' и ставит курсор за него."""
        end = self.text.find(COMMENT_CLOSE, self._pos)
        if end < 0:
            raise TemplateParseError(
                f"unterminated tag on line {self._line_of(tag_start)}; missing '{COMMENT_CLOSE}'",
                tag_start,
            )
        content = self.text[self._pos:end]
        self._pos = end + len(COMMENT_CLOSE)
        return content

    def _skip_ws(self) -> None:
        while self._pos < len(self.text) and self.text[self._pos].isspace():
            self._pos += 1

    def _consume(self, prefix: str) -> bool:
        """Директива распознаётся по префиксу; пробел после ключевого слова необязателен."""
        if not self.text.startswith(prefix, self._pos):
            return False
        self._pos += len(prefix)
        return True

    def _line_of(self, pos: int) -> int:
        return self.text.count("\n", 0, pos) + 1


def parse_template(text: str) -> Template:
    """
    Удобная функция для разбора шаблона.

    Raises:
        TemplateParseError: При ошибке синтаксического анализа
    """
    template = TemplateParser(text).parse()
    logger.debug("parsed template: %d top-level blocks", len(template.blocks))
    return template


__all__ = ["TemplateParser", "parse_template", "COMMENT_OPEN", "COMMENT_CLOSE"]
