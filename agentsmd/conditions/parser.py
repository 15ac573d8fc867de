"""
Парсер условных выражений (guard) с рекурсивным спуском.

Строит абстрактное синтаксическое дерево (AST) непосредственно по символам
строки: строковые литералы и «голые» токены контекстно-зависимы, поэтому
отдельный лексер здесь не используется.

Грамматика:
expression  → or_expr
or_expr     → and_expr ("||" and_expr)*
and_expr    → not_expr ("&&" not_expr)*
not_expr    → "!" not_expr | primary
primary     → "(" expression ")"
            | "exists" "(" string ")"
            | "lang" "(" string ")"
            | "env" "(" name ["=" string] ")"
string      → '"' ... '"' | "'" ... "'" | 'r"' ... '"' | bare-token
"""

from __future__ import annotations

import logging
from typing import NoReturn, Optional

from ..errors import TemplateParseError
from .model import And, EnvEquals, EnvExists, Exists, Expr, Lang, Not, Or

logger = logging.getLogger(__name__)

# Предел вложенности ! и скобок
MAX_NESTING = 100

# Escape-последовательности в кавычках; прочие сохраняются как "\X"
_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


class ConditionParser:
    """
    Парсер guard-выражений с рекурсивным спуском.

    Экземпляр можно переиспользовать: состояние сбрасывается в parse().
    """

    def __init__(self):
        self._src = ""
        self._pos = 0
        self._depth = 0

    def parse(self, condition_str: str) -> Expr:
        """
        Парсит строку условия в AST.

        Строка обрезается по краям, после чего должна быть поглощена целиком.

        Args:
            condition_str: Текст условия из директивы if

        Returns:
            Корневой узел AST

        Raises:
            TemplateParseError: При синтаксической ошибке
        """
        self._src = condition_str.strip()
        self._pos = 0
        self._depth = 0

        if not self._src:
            raise TemplateParseError("empty condition", 0)

        result = self._parse_or()

        self._skip_ws()
        if not self._at_end():
            self._fail("trailing characters in expression")

        logger.debug("parsed condition %r -> %s", self._src, result)
        return result

    # ---- Грамматика ----

    def _parse_or(self) -> Expr:
        """Оператор || (низший приоритет), левоассоциативный."""
        left = self._parse_and()
        while True:
            self._skip_ws()
            if not self._consume("||"):
                return left
            right = self._parse_and()
            left = Or(left, right)

    def _parse_and(self) -> Expr:
        """Оператор && (средний приоритет), левоассоциативный."""
        left = self._parse_not()
        while True:
            self._skip_ws()
            if not self._consume("&&"):
                return left
            right = self._parse_not()
            left = And(left, right)

    def _parse_not(self) -> Expr:
        """Унарный ! (высокий приоритет), допускает цепочки."""
        self._skip_ws()
        if self._consume("!"):
            self._enter()
            operand = self._parse_not()
            self._depth -= 1
            return Not(operand)
        return self._parse_primary()

    def _parse_primary(self) -> Expr:
        """Матчер или группа в скобках."""
        self._skip_ws()

        if self._consume("("):
            self._enter()
            expr = self._parse_or()
            self._skip_ws()
            if not self._consume(")"):
                self._fail("expected ')'")
            self._depth -= 1
            return expr

        if self._consume_keyword("exists"):
            return Exists(self._parse_paren_string())

        if self._consume_keyword("lang"):
            return Lang(self._parse_paren_string())

        if self._consume_keyword("env"):
            return self._parse_env()

        if self._at_end():
            self._fail("unexpected end of expression, expected matcher or '('")
        self._fail("expected matcher or '('")

    def _parse_paren_string(self) -> str:
        self._skip_ws()
        if not self._consume("("):
            self._fail("expected '('")
        value = self._parse_string_like()
        self._skip_ws()
        if not self._consume(")"):
            self._fail("expected ')'")
        return value

    def _parse_env(self) -> Expr:
        """env(NAME) или env(NAME=VALUE)."""
        self._skip_ws()
        if not self._consume("("):
            self._fail("expected '(' after env")
        self._skip_ws()
        if self._peek() == ")" or self._at_end():
            self._fail("empty env() argument")

        name = self._parse_string_like(stop="=", allow_empty=True)
        if not name:
            self._fail("empty env var name")

        value: Optional[str] = None
        self._skip_ws()
        if self._consume("="):
            self._skip_ws()
            value = self._parse_string_like(allow_empty=True)
            self._skip_ws()

        if not self._consume(")"):
            self._fail("expected ')'")

        if value is None:
            return EnvExists(name)
        return EnvEquals(name, value)

    # ---- Строковые литералы ----

    def _parse_string_like(self, stop: str = "", allow_empty: bool = False) -> str:
        """
        Строка в кавычках, raw-строка r"..." или голый токен.

        Голый токен продолжается до пробела, ')' или любого символа из stop.
        """
        self._skip_ws()
        ch = self._peek()
        if ch in ('"', "'"):
            return self._parse_quoted()
        if ch == "r" and self._peek(1) == '"':
            self._pos += 1
            return self._parse_raw()

        start = self._pos
        while not self._at_end():
            ch = self._src[self._pos]
            if ch.isspace() or ch == ")" or ch in stop:
                break
            self._pos += 1
        if self._pos == start and not allow_empty:
            self._fail("expected string")
        return self._src[start:self._pos]

    def _parse_quoted(self) -> str:
        start = self._pos
        quote_char = self._src[self._pos]
        self._pos += 1
        out = []
        while not self._at_end():
            ch = self._src[self._pos]
            self._pos += 1
            if ch == quote_char:
                return "".join(out)
            if ch == "\\":
                if self._at_end():
                    self._fail("unterminated escape")
                esc = self._src[self._pos]
                self._pos += 1
                out.append(_ESCAPES.get(esc, "\\" + esc))
                continue
            out.append(ch)
        raise TemplateParseError(f"unterminated string at position {start}", start)

    def _parse_raw(self) -> str:
        start = self._pos
        # Курсор стоит на открывающей кавычке после 'r'
        self._pos += 1
        end = self._src.find('"', self._pos)
        if end < 0:
            raise TemplateParseError(f"unterminated raw string at position {start}", start)
        value = self._src[self._pos:end]
        self._pos = end + 1
        return value

    # ---- Вспомогательные методы ----

    def _at_end(self) -> bool:
        return self._pos >= len(self._src)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        return self._src[idx] if idx < len(self._src) else ""

    def _skip_ws(self) -> None:
        while not self._at_end() and self._src[self._pos].isspace():
            self._pos += 1

    def _consume(self, s: str) -> bool:
        if self._src.startswith(s, self._pos):
            self._pos += len(s)
            return True
        return False

    def _consume_keyword(self, keyword: str) -> bool:
        """Потребляет ключевое слово, если за ним не следует символ идентификатора."""
        if not self._src.startswith(keyword, self._pos):
            return False
        nxt = self._peek(len(keyword))
        if nxt and (nxt.isalnum() or nxt == "_"):
            return False
        self._pos += len(keyword)
        return True

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING:
            self._fail("expression nested too deeply")

    def _fail(self, message: str) -> NoReturn:
        raise TemplateParseError(f"{message} at position {self._pos}", self._pos)


def parse_condition(condition_str: str) -> Expr:
    """
    Удобная функция для разбора guard-выражения.

    Raises:
        TemplateParseError: При синтаксической ошибке
    """
    return ConditionParser().parse(condition_str)


__all__ = ["ConditionParser", "parse_condition"]
