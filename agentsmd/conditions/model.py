"""
Модели данных для условных выражений (guard).

Содержит классы для представления матчеров и логических операций
в директивах <!-- if ... --> шаблонов AGENTS.md.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List


class ConditionType(Enum):
    """Типы узлов выражения."""
    EXISTS = "exists"
    ENV_EXISTS = "env_exists"
    ENV_EQUALS = "env_equals"
    LANG = "lang"
    AND = "and"
    OR = "or"
    NOT = "not"


_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def quote(value: str) -> str:
    """Строковый литерал в синтаксисе guard (обратимо для парсера)."""
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in value) + '"'


_BARE_NAME_STOP = set("=)\"'")


def env_name(name: str) -> str:
    """Имя переменной для env(): голым токеном, если он прочитается обратно как есть."""
    if any(ch.isspace() or ch in _BARE_NAME_STOP for ch in name):
        return quote(name)
    return name


@dataclass(frozen=True)
class Expr(ABC):
    """Базовый абстрактный класс для всех узлов выражения."""

    @abstractmethod
    def get_type(self) -> ConditionType:
        """Возвращает тип узла."""
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        """Внутренний метод для создания строкового представления."""
        pass


@dataclass(frozen=True)
class Matcher(Expr, ABC):
    """Примитивный предикат над деревом проекта или окружением процесса."""
    pass


@dataclass(frozen=True)
class Exists(Matcher):
    """
    Матчер exists("glob").

    Истинно, если в проекте есть обычный файл, путь которого
    (относительно корня) подходит под glob.
    """
    pattern: str

    def get_type(self) -> ConditionType:
        return ConditionType.EXISTS

    def _to_string(self) -> str:
        return f"exists({quote(self.pattern)})"


@dataclass(frozen=True)
class EnvExists(Matcher):
    """
    Матчер env(NAME).

    Истинно, если переменная окружения задана и не пуста.
    """
    name: str

    def get_type(self) -> ConditionType:
        return ConditionType.ENV_EXISTS

    def _to_string(self) -> str:
        return f"env({env_name(self.name)})"


@dataclass(frozen=True)
class EnvEquals(Matcher):
    """
    Матчер env(NAME=VALUE).

    Истинно, если переменная окружения задана и в точности равна значению.
    """
    name: str
    value: str

    def get_type(self) -> ConditionType:
        return ConditionType.ENV_EQUALS

    def _to_string(self) -> str:
        return f"env({env_name(self.name)}={quote(self.value)})"


@dataclass(frozen=True)
class Lang(Matcher):
    """
    Матчер lang("name").

    Истинно, если в проекте есть файл с расширением, принадлежащим языку.
    """
    name: str

    def get_type(self) -> ConditionType:
        return ConditionType.LANG

    def _to_string(self) -> str:
        return f"lang({quote(self.name)})"


@dataclass(frozen=True)
class Not(Expr):
    """Отрицание: !expr"""
    operand: Expr

    def get_type(self) -> ConditionType:
        return ConditionType.NOT

    def _to_string(self) -> str:
        if isinstance(self.operand, (And, Or)):
            return f"!({self.operand})"
        return f"!{self.operand}"


@dataclass(frozen=True)
class And(Expr):
    """Логическое И: left && right"""
    left: Expr
    right: Expr

    def get_type(self) -> ConditionType:
        return ConditionType.AND

    def _to_string(self) -> str:
        first, *rest = _chain(self, And)
        parts = [f"({first})" if isinstance(first, Or) else str(first)]
        parts.extend(f"({op})" if isinstance(op, (And, Or)) else str(op) for op in rest)
        return " && ".join(parts)


@dataclass(frozen=True)
class Or(Expr):
    """Логическое ИЛИ: left || right"""
    left: Expr
    right: Expr

    def get_type(self) -> ConditionType:
        return ConditionType.OR

    def _to_string(self) -> str:
        first, *rest = _chain(self, Or)
        parts = [str(first)]
        parts.extend(f"({op})" if isinstance(op, Or) else str(op) for op in rest)
        return " || ".join(parts)


def _chain(node: Expr, op: type) -> List[Expr]:
    """Операнды левоассоциативной цепочки одного оператора, слева направо."""
    operands: List[Expr] = []
    while isinstance(node, op):
        operands.append(node.right)
        node = node.left
    operands.append(node)
    operands.reverse()
    return operands


__all__ = [
    "ConditionType",
    "Expr",
    "Matcher",
    "Exists",
    "EnvExists",
    "EnvEquals",
    "Lang",
    "Not",
    "And",
    "Or",
    "quote",
    "env_name",
]
