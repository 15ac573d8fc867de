"""
Пакет условных выражений (guard) для директив <!-- if ... -->.

Предоставляет модель AST, парсер с рекурсивным спуском и вычислитель
матчеров exists()/lang()/env() относительно корня проекта.
"""

from .evaluator import ConditionEvaluator, evaluate
from .model import (
    And,
    ConditionType,
    EnvEquals,
    EnvExists,
    Exists,
    Expr,
    Lang,
    Matcher,
    Not,
    Or,
)
from .parser import ConditionParser, parse_condition

__all__ = [
    # Модель
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

    # Парсинг и вычисление
    "ConditionParser",
    "parse_condition",
    "ConditionEvaluator",
    "evaluate",
]
