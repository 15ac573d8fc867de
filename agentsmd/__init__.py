"""
agents-md: сборка AGENTS.md из общего шаблона и шаблона проекта.

Публичный API движка шаблонов:

    parse(text) -> Template
    render(template, root, prefix=None) -> str
    parse_expr(text) -> Expr
    evaluate(expr, root) -> bool
"""

from .conditions import Expr, evaluate
from .conditions import parse_condition as parse_expr
from .errors import (
    AgentsUserError,
    TemplateError,
    TemplateEvalError,
    TemplateParseError,
)
from .templating import Block, IfBlock, Template, TextBlock
from .templating import parse_template as parse
from .templating import render_template as render

__all__ = [
    "parse",
    "render",
    "parse_expr",
    "evaluate",
    "Template",
    "Block",
    "TextBlock",
    "IfBlock",
    "Expr",
    "AgentsUserError",
    "TemplateError",
    "TemplateParseError",
    "TemplateEvalError",
]
