"""
Пакет шаблонов AGENTS.md.

Markdown-текст с условными директивами в HTML-комментариях:
<!-- if condition --> ... <!-- endif -->
"""

from .nodes import Block, IfBlock, Template, TextBlock
from .notes import strip_note_comments
from .parser import TemplateParser, parse_template
from .renderer import TemplateRenderer, render_template

__all__ = [
    # Основные функции для использования
    "parse_template",
    "render_template",
    "strip_note_comments",

    # Модель
    "Template",
    "Block",
    "TextBlock",
    "IfBlock",

    # Классы (для тестирования и расширения)
    "TemplateParser",
    "TemplateRenderer",
]
