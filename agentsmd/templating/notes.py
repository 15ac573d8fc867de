"""
Заметки для мейнтейнеров шаблона: <!-- note: ... -->.

Парсер шаблонов сохраняет такие комментарии как обычный текст; из префикса
(отрендеренного локального шаблона) они вырезаются перед сборкой AGENTS.md.
"""

from __future__ import annotations

import re

_NOTE = r"<!--\s*note:(?:(?!-->).)*-->"

# Заметка, занимающая всю строку, удаляется вместе с переводом строки
_NOTE_LINE_RE = re.compile(r"^[ \t]*" + _NOTE + r"[ \t]*(?:\r?\n|\Z)", re.IGNORECASE | re.DOTALL | re.MULTILINE)
_NOTE_RE = re.compile(_NOTE, re.IGNORECASE | re.DOTALL)


def strip_note_comments(text: str) -> str:
    """
    Удаляет все комментарии-заметки, остальные HTML-комментарии не трогает.

    Args:
        text: Исходный текст

    Returns:
        Текст без заметок
    """
    text = _NOTE_LINE_RE.sub("", text)
    return _NOTE_RE.sub("", text)


__all__ = ["strip_note_comments"]
