"""
Вычислитель условных выражений.

Проходит по AST guard-выражения и вычисляет его значение относительно
корня проекта и окружения процесса. Результаты матчеров не кэшируются:
каждый exists()/lang() заново обходит дерево файлов.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Tuple, Union, cast

from ..errors import TemplateEvalError
from ..git import FileWalker, iter_project_files
from ..languages import Language, from_name
from .glob import GlobError, compile_glob
from .model import (
    And,
    ConditionType,
    EnvEquals,
    EnvExists,
    Exists,
    Expr,
    Lang,
    Not,
    Or,
)

logger = logging.getLogger(__name__)

LanguageLookup = Callable[[str], Optional[Language]]


class ConditionEvaluator:
    """
    Вычислитель guard-выражений.

    Окружение, обход файлов и реестр языков передаются через конструктор.
    """

    def __init__(
        self,
        root: Path,
        *,
        env: Optional[Mapping[str, str]] = None,
        walker: Optional[FileWalker] = None,
        languages: Optional[LanguageLookup] = None,
    ):
        """
        Args:
            root: Корень проекта, относительно которого работают exists() и lang()
            env: Переменные окружения (по умолчанию os.environ, только чтение)
            walker: Обход файлов: root → относительные POSIX-пути обычных файлов
            languages: Поиск языка по имени
        """
        self.root = root
        self.env: Mapping[str, str] = os.environ if env is None else env
        self.walker: FileWalker = walker or iter_project_files
        self.languages: LanguageLookup = languages or from_name

    def evaluate(self, expr: Expr) -> bool:
        """
        Вычисляет значение выражения.

        Левый операнд && и || вычисляется первым, правый вычисляется, только если
        левый не определил результат. Обход идёт по явному стеку, поэтому длинные
        цепочки && и || не упираются в лимит рекурсии.

        Raises:
            TemplateEvalError: Невалидный glob или неизвестный язык
        """
        # Кадры составных узлов: (узел, вычислен ли уже левый операнд)
        stack: List[Tuple[Expr, bool]] = []
        node = expr

        while True:
            # Спуск по левым операндам до матчера
            while True:
                expr_type = node.get_type()
                if expr_type == ConditionType.NOT:
                    stack.append((node, False))
                    node = cast(Not, node).operand
                elif expr_type in (ConditionType.AND, ConditionType.OR):
                    stack.append((node, False))
                    node = cast(Union[And, Or], node).left
                else:
                    break
            value = self._evaluate_matcher(node)

            # Подъём: применяем результат к ожидающим родителям
            while stack:
                parent, right_done = stack.pop()
                parent_type = parent.get_type()
                if parent_type == ConditionType.NOT:
                    value = not value
                elif right_done:
                    continue
                elif (parent_type == ConditionType.AND) != value:
                    continue  # Короткое вычисление
                else:
                    stack.append((parent, True))
                    node = cast(Union[And, Or], parent).right
                    break
            else:
                return value

    def _evaluate_matcher(self, matcher: Expr) -> bool:
        expr_type = matcher.get_type()

        if expr_type == ConditionType.EXISTS:
            return self._evaluate_exists(cast(Exists, matcher))
        elif expr_type == ConditionType.ENV_EXISTS:
            return self._evaluate_env_exists(cast(EnvExists, matcher))
        elif expr_type == ConditionType.ENV_EQUALS:
            return self._evaluate_env_equals(cast(EnvEquals, matcher))
        elif expr_type == ConditionType.LANG:
            return self._evaluate_lang(cast(Lang, matcher))
        else:
            raise TemplateEvalError(f"unknown condition type: {expr_type}")

    def _evaluate_exists(self, matcher: Exists) -> bool:
        """Есть ли обычный файл, путь которого подходит под glob."""
        try:
            glob = compile_glob(matcher.pattern)
        except GlobError as e:
            raise TemplateEvalError(f"invalid exists() pattern: {e}") from e

        for rel_path in self.walker(self.root):
            if glob.is_match(rel_path):
                logger.debug("%s matched %s", matcher, rel_path)
                return True
        return False

    def _evaluate_env_exists(self, matcher: EnvExists) -> bool:
        """Переменная задана и не пуста."""
        return bool(self.env.get(matcher.name))

    def _evaluate_env_equals(self, matcher: EnvEquals) -> bool:
        """Переменная задана и равна значению; незаданная переменная даёт False."""
        value = self.env.get(matcher.name)
        return value is not None and value == matcher.value

    def _evaluate_lang(self, matcher: Lang) -> bool:
        """Есть ли файл с расширением языка (без учёта регистра)."""
        lang = self.languages(matcher.name)
        if lang is None:
            raise TemplateEvalError(f"unknown language: {matcher.name}")

        extensions = {ext.lstrip(".").lower() for ext in lang.extensions}
        extensions.discard("")
        if not extensions:
            return False

        for rel_path in self.walker(self.root):
            name = rel_path.rsplit("/", 1)[-1]
            stem, dot, ext = name.rpartition(".")
            if dot and stem and ext.lower() in extensions:
                logger.debug("%s matched %s", matcher, rel_path)
                return True
        return False


def evaluate(expr: Expr, root: Path, *, env: Optional[Mapping[str, str]] = None) -> bool:
    """
    Удобная функция для вычисления одного выражения.

    Raises:
        TemplateEvalError: При ошибке вычисления
    """
    return ConditionEvaluator(root, env=env).evaluate(expr)


__all__ = ["ConditionEvaluator", "LanguageLookup", "evaluate"]
