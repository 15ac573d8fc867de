"""
Загрузчик конфигурации проекта (.agents.yaml в корне проекта).

Пример:

    template: ~/dotfiles/agents.md
    out: docs/AGENTS.md
    claude: true

Все ключи необязательны. Флаги CLI и AGENTS_TEMPLATE имеют приоритет над файлом.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

CONFIG_FILE = ".agents.yaml"

_yaml = YAML(typ="safe")

_KNOWN_KEYS = {"template", "out", "claude"}


@dataclass(frozen=True)
class AgentsConfig:
    template: Optional[Path] = None  # общий шаблон
    out: Optional[Path] = None  # файл результата
    claude: bool = False  # дополнительно писать CLAUDE.md

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, base_dir: Path) -> AgentsConfig:
        """
        Создание экземпляра из словаря (из YAML).

        Относительный template разрешается от base_dir; out остаётся как есть
        (его разрешает слой вывода относительно корня проекта).
        """
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"{CONFIG_FILE}: unknown keys: {', '.join(unknown)}")

        template = _opt_path(data, "template")
        if template is not None and not template.is_absolute():
            template = base_dir / template

        claude = data.get("claude", False)
        if not isinstance(claude, bool):
            raise ConfigError(f"{CONFIG_FILE}: 'claude' must be a boolean")

        return cls(template=template, out=_opt_path(data, "out"), claude=claude)


def _opt_path(data: Dict[str, Any], key: str) -> Optional[Path]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{CONFIG_FILE}: '{key}' must be a non-empty string")
    return Path(value).expanduser()


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(root: Path) -> AgentsConfig:
    """
    Загружает конфигурацию проекта.

    Args:
        root: Корень проекта

    Returns:
        Конфигурация; значения по умолчанию, если файла нет
    """
    path = root / CONFIG_FILE
    if not path.is_file():
        return AgentsConfig()
    return AgentsConfig.from_dict(_read_yaml_map(path), base_dir=root)


__all__ = ["AgentsConfig", "load_config", "CONFIG_FILE"]
