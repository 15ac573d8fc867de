from __future__ import annotations

from importlib import metadata


def tool_version() -> str:
    """Версия установленного дистрибутива agents-md; "0.0.0" при запуске из исходников без установки."""
    try:
        return metadata.version("agents-md")
    except metadata.PackageNotFoundError:
        return "0.0.0"

__all__ = ["tool_version"]
