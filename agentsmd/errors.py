"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from AgentsUserError.

Programming errors and bugs should NOT inherit from AgentsUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class AgentsUserError(Exception):
    """
    Base class for all user-facing errors in agents-md.

    These errors indicate problems that the user can fix:
    broken templates, missing files, a directory outside any project, etc.
    """
    pass


class TemplateError(AgentsUserError):
    """
    Error of the template engine itself (parsing or evaluating a template).

    Collaborator failures (project root, config, I/O) use their own classes,
    so callers can tell engine errors apart from everything else.
    """

    def __init__(self, message: str, position: Optional[int] = None):
        self.message = message
        self.position = position
        super().__init__(message)


class TemplateParseError(TemplateError):
    """Malformed directive structure or malformed guard expression."""
    pass


class TemplateEvalError(TemplateError):
    """Guard could not be evaluated (invalid glob, unknown language)."""
    pass


class ProjectRootError(AgentsUserError):
    """Project root could not be determined."""
    pass


class ConfigError(AgentsUserError):
    """Malformed .agents.yaml."""
    pass


__all__ = [
    "AgentsUserError",
    "TemplateError",
    "TemplateParseError",
    "TemplateEvalError",
    "ProjectRootError",
    "ConfigError",
]
