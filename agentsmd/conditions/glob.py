"""
Glob patterns for the exists() matcher.

Patterns are matched against root-relative POSIX paths of regular files and
are case-sensitive. Supported syntax:

- ``?``       any single character
- ``*``       any sequence of characters, including ``/``
- ``**``      as a whole path component: zero or more directories
- ``[abc]``   character class; ``[!a-z]`` / ``[^a-z]`` negated, ranges allowed
- ``{a,b}``   alternation (groups cannot be nested)
- ``\\x``     literal ``x``
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Pattern

__all__ = ["GlobError", "GlobMatcher", "compile_glob"]


class GlobError(ValueError):
    """Malformed glob pattern."""
    pass


@dataclass(frozen=True)
class GlobMatcher:
    """Compiled glob pattern."""
    pattern: str
    regex: Pattern[str]

    def is_match(self, rel_posix: str) -> bool:
        return self.regex.fullmatch(rel_posix) is not None


def compile_glob(pattern: str) -> GlobMatcher:
    """
    Compile a glob pattern.

    Raises:
        GlobError: If the pattern is malformed (unclosed class or group, etc.)
    """
    regex = _translate(pattern)
    return GlobMatcher(pattern=pattern, regex=re.compile(regex, re.DOTALL))


def _translate(pattern: str) -> str:
    out: List[str] = []
    n = len(pattern)
    i = 0
    in_alt = False

    while i < n:
        c = pattern[i]

        if c == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            stars = j - i
            comp_start = i == 0 or pattern[i - 1] == "/"
            comp_end = j == n or pattern[j] == "/"
            if stars == 2 and comp_start and comp_end and j < n:
                # "**/" matches zero or more leading directories
                out.append("(?:.*/)?")
                i = j + 1
            else:
                out.append(".*")
                i = j
            continue

        if c == "?":
            out.append(".")
        elif c == "[":
            cls, i = _translate_class(pattern, i)
            out.append(cls)
            continue
        elif c == "{":
            if in_alt:
                raise GlobError(f"nested alternate groups are not allowed: {pattern!r}")
            in_alt = True
            out.append("(?:")
        elif c == "}":
            if not in_alt:
                raise GlobError(f"unopened alternate group; missing '{{': {pattern!r}")
            in_alt = False
            out.append(")")
        elif c == "," and in_alt:
            out.append("|")
        elif c == "\\":
            if i + 1 >= n:
                raise GlobError(f"dangling '\\' at end of pattern: {pattern!r}")
            i += 1
            out.append(re.escape(pattern[i]))
        else:
            out.append(re.escape(c))
        i += 1

    if in_alt:
        raise GlobError(f"unclosed alternate group; missing '}}': {pattern!r}")

    return "".join(out)


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """
    Translate a character class starting at ``pattern[start] == '['``.

    Returns the regex fragment and the index just after the closing ``]``.
    """
    n = len(pattern)
    i = start + 1
    negated = False
    if i < n and pattern[i] in "!^":
        negated = True
        i += 1

    items: List[str] = []
    first = True
    while i < n:
        c = pattern[i]
        if c == "]" and not first:
            body = "".join(items)
            return ("[^" if negated else "[") + body + "]", i + 1
        first = False

        if i + 2 < n and pattern[i + 1] == "-" and pattern[i + 2] != "]":
            lo, hi = c, pattern[i + 2]
            if lo > hi:
                raise GlobError(f"invalid range '{lo}-{hi}' in pattern: {pattern!r}")
            items.append(f"{re.escape(lo)}-{re.escape(hi)}")
            i += 3
            continue

        items.append(re.escape(c))
        i += 1

    raise GlobError(f"unclosed character class; missing ']': {pattern!r}")
