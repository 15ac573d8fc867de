"""
Реестр языков для матчера lang(): имя, алиасы и расширения файлов.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

__all__ = [
    "Language",
    "register_language",
    "from_name",
    "list_languages",
]


@dataclass(frozen=True)
class Language:
    name: str
    extensions: Tuple[str, ...]  # без ведущей точки, в нижнем регистре
    aliases: Tuple[str, ...] = ()


# Имя или алиас в нижнем регистре → язык
_BY_NAME: Dict[str, Language] = {}


def _norm_ext(ext: str) -> str:
    return ext.strip().lstrip(".").lower()


def register_language(name: str, extensions: List[str] | Tuple[str, ...], aliases: List[str] | Tuple[str, ...] = ()) -> Language:
    """
    Зарегистрировать язык. Повторная регистрация имени перезаписывает запись.
    Пустой список расширений допустим: такой язык никогда не «находится» в проекте.
    """
    exts = tuple(e for e in (_norm_ext(x) for x in extensions) if e)
    lang = Language(name=name, extensions=exts, aliases=tuple(aliases))
    for key in (name, *aliases):
        _BY_NAME[key.lower()] = lang
    return lang


def from_name(name: str) -> Optional[Language]:
    """Найти язык по имени или алиасу (без учёта регистра)."""
    return _BY_NAME.get(name.strip().lower())


def list_languages() -> List[str]:
    """Канонические имена всех зарегистрированных языков."""
    return sorted({lang.name for lang in _BY_NAME.values()})


# ---------------------------------------------------------------------------
# Встроенная таблица (имена и расширения по мотивам GitHub Linguist)
# ---------------------------------------------------------------------------

register_language("Assembly", [".asm", ".nasm", ".s"], aliases=["asm", "nasm"])
register_language("C", [".c", ".h"])
register_language("C#", [".cs", ".csx"], aliases=["csharp", "cs"])
register_language("C++", [".cpp", ".cc", ".cxx", ".c++", ".hpp", ".hh", ".hxx", ".h++", ".ipp"], aliases=["cpp"])
register_language("Clojure", [".clj", ".cljs", ".cljc", ".edn"])
register_language("CMake", [".cmake"])
register_language("CSS", [".css"])
register_language("Dart", [".dart"])
register_language("Dockerfile", [".dockerfile"], aliases=["docker"])
register_language("Elixir", [".ex", ".exs"])
register_language("Elm", [".elm"])
register_language("Erlang", [".erl", ".hrl"])
register_language("F#", [".fs", ".fsi", ".fsx"], aliases=["fsharp"])
register_language("Fortran", [".f", ".f90", ".f95", ".f03", ".for"])
register_language("Go", [".go"], aliases=["golang"])
register_language("GraphQL", [".graphql", ".gql"])
register_language("Groovy", [".groovy", ".gradle"])
register_language("Haskell", [".hs", ".lhs"])
register_language("HCL", [".hcl", ".tf", ".tfvars"], aliases=["terraform"])
register_language("HTML", [".html", ".htm", ".xhtml"])
register_language("Java", [".java"])
register_language("JavaScript", [".js", ".mjs", ".cjs", ".jsx"], aliases=["js", "node"])
register_language("JSON", [".json", ".jsonc", ".json5"])
register_language("Julia", [".jl"])
register_language("Kotlin", [".kt", ".kts"])
register_language("Lua", [".lua"])
register_language("Makefile", [".mk", ".mak"], aliases=["make"])
register_language("Markdown", [".md", ".markdown", ".mdx"])
register_language("Nix", [".nix"])
register_language("Objective-C", [".m"], aliases=["objc"])
register_language("OCaml", [".ml", ".mli"])
register_language("Perl", [".pl", ".pm"])
register_language("PHP", [".php", ".phtml"])
register_language("PowerShell", [".ps1", ".psm1", ".psd1"], aliases=["pwsh"])
register_language("Protocol Buffer", [".proto"], aliases=["protobuf", "proto"])
register_language("Python", [".py", ".pyi", ".pyw"], aliases=["py"])
register_language("R", [".r", ".rmd"])
register_language("Ruby", [".rb", ".rake", ".gemspec"], aliases=["rb"])
register_language("Rust", [".rs"], aliases=["rs"])
register_language("Sass", [".sass"])
register_language("Scala", [".scala", ".sc"])
register_language("SCSS", [".scss"])
register_language("Shell", [".sh", ".bash", ".zsh", ".ksh"], aliases=["sh", "bash", "zsh"])
register_language("SQL", [".sql"])
register_language("Svelte", [".svelte"])
register_language("Swift", [".swift"])
register_language("TOML", [".toml"])
register_language("TSX", [".tsx"])
register_language("TypeScript", [".ts", ".mts", ".cts", ".tsx"], aliases=["ts"])
register_language("Vue", [".vue"])
register_language("XML", [".xml", ".xsd", ".xsl"])
register_language("YAML", [".yml", ".yaml"], aliases=["yml"])
register_language("Zig", [".zig"])
# Языки без собственных расширений (распознаются только по имени файла)
register_language("Git Config", [], aliases=["gitconfig"])
register_language("Git Attributes", [], aliases=["gitattributes"])
