from pathlib import Path

import pytest

# Импорт из унифицированной инфраструктуры
from tests.infrastructure.cli_utils import run_cli  # noqa: F401
from tests.infrastructure.file_utils import write


@pytest.fixture(autouse=True)
def _isolated_git_env(tmp_path_factory, monkeypatch):
    """
    Изолирует тесты от глобальных настроек пользователя:
    ~/.gitconfig, core.excludesFile, ~/.config/git/ignore, ~/.agents.md.
    """
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("AGENTS_TEMPLATE", raising=False)
    monkeypatch.delenv("AGENTS_DEBUG", raising=False)
    return home


@pytest.fixture
def home_dir(_isolated_git_env) -> Path:
    return _isolated_git_env


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Пустой проект: корень с каталогом .git."""
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    return root


@pytest.fixture
def rust_project(project: Path) -> Path:
    """Проект с Cargo.toml и исходниками на Rust."""
    write(project / "Cargo.toml", "[package]\nname = \"demo\"\n")
    write(project / "src" / "main.rs", "fn main() {}\n")
    return project

