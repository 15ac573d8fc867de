"""
Интеграционные тесты CLI: отдельный процесс и вызов main() напрямую.
"""

from pathlib import Path

import pytest

from agentsmd.cli import main
from tests.infrastructure.cli_utils import run_cli
from tests.infrastructure.file_utils import write

SHARED = '# Rules\n<!-- if exists("Cargo.toml") -->cargo\n<!-- endif -->'
RENDERED = "# Rules\ncargo\n"


@pytest.fixture
def shared(tmp_path: Path) -> Path:
    return write(tmp_path / "shared.md", SHARED)


def test_writes_agents_md(rust_project, shared):
    cp = run_cli(rust_project, "--template", str(shared))
    assert cp.returncode == 0, cp.stderr
    assert (rust_project / "AGENTS.md").read_text(encoding="utf-8") == RENDERED
    assert not (rust_project / "CLAUDE.md").exists()


def test_stdout(rust_project, shared):
    cp = run_cli(rust_project, "--template", str(shared), "--stdout")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == RENDERED
    assert not (rust_project / "AGENTS.md").exists()


def test_diff_does_not_write(rust_project, shared):
    write(rust_project / "AGENTS.md", "old\n")
    cp = run_cli(rust_project, "--template", str(shared), "--diff")
    assert cp.returncode == 0, cp.stderr
    assert "-old" in cp.stdout
    assert "+# Rules" in cp.stdout
    assert (rust_project / "AGENTS.md").read_text(encoding="utf-8") == "old\n"


def test_diff_no_changes(rust_project, shared):
    write(rust_project / "AGENTS.md", RENDERED)
    cp = run_cli(rust_project, "--template", str(shared), "--diff")
    assert cp.returncode == 0, cp.stderr
    assert "No changes" in cp.stdout


def test_claude_flag(rust_project, shared):
    cp = run_cli(rust_project, "--template", str(shared), "--claude")
    assert cp.returncode == 0, cp.stderr
    assert (rust_project / "CLAUDE.md").read_text(encoding="utf-8") == RENDERED


def test_out_flag(rust_project, shared):
    cp = run_cli(rust_project, "--template", str(shared), "--out", "docs/AGENTS.md", "--claude")
    assert cp.returncode == 0, cp.stderr
    assert (rust_project / "docs" / "AGENTS.md").read_text(encoding="utf-8") == RENDERED
    assert (rust_project / "docs" / "CLAUDE.md").read_text(encoding="utf-8") == RENDERED
    assert not (rust_project / "AGENTS.md").exists()


def test_config_file(rust_project, shared):
    write(rust_project / ".agents.yaml", f"template: {shared}\nout: GENERATED.md\nclaude: true\n")
    cp = run_cli(rust_project)
    assert cp.returncode == 0, cp.stderr
    assert (rust_project / "GENERATED.md").read_text(encoding="utf-8") == RENDERED
    assert (rust_project / "CLAUDE.md").read_text(encoding="utf-8") == RENDERED


def test_template_from_env(rust_project, shared):
    cp = run_cli(rust_project, "--stdout", env_extra={"AGENTS_TEMPLATE": str(shared)})
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == RENDERED


def test_template_from_home(rust_project, home_dir):
    write(home_dir / ".agents.md", SHARED)
    cp = run_cli(rust_project, "--stdout")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == RENDERED


def test_local_template_is_prepended(rust_project, shared):
    write(rust_project / ".agents.md", "Project notes\n<!-- note: not for agents -->\n")
    cp = run_cli(rust_project, "--template", str(shared), "--stdout")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == "Project notes\n" + RENDERED


def test_path_argument(rust_project, shared, tmp_path):
    cp = run_cli(tmp_path, str(rust_project / "src"), "--template", str(shared))
    assert cp.returncode == 0, cp.stderr
    assert (rust_project / "AGENTS.md").read_text(encoding="utf-8") == RENDERED


def test_explicit_root(tmp_path, shared):
    root = tmp_path / "plain"
    write(root / "Cargo.toml", "")
    cp = run_cli(tmp_path, "--root", str(root), "--template", str(shared), "--stdout")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == RENDERED


def test_parse_error_exit_code(project, tmp_path):
    broken = write(tmp_path / "broken.md", "oops <!-- endif -->")
    cp = run_cli(project, "--template", str(broken))
    assert cp.returncode == 1
    assert "stray" in cp.stderr
    assert "Traceback" not in cp.stderr
    assert not (project / "AGENTS.md").exists()


def test_eval_error_exit_code(project, tmp_path):
    tpl = write(tmp_path / "t.md", '<!-- if lang("definitely-not-a-language") -->x<!-- endif -->')
    cp = run_cli(project, "--template", str(tpl))
    assert cp.returncode == 1
    assert "unknown language" in cp.stderr


def test_missing_template(project, tmp_path):
    cp = run_cli(project, "--template", str(tmp_path / "missing.md"))
    assert cp.returncode == 1
    assert "template read error" in cp.stderr


def test_version(project):
    cp = run_cli(project, "--version")
    assert cp.returncode == 0
    assert cp.stdout.startswith("agents ")


class TestMainInProcess:

    def test_stdout(self, rust_project, shared, capsys, monkeypatch):
        monkeypatch.chdir(rust_project)
        assert main(["--template", str(shared), "--stdout"]) == 0
        assert capsys.readouterr().out == RENDERED

    def test_error_reported_without_traceback(self, project, tmp_path, capsys):
        broken = write(tmp_path / "broken.md", "<!-- if env(CI) -->")
        assert main(["--root", str(project), "--template", str(broken)]) == 1
        err = capsys.readouterr().err
        assert "unclosed 'if' block" in err
        assert "Traceback" not in err
