"""
Tests for the ignore-aware project walker.
"""

import os
from pathlib import Path

import pytest

from agentsmd.git import GitIgnoreService, find_global_excludes_file, iter_project_files
from tests.infrastructure.file_utils import write, write_tree


def _files(root: Path, **kwargs) -> list:
    return list(iter_project_files(root, **kwargs))


class TestIterProjectFiles:

    def test_sorted_relative_posix_paths(self, project):
        write_tree(project, {
            "b.txt": "",
            "a.txt": "",
            "sub/c.txt": "",
            "sub/deeper/d.txt": "",
        })
        assert _files(project) == ["a.txt", "b.txt", "sub/c.txt", "sub/deeper/d.txt"]

    def test_git_directory_skipped(self, project):
        write(project / ".git" / "config", "")
        write(project / "a.txt", "")
        assert _files(project) == ["a.txt"]

    def test_hidden_files_included(self, project):
        write(project / ".env.example", "")
        write(project / ".github" / "workflows" / "ci.yml", "")
        assert _files(project) == [".env.example", ".github/workflows/ci.yml"]

    def test_gitignore_patterns(self, project):
        write_tree(project, {
            ".gitignore": "*.log\nbuild/\n",
            "app.log": "",
            "src/debug.log": "",
            "build/out.txt": "",
            "main.py": "",
        })
        assert _files(project) == [".gitignore", "main.py"]

    def test_negation(self, project):
        write_tree(project, {
            ".gitignore": "*.log\n!keep.log\n",
            "drop.log": "",
            "keep.log": "",
        })
        assert _files(project) == [".gitignore", "keep.log"]

    def test_nested_gitignore_is_relative(self, project):
        write_tree(project, {
            "sub/.gitignore": "x.txt\n/only-here.txt\n",
            "x.txt": "",
            "only-here.txt": "",
            "sub/x.txt": "",
            "sub/only-here.txt": "",
            "sub/deeper/x.txt": "",
            "sub/deeper/only-here.txt": "",
        })
        assert _files(project) == [
            "only-here.txt",
            "x.txt",
            "sub/.gitignore",
            "sub/deeper/only-here.txt",
        ]

    def test_deeper_rule_overrides(self, project):
        write_tree(project, {
            ".gitignore": "*.gen\n",
            "pkg/.gitignore": "!*.gen\n",
            "top.gen": "",
            "pkg/inner.gen": "",
        })
        assert _files(project) == [".gitignore", "pkg/.gitignore", "pkg/inner.gen"]

    def test_dot_ignore_file(self, project):
        write_tree(project, {
            ".ignore": "vendor/\n",
            "vendor/lib.rs": "",
            "src/lib.rs": "",
        })
        assert _files(project) == [".ignore", "src/lib.rs"]

    def test_info_exclude(self, project):
        write(project / ".git" / "info" / "exclude", "secret.txt\n")
        write(project / "secret.txt", "")
        write(project / "public.txt", "")
        assert _files(project) == ["public.txt"]

    def test_global_excludes_from_xdg(self, project, home_dir):
        write(home_dir / ".config" / "git" / "ignore", "*.swp\n")
        write(project / "a.txt.swp", "")
        write(project / "a.txt", "")
        assert _files(project) == ["a.txt"]

    def test_explicit_global_excludes(self, project, tmp_path):
        excludes = write(tmp_path / "excludes", "*.tmp\n")
        write(project / "x.tmp", "")
        write(project / "x.txt", "")
        service = GitIgnoreService(project, global_excludes=excludes)
        assert _files(project, ignore=service) == ["x.txt"]

    def test_local_rules_override_global(self, project, tmp_path):
        excludes = write(tmp_path / "excludes", "*.tmp\n")
        write(project / ".gitignore", "!wanted.tmp\n")
        write(project / "wanted.tmp", "")
        service = GitIgnoreService(project, global_excludes=excludes)
        assert _files(project, ignore=service) == [".gitignore", "wanted.tmp"]

    def test_directory_only_pattern_keeps_files(self, project):
        write(project / ".gitignore", "logs/\n")
        write(project / "logs", "file, not a directory")
        assert _files(project) == [".gitignore", "logs"]

    def test_rules_apply_without_repository(self, tmp_path):
        write(tmp_path / ".gitignore", "*.o\n")
        write(tmp_path / "main.o", "")
        write(tmp_path / "main.c", "")
        assert _files(tmp_path) == [".gitignore", "main.c"]

    def test_symlinks_not_followed(self, project, tmp_path):
        outside = tmp_path / "outside"
        write(outside / "hidden.rs", "")
        write(project / "real.txt", "")
        try:
            os.symlink(outside, project / "linked_dir", target_is_directory=True)
            os.symlink(project / "real.txt", project / "link.txt")
        except (OSError, NotImplementedError):
            pytest.skip("symlinks are not supported here")
        assert _files(project) == ["real.txt"]


class TestGitIgnoreService:

    def test_is_ignored(self, project):
        write(project / ".gitignore", "dist/\n*.pyc\n")
        service = GitIgnoreService(project, discover_global=False)
        assert service.is_ignored("pkg/mod.pyc")
        assert not service.is_ignored("pkg/mod.py")
        assert service.is_ignored("dist", is_dir=True)
        assert not service.is_ignored("dist")
        assert not service.should_descend("dist")
        assert service.should_descend("src")

    def test_comments_and_blank_lines(self, project):
        write(project / ".gitignore", "# comment\n\n*.bak\n")
        service = GitIgnoreService(project, discover_global=False)
        assert service.is_ignored("a.bak")
        assert not service.is_ignored("# comment")


def test_find_global_excludes_file(project, home_dir):
    assert find_global_excludes_file(project) is None
    path = write(home_dir / ".config" / "git" / "ignore", "*.swp\n")
    assert find_global_excludes_file(project) == path
