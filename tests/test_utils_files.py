"""Tests for file utility functions."""

from __future__ import annotations

from pathlib import Path

from postfinder.utils.files import iter_markdown_paths


class TestIterMarkdownPaths:
    """Test iter_markdown_paths function."""

    def test_single_markdown_file(self, tmp_path: Path) -> None:
        """Should yield a single markdown file."""
        post = tmp_path / "post.md"
        post.write_text("---\ntitle: x\n---\n")

        assert list(iter_markdown_paths([post])) == [post]

    def test_non_markdown_file_ignored(self, tmp_path: Path) -> None:
        """Should skip files with other extensions."""
        other = tmp_path / "notes.txt"
        other.write_text("text")

        assert list(iter_markdown_paths([other])) == []

    def test_uppercase_extension(self, tmp_path: Path) -> None:
        """Should accept .MD files passed directly."""
        post = tmp_path / "POST.MD"
        post.write_text("content")

        assert list(iter_markdown_paths([post])) == [post]

    def test_directory_sorted_and_recursive(self, tmp_path: Path) -> None:
        """Should descend into directories and yield sorted paths."""
        (tmp_path / "b.md").write_text("b")
        (tmp_path / "a.md").write_text("a")
        nested = tmp_path / "nested"
        nested.mkdir()
        (nested / "c.md").write_text("c")
        (nested / "skip.txt").write_text("skip")

        result = list(iter_markdown_paths([tmp_path]))

        assert result == sorted([tmp_path / "a.md", tmp_path / "b.md", nested / "c.md"])

    def test_empty_directory(self, tmp_path: Path) -> None:
        """Should yield nothing for an empty directory."""
        assert list(iter_markdown_paths([tmp_path])) == []

    def test_missing_path(self, tmp_path: Path) -> None:
        """Should silently skip paths that do not exist."""
        assert list(iter_markdown_paths([tmp_path / "missing.md"])) == []
