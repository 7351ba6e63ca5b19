"""Tests for path and worktree formatters"""
import pytest

from git_worktree_plus.formatters import (
    display_width,
    format_branch_display,
    format_head,
    format_path_display,
    format_worktree_name,
    is_within,
    pad_to_width,
    relative_display_path,
    relative_to_repo,
    truncate_middle,
)
from git_worktree_plus.models.worktree import WorktreeRecord


class TestDisplayWidth:
    """Test terminal cell width measurement."""

    def test_ascii(self):
        assert display_width("feature/x") == 9

    def test_east_asian_wide_characters(self):
        """Test CJK characters count as two columns each."""
        assert display_width("日本語") == 6
        assert display_width("機能/テスト") == 11

    def test_pad_uses_cells(self):
        """Test padding compensates for wide characters."""
        assert pad_to_width("日本", 6) == "日本  "
        assert pad_to_width("abc", 2) == "abc"


class TestTruncateMiddle:
    """Test middle truncation with an ellipsis."""

    def test_short_text_unchanged(self):
        assert truncate_middle("short", 10) == "short"

    def test_keeps_more_of_the_end(self):
        result = truncate_middle("../worktrees/repo/feature/long-name", 20)
        assert result == "../wo...re/long-name"
        assert display_width(result) == 20

    def test_tiny_width(self):
        assert truncate_middle("abcdef", 3) == "abc"
        assert truncate_middle("abcdef", 0) == ""

    @pytest.mark.parametrize("width", range(4, 30))
    def test_wide_characters_never_overflow(self, width):
        text = "../ワークツリー/機能/とても長いブランチ名"
        assert display_width(truncate_middle(text, width)) <= width


class TestPaths:
    """Test path labels."""

    def test_relative_inside_cwd(self):
        assert relative_display_path("/repo/.worktrees/x", "/repo") == ".worktrees/x"

    def test_relative_outside_cwd(self):
        assert relative_display_path("/src/worktrees/repo/x", "/src/repo") == "../worktrees/repo/x"

    def test_absolute_when_shorter(self):
        """Test the absolute path wins only when the relative form is longer."""
        assert relative_display_path("/x", "/a/b/c/d/e") == "/x"

    def test_relative_path_input_anchored_at_cwd(self):
        assert relative_display_path("sub/dir", "/repo") == "sub/dir"

    def test_relative_to_repo(self):
        assert relative_to_repo("/src/repo", "/src/worktrees/foo") == "../worktrees/foo"

    def test_is_within(self):
        assert is_within("/a/b/c", "/a/b") is True
        assert is_within("/a/b", "/a/b") is True
        assert is_within("/a/b", "/a/b", strict=True) is False
        assert is_within("/a/bc", "/a/b") is False


class TestWorktreeColumns:
    """Test branch, head, path and name columns."""

    def test_branch_display(self):
        assert format_branch_display(WorktreeRecord("/wt", "dev", "abc")) == "dev"
        assert format_branch_display(WorktreeRecord("/wt", "", "abc", is_detached=True)) == "(detached HEAD)"
        assert format_branch_display(WorktreeRecord("/wt", "", "abc")) == "(no branch)"

    def test_head_truncated_to_eight(self):
        assert format_head("0123456789abcdef0123456789abcdef01234567") == "01234567"

    @pytest.mark.parametrize("head", ["", "abc", "1234567", "12345678"])
    def test_short_head_unchanged(self, head):
        assert format_head(head) == head

    def test_main_path_label(self):
        record = WorktreeRecord("/repo", "main", "abc", is_main=True)
        assert format_path_display(record, "/elsewhere") == "@ (main worktree)"
        assert format_path_display(record, "/repo", is_current=True) == "@ (main worktree)*"

    def test_worktree_name(self):
        main = WorktreeRecord("/src/repo", "main", "abc", is_main=True)
        managed = WorktreeRecord("/src/worktrees/repo/feature/a", "a", "def")
        assert format_worktree_name(main, "/src/worktrees/repo") == "@"
        assert format_worktree_name(managed, "/src/worktrees/repo") == "feature/a"
        assert format_worktree_name(managed) == "a"
