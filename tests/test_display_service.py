"""Tests for DisplayService worktree listings"""
import pytest
from rich.cells import cell_len

from git_worktree_plus.config import Config
from git_worktree_plus.models.worktree import WorktreeRecord
from git_worktree_plus.services.display_service import DisplayService, find_current_worktree
from git_worktree_plus.services.git import parse_worktree_list


@pytest.fixture
def display_service(string_console):
    return DisplayService(string_console)


@pytest.fixture
def long_records():
    return [
        WorktreeRecord("/home/user/projects/repo", "main", "a" * 40, is_main=True),
        WorktreeRecord(
            "/home/user/projects/worktrees/repo/feature/an-extremely-long-directory-name-for-testing",
            "feature/an-extremely-long-directory-name-for-testing",
            "b" * 40,
        ),
        WorktreeRecord("/home/user/projects/worktrees/repo/機能/日本語のブランチ", "機能/日本語", "c" * 40),
        WorktreeRecord("/tmp/detached", "", "d" * 40, is_detached=True),
    ]


class TestRenderWorktreeTable:
    """Test the rendered table."""

    def test_example_listing(self, display_service, example_porcelain):
        """Test the two-worktree example renders from the main worktree."""
        records = parse_worktree_list(example_porcelain)
        output = display_service.render_worktree_table(records, "/repo", "/repo", 80)

        assert output.splitlines() == [
            f"{'PATH':<18} {'BRANCH':<9} HEAD",
            f"{'----':<18} {'------':<9} ----",
            f"{'@ (main worktree)*':<18} {'main':<9} abc123",
            f"{'.worktrees/x':<18} {'feature/x':<9} def456",
        ]

    def test_empty_listing(self, display_service):
        """Test no records renders a single message instead of headers."""
        assert display_service.render_worktree_table([], "/repo", "/repo", 80) == "No worktrees found"

    def test_head_shows_eight_characters(self, display_service):
        records = [WorktreeRecord("/repo", "main", "0123456789abcdef" * 2 + "01234567", is_main=True)]
        row = display_service.render_worktree_table(records, "/repo", "/repo", 80).splitlines()[2]
        assert row.endswith(" 01234567")
        assert "012345678" not in row

    def test_detached_and_branchless(self, display_service):
        records = [
            WorktreeRecord("/repo", "", "aaa", is_main=True),
            WorktreeRecord("/repo/wt", "", "bbb", is_detached=True),
        ]
        output = display_service.render_worktree_table(records, "/repo", "/repo", 80)
        assert "(no branch)" in output
        assert "(detached HEAD)" in output

    def test_no_trailing_whitespace(self, display_service, long_records):
        output = display_service.render_worktree_table(long_records, "/home/user", long_records[0].path, 200)
        for line in output.splitlines():
            assert line == line.rstrip()

    def test_wide_characters_align(self, display_service):
        """Test the HEAD column starts at the same cell offset on every row."""
        records = [
            WorktreeRecord("/repo", "main", "11111111", is_main=True),
            WorktreeRecord("/repo/機能", "機能/テスト", "22222222"),
            WorktreeRecord("/repo/plain", "plain", "33333333"),
        ]
        lines = display_service.render_worktree_table(records, "/repo", "/repo", 120).splitlines()
        offsets = {cell_len(line[: line.index(head)]) for line, head in zip(lines[2:], ["1111", "2222", "3333"])}
        assert len(offsets) == 1
        assert cell_len(lines[0][: lines[0].index("HEAD")]) in offsets


class TestCurrentWorktreeMarker:
    """Test the * marker for the worktree the user is in."""

    def test_nested_cwd_marks_deepest_worktree(self, display_service, example_records):
        lines = display_service.render_worktree_table(
            example_records, "/repo/.worktrees/x/src", "/repo", 80
        ).splitlines()

        assert lines[2].startswith("@ (main worktree) ")
        assert lines[3].startswith("..* ")

    def test_cwd_outside_every_worktree(self, display_service, example_records):
        output = display_service.render_worktree_table(example_records, "/elsewhere", "/repo", 80)
        assert "*" not in output

    def test_find_current_worktree(self, example_records):
        assert find_current_worktree(example_records, "/repo/docs") is example_records[0]
        assert find_current_worktree(example_records, "/repo/.worktrees/x") is example_records[1]
        assert find_current_worktree(example_records, "/other") is None


class TestTruncation:
    """Test fitting the table into the terminal."""

    @pytest.mark.parametrize("width", range(20, 121, 7))
    def test_lines_fit_terminal(self, display_service, long_records, width):
        """Test no line is wider than the terminal."""
        output = display_service.render_worktree_table(long_records, "/home/user", long_records[0].path, width)
        for line in output.splitlines():
            assert cell_len(line) <= width

    def test_path_truncated_before_branch(self, display_service):
        records = [
            WorktreeRecord("/repo", "main", "aaaaaaaa", is_main=True),
            WorktreeRecord("/repo/some/deeply/nested/worktree/directory/name", "feature/x", "bbbbbbbb"),
        ]
        lines = display_service.render_worktree_table(records, "/repo", "/repo", 40).splitlines()

        assert "..." in lines[3]
        assert "feature/x" in lines[3]
        assert lines[3].endswith("bbbbbbbb")
        assert all(len(line) <= 40 for line in lines)

    def test_max_path_width(self, display_service, long_records):
        output = display_service.render_worktree_table(
            long_records, "/home/user", long_records[0].path, 500, max_path_width=20
        )
        header = output.splitlines()[0]
        assert header.index("BRANCH") == 21

    def test_no_width_limit(self, display_service, long_records):
        output = display_service.render_worktree_table(long_records, "/home/user", long_records[0].path, 0)
        assert "..." not in output


class TestWorktreeNames:
    """Test quiet listing."""

    def test_names(self, display_service):
        records = [
            WorktreeRecord("/src/repo", "main", "aaa", is_main=True),
            WorktreeRecord("/src/worktrees/repo/feature/a", "feature/a", "bbb"),
            WorktreeRecord("/tmp/scratch", "", "ccc", is_detached=True),
        ]
        assert display_service.render_worktree_names(records, Config(), "/src/repo") == [
            "@",
            "feature/a",
            "scratch",
        ]

    def test_display_names_prints_lines(self, display_service, example_records, string_console):
        display_service.display_worktree_names(example_records)
        assert string_console.file.getvalue() == "@\nx\n"

    def test_display_table_prints(self, display_service, example_records, string_console):
        display_service.display_worktree_table(example_records, "/repo", "/repo", 80)
        assert "@ (main worktree)*" in string_console.file.getvalue()
