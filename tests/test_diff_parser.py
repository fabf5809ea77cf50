"""Tests for the unified diff parser and Addition grouping."""

from leakgate.git.diff_parser import DiffParser, collect_additions
from leakgate.git.models import CommitContext, DiffFile, DiffLine, FileSkipped, FileStatus, LineType


class TestBasicParsing:
    def test_added_lines(self, sample_diff_clean):
        items = list(DiffParser(sample_diff_clean).parse())
        diff_files = [i for i in items if isinstance(i, DiffFile)]
        diff_lines = [i for i in items if isinstance(i, DiffLine)]

        assert len(diff_files) == 1
        assert diff_files[0].path == "hello.py"
        assert len(diff_lines) == 3
        assert all(dl.line_type == LineType.ADDED for dl in diff_lines)
        assert diff_lines[0].content == 'def greet(name):'
        assert diff_lines[0].line_no == 1

    def test_aws_key_lines(self, sample_diff_with_aws_key):
        items = list(DiffParser(sample_diff_with_aws_key).parse())
        lines = [i for i in items if isinstance(i, DiffLine)]
        assert len(lines) == 4
        # Line 3 should contain the AWS key
        assert "AKIAIOSFODNN7REAL123" in lines[2].content

    def test_password_diff(self, sample_diff_with_password):
        items = list(DiffParser(sample_diff_with_password).parse())
        lines = [i for i in items if isinstance(i, DiffLine)]
        assert len(lines) == 1
        assert "SuperS3cretP@ssw0rd!" in lines[0].content
        assert lines[0].line_no == 11


class TestEdgeCases:
    def test_binary_file_skipped(self, sample_diff_binary):
        items = list(DiffParser(sample_diff_binary).parse())
        skipped = [i for i in items if isinstance(i, FileSkipped)]
        assert len(skipped) == 1
        assert skipped[0].reason == "binary"
        assert skipped[0].path == "image.png"

    def test_rename_tracked(self, sample_diff_rename):
        items = list(DiffParser(sample_diff_rename).parse())
        files = [i for i in items if isinstance(i, DiffFile)]
        assert len(files) == 1
        assert files[0].path == "new_name.py"
        assert files[0].old_path == "old_name.py"
        assert files[0].status == FileStatus.RENAMED

    def test_mode_only_skipped(self, sample_diff_mode_only):
        items = list(DiffParser(sample_diff_mode_only).parse())
        skipped = [i for i in items if isinstance(i, FileSkipped)]
        assert len(skipped) == 1
        assert skipped[0].reason == "mode_only"

    def test_submodule_ignored(self, sample_diff_submodule):
        items = list(DiffParser(sample_diff_submodule).parse())
        lines = [i for i in items if isinstance(i, DiffLine)]
        # Subproject commit lines should be skipped
        assert len(lines) == 0

    def test_no_newline_marker_ignored(self, sample_diff_no_newline):
        items = list(DiffParser(sample_diff_no_newline).parse())
        lines = [i for i in items if isinstance(i, DiffLine)]
        assert len(lines) == 1
        assert lines[0].content == "final line without newline"

    def test_single_line_hunk_header(self):
        """Hunk header without comma implies count=1."""
        diff = (
            "diff --git a/f.txt b/f.txt\n"
            "index abc..def 100644\n"
            "--- a/f.txt\n"
            "+++ b/f.txt\n"
            "@@ -1 +1 @@\n"
            "+replaced line\n"
        )
        items = list(DiffParser(diff).parse())
        lines = [i for i in items if isinstance(i, DiffLine)]
        assert len(lines) == 1
        assert lines[0].line_no == 1

    def test_consecutive_hunks(self):
        """Two hunks in the same file — line counter resets."""
        diff = (
            "diff --git a/f.py b/f.py\n"
            "index abc..def 100644\n"
            "--- a/f.py\n"
            "+++ b/f.py\n"
            "@@ -5,0 +5,1 @@\n"
            "+line at 5\n"
            "@@ -20,0 +21,1 @@\n"
            "+line at 21\n"
        )
        items = list(DiffParser(diff).parse())
        lines = [i for i in items if isinstance(i, DiffLine)]
        assert len(lines) == 2
        assert lines[0].line_no == 5
        assert lines[1].line_no == 21

    def test_deleted_file_no_added_lines(self):
        """Deleted files have only '-' lines — parser yields zero added lines."""
        diff = (
            "diff --git a/old.py b/old.py\n"
            "deleted file mode 100644\n"
            "index abc..000 100644\n"
            "--- a/old.py\n"
            "+++ /dev/null\n"
            "@@ -1,3 +0,0 @@\n"
            "-line one\n"
            "-line two\n"
            "-line three\n"
        )
        items = list(DiffParser(diff).parse())
        lines = [i for i in items if isinstance(i, DiffLine)]
        assert len(lines) == 0

    def test_bom_stripped(self):
        """UTF-8 BOM at start of content is removed."""
        diff = (
            "diff --git a/bom.txt b/bom.txt\n"
            "new file mode 100644\n"
            "index 0000000..abc1234\n"
            "--- /dev/null\n"
            "+++ b/bom.txt\n"
            "@@ -0,0 +1,1 @@\n"
            "+\ufeffhello world\n"
        )
        items = list(DiffParser(diff).parse())
        lines = [i for i in items if isinstance(i, DiffLine)]
        assert len(lines) == 1
        assert lines[0].content == "hello world"

    def test_file_headers_not_content(self):
        """--- a/file and +++ b/file should not appear as added lines."""
        diff = (
            "diff --git a/config.py b/config.py\n"
            "index abc..def 100644\n"
            "--- a/config.py\n"
            "+++ b/config.py\n"
            "@@ -1,0 +2,1 @@\n"
            "+new line\n"
        )
        items = list(DiffParser(diff).parse())
        lines = [i for i in items if isinstance(i, DiffLine)]
        assert len(lines) == 1
        assert "---" not in lines[0].content
        assert "+++" not in lines[0].content

    def test_deleted_file_status(self, sample_diff_deleted):
        items = list(DiffParser(sample_diff_deleted).parse())
        files = [i for i in items if isinstance(i, DiffFile)]
        assert files == [DiffFile(path="gone.txt", status=FileStatus.DELETED)]

    def test_crlf_stripped(self):
        diff = (
            "diff --git a/win.txt b/win.txt\n"
            "new file mode 100644\n"
            "--- /dev/null\n"
            "+++ b/win.txt\n"
            "@@ -0,0 +1 @@\n"
            "+line\r\n"
        )
        lines = [i for i in DiffParser(diff).parse() if isinstance(i, DiffLine)]
        assert lines[0].content == "line"

    def test_new_file_status(self, sample_diff_clean):
        files = [i for i in DiffParser(sample_diff_clean).parse() if isinstance(i, DiffFile)]
        assert files[0].status == FileStatus.ADDED


class TestCollectAdditions:
    def test_one_addition_per_file(self, sample_diff_two_files):
        parsed = collect_additions(sample_diff_two_files)
        assert [a.path for a in parsed.additions] == ["a.txt", "b.txt"]
        assert parsed.additions[0].content == b"alpha\nbeta\ngamma\n"
        assert parsed.additions[1].content == b"delta\n"

    def test_only_added_lines(self, sample_diff_deleted):
        parsed = collect_additions(sample_diff_deleted)
        assert parsed.additions == []
        assert parsed.binary_paths == []

    def test_binary_reported_separately(self, sample_diff_binary):
        parsed = collect_additions(sample_diff_binary)
        assert parsed.additions == []
        assert parsed.binary_paths == ["image.png"]

    def test_mode_only_recorded_as_skipped(self, sample_diff_mode_only):
        parsed = collect_additions(sample_diff_mode_only)
        assert parsed.additions == []
        assert [s.reason for s in parsed.skipped] == ["mode_only"]

    def test_commit_attached(self, sample_diff_clean):
        commit = CommitContext(sha="a" * 40, author="Test", subject="add hello")
        parsed = collect_additions(sample_diff_clean, commit=commit)
        assert parsed.additions[0].commit == commit

    def test_empty_diff(self):
        parsed = collect_additions("")
        assert parsed.additions == []
