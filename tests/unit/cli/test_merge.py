"""Unit tests for the merge command.

Runs the real command against temporary trees; interactive answers are
fed through the runner's stdin.
"""

from pathlib import Path
from unittest.mock import patch

from overwriter.cli.main import app
from typer.testing import CliRunner

from tests.conftest import TreeWriter

runner = CliRunner()


def _merge(incoming: Path, existing: Path, *args: str, stdin: str | None = None):
    return runner.invoke(app, ["merge", str(incoming), str(existing), *args], input=stdin)


class TestMergeWithoutConflicts:
    """Tests for runs where nothing collides."""

    def test_new_files_left_in_place(
        self, incoming: Path, existing: Path, make_tree: TreeWriter
    ) -> None:
        """New files are reported and not moved."""
        make_tree(incoming, {"new.txt": "n"})
        make_tree(existing, {"other.txt": "o"})

        result = _merge(incoming, existing)

        assert result.exit_code == 0
        assert "No conflicts found" in result.output
        assert "1 new file(s)" in result.output
        assert (incoming / "new.txt").exists()
        assert not (existing / "new.txt").exists()


class TestMergeApplyAll:
    """Tests for --all."""

    def test_replace_all(self, incoming: Path, existing: Path, make_tree: TreeWriter) -> None:
        """Every conflict is replaced without prompting."""
        make_tree(incoming, {"a.txt": "new a", "sub/b.txt": "new b", "sub/b.txt.meta": "m"})
        make_tree(existing, {"a.txt": "old a", "sub/b.txt": "old b"})

        result = _merge(incoming, existing, "--all", "replace")

        assert result.exit_code == 0
        assert "Found 2 conflict(s)" in result.output
        assert "2 replaced" in result.output
        assert (existing / "a.txt").read_text() == "new a"
        assert (existing / "sub/b.txt").read_text() == "new b"
        assert not (incoming / "sub/b.txt.meta").exists()
        assert not (existing / "sub/b.txt.meta").exists()

    def test_keep_both_all(self, incoming: Path, existing: Path, make_tree: TreeWriter) -> None:
        """keep-both leaves both sides untouched."""
        make_tree(incoming, {"a.txt": "new"})
        make_tree(existing, {"a.txt": "old"})

        result = _merge(incoming, existing, "-a", "keep-both")

        assert result.exit_code == 0
        assert "1 kept both" in result.output
        assert (incoming / "a.txt").read_text() == "new"
        assert (existing / "a.txt").read_text() == "old"

    def test_emptied_incoming_folder_removed(
        self, tmp_path: Path, existing: Path, make_tree: TreeWriter
    ) -> None:
        """A dropped folder whose files were all consumed is removed."""
        drop = make_tree(tmp_path / "Drop", {"a.txt": "new", "deep/b.txt": "new"})
        make_tree(tmp_path, {"Drop.meta": "folder"})
        make_tree(existing, {"a.txt": "old", "deep/b.txt": "old"})

        result = _merge(drop, existing, "--all", "skip")

        assert result.exit_code == 0
        assert "Removed 2 emptied directory(ies)" in result.output
        assert not drop.exists()
        assert not (tmp_path / "Drop.meta").exists()
        assert (existing / "deep/b.txt").read_text() == "old"

    def test_single_file_source(
        self, incoming: Path, existing: Path, make_tree: TreeWriter
    ) -> None:
        """A single incoming file is matched by its name."""
        make_tree(incoming, {"a.txt": "new", "b.txt": "other"})
        make_tree(existing, {"a.txt": "old", "b.txt": "older"})

        result = _merge(incoming / "a.txt", existing, "--all", "replace")

        assert result.exit_code == 0
        assert "Found 1 conflict(s)" in result.output
        assert (existing / "a.txt").read_text() == "new"
        assert (existing / "b.txt").read_text() == "older"
        assert incoming.exists()


class TestMergeInteractive:
    """Tests for prompted resolution."""

    def test_answers_per_conflict(
        self, incoming: Path, existing: Path, make_tree: TreeWriter
    ) -> None:
        """Declining apply-to-all asks again for the next conflict."""
        make_tree(incoming, {"a.txt": "new a", "b.txt": "new b"})
        make_tree(existing, {"a.txt": "old a", "b.txt": "old b"})

        result = _merge(incoming, existing, stdin="s\nn\nk\n")

        assert result.exit_code == 0
        assert "Apply this choice to all remaining conflicts?" in result.output
        assert not (incoming / "a.txt").exists()
        assert (existing / "a.txt").read_text() == "old a"
        assert (incoming / "b.txt").read_text() == "new b"
        assert (existing / "b.txt").read_text() == "old b"

    def test_apply_to_all(self, incoming: Path, existing: Path, make_tree: TreeWriter) -> None:
        """Accepting apply-to-all resolves the rest without prompting."""
        make_tree(incoming, {"a.txt": "new a", "b.txt": "new b", "c.txt": "new c"})
        make_tree(existing, {"a.txt": "old a", "b.txt": "old b", "c.txt": "old c"})

        result = _merge(incoming, existing, stdin="r\ny\n")

        assert result.exit_code == 0
        assert result.output.count("[r]eplace") == 1
        assert "3 replaced" in result.output
        for name in ("a", "b", "c"):
            assert (existing / f"{name}.txt").read_text() == f"new {name}"

    def test_unrecognized_answer_asks_again(
        self, incoming: Path, existing: Path, make_tree: TreeWriter
    ) -> None:
        """An unknown answer is reported and the question repeated."""
        make_tree(incoming, {"a.txt": "new"})
        make_tree(existing, {"a.txt": "old"})

        result = _merge(incoming, existing, stdin="x\nk\nn\n")

        assert result.exit_code == 0
        assert "Unrecognized answer" in result.output
        assert "1 kept both" in result.output

    def test_quit_cancels(self, incoming: Path, existing: Path, make_tree: TreeWriter) -> None:
        """Quitting stops the run before touching the remaining files."""
        make_tree(incoming, {"a.txt": "new a", "b.txt": "new b"})
        make_tree(existing, {"a.txt": "old a", "b.txt": "old b"})

        result = _merge(incoming, existing, stdin="r\nn\nq\n")

        assert result.exit_code == 0
        assert "Cancelled after 1 conflict(s)" in result.output
        assert (existing / "a.txt").read_text() == "new a"
        assert (incoming / "b.txt").read_text() == "new b"
        assert (existing / "b.txt").read_text() == "old b"


class TestMergeIdentical:
    """Tests for identical-content handling."""

    def test_identical_skipped_by_default(
        self, incoming: Path, existing: Path, make_tree: TreeWriter
    ) -> None:
        """Identical files are skipped without a prompt."""
        make_tree(incoming, {"same.txt": "x"})
        make_tree(existing, {"same.txt": "x"})

        result = _merge(incoming, existing)

        assert result.exit_code == 0
        assert "[r]eplace" not in result.output
        assert "1 skipped" in result.output
        assert not (incoming / "same.txt").exists()

    def test_ask_identical(self, incoming: Path, existing: Path, make_tree: TreeWriter) -> None:
        """--ask-identical treats identical files like any other conflict."""
        make_tree(incoming, {"same.txt": "x"})
        make_tree(existing, {"same.txt": "x"})

        result = _merge(incoming, existing, "--ask-identical", stdin="k\nn\n")

        assert result.exit_code == 0
        assert "1 kept both" in result.output
        assert (incoming / "same.txt").exists()

    def test_config_disables_identical_skip(
        self, tmp_path: Path, incoming: Path, existing: Path, make_tree: TreeWriter
    ) -> None:
        """skip_identical = false in the config file is honored."""
        config = tmp_path / "custom.toml"
        config.write_text("[reconcile]\nskip_identical = false\n")
        make_tree(incoming, {"same.txt": "x"})
        make_tree(existing, {"same.txt": "x"})

        result = runner.invoke(
            app,
            ["-c", str(config), "merge", str(incoming), str(existing), "--all", "keep-both"],
        )

        assert result.exit_code == 0
        assert "1 kept both" in result.output


class TestMergeDryRun:
    """Tests for --dry-run."""

    def test_dry_run_changes_nothing(
        self, incoming: Path, existing: Path, make_tree: TreeWriter
    ) -> None:
        """Nothing on disk changes in dry-run mode."""
        make_tree(incoming, {"a.txt": "new"})
        make_tree(existing, {"a.txt": "old"})

        result = _merge(incoming, existing, "--all", "replace", "--dry-run")

        assert result.exit_code == 0
        assert "dry-run" in result.output
        assert (incoming / "a.txt").read_text() == "new"
        assert (existing / "a.txt").read_text() == "old"


class TestMergeErrors:
    """Tests for error exits."""

    def test_destination_inside_source(self, incoming: Path, make_tree: TreeWriter) -> None:
        """Merging a folder into its own subfolder is refused."""
        make_tree(incoming, {"sub/a.txt": "a"})

        result = _merge(incoming, incoming / "sub")

        assert result.exit_code == 1
        assert "Error: Destination" in result.output

    def test_missing_source(self, tmp_path: Path, existing: Path) -> None:
        """A nonexistent source is rejected by argument validation."""
        result = _merge(tmp_path / "missing", existing)

        assert result.exit_code != 0

    def test_invalid_config(self, tmp_path: Path, incoming: Path, existing: Path) -> None:
        """A broken config file aborts with exit code 1."""
        config = tmp_path / "broken.toml"
        config.write_text("[reconcile\n")

        result = runner.invoke(
            app, ["--config", str(config), "merge", str(incoming), str(existing)]
        )

        assert result.exit_code == 1
        assert "Failed to load config" in result.output

    def test_failed_replace_exits_nonzero(
        self, incoming: Path, existing: Path, make_tree: TreeWriter
    ) -> None:
        """A failed action is reported and the exit code is 1."""
        make_tree(incoming, {"a.txt": "new"})
        make_tree(existing, {"a.txt": "old"})

        with patch("overwriter.reconcile.operator.os.replace", side_effect=OSError("disk full")):
            result = _merge(incoming, existing, "--all", "replace")

        assert result.exit_code == 1
        assert "1 failed" in result.output
        assert (existing / "a.txt").read_text() == "old"
        assert (incoming / "a.txt").read_text() == "new"
