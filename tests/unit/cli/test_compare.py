"""Unit tests for the compare command."""

from pathlib import Path
from unittest.mock import patch

from overwriter.cli.main import app
from overwriter.reconcile.compare import Comparison
from typer.testing import CliRunner

from tests.conftest import TreeWriter

runner = CliRunner()


class TestCompare:
    """Tests for overwriter compare."""

    def test_identical(self, tmp_path: Path, make_tree: TreeWriter) -> None:
        """Identical files exit 0."""
        make_tree(tmp_path, {"a.bin": b"\x00\x01", "b.bin": b"\x00\x01"})

        result = runner.invoke(app, ["compare", str(tmp_path / "a.bin"), str(tmp_path / "b.bin")])

        assert result.exit_code == 0
        assert "Files are identical" in result.output

    def test_different(self, tmp_path: Path, make_tree: TreeWriter) -> None:
        """Differing files exit 1."""
        make_tree(tmp_path, {"a.bin": b"\x00\x01", "b.bin": b"\x00\x02"})

        result = runner.invoke(app, ["compare", str(tmp_path / "a.bin"), str(tmp_path / "b.bin")])

        assert result.exit_code == 1
        assert "Files differ" in result.output

    def test_unreadable(self, tmp_path: Path, make_tree: TreeWriter) -> None:
        """A read error exits 2."""
        make_tree(tmp_path, {"a.bin": b"a", "b.bin": b"b"})

        with patch(
            "overwriter.cli.commands.compare.files_equal",
            return_value=Comparison(equal=False, error="Permission denied"),
        ):
            result = runner.invoke(
                app, ["compare", str(tmp_path / "a.bin"), str(tmp_path / "b.bin")]
            )

        assert result.exit_code == 2
        assert "Could not compare files: Permission denied" in result.output

    def test_directory_rejected(self, tmp_path: Path, make_tree: TreeWriter) -> None:
        """Directories are not accepted."""
        make_tree(tmp_path, {"a.bin": b"a"})

        result = runner.invoke(app, ["compare", str(tmp_path), str(tmp_path / "a.bin")])

        assert result.exit_code != 0
