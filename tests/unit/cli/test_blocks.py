"""Unit tests for blocks command and global options."""

import json
from pathlib import Path

from typer.testing import CliRunner

from stardestroyer import __version__
from stardestroyer.cli.main import app

runner = CliRunner()


class TestBlocksCommand:
    """Tests for sd blocks command."""

    def test_lists_blocks(self, sample_project: Path) -> None:
        """All declared blocks are listed with a summary."""
        result = runner.invoke(app, ["-C", str(sample_project), "blocks"])

        assert result.exit_code == 0
        for name in ("core", "chart", "analytics"):
            assert name in result.output
        assert "unused" in result.output
        assert "3 block(s), 0 removed" in result.output

    def test_scan_counts_markers(self, sample_project: Path) -> None:
        """--scan adds marker counts without changing files."""
        before = (sample_project / "src" / "index.js").read_text()

        result = runner.invoke(app, ["-C", str(sample_project), "blocks", "--scan"])

        assert result.exit_code == 0
        assert "Markers" in result.output
        assert (sample_project / "src" / "index.js").read_text() == before

    def test_removed_state(self, sample_project: Path) -> None:
        """Removed blocks are counted in the summary."""
        path = sample_project / "destroy.config.json"
        config = json.loads(path.read_text())
        config["blocks"]["chart"]["removed"] = True
        path.write_text(json.dumps(config))

        result = runner.invoke(app, ["-C", str(sample_project), "blocks"])

        assert result.exit_code == 0
        assert "removed" in result.output
        assert "3 block(s), 1 removed" in result.output

    def test_no_blocks(self, tmp_path: Path) -> None:
        """An empty registry is reported."""
        (tmp_path / "destroy.config.json").write_text('{"blocks": {}}')

        result = runner.invoke(app, ["-C", str(tmp_path), "blocks"])

        assert result.exit_code == 0
        assert "No blocks declared" in result.output


class TestGlobalOptions:
    """Tests for options of the root command."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_args_shows_help(self) -> None:
        """Running without a command prints the usage."""
        result = runner.invoke(app, [])

        assert "destroy" in result.output
        assert "clean" in result.output

    def test_unknown_command(self) -> None:
        """Unknown commands fail with a non-zero exit status."""
        result = runner.invoke(app, ["obliterate"])

        assert result.exit_code != 0

    def test_quiet_suppresses_info(self, sample_project: Path) -> None:
        """--quiet hides informational messages."""
        path = sample_project / "destroy.config.json"
        config = json.loads(path.read_text())
        config["blocksInUse"] = ["core", "chart", "analytics"]
        path.write_text(json.dumps(config))

        result = runner.invoke(app, ["-q", "-C", str(sample_project), "destroy"])

        assert result.exit_code == 0
        assert "No redundant blocks" not in result.output
