"""
Tests for the command line entry point (brew_pretty/cli.py).
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from brew_pretty.brew import BrewCommandError
from brew_pretty.cli import apply_cli_overrides, main, parse_args
from brew_pretty.config import Config


FIXTURES_DIR = Path(__file__).parent / "fixtures"
UPDATE_FILE = str(FIXTURES_DIR / "update.txt")
OUTDATED_FILE = str(FIXTURES_DIR / "outdated.json")


@pytest.fixture(autouse=True)
def no_config_files(monkeypatch):
    """Keep user and project config files out of the tests."""
    monkeypatch.setattr("brew_pretty.config.CONFIG_LOCATIONS", [])
    monkeypatch.delenv("BREW_PRETTY_WIDTH", raising=False)


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test default options."""
        args = parse_args([])
        assert args.no_update is False
        assert args.width is None
        assert args.text is False

    def test_stdin_only_once(self):
        """Test that stdin cannot feed both phases."""
        with pytest.raises(SystemExit):
            parse_args(["--update-file", "-", "--outdated-file", "-"])

    def test_negative_width(self):
        """Test that widths must not be negative."""
        with pytest.raises(SystemExit):
            parse_args(["--width", "-1"])

    def test_apply_cli_overrides(self):
        """Test options overriding configuration."""
        args = parse_args(["--no-color", "--width", "60", "--text"])
        config = apply_cli_overrides(Config(), args)
        assert config.colors.enabled is False
        assert config.layout.terminal_width == 60
        assert config.outdated.json is False


class TestMain:
    """Tests for complete runs."""

    def test_replay_files(self, capsys):
        """Test rendering captured output."""
        code = main([
            "--update-file", UPDATE_FILE,
            "--outdated-file", OUTDATED_FILE,
            "--width", "80",
            "--no-color",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert out.startswith("Updated 1 tap (homebrew/core).\n==> Updated Formulae\n")
        assert "php ✔" in out
        assert "==> Outdated Formulae\n" in out
        assert "php           8.0.12                     ->    8.0.13\n" in out

    def test_runs_brew(self, capsys):
        """Test that brew is invoked when no files are given."""
        with patch("brew_pretty.cli.run_update", return_value="Already up-to-date.\n") as update, \
                patch("brew_pretty.cli.run_outdated", return_value='{"formulae": [], "casks": []}') as outdated:
            code = main(["--width", "80"])

        assert code == 0
        update.assert_called_once()
        outdated.assert_called_once_with(json=True)
        assert capsys.readouterr().out == "Already up-to-date.\n"

    def test_update_failure_still_prints_outdated(self, capsys):
        """Test that a failed update phase does not hide outdated formulae."""
        error = BrewCommandError(("brew", "update"), "brew executable not found")
        with patch("brew_pretty.cli.run_update", side_effect=error):
            code = main(["--outdated-file", OUTDATED_FILE, "--no-color"])

        assert code == 1
        out = capsys.readouterr().out
        assert out.startswith("==> Outdated Formulae\n")

    def test_broken_outdated_still_prints_update(self, capsys, tmp_path):
        """Test that a broken outdated document does not hide the update log."""
        broken = tmp_path / "outdated.json"
        broken.write_text("{broken")
        code = main(["--update-file", UPDATE_FILE, "--outdated-file", str(broken), "--no-color", "-q"])

        assert code == 1
        out = capsys.readouterr().out
        assert out.startswith("Updated 1 tap (homebrew/core).")
        assert "Outdated Formulae" not in out

    def test_missing_file(self, capsys):
        """Test an unreadable replay file."""
        code = main(["--no-update", "--outdated-file", "/nonexistent/outdated.json", "-q"])
        assert code == 1
        assert capsys.readouterr().out == ""

    def test_text_mode(self, capsys, tmp_path):
        """Test the line form of the outdated listing."""
        listing = tmp_path / "outdated.txt"
        listing.write_text("rust (1.38.0, 1.39.0) < 1.40.0\n")
        code = main(["--no-update", "--text", "--outdated-file", str(listing), "--no-color"])

        assert code == 0
        assert capsys.readouterr().out == "==> Outdated Formulae\nrust    1.39.0    ->    1.40.0\n"

    def test_bad_config(self, capsys):
        """Test an explicit configuration file that cannot be loaded."""
        assert main(["--config", "/nonexistent/config.yml", "-q"]) == 2

    def test_wrong_typed_config(self, tmp_path):
        """Test that a wrongly typed config file exits cleanly."""
        config_file = tmp_path / "config.yml"
        config_file.write_text("layout:\n  gap: wide\n")
        assert main(["--config", str(config_file), "--no-update", "--no-outdated", "-q"]) == 2

    def test_invalid_project_config_ignored(self, tmp_path, monkeypatch, capsys):
        """Test that a broken project config file does not stop the run."""
        project = tmp_path / ".brew-pretty.yml"
        project.write_text("colors:\n  major: pink\n")
        monkeypatch.setattr("brew_pretty.config.CONFIG_LOCATIONS", [str(project)])

        code = main(["--no-update", "--outdated-file", OUTDATED_FILE, "--no-color"])

        assert code == 0
        assert capsys.readouterr().out.startswith("==> Outdated Formulae\n")
