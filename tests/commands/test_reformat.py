"""Tests for the reformat command."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from linkconv.cli import cli
from tests.conftest import read_note, write_note


@pytest.mark.usefixtures("_isolated_vault")
class TestReformatCommand:
    def test_absolute(self, cli_runner: CliRunner, vault_root: Path) -> None:
        result = cli_runner.invoke(cli, ["reformat", "-f", "absolute-path", "a/b/c.md"])
        assert result.exit_code == 0, result.output
        assert read_note(vault_root, "a/b/c.md") == "See [[a/d/e]].\n"

    def test_format_from_config(self, cli_runner: CliRunner, vault_root: Path) -> None:
        (vault_root / "linkconv.toml").write_text('[links]\nfinal_link_format = "relative-path"\n')
        result = cli_runner.invoke(cli, ["reformat", "a/b/c.md"])
        assert result.exit_code == 0, result.output
        assert read_note(vault_root, "a/b/c.md") == "See [[../d/e]].\n"

    def test_unchanged_format_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["reformat", "a/b/c.md"])
        assert result.exit_code == 1
        assert "Choose a link format" in result.output

    def test_keeps_markdown_notation(self, cli_runner: CliRunner, vault_root: Path) -> None:
        write_note(vault_root, "a/b/c.md", "[spec](e.md)\n")
        result = cli_runner.invoke(cli, ["reformat", "-f", "relative-path", "a/b/c.md"])
        assert result.exit_code == 0, result.output
        assert read_note(vault_root, "a/b/c.md") == "[spec](../d/e.md)\n"

    def test_whole_vault_prompt(self, cli_runner: CliRunner, vault_root: Path) -> None:
        result = cli_runner.invoke(cli, ["reformat", "-f", "absolute-path"], input="n\n")
        assert "Rewrite every link in the vault as absolute-path?" in result.output
        assert "Cancelled." in result.output
        assert read_note(vault_root, "a/b/c.md") == "See [[e]].\n"

    def test_dry_run_no_prompt(self, cli_runner: CliRunner, vault_root: Path) -> None:
        result = cli_runner.invoke(cli, ["reformat", "-f", "absolute-path", "--dry-run"])
        assert result.exit_code == 0, result.output
        assert "Rewrite every link" not in result.output
        assert read_note(vault_root, "a/b/c.md") == "See [[e]].\n"

    def test_unchanged_default_fails_without_prompt(
        self, cli_runner: CliRunner, vault_root: Path
    ) -> None:
        result = cli_runner.invoke(cli, ["reformat"], input="y\n")
        assert result.exit_code == 1
        assert "Rewrite every link" not in result.output
        assert "Choose a link format" in result.output
        assert read_note(vault_root, "a/b/c.md") == "See [[e]].\n"
