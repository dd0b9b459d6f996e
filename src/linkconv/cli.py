"""Root CLI group for linkconv with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from linkconv import __version__
from linkconv.commands import register_commands
from linkconv.commands._context import AppContext
from linkconv.config.settings import LinkSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="linkconv")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Non-interactive mode (no prompts).")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--vault",
    "vault_root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Vault root (default: folder holding linkconv.toml, else CWD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    config_path: str | None,
    vault_root: Path | None,
) -> None:
    """linkconv — convert vault links between wiki and Markdown notation."""
    settings = LinkSettings.from_cli(
        config_path=config_path,
        vault_root=vault_root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_interact=no_interact,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
