"""Command: rewrite link paths as absolute, relative, or shortest."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from linkconv.commands._base import LinkCommand, format_option, paths_argument
from linkconv.domain.types import LinkFormat

if TYPE_CHECKING:
    from linkconv.commands._context import AppContext


@click.command(
    cls=LinkCommand,
    examples="""\
  linkconv reformat -f relative-path Daily.md
  linkconv reformat -f shortest-path notes/ --dry-run
  linkconv reformat --yes                          # whole vault, configured format""",
)
@paths_argument
@format_option
@click.option("--dry-run", is_flag=True, help="Show changes without writing files.")
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation for whole-vault runs.")
@click.pass_obj
def reformat(
    app: AppContext,
    paths: tuple[Path, ...],
    link_format: str | None,
    dry_run: bool,
    yes: bool,
) -> None:
    """Rewrite the path of every resolvable link, keeping its notation."""
    from linkconv.services.links import LinkService

    preference = app.link_format(link_format)
    effective = preference or app.settings.links.final_link_format
    asks = not (paths or dry_run or yes or app.settings.no_interact)
    # An unchanged format is rejected by the service without touching files.
    if asks and effective != LinkFormat.UNCHANGED:
        if not click.confirm(f"Rewrite every link in the vault as {effective}?"):
            click.echo("Cancelled.")
            return

    app.emit(LinkService(app.vault).reformat(list(paths), preference, dry_run=dry_run))
