"""Command: convert links between wiki and Markdown notation."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from linkconv.commands._base import LinkCommand, format_option, paths_argument
from linkconv.domain.types import Notation

if TYPE_CHECKING:
    from linkconv.commands._context import AppContext

_NOTATION_LABELS = {Notation.WIKI: "Wikilinks", Notation.MARKDOWN: "Markdown Links"}


@click.command(
    cls=LinkCommand,
    examples="""\
  linkconv convert markdown                       # whole vault, asks first
  linkconv convert wiki notes/Projects            # every note under a folder
  linkconv convert markdown Daily.md --dry-run    # report without writing
  linkconv convert markdown -f shortest-path Daily.md
  pbpaste | linkconv convert wiki --stdin --source notes/Inbox.md""",
)
@click.argument("destination", type=click.Choice([n.value for n in Notation]))
@paths_argument
@format_option
@click.option("--dry-run", is_flag=True, help="Show changes without writing files.")
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation for whole-vault runs.")
@click.option("--stdin", "from_stdin", is_flag=True, help="Convert text from stdin and print it.")
@click.option(
    "--source",
    type=click.Path(path_type=Path),
    default=None,
    help="Document the stdin text belongs to (anchors relative links).",
)
@click.pass_obj
def convert(
    app: AppContext,
    destination: str,
    paths: tuple[Path, ...],
    link_format: str | None,
    dry_run: bool,
    yes: bool,
    from_stdin: bool,
    source: Path | None,
) -> None:
    """Convert links to DESTINATION notation (wiki or markdown).

    PATHS may be Markdown files or folders; none means the whole vault.
    """
    from linkconv.services.links import LinkService

    notation = Notation(destination)
    preference = app.link_format(link_format)
    svc = LinkService(app.vault)

    if from_stdin:
        if paths:
            raise click.UsageError("--stdin does not take PATHS.")
        if source is None:
            raise click.UsageError("--stdin requires --source.")
        text = sys.stdin.read()
        result = svc.convert_text(text, source, notation, preference=preference)
        if result.ok and not app.settings.json_output:
            click.echo(result.data["text"], nl=False)
            return
        app.emit(result)
        return

    if not paths and not dry_run and not yes and not app.settings.no_interact:
        other = Notation.MARKDOWN if notation == Notation.WIKI else Notation.WIKI
        prompt = (
            f"Are you sure you want to convert all {_NOTATION_LABELS[other]} "
            f"to {_NOTATION_LABELS[notation]}?"
        )
        if not click.confirm(prompt):
            click.echo("Cancelled.")
            return

    app.emit(svc.convert(list(paths), notation, preference=preference, dry_run=dry_run))
