"""Command: list the links found in a document."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from linkconv.commands._base import LinkCommand

if TYPE_CHECKING:
    from linkconv.commands._context import AppContext


@click.command(
    cls=LinkCommand,
    examples="""\
  linkconv links Daily.md
  linkconv --json links notes/Project.md
  linkconv -v links Daily.md                       # include match offsets""",
)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def links(app: AppContext, path: Path) -> None:
    """Show every link in PATH, its kind, and the file it resolves to."""
    from linkconv.services.links import LinkService

    app.emit(LinkService(app.vault).list_links(path))
