"""Custom Click command class with --examples support.

When ``--examples`` is passed, the command prints usage examples and
exits. This keeps ``--help`` concise while making examples available on
demand.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from linkconv.domain.types import LinkFormat


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class LinkCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


# Shared option for commands that accept a path style override.
format_option = click.option(
    "-f",
    "--format",
    "link_format",
    type=click.Choice([f.value for f in LinkFormat]),
    default=None,
    help="Path style for rewritten links (default: [links] final_link_format).",
)

paths_argument = click.argument(
    "paths",
    nargs=-1,
    type=click.Path(exists=True, path_type=Path),
)
