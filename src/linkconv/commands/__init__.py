"""Subcommand modules for linkconv.

Provides register_commands() which uses deferred imports to keep
``linkconv --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    from linkconv.commands.convert import convert
    from linkconv.commands.links import links
    from linkconv.commands.reformat import reformat

    cli.add_command(convert)
    cli.add_command(reformat)
    cli.add_command(links)
