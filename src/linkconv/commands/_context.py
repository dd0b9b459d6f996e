"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Vault initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkconv.config.logging import configure_logging
from linkconv.domain.types import LinkFormat
from linkconv.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from linkconv.config.settings import LinkSettings
    from linkconv.infrastructure.vault import Vault
    from linkconv.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The vault is created lazily so ``--help`` and ``--version`` never
    walk the filesystem.
    """

    def __init__(self, settings: LinkSettings) -> None:
        self.settings = settings
        self._vault: Vault | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def vault(self) -> Vault:
        """The vault instance (created lazily on first access)."""
        if self._vault is None:
            from linkconv.infrastructure.vault import Vault

            self._vault = Vault(self.settings)
        return self._vault

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def link_format(self, value: str | None) -> LinkFormat | None:
        """Parse a ``--format`` value; None defers to the configured default."""
        return LinkFormat(value) if value is not None else None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
