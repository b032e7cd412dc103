"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Builds fillers from settings and centralizes result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldfill.config.logging import configure_logging
from fieldfill.infrastructure.overlay import OverlayStore, layered_lookup
from fieldfill.output.formatters import format_result
from fieldfill.services.filler import Filler

if TYPE_CHECKING:
    from collections.abc import Mapping

    from fieldfill.config.settings import FieldfillSettings
    from fieldfill.services.result import CommandResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: FieldfillSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def filler(self, env: Mapping[str, str] | None = None) -> Filler:
        """Filler from settings; *env* pairs form a private overlay for this run."""
        if env:
            return Filler.from_settings(self.settings, lookup=layered_lookup(OverlayStore(env)))
        return Filler.from_settings(self.settings)

    def emit(self, result: CommandResult) -> None:
        """Format and output a CommandResult.

        * Success: writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
