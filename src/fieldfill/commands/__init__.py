"""Subcommand modules for fieldfill.

Provides register_commands() which uses deferred imports to keep
``fieldfill --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from fieldfill.commands.fill import fill
    from fieldfill.commands.resolve import resolve

    cli.add_command(resolve)
    cli.add_command(fill)
