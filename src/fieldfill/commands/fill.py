"""Command: fill a record class and show the outcome of every field."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldfill.commands._base import FieldfillCommand, parse_env_pairs
from fieldfill.services.operations import fill_record

if TYPE_CHECKING:
    from fieldfill.commands._context import AppContext


@click.command(
    cls=FieldfillCommand,
    examples="""\
  fieldfill fill myapp.config:ServerConfig
  fieldfill fill myapp.config:ServerConfig --env EnvType=prod
  fieldfill --strict --json fill myapp.config:ServerConfig""",
)
@click.argument("target", metavar="MODULE:CLASS")
@click.option("--env", "env_pairs", multiple=True, metavar="KEY=VALUE", help="Overlay key.")
@click.pass_obj
def fill(app: AppContext, target: str, env_pairs: tuple[str, ...]) -> None:
    """Instantiate MODULE:CLASS with no arguments and apply its defaults."""
    filler = app.filler(parse_env_pairs(env_pairs))
    app.emit(fill_record(filler, target))
