"""Command: evaluate a single annotation string."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldfill.commands._base import FieldfillCommand, parse_env_pairs
from fieldfill.services.operations import KIND_HINTS, resolve_annotation

if TYPE_CHECKING:
    from fieldfill.commands._context import AppContext


@click.command(
    cls=FieldfillCommand,
    examples="""\
  fieldfill resolve 'envs|APP_ENV|dev,debug|prod,info' --env APP_ENV=prod
  fieldfill resolve 'report-{{date:0,0,-1}}.csv'
  fieldfill resolve 1h30m --kind duration
  fieldfill resolve '[1,2,3]' --kind int --list
  fieldfill --json resolve '2024-03-01 10:30:00' --kind timestamp""",
)
@click.argument("annotation")
@click.option(
    "--kind",
    type=click.Choice(sorted(KIND_HINTS)),
    default="str",
    show_default=True,
    help="Field kind to coerce to.",
)
@click.option("--list", "as_list", is_flag=True, help="Treat the field as a list of --kind.")
@click.option("--env", "env_pairs", multiple=True, metavar="KEY=VALUE", help="Overlay key.")
@click.pass_obj
def resolve(
    app: AppContext,
    annotation: str,
    kind: str,
    as_list: bool,
    env_pairs: tuple[str, ...],
) -> None:
    """Resolve ANNOTATION as a default for a field of the given kind."""
    filler = app.filler(parse_env_pairs(env_pairs))
    app.emit(resolve_annotation(filler, annotation, kind=kind, as_list=as_list))
