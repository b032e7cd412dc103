"""Root CLI group for fieldfill with global flags and command registration."""

from __future__ import annotations

import click

from fieldfill import __version__
from fieldfill.commands import register_commands
from fieldfill.commands._context import AppContext
from fieldfill.config.settings import FieldfillSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="fieldfill")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--tag", default=None, help="Annotation key to read (default: 'default').")
@click.option("--strict", is_flag=True, help="Fail when any field cannot be defaulted.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    tag: str | None,
    strict: bool,
) -> None:
    """fieldfill: apply annotation defaults to dataclasses and pydantic models."""
    settings = FieldfillSettings.from_cli(
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
        tag=tag,
        strict=strict,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
