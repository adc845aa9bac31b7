"""Entry point: the ``slnctl`` click group and its global options."""

from __future__ import annotations

import click

from slnctl import __version__
from slnctl.commands import register_commands
from slnctl.commands._context import AppContext
from slnctl.config.settings import SlnSettings


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="slnctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print affected project paths only.")
@click.option("-v", "--verbose", is_flag=True, help="Show details and debug logging.")
@click.option("--log-json", is_flag=True, help="Emit logs on stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Use this slnctl.toml instead of searching for one.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """slnctl: add, remove, and list the projects of a Visual Studio solution.

    Projects are placed in solution folders that follow their location on
    disk; folders left empty by a removal are pruned.
    """
    settings = SlnSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
