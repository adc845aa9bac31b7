"""Command base class adding an on-demand ``--examples`` flag.

Usage examples stay out of ``--help``; ``slnctl add --examples`` prints them
and exits before any argument is validated.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    command = ctx.command
    assert isinstance(command, SlnCommand)
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(textwrap.indent(command.examples or "", "  "))
    ctx.exit(0)


class SlnCommand(click.Command):
    """A click command carrying optional usage examples.

    The ``examples`` text is dedented, so it can be written as an indented
    triple-quoted string next to the decorator.
    """

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_print_examples,
                    help="Show usage examples and exit.",
                )
            )
