"""AppContext: what every command receives through ``@click.pass_obj``.

The root group builds it once per invocation. It sets up logging, hands out
services, and owns the mapping from a ServiceResult to streams and exit codes.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from slnctl.config.logging import configure_logging
from slnctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from slnctl.config.settings import SlnSettings
    from slnctl.services.membership import MembershipService
    from slnctl.services.result import ServiceResult


class AppContext:
    """Per-invocation state shared by all subcommands."""

    def __init__(self, settings: SlnSettings) -> None:
        self.settings = settings
        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def membership(self) -> MembershipService:
        """A membership service bound to the current settings."""
        from slnctl.services.membership import MembershipService

        return MembershipService(self.settings)

    @cached_property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and translate failure into exit status 1.

        Successful output goes to stdout (nothing at all when the rendering is
        empty, as in quiet mode with no affected paths). Warnings and failures
        go to stderr.
        """
        text = format_result(result, settings=self.output_settings)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        if text:
            click.echo(text)
        # The JSON payload already carries its warnings.
        if not self.output_settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
