"""The object every subcommand receives through ``@click.pass_obj``."""

from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING

import click

from archctl.config.logging import configure_logging
from archctl.output.formatters import OutputSettings, format_result
from archctl.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from archctl.config.settings import ArchSettings
    from archctl.infrastructure.workspace import Workspace
    from archctl.services.result import ServiceResult


class AppContext:
    """Settings plus a lazily built workspace.

    Building the workspace reads the catalog and loads plugins, which
    ``--help`` and ``--version`` have no use for.
    """

    def __init__(self, settings: ArchSettings, *, working_dir: Path | None = None) -> None:
        self.settings = settings
        # Directory given by -C, or the cwd.
        # -C directory, else the cwd; relative command paths resolve against it.
        self.working_dir = working_dir or Path.cwd()
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @cached_property
    def workspace(self) -> Workspace:
        from archctl.infrastructure.workspace import Workspace

        workspace = Workspace(self.settings)
        if self.settings.plugins_enabled:
            workspace.init_plugins()
        return workspace

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and exit 1 if it failed.

        Successful output goes to stdout with warnings on stderr (JSON output
        already carries them).  Failures go to stderr.
        """
        opts = self.output_settings
        text = format_result(result, settings=opts)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if not opts.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
