"""Click base classes that add an ``--examples`` flag.

Usage examples are long; keeping them out of ``--help`` leaves the help
screen short.  ``archctl <cmd> --examples`` prints them and exits.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Adds an eager ``--examples`` option when an ``examples`` text is given."""

    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if examples:
            self.params.append(self._examples_option(examples))

    @staticmethod
    def _examples_option(examples: str) -> click.Option:
        def _print(ctx: click.Context, _param: click.Parameter, requested: bool) -> None:
            if not requested or ctx.resilient_parsing:
                return
            click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
            ctx.exit(0)

        return click.Option(
            ["--examples"],
            is_flag=True,
            is_eager=True,
            expose_value=False,
            callback=_print,
            help="Show usage examples and exit.",
        )


class ArchCommand(_ExamplesMixin, click.Command):
    """Command accepting ``examples=`` in its decorator."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class ArchGroup(_ExamplesMixin, click.Group):
    """Group accepting ``examples=``; its subcommands default to :class:`ArchCommand`."""

    command_class = ArchCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
