"""Subcommand modules for archctl.

register_commands() uses deferred imports so ``archctl --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root group."""
    # --- Groups ---
    from archctl.commands.agents import agents
    from archctl.commands.skills import skills

    cli.add_command(agents)
    cli.add_command(skills)

    # --- Standalone commands ---
    from archctl.commands.check import check
    from archctl.commands.init_cmd import init_cmd
    from archctl.commands.route import classify, plan
    from archctl.commands.serve import serve

    cli.add_command(plan)
    cli.add_command(classify)
    cli.add_command(check)
    cli.add_command(init_cmd)
    cli.add_command(serve)
