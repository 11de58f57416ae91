"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import typer

app = typer.Typer(
    name="arch-updates",
    help="Arch Updates - Pending pacman, AUR and devel package updates.",
    no_args_is_help=True,
)


def _register_commands() -> None:
    from arch_updates.cli.commands.check_cmd import app as check_app
    from arch_updates.cli.commands.watch_cmd import app as watch_app

    app.add_typer(check_app, name="check", help="Check for updates once")
    app.add_typer(watch_app, name="watch", help="Poll for updates continuously")


_register_commands()


def main() -> None:
    app()
