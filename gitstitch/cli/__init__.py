"""CLI entry point for git-stitch.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from gitstitch.cli.config import config_app
from gitstitch.cli.init import init_command
from gitstitch.cli.main import main_command
from gitstitch.cli.rip import rip_command, rip_main
from gitstitch.cli.stitch import stitch_command

# Main application
app = typer.Typer(
    name="git-stitch",
    help="git-stitch: combine repositories into one history and split it back",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("init")(init_command)
app.command("stitch")(stitch_command)
app.command("rip")(rip_command)

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "init_command",
    "main_command",
    "rip_command",
    "rip_main",
    "stitch_command",
]
