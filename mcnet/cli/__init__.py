"""
Command-line interface for mcnet.

This module provides the main entry point for the mcnet CLI.
"""

import click
import importlib
import logging
import pkgutil
from pathlib import Path

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: int) -> None:
    """Set the root log level from the number of ``-v`` flags."""
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


# Create the main Click group
@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="mcnet")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v info, -vv debug)")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """Motif clustering statistics for networks."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)


# Dynamically load all command modules
def register_commands() -> None:
    """Dynamically discover and register all command modules."""
    commands_pkg = Path(__file__).parent / "commands"

    for _, module_name, _ in pkgutil.iter_modules([str(commands_pkg)]):
        module = importlib.import_module(f"mcnet.cli.commands.{module_name}")

        # Look for register_*_commands functions and call them
        for name, func in module.__dict__.items():
            if name.startswith("register_") and name.endswith("_commands"):
                func(cli)


register_commands()


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})
