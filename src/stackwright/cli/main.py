"""Stackwright CLI — Stack compatibility and service ordering.

Entry point for the ``stackwright`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    resolve   — Resolve incompatible selections in a stack file.
    command   — Print the scaffolder command that recreates a stack.
    options   — Check which options of a category fit a stack.
    order     — Print the initialization order of a services file.
    graph     — Print a services file as Graphviz DOT.
    defaults  — Show the default stack.

Usage::

    stackwright resolve stack.yaml
    stackwright resolve stack.yaml --json
    stackwright command stack.yaml
    stackwright options stack.yaml webFrontend next nuxt solid
    stackwright order services.yaml
    stackwright graph services.yaml | dot -Tpng -o services.png
"""

from __future__ import annotations

import logging

import click

from stackwright import __version__
from stackwright.cli.command_cmd import command_command
from stackwright.cli.defaults_cmd import defaults_command
from stackwright.cli.options_cmd import options_command
from stackwright.cli.order_cmd import graph_command, order_command
from stackwright.cli.resolve_cmd import resolve_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Stackwright: Resolve stack compatibility and order service startup.

    Normalize a chosen technology stack so incompatible options never
    coexist, reproduce it as a scaffolder command, and compute a safe
    initialization order for interdependent services.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


# Register all subcommands
cli.add_command(resolve_command)
cli.add_command(command_command)
cli.add_command(options_command)
cli.add_command(order_command)
cli.add_command(graph_command)
cli.add_command(defaults_command)
