"""``stackwright order`` and ``stackwright graph`` — Service ordering commands.

``order`` prints the initialization order of the services in a services
file, dependencies first. ``graph`` prints the dependency graph in Graphviz
DOT format.

Exit Codes:
    0 — Order computed (or graph printed).
    1 — Circular dependency found, or the services file could not be loaded.
"""

from __future__ import annotations

import sys

import click

from stackwright.cli.output import print_cycle, print_initialization_order, print_json
from stackwright.config import load_services
from stackwright.core.dependency import CircularDependencyError, ServiceDependencyGraph
from stackwright.exceptions import ConfigError


def _load(services_file: str) -> ServiceDependencyGraph:
    try:
        return load_services(services_file)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@click.command("order")
@click.argument("services_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--json", "as_json",
    is_flag=True,
    default=False,
    help="Output the order (or cycle) as JSON.",
)
def order_command(services_file: str, as_json: bool) -> None:
    """Print the initialization order for SERVICES_FILE.

    Exit code 0 on success, 1 if the services form a cycle.
    """
    graph = _load(services_file)

    try:
        order = graph.get_initialization_order()
    except CircularDependencyError as exc:
        if as_json:
            print_json({"order": None, "cycle": exc.cycle})
        else:
            print_cycle(exc.cycle)
        sys.exit(1)

    if as_json:
        print_json({"order": order, "cycle": None})
    else:
        print_initialization_order(order)


@click.command("graph")
@click.argument("services_file", type=click.Path(exists=True, dir_okay=False))
def graph_command(services_file: str) -> None:
    """Print SERVICES_FILE as a Graphviz DOT digraph."""
    click.echo(_load(services_file).to_graphviz())
