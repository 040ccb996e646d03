"""``stackwright defaults`` — Show the default stack.

Exit Codes:
    0 — Always (informational command, cannot fail).
"""

from __future__ import annotations

import click

from stackwright.cli.output import print_json, print_stack
from stackwright.stack import default_stack


@click.command("defaults")
@click.option(
    "--json", "as_json",
    is_flag=True,
    default=False,
    help="Output the default stack as JSON.",
)
def defaults_command(as_json: bool) -> None:
    """Print the default stack used to fill missing categories."""
    if as_json:
        print_json(default_stack())
    else:
        print_stack(default_stack(), title="Default Stack")
