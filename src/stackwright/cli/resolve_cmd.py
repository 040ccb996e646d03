"""``stackwright resolve <stack-file>`` — Resolve incompatible stack selections.

Loads a stack file, applies the compatibility rules, and reports every forced
change with notes on the categories involved.

Exit Codes:
    0 — Resolution completed (whether or not anything changed).
    1 — The stack file could not be loaded.
"""

from __future__ import annotations

import click

from stackwright.cli.output import print_compatibility_result, print_json, print_stack
from stackwright.config import load_stack
from stackwright.core.compatibility import CompatibilityResolver
from stackwright.exceptions import ConfigError


@click.command("resolve")
@click.argument("stack_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--json", "as_json",
    is_flag=True,
    default=False,
    help="Output the full result as JSON.",
)
@click.option(
    "--show-stack",
    is_flag=True,
    default=False,
    help="Also print the resolved stack.",
)
def resolve_command(stack_file: str, as_json: bool, show_stack: bool) -> None:
    """Resolve incompatible selections in STACK_FILE and explain each change.

    STACK_FILE is a JSON or YAML mapping of category to selection; missing
    categories take their default values.
    """
    try:
        stack = load_stack(stack_file)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    result = CompatibilityResolver().resolve(stack)

    if as_json:
        print_json(result.to_dict())
        return

    print_compatibility_result(result)
    if show_stack:
        print_stack(result.adjusted_stack or stack, title="Resolved Stack")
