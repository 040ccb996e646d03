"""``stackwright command <stack-file>`` — Print the equivalent scaffolder command.

Exit Codes:
    0 — Command generated.
    1 — The stack file could not be loaded.
"""

from __future__ import annotations

import click

from stackwright.config import load_stack
from stackwright.core.command import generate_command
from stackwright.core.compatibility import CompatibilityResolver
from stackwright.exceptions import ConfigError


@click.command("command")
@click.argument("stack_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--resolve/--no-resolve",
    default=True,
    help="Resolve incompatibilities before generating (default: on).",
)
def command_command(stack_file: str, resolve: bool) -> None:
    """Print the scaffolder invocation that recreates STACK_FILE."""
    try:
        stack = load_stack(stack_file)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if resolve:
        result = CompatibilityResolver().resolve(stack)
        if result.adjusted_stack is not None:
            stack = result.adjusted_stack

    click.echo(generate_command(stack))
