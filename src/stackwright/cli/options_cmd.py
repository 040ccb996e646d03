"""``stackwright options <stack-file> <category> <option>...`` — Check candidate options.

Tries each option against the stack and reports which ones a stack builder
should offer and which it should disable.

Exit Codes:
    0 — All options checked (whether or not any were disabled).
    1 — The stack file could not be loaded.
"""

from __future__ import annotations

import click

from stackwright.cli.output import print_json, print_option_compatibility
from stackwright.config import load_stack
from stackwright.core.compatibility import CompatibilityResolver
from stackwright.exceptions import ConfigError


@click.command("options")
@click.argument("stack_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("category")
@click.argument("options", nargs=-1, required=True)
@click.option(
    "--json", "as_json",
    is_flag=True,
    default=False,
    help="Output the disabled options as JSON.",
)
def options_command(
    stack_file: str, category: str, options: tuple[str, ...], as_json: bool
) -> None:
    """Check which OPTIONS of CATEGORY are compatible with STACK_FILE."""
    try:
        stack = load_stack(stack_file)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    disabled = CompatibilityResolver().disabled_options(stack, category, options)

    if as_json:
        print_json({
            "category": category,
            "options": list(options),
            "disabled": disabled,
        })
        return

    print_option_compatibility(category, options, disabled)
