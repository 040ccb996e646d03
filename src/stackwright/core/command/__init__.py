"""Scaffolder command-line synthesis from stack configurations."""

from stackwright.core.command.generator import (
    EXPLICIT_DATABASE_SETUPS,
    KNOWN_ADDONS,
    generate_command,
)

__all__ = [
    "EXPLICIT_DATABASE_SETUPS",
    "KNOWN_ADDONS",
    "generate_command",
]
