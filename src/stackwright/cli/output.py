"""Rich output formatting helpers for the Stackwright CLI.

Provides consistent terminal output for compatibility results, option
checks, service initialization orders, cycle reports, and stack listings.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from stackwright.core.compatibility import CompatibilityResult
from stackwright.stack import category_display_name, display_value

console = Console()


def print_compatibility_result(result: CompatibilityResult) -> None:
    """Print the changes and per-category notes of a resolution.

    Args:
        result: Output of ``CompatibilityResolver.resolve``.
    """
    if not result.changed:
        console.print(
            Panel("[bold green]Stack is compatible[/bold green]",
                  title="Compatibility")
        )
        return

    console.print(
        Panel(f"[bold yellow]{len(result.changes)} change(s) applied[/bold yellow]",
              title="Compatibility")
    )

    changes_table = Table(title="Changes", show_header=True, header_style="bold")
    changes_table.add_column("Category", style="bold")
    changes_table.add_column("Change")
    for change in result.changes:
        changes_table.add_row(category_display_name(change.category), change.message)
    console.print(changes_table)

    notes_table = Table(title="Notes", show_header=True, header_style="bold")
    notes_table.add_column("Category", style="bold")
    notes_table.add_column("Note")
    for category, entry in result.notes.items():
        for note in entry.notes:
            notes_table.add_row(category_display_name(category), note)
    console.print(notes_table)


def print_stack(stack: Mapping[str, Any], title: str = "Stack") -> None:
    """Print a stack configuration as a two-column table."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Category", style="bold")
    table.add_column("Selection")
    for key, value in stack.items():
        table.add_row(category_display_name(key), display_value(value))
    console.print(table)


def print_option_compatibility(
    category: str, options: Iterable[str], disabled: Iterable[str]
) -> None:
    """Print each candidate option with its availability."""
    blocked = set(disabled)
    table = Table(
        title=f"{category_display_name(category)} Options",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Option", style="bold")
    table.add_column("Status")
    for option in options:
        if option in blocked:
            table.add_row(option, "[red]disabled[/red]")
        else:
            table.add_row(option, "[green]available[/green]")
    console.print(table)


def print_initialization_order(order: list[str]) -> None:
    """Print a numbered service initialization order."""
    if not order:
        console.print("[dim]No services registered.[/dim]")
        return

    table = Table(title="Initialization Order", show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Service", style="bold")
    for idx, service in enumerate(order, start=1):
        table.add_row(str(idx), service)
    console.print(table)


def print_cycle(cycle: list[str]) -> None:
    """Print a circular dependency path."""
    path = Text(" -> ".join(cycle), style="bold red")
    console.print(Panel(path, title="Circular dependency detected"))


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout.

    Args:
        data: Any JSON-serializable data structure.
    """
    console.print_json(json.dumps(data, default=str))
