"""Compatibility data models: rules, filters, notes, and results.

Rules are plain data: a trigger predicate over the stack, a map of forced
overrides, and optional filters that strip disallowed members from
multi-select categories. The resolver interprets them; nothing here has
behavior beyond small accessors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from stackwright.stack import StackConfiguration, StackValue

Trigger = Callable[[Mapping[str, Any]], bool]


# ---------------------------------------------------------------------------
# Rule definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CategoryFilter:
    """Removes disallowed members from a multi-select category.

    Attributes:
        category: The multi-select category to filter (e.g. ``webFrontend``).
        disallowed: Option identifiers to remove.
        target_note: Note appended to ``category`` when something was removed.
        source_note: Note appended to the rule's source category.
        message: Change-record message.
    """

    category: str
    disallowed: frozenset[str]
    target_note: str
    source_note: str
    message: str


@dataclass(frozen=True)
class CompatibilityRule:
    """A named, triggerable group of forced overrides and filters.

    ``target_note`` and ``source_note`` are ``str.format`` templates receiving
    ``category`` (display name of the overridden category) and ``value``
    (display form of the forced value).

    Attributes:
        name: Stable identifier; used as the change-record category tag.
        source: Category whose selection triggers the rule.
        trigger: Predicate over the current stack configuration.
        overrides: Category -> forced value, applied in mapping order.
        filters: Multi-select filters applied after the overrides.
        priority: Lower runs first. Ties keep table order.
        target_note: Template for the note on an overridden category.
        source_note: Template for the note on the source category.
    """

    name: str
    source: str
    trigger: Trigger
    overrides: Mapping[str, StackValue] = field(default_factory=dict)
    filters: tuple[CategoryFilter, ...] = ()
    priority: int = 100
    target_note: str = "{category} will be set to '{value}'."
    source_note: str = "Requires {category} to be '{value}'."

    def applies_to(self, stack: Mapping[str, Any]) -> bool:
        """Return True when the trigger holds for *stack*."""
        return bool(self.trigger(stack))


# ---------------------------------------------------------------------------
# Resolution output
# ---------------------------------------------------------------------------


@dataclass
class CategoryNotes:
    """Human-readable notes for one category plus an issue flag."""

    notes: list[str] = field(default_factory=list)
    has_issue: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"notes": list(self.notes), "hasIssue": self.has_issue}


@dataclass(frozen=True)
class ChangeRecord:
    """One discrete change applied by the resolver, kept for audit and undo.

    Attributes:
        category: The tag of the rule that caused the change.
        message: What changed, e.g. "ORM set to 'none'".
    """

    category: str
    message: str


@dataclass
class CompatibilityResult:
    """Outcome of resolving a stack configuration.

    Attributes:
        adjusted_stack: The corrected configuration, or None if no override
            or filter changed anything.
        notes: Per-category notes; contains every canonical category.
        changes: Ordered change records.
    """

    adjusted_stack: StackConfiguration | None
    notes: dict[str, CategoryNotes] = field(default_factory=dict)
    changes: list[ChangeRecord] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """True when the resolver adjusted the input."""
        return self.adjusted_stack is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-compatible data."""
        return {
            "adjustedStack": self.adjusted_stack,
            "notes": {cat: n.to_dict() for cat, n in self.notes.items()},
            "changes": [
                {"category": c.category, "message": c.message}
                for c in self.changes
            ],
        }
