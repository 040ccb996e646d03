"""Compatibility resolver: normalize a stack so incompatible choices cannot coexist.

The resolver walks an ordered rule table once. Every triggered rule applies
its overrides and filters to a working copy of the stack, and every change is
explained twice: on the category that was changed and on the category whose
selection forced it. The input mapping is never mutated.

Guarantees:

- ``adjusted_stack`` is None if and only if nothing changed.
- ``notes`` has an entry for every canonical category.
- Resolution is total: unknown option identifiers pass through untouched.
- For the default rule table, resolving an adjusted stack again changes
  nothing.

The same resolution answers option lookups: an option is compatible with a
stack when selecting it survives a resolution of the resulting trial stack.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from stackwright.core.compatibility.models import (
    CategoryFilter,
    CategoryNotes,
    ChangeRecord,
    CompatibilityResult,
    CompatibilityRule,
)
from stackwright.core.compatibility.rules import DEFAULT_RULES
from stackwright.stack import (
    CATEGORY_ORDER,
    MULTI_SELECT_CATEGORIES,
    StackConfiguration,
    StackValue,
    category_display_name,
    copy_stack,
    display_value,
)

logger = logging.getLogger(__name__)


class CompatibilityResolver:
    """Resolves incompatible selections in a stack configuration.

    Args:
        rules: Rule table to evaluate. Defaults to ``DEFAULT_RULES``. Rules
            are sorted by ``priority``; equal priorities keep the given order.
        categories: Canonical categories that always receive a notes entry.

    Example::

        result = CompatibilityResolver().resolve({"backend": "convex", ...})
        if result.changed:
            save(result.adjusted_stack)
    """

    def __init__(
        self,
        rules: Iterable[CompatibilityRule] | None = None,
        categories: Iterable[str] = CATEGORY_ORDER,
    ) -> None:
        table = list(DEFAULT_RULES if rules is None else rules)
        self._rules: tuple[CompatibilityRule, ...] = tuple(
            sorted(table, key=lambda rule: rule.priority)
        )
        self._categories: tuple[str, ...] = tuple(categories)

    @property
    def rules(self) -> tuple[CompatibilityRule, ...]:
        """The rule table in evaluation order."""
        return self._rules

    def resolve(self, config: Mapping[str, Any]) -> CompatibilityResult:
        """Resolve *config* against the rule table.

        Args:
            config: The proposed stack configuration.

        Returns:
            A ``CompatibilityResult``. ``adjusted_stack`` is a new mapping
            when any rule changed something, otherwise None.
        """
        stack = copy_stack(config)
        notes: dict[str, CategoryNotes] = {
            category: CategoryNotes() for category in self._categories
        }
        changes: list[ChangeRecord] = []

        for rule in self._rules:
            if not rule.applies_to(stack):
                continue
            logger.debug("Compatibility rule %r triggered", rule.name)
            for category, value in rule.overrides.items():
                self._apply_override(rule, category, value, stack, notes, changes)
            for category_filter in rule.filters:
                self._apply_filter(rule, category_filter, stack, notes, changes)

        if changes:
            logger.debug("Resolution applied %d change(s)", len(changes))
        return CompatibilityResult(
            adjusted_stack=stack if changes else None,
            notes=notes,
            changes=changes,
        )

    def is_option_compatible(
        self, config: Mapping[str, Any], category: str, option: str
    ) -> bool:
        """Check whether selecting *option* in *category* would survive resolution.

        A trial stack is built from *config* with *option* selected: it
        replaces the value of a single-select category and is added to the
        members of a multi-select one. The option is compatible when
        resolving the trial leaves it selected. Changes the trial forces on
        other categories (Convex switching the database off, say) do not
        make the option incompatible.

        Args:
            config: The current stack configuration.
            category: Category the option belongs to.
            option: Option identifier to try.

        Returns:
            False if some rule overrides or filters the option away.
        """
        trial = copy_stack(config)
        if category in MULTI_SELECT_CATEGORIES:
            members = _members(trial.get(category))
            if option not in members:
                members.append(option)
            trial[category] = members
        else:
            trial[category] = option

        result = self.resolve(trial)
        if result.adjusted_stack is None:
            return True

        resolved = result.adjusted_stack.get(category)
        if category in MULTI_SELECT_CATEGORIES:
            compatible = option in _members(resolved)
        else:
            compatible = resolved == option
        if not compatible:
            logger.debug("Option %r is not compatible for %s", option, category)
        return compatible

    def disabled_options(
        self, config: Mapping[str, Any], category: str, options: Iterable[str]
    ) -> list[str]:
        """Return the members of *options* that are incompatible with *config*.

        Order follows *options*.
        """
        return [
            option for option in options
            if not self.is_option_compatible(config, category, option)
        ]

    @staticmethod
    def _apply_override(
        rule: CompatibilityRule,
        category: str,
        value: StackValue,
        stack: StackConfiguration,
        notes: dict[str, CategoryNotes],
        changes: list[ChangeRecord],
    ) -> None:
        forced = list(value) if isinstance(value, (list, tuple)) else value
        if stack.get(category) == forced:
            return

        display = category_display_name(category)
        shown = display_value(forced)
        stack[category] = forced

        _note(notes, category, rule.target_note.format(category=display, value=shown))
        if rule.source != category:
            _note(notes, rule.source, rule.source_note.format(category=display, value=shown))
        changes.append(ChangeRecord(rule.name, f"{display} set to '{shown}'"))
        logger.debug("%s: %s forced to %r", rule.name, category, forced)

    @staticmethod
    def _apply_filter(
        rule: CompatibilityRule,
        category_filter: CategoryFilter,
        stack: StackConfiguration,
        notes: dict[str, CategoryNotes],
        changes: list[ChangeRecord],
    ) -> None:
        current = stack.get(category_filter.category)
        if not isinstance(current, list):
            return

        kept = [m for m in current if m not in category_filter.disallowed]
        if len(kept) == len(current):
            return

        stack[category_filter.category] = kept
        _note(notes, category_filter.category, category_filter.target_note)
        if rule.source != category_filter.category:
            _note(notes, rule.source, category_filter.source_note)
        changes.append(ChangeRecord(rule.name, category_filter.message))
        logger.debug(
            "%s: filtered %s from %r to %r",
            rule.name,
            category_filter.category,
            current,
            kept,
        )


def _note(notes: dict[str, CategoryNotes], category: str, text: str) -> None:
    """Append *text* to a category's notes and flag it as an issue."""
    entry = notes.setdefault(category, CategoryNotes())
    entry.notes.append(text)
    entry.has_issue = True


def _members(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def resolve_stack(config: Mapping[str, Any]) -> CompatibilityResult:
    """Resolve *config* with the default rule table."""
    return CompatibilityResolver().resolve(config)


def is_option_compatible(config: Mapping[str, Any], category: str, option: str) -> bool:
    """Check *option* for *category* against the default rule table."""
    return CompatibilityResolver().is_option_compatible(config, category, option)


def disabled_options(
    config: Mapping[str, Any], category: str, options: Iterable[str]
) -> list[str]:
    """List the incompatible *options* for *category* under the default rule table."""
    return CompatibilityResolver().disabled_options(config, category, options)
