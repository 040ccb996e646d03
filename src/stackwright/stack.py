"""Stack configuration model: categories, defaults, and value comparison.

A *stack configuration* maps a category name (``backend``, ``database``,
``webFrontend``, ...) to either a single option identifier or an ordered list
of identifiers for multi-select categories. Option identifiers are opaque
strings; nothing in this module validates them.

Category identity and canonical ordering are fixed here rather than derived
at runtime, so every consumer (resolver notes, CLI tables, command
generation) walks the categories in the same order.
"""

from __future__ import annotations

from typing import Any, Mapping, Union

StackValue = Union[str, list[str]]
StackConfiguration = dict[str, StackValue]


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

CATEGORY_ORDER: tuple[str, ...] = (
    "webFrontend",
    "nativeFrontend",
    "runtime",
    "backend",
    "api",
    "database",
    "orm",
    "dbSetup",
    "auth",
    "uiSystem",
    "compliance",
    "packageManager",
    "addons",
    "examples",
    "webDeploy",
    "git",
    "install",
)

MULTI_SELECT_CATEGORIES: frozenset[str] = frozenset({
    "webFrontend",
    "nativeFrontend",
    "compliance",
    "addons",
    "examples",
})

_DISPLAY_NAMES: dict[str, str] = {
    "webFrontend": "Web Frontend",
    "nativeFrontend": "Native Frontend",
    "runtime": "Runtime",
    "backend": "Backend",
    "api": "API",
    "database": "Database",
    "orm": "ORM",
    "dbSetup": "DB Setup",
    "auth": "Authentication",
    "uiSystem": "UI System",
    "compliance": "Compliance",
    "packageManager": "Package Manager",
    "addons": "Add-ons",
    "examples": "Examples",
    "webDeploy": "Web Deployment",
    "git": "Git",
    "install": "Install Dependencies",
}


def category_display_name(category: str) -> str:
    """Return the human-readable label for a category, or the key itself."""
    return _DISPLAY_NAMES.get(category, category)


def display_value(value: Any) -> str:
    """Render a category value for notes and change messages.

    Lists are joined with ", "; an empty list renders as ``none``.
    """
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value) if value else "none"
    return str(value)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_PROJECT_NAME = "my-xaheen-app"

DEFAULT_STACK: Mapping[str, StackValue] = {
    "projectName": DEFAULT_PROJECT_NAME,
    "webFrontend": ["tanstack-router"],
    "nativeFrontend": ["none"],
    "runtime": "bun",
    "backend": "hono",
    "database": "sqlite",
    "orm": "drizzle",
    "dbSetup": "none",
    "auth": "true",
    "packageManager": "bun",
    "uiSystem": "xala",
    "compliance": ["none"],
    "addons": ["turborepo"],
    "examples": [],
    "git": "true",
    "install": "true",
    "api": "trpc",
    "webDeploy": "none",
}

# Values that a Convex backend forces; they count as "default" for such stacks.
_CONVEX_IMPLIED: dict[str, StackValue] = {
    "runtime": "none",
    "database": "none",
    "orm": "none",
    "api": "none",
    "auth": "false",
    "dbSetup": "none",
    "examples": ["todo"],
}


def copy_stack(stack: Mapping[str, Any]) -> StackConfiguration:
    """Return a detached copy of *stack*; list and tuple values become new lists."""
    return {
        key: list(value) if isinstance(value, (list, tuple)) else value
        for key, value in stack.items()
    }


def default_stack() -> StackConfiguration:
    """Return a fresh, mutable copy of ``DEFAULT_STACK``."""
    return copy_stack(DEFAULT_STACK)


def with_defaults(partial: Mapping[str, Any]) -> StackConfiguration:
    """Fill every key missing from *partial* with its default value.

    Multi-select categories given as a bare string are wrapped in a list, so
    ``{"addons": "pwa"}`` becomes ``{"addons": ["pwa"]}``. Booleans, as YAML
    and JSON read ``git: false``, become the strings ``"true"`` and
    ``"false"`` that toggle categories hold.
    """
    stack = default_stack()
    for key, value in copy_stack(partial).items():
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif key in MULTI_SELECT_CATEGORIES and isinstance(value, str):
            value = [value]
        stack[key] = value
    return stack


def is_stack_default(stack: Mapping[str, Any], key: str, value: Any) -> bool:
    """Check whether *value* counts as the default for *key* within *stack*.

    List values are compared order-insensitively. For a Convex backend the
    values Convex forces (``runtime: none``, ``examples: [todo]``, ...) are
    treated as defaults so they never surface as explicit flags.
    """
    if stack.get("backend") == "convex" and key in _CONVEX_IMPLIED:
        if _values_equal(_CONVEX_IMPLIED[key], value):
            return True

    return _values_equal(DEFAULT_STACK.get(key), value)


def _values_equal(left: Any, right: Any) -> bool:
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return sorted(map(str, left)) == sorted(map(str, right))
    return left == right
