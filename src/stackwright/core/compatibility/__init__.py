"""Stack compatibility rules and resolution.

All public names are re-exported here so callers can write
``from stackwright.core.compatibility import CompatibilityResolver``.
"""

from stackwright.core.compatibility.models import (
    CategoryFilter,
    CategoryNotes,
    ChangeRecord,
    CompatibilityResult,
    CompatibilityRule,
)
from stackwright.core.compatibility.rules import DEFAULT_RULES
from stackwright.core.compatibility.resolver import (
    CompatibilityResolver,
    disabled_options,
    is_option_compatible,
    resolve_stack,
)

__all__ = [
    "CategoryFilter",
    "CategoryNotes",
    "ChangeRecord",
    "CompatibilityResult",
    "CompatibilityRule",
    "CompatibilityResolver",
    "DEFAULT_RULES",
    "disabled_options",
    "is_option_compatible",
    "resolve_stack",
]
