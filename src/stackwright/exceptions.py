"""Stackwright exception hierarchy.

All public exceptions inherit from StackwrightError, giving callers a single
base class to catch when they want to handle any Stackwright-specific failure
without swallowing unrelated errors.

The compatibility resolver is total and never raises; the exceptions below
come from file loading and service ordering.
"""

from __future__ import annotations


class StackwrightError(Exception):
    """Base exception for all Stackwright errors."""


class ConfigError(StackwrightError):
    """Raised when a stack or services file cannot be loaded.

    Covers unreadable files, unsupported extensions, invalid JSON/YAML,
    and documents whose top-level shape is not a mapping.
    """


class ResolutionError(StackwrightError):
    """Raised when services cannot be put into a valid initialization order."""


class CircularDependencyError(ResolutionError):
    """Raised when the service dependency graph contains a cycle.

    Attributes:
        service: The service revisited while still in progress on the
            traversal path. Always a member of the cycle.
        cycle: The cycle witnessed by the traversal, first and last element
            being the same service (e.g. ``["a", "b", "c", "a"]``).
    """

    def __init__(self, service: str, cycle: list[str] | None = None) -> None:
        self.service = service
        self.cycle = list(cycle) if cycle else [service, service]
        super().__init__(
            f"Circular dependency detected involving service: {service}"
        )
