"""Service dependency graph and initialization ordering.

Re-exports the public names so callers can write
``from stackwright.core.dependency import ServiceDependencyGraph``.
"""

from stackwright.core.dependency.graph import ServiceDependencyGraph
from stackwright.exceptions import CircularDependencyError

__all__ = [
    "CircularDependencyError",
    "ServiceDependencyGraph",
]
