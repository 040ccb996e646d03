"""Service dependency graph: initialization ordering and cycle diagnostics.

Edges read "service S depends on service D" and are stored twice, forward
(S -> D) and reverse (D -> S), so both "what does X need" and "what needs X"
are single lookups. Adjacency sets are insertion-ordered dicts, which keeps
every query and the traversal order deterministic.

Ordering uses depth-first post-order with three-color marking: a service is
emitted only after all of its dependencies, and meeting a service that is
still in progress on the current path is a cycle. The same traversal feeds
both ``get_initialization_order`` and ``get_circular_dependency_path``.

Thread safety: This class is NOT thread-safe. External synchronization is
required for concurrent access.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from stackwright.exceptions import CircularDependencyError

logger = logging.getLogger(__name__)

_WHITE, _GRAY, _BLACK = 0, 1, 2


class ServiceDependencyGraph:
    """Directed graph of named services and the services they depend on.

    Cycles are not rejected on insertion; services often register before
    all of their dependencies are known. Detection happens when an order is
    requested.

    Example::

        graph = ServiceDependencyGraph()
        graph.add_dependency("web", "api")
        graph.add_dependency("api", "db")
        graph.get_initialization_order()  # ["db", "api", "web"]
    """

    def __init__(self) -> None:
        self._dependencies: dict[str, dict[str, None]] = {}
        self._dependents: dict[str, dict[str, None]] = {}

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, Iterable[str]]
    ) -> ServiceDependencyGraph:
        """Build a graph from ``{service: [dependency, ...]}``.

        Services listed with no dependencies are still registered.
        """
        graph = cls()
        for service, deps in mapping.items():
            graph.add_service(service)
            for dep in deps:
                graph.add_dependency(service, dep)
        return graph

    # -- Mutation -----------------------------------------------------------

    def add_service(self, service: str) -> None:
        """Register *service* with no edges. Idempotent."""
        self._dependencies.setdefault(service, {})
        self._dependents.setdefault(service, {})

    def add_dependency(self, service: str, depends_on: str) -> None:
        """Record that *service* depends on *depends_on*.

        Both services are registered in both adjacency maps. Adding the same
        edge twice has no further effect.
        """
        self.add_service(service)
        self.add_service(depends_on)
        self._dependencies[service][depends_on] = None
        self._dependents[depends_on][service] = None

    def remove_service(self, service: str) -> None:
        """Remove *service* and every edge touching it. No-op if unknown."""
        self._dependencies.pop(service, None)
        self._dependents.pop(service, None)
        for deps in self._dependencies.values():
            deps.pop(service, None)
        for deps in self._dependents.values():
            deps.pop(service, None)

    def clear(self) -> None:
        """Reset to the empty graph."""
        self._dependencies.clear()
        self._dependents.clear()

    # -- Queries ------------------------------------------------------------

    def get_dependencies(self, service: str) -> list[str]:
        """Return the services *service* depends on, in insertion order."""
        return list(self._dependencies.get(service, ()))

    def get_dependents(self, service: str) -> list[str]:
        """Return the services that depend on *service*, in insertion order."""
        return list(self._dependents.get(service, ()))

    def get_all_services(self) -> set[str]:
        """Return every service known to either adjacency map."""
        return set(self._dependencies) | set(self._dependents)

    def __contains__(self, service: object) -> bool:
        return service in self._dependencies or service in self._dependents

    def __len__(self) -> int:
        return len(self.get_all_services())

    # -- Ordering and cycles ------------------------------------------------

    def get_initialization_order(self) -> list[str]:
        """Return services ordered so dependencies come before dependents.

        Every service appears exactly once. Roots are taken in registration
        order.

        Raises:
            CircularDependencyError: If the graph contains a cycle. The
                error's ``service`` is the node revisited while in progress
                and ``cycle`` is the path that closed the loop.
        """
        order, cycle = self._traverse()
        if cycle is not None:
            raise CircularDependencyError(cycle[-1], cycle)
        return order

    def has_circular_dependency(self) -> bool:
        """Return True if ``get_initialization_order`` would raise a cycle error."""
        try:
            self.get_initialization_order()
        except CircularDependencyError:
            return True
        return False

    def get_circular_dependency_path(self) -> list[str] | None:
        """Return the first cycle found by the traversal, or None.

        The path runs from the repeated service's first occurrence through
        the repeated service, e.g. ``["a", "b", "c", "a"]``. With several
        cycles present only the first one reached is reported.
        """
        _, cycle = self._traverse()
        return cycle

    def _traverse(self) -> tuple[list[str], list[str] | None]:
        """Depth-first post-order over all services.

        The walk keeps its own stack of ``(service, pending dependencies)``
        frames, so chain length is not bounded by the interpreter's
        recursion limit.

        Returns:
            ``(order, cycle)``. ``cycle`` is None when the graph is acyclic;
            otherwise ``order`` is partial and must not be used.
        """
        color: dict[str, int] = {}
        path: list[str] = []
        order: list[str] = []

        for root in self._dependencies:
            if color.get(root, _WHITE) != _WHITE:
                continue

            color[root] = _GRAY
            path.append(root)
            frames = [(root, iter(self._dependencies.get(root, ())))]
            while frames:
                service, pending = frames[-1]
                dep = next(pending, None)
                if dep is None:
                    frames.pop()
                    path.pop()
                    color[service] = _BLACK
                    order.append(service)
                    continue

                state = color.get(dep, _WHITE)
                if state == _BLACK:
                    continue
                if state == _GRAY:
                    cycle = path[path.index(dep):] + [dep]
                    logger.debug("Cycle detected: %s", " -> ".join(cycle))
                    return order, cycle

                color[dep] = _GRAY
                path.append(dep)
                frames.append((dep, iter(self._dependencies.get(dep, ()))))

        return order, None

    # -- Diagnostics --------------------------------------------------------

    def to_graphviz(self) -> str:
        """Render the graph in Graphviz DOT format."""
        lines = ["digraph ServiceDependencies {"]
        for service, deps in self._dependencies.items():
            for dep in deps:
                lines.append(f'  "{service}" -> "{dep}";')
        lines.append("}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, list[str]]:
        """Return the forward adjacency as ``{service: [dependency, ...]}``."""
        return {service: list(deps) for service, deps in self._dependencies.items()}
