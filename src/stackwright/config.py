"""Load stack and services files from disk.

Both file kinds may be JSON (``.json``) or YAML (``.yaml`` / ``.yml``).

A stack file is a mapping of category to selection. Only the categories that
differ from the defaults need to be present::

    projectName: shop
    backend: convex
    webFrontend: [next, nuxt]

A services file maps each service to the services it depends on, either at
the top level or under a ``services`` key::

    services:
      web: [api]
      api: [db, cache]
      db: []
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from stackwright.core.dependency import ServiceDependencyGraph
from stackwright.exceptions import ConfigError
from stackwright.stack import CATEGORY_ORDER, StackConfiguration, with_defaults

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})
_KNOWN_STACK_KEYS = frozenset(CATEGORY_ORDER) | {"projectName"}


def _read_document(path: Path) -> Any:
    """Parse a JSON or YAML document, choosing the parser by file suffix."""
    suffix = path.suffix.lower()
    if suffix != ".json" and suffix not in _YAML_SUFFIXES:
        raise ConfigError(
            f"Unsupported file type {suffix or '(none)'!r} for {path}; "
            "expected .json, .yaml or .yml"
        )

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    try:
        if suffix == ".json":
            return json.loads(raw)
        return yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid {suffix[1:].upper()} in {path}: {exc}") from exc


def load_stack(path: str | Path) -> StackConfiguration:
    """Load a stack file and fill missing categories from the defaults.

    Args:
        path: Path to a ``.json``, ``.yaml`` or ``.yml`` stack file.

    Returns:
        A complete stack configuration.

    Raises:
        ConfigError: If the file cannot be read or is not a mapping.
    """
    path = Path(path)
    data = _read_document(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Stack file {path} must contain a mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_STACK_KEYS)
    if unknown:
        logger.warning("Unknown categories in %s: %s", path, ", ".join(unknown))

    return with_defaults(data)


def load_services(path: str | Path) -> ServiceDependencyGraph:
    """Load a services file into a dependency graph.

    Args:
        path: Path to a ``.json``, ``.yaml`` or ``.yml`` services file.

    Returns:
        A ``ServiceDependencyGraph`` with every listed service registered.

    Raises:
        ConfigError: If the file cannot be read, is not a mapping, or a
            service's dependencies are not a list of names.
    """
    path = Path(path)
    data = _read_document(path)
    if isinstance(data, dict) and isinstance(data.get("services"), dict):
        data = data["services"]
    if not isinstance(data, dict):
        raise ConfigError(f"Services file {path} must contain a mapping")

    mapping: dict[str, list[str]] = {}
    for service, deps in data.items():
        if deps is None:
            deps = []
        elif isinstance(deps, str):
            deps = [deps]
        if not isinstance(deps, list):
            raise ConfigError(
                f"Dependencies of {service!r} in {path} must be a list"
            )
        mapping[str(service)] = [str(dep) for dep in deps]

    logger.debug("Loaded %d service(s) from %s", len(mapping), path)
    return ServiceDependencyGraph.from_mapping(mapping)
