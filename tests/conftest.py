"""Shared fixtures for stackwright tests."""

from __future__ import annotations

import json
import pathlib
from typing import Any, Callable

import pytest
import yaml

from stackwright.stack import StackConfiguration, default_stack


@pytest.fixture
def base_stack() -> StackConfiguration:
    """A fresh copy of the default stack (backend ``hono``)."""
    return default_stack()


@pytest.fixture
def write_file(tmp_path: pathlib.Path) -> Callable[[str, Any], pathlib.Path]:
    """Write *data* as JSON or YAML depending on the file name's suffix."""

    def _write(name: str, data: Any) -> pathlib.Path:
        path = tmp_path / name
        if path.suffix == ".json":
            path.write_text(json.dumps(data))
        else:
            path.write_text(yaml.safe_dump(data, sort_keys=False))
        return path

    return _write


@pytest.fixture
def services_file(write_file) -> pathlib.Path:
    """A services file with a linear web -> api -> db chain."""
    return write_file(
        "services.yaml",
        {"services": {"web": ["api"], "api": ["db"], "db": []}},
    )


@pytest.fixture
def cyclic_services_file(write_file) -> pathlib.Path:
    """A services file where a -> b -> c -> a."""
    return write_file("cyclic.json", {"a": ["b"], "b": ["c"], "c": ["a"]})
