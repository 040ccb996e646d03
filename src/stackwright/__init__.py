"""Stackwright: Stack compatibility resolution and service ordering for project scaffolding."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
