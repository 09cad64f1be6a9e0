"""Errors raised by the synchronizer and the layers around it.

Every error is fatal to the current run. Because each unit action is
idempotent, recovery is to fix the cause and run again.
"""

from __future__ import annotations

from pathlib import Path


class SyncError(Exception):
    """Base class for all skillsync errors."""


class NotFoundError(SyncError):
    """A required source root does not exist."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(f"Source root not found: {self.path}")


class UnitIOError(SyncError):
    """Reading, writing or deleting a single unit failed."""

    def __init__(self, name: str, path: str | Path, operation: str, error: OSError):
        self.name = name
        self.path = Path(path)
        self.operation = operation
        self.error = error
        super().__init__(f"Failed to {operation} '{name}' at {self.path}: {error}")


class NameCollisionError(SyncError):
    """Two source units resolve to the same target name."""

    def __init__(self, first: str, second: str, root: str | Path):
        self.first = first
        self.second = second
        self.root = Path(root)
        super().__init__(
            f"Units '{first}' and '{second}' in {self.root} map to the same target name"
        )


class ConfigError(SyncError):
    """The configuration file is missing fields or malformed."""


class HookInstallError(SyncError):
    """A git hook could not be installed."""
