"""Core data models for unit synchronization.

A unit is the smallest thing the synchronizer manages as one entity: a skill
directory or an agent file. A sync run produces a report of what happened to
each unit, in a deterministic order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


DEFAULT_AGENT_SUFFIX = ".md"


class UnitKind(Enum):
    """The on-disk shape of a unit."""

    DIRECTORY = "directory"  # A named subtree, e.g. a skill
    FILE = "file"  # A single named file, e.g. an agent definition


class SyncAction(Enum):
    """What the synchronizer did (or would do) to a unit."""

    NEW = "new"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    REMOVED = "removed"

    @property
    def tag(self) -> str:
        return self.name


# --- Units ---


@dataclass(frozen=True)
class Unit:
    """A named installable item discovered under a root directory."""

    name: str
    kind: UnitKind
    source_path: Path

    @property
    def display_name(self) -> str:
        """Name without the file suffix, for agent listings."""
        if self.kind == UnitKind.FILE:
            return self.source_path.stem
        return self.name


# --- Options ---


@dataclass
class SyncOptions:
    """Knobs for a single sync run."""

    remove_orphans: bool = False
    dry_run: bool = False
    suffix: str = DEFAULT_AGENT_SUFFIX  # Only used for file units


# --- Report ---


@dataclass(frozen=True)
class SyncEntry:
    """One line of a sync report."""

    name: str
    action: SyncAction

    def __str__(self) -> str:
        return f"[{self.action.tag}] {self.name}"


@dataclass
class SyncReport:
    """Ordered record of one sync run.

    Source-driven actions come first in source order, followed by removals
    in target order. Two reports are equal when their entries are equal,
    regardless of where they were produced.
    """

    entries: list[SyncEntry] = field(default_factory=list)
    kind: UnitKind | None = field(default=None, compare=False)
    source_root: Path | None = field(default=None, compare=False)
    target_root: Path | None = field(default=None, compare=False)
    dry_run: bool = field(default=False, compare=False)

    def add(self, name: str, action: SyncAction) -> SyncEntry:
        entry = SyncEntry(name=name, action=action)
        self.entries.append(entry)
        return entry

    def names(self, action: SyncAction | None = None) -> list[str]:
        """Unit names in report order, optionally filtered by action."""
        return [e.name for e in self.entries if action is None or e.action == action]

    @property
    def changed(self) -> list[SyncEntry]:
        return [e for e in self.entries if e.action != SyncAction.UNCHANGED]

    @property
    def changed_count(self) -> int:
        return len(self.changed)

    @property
    def is_noop(self) -> bool:
        return self.changed_count == 0

    def as_pairs(self) -> list[tuple[str, SyncAction]]:
        return [(e.name, e.action) for e in self.entries]

    def summary(self) -> str:
        if self.is_noop:
            return f"{len(self.entries)} unit(s), everything in sync"
        verb = "would change" if self.dry_run else "changed"
        return f"{len(self.entries)} unit(s), {self.changed_count} {verb}"
