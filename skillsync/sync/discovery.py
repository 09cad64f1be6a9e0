"""Unit discovery — list the units of one kind directly under a root."""

from __future__ import annotations

import logging
from pathlib import Path

from skillsync.models.units import DEFAULT_AGENT_SUFFIX, Unit, UnitKind
from skillsync.sync.errors import NameCollisionError

logger = logging.getLogger(__name__)


def is_hidden(path: Path) -> bool:
    """Dot-entries are never units (.git, .DS_Store, editor swap files)."""
    return path.name.startswith(".")


def matches_kind(path: Path, kind: UnitKind, suffix: str = DEFAULT_AGENT_SUFFIX) -> bool:
    """Check if a root child has the shape of a unit of the given kind."""
    if is_hidden(path):
        return False
    if kind == UnitKind.DIRECTORY:
        return path.is_dir()
    return path.is_file() and path.name.endswith(suffix) and path.name != suffix


def discover_units(
    root: Path,
    kind: UnitKind,
    suffix: str = DEFAULT_AGENT_SUFFIX,
    check_collisions: bool = True,
) -> list[Unit]:
    """Return the units directly under ``root``, sorted by name.

    A missing root yields no units; callers that require the root to exist
    check for it first. Target roots are listed with ``check_collisions``
    off: whatever already sits there is never an error.

    Raises:
        NameCollisionError: If two names differ only by case. Targets may live
            on case-insensitive filesystems where they would overwrite each other.
    """
    if not root.is_dir():
        return []

    units = [
        Unit(name=child.name, kind=kind, source_path=child)
        for child in root.iterdir()
        if matches_kind(child, kind, suffix)
    ]
    units.sort(key=lambda u: u.name)

    if check_collisions:
        _check_collisions(units, root)

    logger.debug("Discovered %d %s unit(s) in %s", len(units), kind.value, root)
    return units


def _check_collisions(units: list[Unit], root: Path) -> None:
    seen: dict[str, str] = {}
    for unit in units:
        key = unit.name.casefold()
        if key in seen:
            raise NameCollisionError(seen[key], unit.name, root)
        seen[key] = unit.name
