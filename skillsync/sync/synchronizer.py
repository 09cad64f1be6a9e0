"""Directory synchronizer — reconcile a target root with a source root.

The target root's contents are the only "previous state": every run
rediscovers the source units, copies what is new, replaces what changed,
leaves identical units untouched and optionally deletes orphans.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from skillsync.models.units import (
    SyncAction,
    SyncOptions,
    SyncReport,
    Unit,
    UnitKind,
)
from skillsync.sync.compare import ByteComparator, Comparator
from skillsync.sync.discovery import discover_units
from skillsync.sync.errors import NotFoundError, UnitIOError

logger = logging.getLogger(__name__)


class DirectorySynchronizer:
    """Makes a target root's set of units match a source root's.

    One instance handles one unit kind. The comparison strategy is injected so
    the same logic serves skills (directories) and agents (files).
    """

    def __init__(self, kind: UnitKind, comparator: Comparator | None = None):
        self.kind = kind
        self.comparator: Comparator = comparator or ByteComparator()

    def sync(
        self,
        source_root: str | Path,
        target_root: str | Path,
        options: SyncOptions | None = None,
    ) -> SyncReport:
        """Synchronize ``target_root`` with ``source_root``.

        Raises:
            NotFoundError: If ``source_root`` is not a directory. The target
                root is left untouched.
            NameCollisionError: If two source units map to the same name.
            UnitIOError: On the first filesystem error. Units processed before
                it keep their new state.
        """
        options = options or SyncOptions()
        source_root = Path(source_root)
        target_root = Path(target_root)

        if not source_root.is_dir():
            raise NotFoundError(source_root)

        report = SyncReport(
            kind=self.kind,
            source_root=source_root,
            target_root=target_root,
            dry_run=options.dry_run,
        )

        source_units = discover_units(source_root, self.kind, options.suffix)

        if not options.dry_run:
            try:
                target_root.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise UnitIOError(target_root.name, target_root, "create", e) from e

        for unit in source_units:
            action = self._sync_unit(unit, target_root / unit.name, options.dry_run)
            report.add(unit.name, action)

        if options.remove_orphans:
            source_names = {u.name for u in source_units}
            for orphan in discover_units(
                target_root, self.kind, options.suffix, check_collisions=False
            ):
                if orphan.name in source_names:
                    continue
                if not options.dry_run:
                    logger.info("Removing orphan %s", orphan.source_path)
                    self._remove(orphan.name, orphan.source_path)
                report.add(orphan.name, SyncAction.REMOVED)

        logger.debug("Sync %s -> %s: %s", source_root, target_root, report.summary())
        return report

    def _sync_unit(self, unit: Unit, target_path: Path, dry_run: bool) -> SyncAction:
        if not target_path.exists() and not target_path.is_symlink():
            if not dry_run:
                logger.info("Installing %s -> %s", unit.name, target_path)
                self._copy(unit, target_path)
            return SyncAction.NEW

        try:
            identical = self.comparator(unit.source_path, target_path)
        except OSError as e:
            raise UnitIOError(unit.name, target_path, "compare", e) from e

        if identical:
            logger.debug("Unchanged: %s", unit.name)
            return SyncAction.UNCHANGED

        if not dry_run:
            logger.info("Updating %s -> %s", unit.name, target_path)
            self._remove(unit.name, target_path)
            self._copy(unit, target_path)
        return SyncAction.UPDATED

    def _copy(self, unit: Unit, target_path: Path) -> None:
        try:
            if unit.source_path.is_dir():
                shutil.copytree(unit.source_path, target_path)
            else:
                shutil.copy2(unit.source_path, target_path)
        except OSError as e:
            raise UnitIOError(unit.name, target_path, "copy", e) from e

    def _remove(self, name: str, path: Path) -> None:
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as e:
            raise UnitIOError(name, path, "remove", e) from e


def sync_skills(
    source_root: str | Path,
    target_root: str | Path,
    options: SyncOptions | None = None,
    comparator: Comparator | None = None,
) -> SyncReport:
    """Synchronize skill directories."""
    return DirectorySynchronizer(UnitKind.DIRECTORY, comparator).sync(
        source_root, target_root, options
    )


def sync_agents(
    source_root: str | Path,
    target_root: str | Path,
    options: SyncOptions | None = None,
    comparator: Comparator | None = None,
) -> SyncReport:
    """Synchronize agent files."""
    return DirectorySynchronizer(UnitKind.FILE, comparator).sync(
        source_root, target_root, options
    )
