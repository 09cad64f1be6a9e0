"""Installer — push skills and agents to assistant config directories.

Two flows share the synchronizer:

- ``install``: repo ``skills/`` and ``agents/`` to each platform's home
  directory. Orphans are kept unless asked otherwise.
- ``mirror``: repo ``skills/`` and ``agents/`` to the in-repo ``copilot/``
  tree. Orphans are always removed so the mirror converges exactly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from skillsync.config import AGENTS_DIR, MIRROR_DIR, SKILLS_DIR, InstallConfig, Platform
from skillsync.models.units import SyncOptions, SyncReport, UnitKind
from skillsync.sync.compare import Comparator
from skillsync.sync.discovery import discover_units
from skillsync.sync.synchronizer import DirectorySynchronizer

logger = logging.getLogger(__name__)


@dataclass
class PlatformResult:
    """Outcome of installing into one platform."""

    platform: str
    skills: SyncReport = field(default_factory=SyncReport)
    agents: SyncReport = field(default_factory=SyncReport)

    @property
    def changed_count(self) -> int:
        return self.skills.changed_count + self.agents.changed_count

    @property
    def reports(self) -> list[tuple[str, SyncReport]]:
        return [(SKILLS_DIR, self.skills), (AGENTS_DIR, self.agents)]


class Installer:
    """Runs skill and agent syncs for a repository checkout."""

    def __init__(
        self,
        repo_root: str | Path,
        config: InstallConfig | None = None,
        comparator: Comparator | None = None,
    ):
        self.repo_root = Path(repo_root)
        self.config = config or InstallConfig()
        self.skills = DirectorySynchronizer(UnitKind.DIRECTORY, comparator)
        self.agents = DirectorySynchronizer(UnitKind.FILE, comparator)

    def _options(self, remove_orphans: bool, dry_run: bool) -> SyncOptions:
        return SyncOptions(
            remove_orphans=remove_orphans,
            dry_run=dry_run,
            suffix=self.config.agent_suffix,
        )

    def install(
        self,
        home: str | Path,
        platforms: list[Platform] | None = None,
        remove_orphans: bool | None = None,
        dry_run: bool = False,
        missing_ok: bool = False,
    ) -> list[PlatformResult]:
        """Install into every selected platform under ``home``.

        Args:
            home: The user's home directory; platform dirs resolve against it.
            platforms: Platforms to install into (default: all configured).
            remove_orphans: Override the configured orphan policy.
            dry_run: Report planned actions without writing anything.
            missing_ok: Treat a missing source root as empty instead of failing.
        """
        home = Path(home)
        if remove_orphans is None:
            remove_orphans = self.config.remove_orphans
        options = self._options(remove_orphans, dry_run)

        results = []
        for platform in platforms if platforms is not None else self.config.platforms:
            logger.info("Installing to %s (%s)", platform.name, platform.target_root(home))
            result = PlatformResult(platform=platform.name)
            result.skills = self._run(
                self.skills,
                platform.skills_source(self.repo_root),
                platform.skills_target(home),
                options,
                missing_ok,
            )
            result.agents = self._run(
                self.agents,
                platform.agents_source(self.repo_root),
                platform.agents_target(home),
                options,
                missing_ok,
            )
            results.append(result)
        return results

    def mirror(self, dry_run: bool = False) -> PlatformResult:
        """Mirror repo skills and agents into the ``copilot/`` tree."""
        options = self._options(remove_orphans=True, dry_run=dry_run)
        mirror_root = self.repo_root / MIRROR_DIR
        return PlatformResult(
            platform=MIRROR_DIR,
            skills=self.skills.sync(
                self.repo_root / SKILLS_DIR, mirror_root / SKILLS_DIR, options
            ),
            agents=self.agents.sync(
                self.repo_root / AGENTS_DIR, mirror_root / AGENTS_DIR, options
            ),
        )

    def installed_units(self) -> dict[str, list[str]]:
        """Names of the skills and agents the repository provides."""
        suffix = self.config.agent_suffix
        return {
            SKILLS_DIR: [
                u.display_name
                for u in discover_units(self.repo_root / SKILLS_DIR, UnitKind.DIRECTORY)
            ],
            AGENTS_DIR: [
                u.name[: -len(suffix)]
                for u in discover_units(self.repo_root / AGENTS_DIR, UnitKind.FILE, suffix)
            ],
        }

    @staticmethod
    def _run(
        synchronizer: DirectorySynchronizer,
        source: Path,
        target: Path,
        options: SyncOptions,
        missing_ok: bool,
    ) -> SyncReport:
        if missing_ok and not source.is_dir():
            logger.warning("Source %s not found, nothing to install", source)
            return SyncReport(
                kind=synchronizer.kind,
                source_root=source,
                target_root=target,
                dry_run=options.dry_run,
            )
        return synchronizer.sync(source, target, options)
