"""Install configuration — which platforms get which units, and where.

Defaults reproduce the stock layout: skills and agents from the repository go
to ``~/.claude`` and ``~/.copilot``. A YAML file can replace the platform list.
The home directory is always passed in; nothing here reads the environment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from skillsync.models.units import DEFAULT_AGENT_SUFFIX
from skillsync.sync.errors import ConfigError

SKILLS_DIR = "skills"
AGENTS_DIR = "agents"
MIRROR_DIR = "copilot"


@dataclass
class Platform:
    """An assistant whose configuration directory receives units."""

    name: str
    home_dir: str  # Relative to the user's home unless absolute
    source_subdir: str = ""  # Repo subdirectory preferred as source, if it exists

    def target_root(self, home: Path) -> Path:
        path = Path(self.home_dir)
        if self.home_dir == "~" or self.home_dir.startswith("~/"):
            return home / path.relative_to("~")
        if path.is_absolute():
            return path
        return home / path

    def skills_target(self, home: Path) -> Path:
        return self.target_root(home) / SKILLS_DIR

    def agents_target(self, home: Path) -> Path:
        return self.target_root(home) / AGENTS_DIR

    def skills_source(self, repo_root: Path) -> Path:
        return _preferred_source(repo_root, self.source_subdir, SKILLS_DIR)

    def agents_source(self, repo_root: Path) -> Path:
        return _preferred_source(repo_root, self.source_subdir, AGENTS_DIR)


def _preferred_source(repo_root: Path, subdir: str, kind_dir: str) -> Path:
    """Use ``<repo>/<subdir>/<kind>`` when it exists, else ``<repo>/<kind>``."""
    if subdir:
        override = repo_root / subdir / kind_dir
        if override.is_dir():
            return override
    return repo_root / kind_dir


DEFAULT_PLATFORMS = [
    Platform(name="claude", home_dir=".claude"),
    Platform(name="copilot", home_dir=".copilot", source_subdir=MIRROR_DIR),
]


@dataclass
class InstallConfig:
    """Top-level install configuration."""

    platforms: list[Platform] = field(default_factory=lambda: list(DEFAULT_PLATFORMS))
    agent_suffix: str = DEFAULT_AGENT_SUFFIX
    remove_orphans: bool = False

    @property
    def platform_names(self) -> list[str]:
        return [p.name for p in self.platforms]

    def select(self, names: list[str] | None) -> list[Platform]:
        """Return the platforms named in ``names`` (all when None), in config order.

        Raises:
            ConfigError: If a name is not configured.
        """
        if names is None:
            return list(self.platforms)
        unknown = [n for n in names if n not in self.platform_names]
        if unknown:
            raise ConfigError(f"Unknown platform(s): {', '.join(unknown)}")
        return [p for p in self.platforms if p.name in names]


def load_config(path: str | Path) -> InstallConfig:
    """Load an install configuration from a YAML file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping")

    platforms_data = data.get("platforms") or []
    if not isinstance(platforms_data, list):
        raise ConfigError(f"'platforms' in {path} must be a list")
    platforms = [_load_platform(entry, path) for entry in platforms_data]

    names = [p.name for p in platforms]
    if len(names) != len(set(names)):
        raise ConfigError(f"Duplicate platform names in {path}")

    suffix = data.get("agent_suffix", DEFAULT_AGENT_SUFFIX)
    if not isinstance(suffix, str) or not suffix:
        raise ConfigError(f"'agent_suffix' in {path} must be a non-empty string")

    remove_orphans = data.get("remove_orphans", False)
    if not isinstance(remove_orphans, bool):
        raise ConfigError(f"'remove_orphans' in {path} must be true or false")

    return InstallConfig(
        platforms=platforms or list(DEFAULT_PLATFORMS),
        agent_suffix=suffix,
        remove_orphans=remove_orphans,
    )


def _load_platform(entry, path: str | Path) -> Platform:
    if not isinstance(entry, dict):
        raise ConfigError(f"Each platform in {path} must be a mapping")

    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ConfigError(f"Each platform in {path} needs a string 'name'")

    home_dir = entry.get("home_dir", f".{name}")
    source_subdir = entry.get("source_subdir", "")
    for key, value in (("home_dir", home_dir), ("source_subdir", source_subdir)):
        if not isinstance(value, str):
            raise ConfigError(f"'{key}' of platform '{name}' in {path} must be a string")
    if not home_dir:
        raise ConfigError(f"'home_dir' of platform '{name}' in {path} must not be empty")

    return Platform(name=name, home_dir=home_dir, source_subdir=source_subdir)
