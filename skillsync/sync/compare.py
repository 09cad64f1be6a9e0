"""Content comparison strategies.

The synchronizer asks a comparator whether a target unit already matches its
source. Comparators are plain callables so tests and callers can inject their
own; the two shipped here compare bytes directly or by SHA-256 digest.
"""

from __future__ import annotations

import filecmp
import hashlib
import os
from pathlib import Path
from typing import Protocol

_CHUNK_SIZE = 64 * 1024


class Comparator(Protocol):
    """Return True when ``target`` has exactly the same content as ``source``."""

    def __call__(self, source: Path, target: Path) -> bool: ...


def _tree_entries(root: Path) -> dict[str, str]:
    """Map each relative path under ``root`` to ``"dir"`` or ``"file"``.

    Symlinked files and directories are followed, matching what
    ``shutil.copytree`` materialises in the target.
    """
    entries: dict[str, str] = {}
    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        base = Path(dirpath).relative_to(root)
        for name in dirnames:
            entries[(base / name).as_posix()] = "dir"
        for name in filenames:
            entries[(base / name).as_posix()] = "file"
    return entries


def _same_shape(source: Path, target: Path) -> bool:
    if source.is_dir():
        return target.is_dir()
    return target.is_file()


class ByteComparator:
    """Byte-for-byte comparison, recursive for directories."""

    def __call__(self, source: Path, target: Path) -> bool:
        if not _same_shape(source, target):
            return False
        if source.is_file():
            return self._same_file(source, target)

        source_entries = _tree_entries(source)
        if source_entries != _tree_entries(target):
            return False
        return all(
            self._same_file(source / rel, target / rel)
            for rel, entry_type in sorted(source_entries.items())
            if entry_type == "file"
        )

    @staticmethod
    def _same_file(source: Path, target: Path) -> bool:
        return filecmp.cmp(source, target, shallow=False)


class HashComparator:
    """Digest comparison; a directory digests its sorted (path, type, content) listing."""

    def __init__(self, algorithm: str = "sha256"):
        self.algorithm = algorithm

    def __call__(self, source: Path, target: Path) -> bool:
        if not _same_shape(source, target):
            return False
        return self.digest(source) == self.digest(target)

    def digest(self, path: Path) -> str:
        if path.is_file():
            return self._file_digest(path)

        h = hashlib.new(self.algorithm)
        for rel, entry_type in sorted(_tree_entries(path).items()):
            h.update(rel.encode("utf-8"))
            h.update(b"\0")
            h.update(entry_type.encode("ascii"))
            if entry_type == "file":
                h.update(self._file_digest(path / rel).encode("ascii"))
            h.update(b"\n")
        return h.hexdigest()

    def _file_digest(self, path: Path) -> str:
        h = hashlib.new(self.algorithm)
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                h.update(chunk)
        return h.hexdigest()
