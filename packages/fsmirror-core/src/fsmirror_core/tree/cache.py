"""Node cache and directory scanner.

Resolving the same path twice through one :class:`NodeCache` returns the
same node object, which lets the apply engine skip unchanged subtrees with
a cheap identity check. Symlinks are followed until a concrete file or
directory is reached, so generated links never chain through other links.
"""

from __future__ import annotations

import logging
import os
import stat
import time
from collections.abc import Callable

from fsmirror_core.apply.models import UnsupportedFileTypeError
from fsmirror_core.config.models import ScannerConfig
from fsmirror_core.tree.models import DirectoryIndex, DirectoryRef, FileRef, FileStat
from fsmirror_core.tree.paths import clean_up_path, clean_up_resolved_path, is_resolved

logger = logging.getLogger(__name__)

# Seconds a directory scan stays valid. Long enough to cover the repeated
# probes of one rebuild pass.
CACHE_TTL = 5.0


class NodeCache:
    """Read-through map from canonical path to tree node. Never evicts."""

    def __init__(
        self,
        index_ttl: float = CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.index_ttl = index_ttl
        self._clock = clock
        self._nodes: dict[str, FileRef | DirectoryRef] = {}

    @classmethod
    def from_config(cls, config: ScannerConfig) -> NodeCache:
        return cls(index_ttl=config.index_ttl)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, path: object) -> bool:
        return path in self._nodes

    def clear(self) -> None:
        self._nodes.clear()

    # ------------------------------------------------------------------
    # Node lookup
    # ------------------------------------------------------------------

    def directory(self, path: str) -> DirectoryRef:
        """Cached DirectoryRef for an already-cleaned path."""
        node = self._nodes.get(path)
        if node is None:
            node = DirectoryRef(path, cache=self)
            self._nodes[path] = node
        return node

    def file(self, path: str, stats: FileStat | None = None) -> FileRef:
        """Cached FileRef for an already-cleaned path."""
        node = self._nodes.get(path)
        if node is None:
            node = FileRef(path, stats)
            self._nodes[path] = node
        return node

    def resolve(self, path: str | os.PathLike[str]) -> FileRef | DirectoryRef:
        """Clean up *path* and resolve it to a concrete node."""
        return self.resolve_cleaned(clean_up_path(path))

    def resolve_cleaned(
        self, path: str, entry: os.DirEntry[str] | None = None
    ) -> FileRef | DirectoryRef:
        """Resolve an already-cleaned path, following symlinks.

        When *entry* comes from a directory scan its cached type is used to
        avoid an extra ``lstat``.
        """
        if entry is not None:
            if entry.is_dir(follow_symlinks=False):
                return self.directory(path)
            if entry.is_file(follow_symlinks=False):
                return self.file(path)
            if not entry.is_symlink():
                raise UnsupportedFileTypeError(path)
        else:
            st = os.lstat(path)
            if stat.S_ISDIR(st.st_mode):
                return self.directory(path)
            if stat.S_ISREG(st.st_mode):
                return self.file(path, FileStat.from_stat_result(st))
            if not stat.S_ISLNK(st.st_mode):
                raise UnsupportedFileTypeError(path)

        target = os.readlink(path)
        if not is_resolved(target) or os.path.islink(target):
            # Most links we see were created by other build steps and point
            # straight at absolute targets. Anything else goes through
            # realpath, which handles `linked_dir/..` and raises on loops.
            target = os.path.realpath(path, strict=True)
        return self.resolve_cleaned(clean_up_resolved_path(target))

    # ------------------------------------------------------------------
    # Directory scanning
    # ------------------------------------------------------------------

    def scan(self, directory: DirectoryRef) -> DirectoryIndex:
        """Return the index of *directory*, rescanning once the TTL expires."""
        if directory._index is not None:
            if directory._index_built_at + self.index_ttl > self._clock():
                return directory._index

        index = DirectoryIndex()
        with os.scandir(directory.path) as it:
            entries = sorted(it, key=lambda e: e.name)
        for entry in entries:
            index[entry.name] = self.resolve_cleaned(
                os.path.join(directory.path, entry.name), entry
            )

        logger.debug("Scanned %s (%d entries)", directory.path, len(index))
        directory._index_built_at = self._clock()
        directory._index = index
        return index


_DEFAULT_CACHE: NodeCache | None = None


def default_cache() -> NodeCache:
    """The process-wide cache used by the module-level helpers."""
    global _DEFAULT_CACHE
    if _DEFAULT_CACHE is None:
        _DEFAULT_CACHE = NodeCache()
    return _DEFAULT_CACHE


def resolve(path: str | os.PathLike[str]) -> FileRef | DirectoryRef:
    """Resolve *path* through the process-wide cache."""
    return default_cache().resolve(path)


def make_node(path: str | os.PathLike[str], cleaned_up: bool = False) -> FileRef | DirectoryRef:
    """Like :func:`resolve`, optionally skipping path cleanup."""
    if cleaned_up:
        return default_cache().resolve_cleaned(os.fspath(path))
    return resolve(path)
