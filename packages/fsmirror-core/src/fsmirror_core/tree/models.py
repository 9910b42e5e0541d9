"""Tree node types describing the desired contents of an output directory."""

from __future__ import annotations

import enum
import os
import stat as stat_module
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from fsmirror_core.tree.paths import clean_up_path

if TYPE_CHECKING:
    from fsmirror_core.tree.cache import NodeCache


@dataclass(frozen=True)
class FileStat:
    """The subset of ``os.stat_result`` the engine cares about."""

    ino: int
    size: int
    mode: int
    atime_ns: int
    mtime_ns: int

    @classmethod
    def from_stat_result(cls, st: os.stat_result) -> FileStat:
        return cls(
            ino=st.st_ino,
            size=st.st_size,
            mode=st.st_mode,
            atime_ns=st.st_atime_ns,
            mtime_ns=st.st_mtime_ns,
        )

    @property
    def permissions(self) -> int:
        return stat_module.S_IMODE(self.mode)

    def same_file(self, other: FileStat) -> bool:
        """Compare inode, size and mode.

        Modification time is intentionally not part of the comparison.
        """
        return (
            self.ino == other.ino
            and self.size == other.size
            and self.mode == other.mode
        )


@dataclass(eq=False)
class FileRef:
    """A concrete (non-symlink) file on disk."""

    path: str
    _stat: FileStat | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.path = clean_up_path(self.path)

    def __fspath__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"FileRef({self.path!r})"

    @property
    def cached_stat(self) -> FileStat | None:
        """The stat captured at resolution time, if any."""
        return self._stat

    def stat(self) -> FileStat:
        """Return the memoized stat, capturing it on first use."""
        if self._stat is None:
            self._stat = FileStat.from_stat_result(os.stat(self.path))
        return self._stat


@dataclass(eq=False)
class DirectoryRef:
    """A concrete directory on disk whose index is scanned lazily."""

    path: str
    cache: NodeCache | None = field(default=None, repr=False)
    _index: DirectoryIndex | None = field(default=None, repr=False)
    _index_built_at: float = field(default=0.0, repr=False)

    def __post_init__(self) -> None:
        self.path = clean_up_path(self.path)

    def __fspath__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"DirectoryRef({self.path!r})"

    def same_target(self, other: object) -> bool:
        return isinstance(other, DirectoryRef) and other.path == self.path

    def get_index(self) -> DirectoryIndex:
        """Scan this directory (or reuse a recent scan) into a DirectoryIndex."""
        if self.cache is None:
            from fsmirror_core.tree.cache import default_cache

            self.cache = default_cache()
        return self.cache.scan(self)


class DirectoryIndex(dict):
    """In-memory directory: entry name -> child tree node."""

    def __repr__(self) -> str:
        return f"DirectoryIndex({dict.__repr__(self)})"


TreeNode = Union[FileRef, DirectoryRef, DirectoryIndex]


class NodeKind(str, enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    INDEX = "index"


def node_kind(node: object) -> NodeKind | None:
    """Tag for a tree node, or None if *node* is not one."""
    if isinstance(node, DirectoryIndex):
        return NodeKind.INDEX
    if isinstance(node, DirectoryRef):
        return NodeKind.DIRECTORY
    if isinstance(node, FileRef):
        return NodeKind.FILE
    return None


def node_key(node: FileRef | DirectoryRef) -> tuple[NodeKind, str]:
    """Stable identity token for a path-backed node."""
    kind = node_kind(node)
    if kind is None or kind is NodeKind.INDEX:
        raise TypeError(f"node_key() needs a FileRef or DirectoryRef, got {node!r}")
    return kind, node.path
