"""Tree nodes, the node cache and the directory scanner."""

from fsmirror_core.tree.cache import CACHE_TTL, NodeCache, default_cache, make_node, resolve
from fsmirror_core.tree.models import (
    DirectoryIndex,
    DirectoryRef,
    FileRef,
    FileStat,
    NodeKind,
    TreeNode,
    node_key,
    node_kind,
)
from fsmirror_core.tree.paths import clean_up_path, clean_up_resolved_path, is_resolved

__all__ = [
    "CACHE_TTL",
    "DirectoryIndex",
    "DirectoryRef",
    "FileRef",
    "FileStat",
    "NodeCache",
    "NodeKind",
    "TreeNode",
    "clean_up_path",
    "clean_up_resolved_path",
    "default_cache",
    "is_resolved",
    "make_node",
    "node_key",
    "node_kind",
    "resolve",
]
