"""fs-mirror core - incrementally mirror a tree description into an output directory."""

from fsmirror_core.apply import (
    ApplyOptions,
    ApplyReport,
    FSMirrorError,
    OutputPathError,
    UnexpectedNodeTypeError,
    UnsupportedFileTypeError,
    UnsupportedPlatformError,
    apply_tree,
    can_symlink,
)
from fsmirror_core.config import MirrorConfig, UpdaterConfig, load_config
from fsmirror_core.tree import (
    DirectoryIndex,
    DirectoryRef,
    FileRef,
    NodeCache,
    make_node,
    resolve,
)
from fsmirror_core.updater import FSUpdater, UpdaterState

__version__ = "0.1.0"

__all__ = [
    "ApplyOptions",
    "ApplyReport",
    "DirectoryIndex",
    "DirectoryRef",
    "FSMirrorError",
    "FSUpdater",
    "FileRef",
    "MirrorConfig",
    "NodeCache",
    "OutputPathError",
    "UnexpectedNodeTypeError",
    "UnsupportedFileTypeError",
    "UnsupportedPlatformError",
    "UpdaterConfig",
    "UpdaterState",
    "apply_tree",
    "can_symlink",
    "load_config",
    "make_node",
    "resolve",
]
