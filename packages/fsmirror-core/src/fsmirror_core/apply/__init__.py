"""Apply engine: reconcile an output directory with a tree description."""

from fsmirror_core.apply.engine import apply_tree, remove_path
from fsmirror_core.apply.models import (
    ApplyOptions,
    ApplyReport,
    FSMirrorError,
    InvalidEntryNameError,
    OutputPathError,
    UnexpectedNodeTypeError,
    UnsupportedFileTypeError,
    UnsupportedPlatformError,
)
from fsmirror_core.apply.platform import can_symlink

__all__ = [
    "ApplyOptions",
    "ApplyReport",
    "FSMirrorError",
    "InvalidEntryNameError",
    "OutputPathError",
    "UnexpectedNodeTypeError",
    "UnsupportedFileTypeError",
    "UnsupportedPlatformError",
    "apply_tree",
    "can_symlink",
    "remove_path",
]
