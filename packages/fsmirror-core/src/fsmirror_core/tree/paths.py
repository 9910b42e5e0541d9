"""Path normalization helpers used when building tree nodes."""

from __future__ import annotations

import os


def clean_up_path(path: str | os.PathLike[str]) -> str:
    """Return *path* as an absolute, normalized string.

    Symlinks are not resolved here; only ``.``/``..`` components, doubled
    separators and trailing separators are collapsed.
    """
    return clean_up_resolved_path(os.path.abspath(os.fspath(path)))


def clean_up_resolved_path(path: str) -> str:
    """Normalize a path that is already absolute and symlink-free."""
    cleaned = os.path.normpath(path)
    drive, rest = os.path.splitdrive(cleaned)
    if drive:
        cleaned = drive[0].upper() + drive[1:] + rest
    return cleaned


def is_resolved(path: str) -> bool:
    """True when *path* is absolute and has no ``.`` or ``..`` components.

    Link targets in this form can be used as-is; anything else needs a full
    ``realpath`` since ``..`` after a symlinked directory cannot be collapsed
    lexically.
    """
    if not os.path.isabs(path):
        return False
    parts = path.replace("\\", "/").split("/")
    return not any(part in (".", "..") for part in parts)
