"""Platform probes and link primitives."""

from __future__ import annotations

import functools
import logging
import os
import tempfile

from fsmirror_core.apply.models import UnsupportedPlatformError

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=None)
def can_symlink() -> bool:
    """Probe once per process whether this user can create symlinks."""
    with tempfile.TemporaryDirectory(prefix="fsmirror-") as tmp:
        target = os.path.join(tmp, "target")
        os.mkdir(target)
        try:
            os.symlink(target, os.path.join(tmp, "link"), target_is_directory=True)
        except (OSError, NotImplementedError) as exc:
            logger.info("Symlinks unavailable, falling back to copy mode: %s", exc)
            return False
    return True


def create_dir_link(target: str, link_path: str, symlink_mode: bool) -> None:
    """Create a directory link at *link_path* pointing at *target*.

    In copy mode on Windows this is an NTFS junction, which needs no
    symlink privilege. Elsewhere both modes produce a directory symlink.
    """
    if symlink_mode or os.name != "nt":
        os.symlink(target, link_path, target_is_directory=True)
        return
    try:
        import _winapi
    except ImportError as exc:
        raise UnsupportedPlatformError(
            "Directory junctions are not available on this interpreter"
        ) from exc
    if not hasattr(_winapi, "CreateJunction"):
        raise UnsupportedPlatformError(
            "Directory junctions are not available on this interpreter"
        )
    _winapi.CreateJunction(target, link_path)


def is_link(path: str) -> bool:
    """True for symlinks and (on Windows) junctions."""
    if os.path.islink(path):
        return True
    isjunction = getattr(os.path, "isjunction", None)
    return bool(isjunction and isjunction(path))
