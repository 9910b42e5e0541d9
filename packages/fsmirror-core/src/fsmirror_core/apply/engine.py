"""Diff/apply engine: turn the old mirrored tree into the new one on disk."""

from __future__ import annotations

import logging
import os
import shutil
import stat

from fsmirror_core.apply.models import (
    ApplyOptions,
    ApplyReport,
    InvalidEntryNameError,
    UnexpectedNodeTypeError,
)
from fsmirror_core.apply.platform import create_dir_link, is_link
from fsmirror_core.tree.models import DirectoryIndex, DirectoryRef, FileRef

logger = logging.getLogger(__name__)


def remove_path(path: str) -> bool:
    """Delete whatever is at *path* without following links.

    Links (including junctions) are unlinked, real directories are removed
    recursively. Returns False if nothing was there.
    """
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        return False
    if is_link(path):
        if os.name == "nt" and os.path.isdir(path):
            os.rmdir(path)
        else:
            os.unlink(path)
    elif stat.S_ISDIR(st.st_mode):
        shutil.rmtree(path)
    else:
        os.unlink(path)
    return True


def _check_entry_name(output_path: str, name: object) -> None:
    if (
        not isinstance(name, str)
        or name in ("", ".", "..")
        or "/" in name
        or (os.sep != "/" and os.sep in name)
        or (os.altsep is not None and os.altsep in name)
    ):
        raise InvalidEntryNameError(output_path, name)


def _is_unchanged(old: object, new: object, options: ApplyOptions) -> bool:
    # Identical objects are presumed unchanged; callers must not mutate a
    # node after handing it to an update.
    if old is new:
        return True
    if options.symlink_mode:
        if isinstance(old, FileRef) and isinstance(new, FileRef):
            return old.path == new.path
        if isinstance(old, DirectoryRef) and isinstance(new, DirectoryRef):
            return old.same_target(new)
        return False
    return (
        isinstance(old, FileRef)
        and isinstance(new, FileRef)
        and old.path == new.path
        and old.cached_stat is not None
        and old.cached_stat.same_file(new.stat())
    )


def _copy_file(source: FileRef, output_path: str) -> None:
    st = source.stat()
    # Exclusive create: anything already at output_path is an internal
    # inconsistency and must not be overwritten.
    with open(source.path, "rb") as src, open(output_path, "xb") as dst:
        shutil.copyfileobj(src, dst)
    os.chmod(output_path, st.permissions)
    os.utime(output_path, ns=(st.atime_ns, st.mtime_ns))


def apply_tree(
    output_path: str,
    old: object,
    new: object,
    options: ApplyOptions,
    report: ApplyReport | None = None,
) -> ApplyReport:
    """Make *output_path* reflect *new*, given that it currently reflects *old*.

    Either node may be None (absent). Stale entries are always removed
    before new ones are created, so two objects never have to share a name.
    """
    if report is None:
        report = ApplyReport()

    if _is_unchanged(old, new, options):
        report.skipped += 1
        return report

    if not (isinstance(old, DirectoryIndex) and isinstance(new, DirectoryIndex)):
        if isinstance(old, DirectoryIndex) or (
            not options.symlink_mode and isinstance(old, DirectoryRef)
        ):
            if remove_path(output_path):
                report.entries_removed += 1
        elif old is not None:
            os.unlink(output_path)
            report.entries_removed += 1

    if isinstance(new, DirectoryIndex):
        if isinstance(old, DirectoryIndex):
            for name, child in old.items():
                if name not in new:
                    apply_tree(os.path.join(output_path, name), child, None, options, report)
        else:
            os.mkdir(output_path)
            report.directories_created += 1
            old = DirectoryIndex()
        for name, child in new.items():
            _check_entry_name(output_path, name)
            apply_tree(os.path.join(output_path, name), old.get(name), child, options, report)
    elif isinstance(new, DirectoryRef):
        create_dir_link(new.path, output_path, options.symlink_mode)
        report.links_created += 1
    elif isinstance(new, FileRef):
        if options.symlink_mode:
            os.symlink(new.path, output_path)
            report.links_created += 1
        else:
            _copy_file(new, output_path)
            report.files_copied += 1
    elif new is not None:
        raise UnexpectedNodeTypeError(new)

    return report
