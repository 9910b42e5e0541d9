"""FSUpdater: keeps an output directory in sync with successive trees."""

from __future__ import annotations

import enum
import logging
import os
import time

from fsmirror_core.apply.engine import apply_tree, remove_path
from fsmirror_core.apply.models import ApplyOptions, ApplyReport, OutputPathError
from fsmirror_core.apply.platform import can_symlink
from fsmirror_core.config.models import MirrorConfig, UpdaterConfig
from fsmirror_core.tree.models import TreeNode
from fsmirror_core.tree.paths import clean_up_path

logger = logging.getLogger(__name__)

_RECOVERY_MESSAGE = (
    "Incremental updating failed, but FSUpdater was able to recover by\n"
    "rebuilding the output from scratch. This can be caused by\n"
    "\n"
    "* a bug in the code calling FSUpdater, or\n"
    "* a bug in FSUpdater itself.\n"
    "\n"
    "Fixing this issue will improve performance. Original error: %s"
)


class UpdaterState(str, enum.Enum):
    EMPTY = "empty"
    MIRRORED = "mirrored"
    ERRORED = "errored"


class FSUpdater:
    """Mirrors tree nodes at *output_path* with minimal filesystem work.

    The updater owns *output_path* exclusively. It must be absent or an
    empty directory when the updater is created.
    """

    def __init__(
        self,
        output_path: str | os.PathLike[str],
        config: UpdaterConfig | None = None,
        *,
        symlink_mode: bool | None = None,
        retry: bool | None = None,
    ) -> None:
        config = config or UpdaterConfig()
        overrides = {}
        if symlink_mode is not None:
            overrides["symlink_mode"] = symlink_mode
        if retry is not None:
            overrides["retry"] = retry
        if overrides:
            config = config.model_copy(update=overrides)
        if config.symlink_mode is None:
            config = config.model_copy(update={"symlink_mode": can_symlink()})

        self.output_path = clean_up_path(output_path)
        self.config = config
        self.options = ApplyOptions(symlink_mode=bool(config.symlink_mode))

        _take_over_output_path(self.output_path)
        self._state = UpdaterState.EMPTY
        self._tree: TreeNode | None = None

    @classmethod
    def from_config(
        cls, output_path: str | os.PathLike[str], config: MirrorConfig
    ) -> FSUpdater:
        """Build an updater from a loaded :class:`MirrorConfig`.

        Only the ``updater`` section applies here. Pair it with
        ``NodeCache.from_config(config.scanner)`` for the trees.
        """
        return cls(output_path, config.updater)

    @property
    def state(self) -> UpdaterState:
        return self._state

    @property
    def tree(self) -> TreeNode | None:
        """The tree currently mirrored at the output path."""
        return self._tree

    def update(self, tree: TreeNode | None) -> ApplyReport:
        """Make the output path reflect *tree* and return what was done."""
        start = time.monotonic()
        report = self._update(tree, self.config.retry)
        report.duration = time.monotonic() - start
        logger.debug(
            "Updated %s: %d created dirs, %d links, %d copies, %d removals, %d skipped",
            self.output_path,
            report.directories_created,
            report.links_created,
            report.files_copied,
            report.entries_removed,
            report.skipped,
        )
        return report

    def _update(self, tree: TreeNode | None, retry: bool) -> ApplyReport:
        if self._state is UpdaterState.ERRORED:
            logger.info("Previous update failed, wiping %s", self.output_path)
            remove_path(self.output_path)
            self._state = UpdaterState.EMPTY
            self._tree = None

        report = ApplyReport(full_rebuild=self._tree is None)
        try:
            apply_tree(self.output_path, self._tree, tree, self.options, report)
        except Exception as err:
            self._state = UpdaterState.ERRORED
            self._tree = None
            if not retry:
                raise
            report = self._update(tree, False)
            report.recovered = True
            logger.warning(_RECOVERY_MESSAGE, err, exc_info=err)
            return report
        except BaseException:
            # Interrupted mid-apply; the output may be half written.
            self._state = UpdaterState.ERRORED
            self._tree = None
            raise

        self._state = UpdaterState.MIRRORED
        self._tree = tree
        return report


def _take_over_output_path(path: str) -> None:
    """Check the output path is absent or an empty directory, then clear it."""
    if os.path.islink(path):
        raise OutputPathError(path, "must not be a symlink")
    if not os.path.lexists(path):
        return
    if not os.path.isdir(path):
        raise OutputPathError(path, "must not be a file")
    if os.listdir(path):
        raise OutputPathError(path, "must be an empty directory")
    os.rmdir(path)
