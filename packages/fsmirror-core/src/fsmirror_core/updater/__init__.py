"""Updater state machine around the apply engine."""

from fsmirror_core.updater.updater import FSUpdater, UpdaterState

__all__ = ["FSUpdater", "UpdaterState"]
