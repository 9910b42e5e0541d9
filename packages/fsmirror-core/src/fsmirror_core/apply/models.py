"""Models and errors for the apply engine."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel


class FSMirrorError(Exception):
    """Base class for errors raised by fs-mirror."""


class OutputPathError(FSMirrorError):
    """The output path was not absent or an empty directory."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Output path {path!r} {reason}")


class UnexpectedNodeTypeError(FSMirrorError, TypeError):
    """A value that is not a tree node showed up where one was expected."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Expected FileRef, DirectoryRef or DirectoryIndex, got {value!r}"
        )


class InvalidEntryNameError(FSMirrorError, ValueError):
    """A DirectoryIndex key would address something outside its directory."""

    def __init__(self, parent: str, name: object) -> None:
        self.parent = parent
        self.name = name
        super().__init__(f"Invalid entry name {name!r} under {parent!r}")


class UnsupportedFileTypeError(FSMirrorError, OSError):
    """Resolution hit something that is not a file, directory or symlink."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File has unexpected type: {path}")


class UnsupportedPlatformError(FSMirrorError):
    """A directory link was requested on a platform that cannot create one."""


@dataclass(frozen=True)
class ApplyOptions:
    """How the engine materializes nodes.

    ``symlink_mode`` links files and directories to their sources; with it
    off, file contents are copied and directories become junction-style
    links.
    """

    symlink_mode: bool


class ApplyReport(BaseModel):
    """Counts of filesystem operations performed by one apply pass."""

    directories_created: int = 0
    links_created: int = 0
    files_copied: int = 0
    entries_removed: int = 0
    skipped: int = 0
    full_rebuild: bool = False
    recovered: bool = False
    duration: float = 0.0

    @property
    def mutations(self) -> int:
        return (
            self.directories_created
            + self.links_created
            + self.files_copied
            + self.entries_removed
        )
