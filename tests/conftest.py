"""Shared test fixtures for fs-mirror."""

import os
from pathlib import Path

import pytest

from fsmirror_core.apply.platform import can_symlink
from fsmirror_core.config.models import MirrorConfig
from fsmirror_core.tree.cache import NodeCache

requires_symlinks = pytest.mark.skipif(
    not can_symlink(), reason="filesystem cannot create symlinks"
)

FIXTURES = {
    "file1": "file1 contents",
    "file2": "file2 contents",
    # "a" and "b" match the entry names used by the tree tests
    "dir1": {"a": "dir1/a contents", "b": "dir1/b contents"},
    "dir2": {"b": "dir2/b contents"},
}


def write_tree(root: Path, layout: dict) -> None:
    """Write a nested {name: str | dict} mapping to disk under *root*."""
    root.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        if isinstance(value, dict):
            write_tree(root / name, value)
        else:
            (root / name).write_text(value)


def read_tree(root: Path) -> dict:
    """Read a directory back as {name: str | dict}, following symlinks."""
    result = {}
    for name in sorted(os.listdir(root)):
        p = root / name
        if p.is_dir():
            result[name] = read_tree(p)
        else:
            result[name] = p.read_text()
    return result


def read_entry(path: Path) -> str | dict | None:
    """Like read_tree, but for a single path that may be a file or absent."""
    if not os.path.lexists(path):
        return None
    if path.is_dir():
        return read_tree(path)
    return path.read_text()


@pytest.fixture
def fixtures_dir(tmp_path):
    """Source files the trees point at. Tests assert these never change."""
    root = tmp_path / "fixtures"
    write_tree(root, FIXTURES)
    return root


@pytest.fixture
def cache():
    return NodeCache()


@pytest.fixture
def out_parent(tmp_path):
    parent = tmp_path / "outparent"
    parent.mkdir()
    return parent


@pytest.fixture
def out_path(out_parent):
    return out_parent / "out"


@pytest.fixture
def sample_config():
    return MirrorConfig()
