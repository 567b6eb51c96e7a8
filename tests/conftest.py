"""Shared fixtures for depgraph tests."""

from pathlib import Path
from typing import Dict, Iterable, List

import pytest


class FakeFileSystem:
    """In-memory FileSystem: a fixed set of files and their parent directories."""

    def __init__(self, files: Iterable[str]):
        self.files = {Path(f) for f in files}
        self.dirs = {parent for f in self.files for parent in f.parents}
        self.lookups: List[Path] = []

    def is_file(self, path: Path) -> bool:
        self.lookups.append(path)
        return path in self.files

    def exists(self, path: Path) -> bool:
        self.lookups.append(path)
        return path in self.files or path in self.dirs


def write_tree(root: Path, files: Dict[str, str]) -> None:
    """Create files (and their directories) under root."""
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def repo(tmp_path):
    """An empty, fully resolved source root."""
    root = tmp_path.resolve() / "r"
    root.mkdir()
    return root
