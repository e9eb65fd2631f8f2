"""Shared fixtures for unit tests."""

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = MagicMock()
        self.profile_creations = MagicMock()
        self.profiles.exists_by_username.return_value = False
        self.committed = False
        self.rolled_back = False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True

    def __enter__(self) -> "FakeUnitOfWork":
        return self

    def __exit__(self, *args: Any) -> None:
        pass


class FakeFileInspector:
    """In-memory file inspector keyed by path."""

    def __init__(self, files: dict[Path, tuple[int, str | None]] | None = None) -> None:
        # path -> (size in bytes, probed content type)
        self.files: dict[Path, tuple[int, str | None]] = dict(files or {})

    def add(self, path: str | Path, size: int = 1024, content_type: str | None = "image/png") -> Path:
        path = Path(path)
        self.files[path] = (size, content_type)
        return path

    def exists(self, path: Path) -> bool:
        return path in self.files

    def is_file(self, path: Path) -> bool:
        return path in self.files

    def size(self, path: Path) -> int:
        return self.files[path][0]

    def probe_content_type(self, path: Path) -> str | None:
        return self.files[path][1]


class AlwaysUnique:
    def is_satisfied_by(self, candidate: str) -> bool:
        return True


class NeverUnique:
    def is_satisfied_by(self, candidate: str) -> bool:
        return False


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def file_inspector() -> FakeFileInspector:
    """Inspector pre-loaded with one valid PNG avatar."""
    inspector = FakeFileInspector()
    inspector.add("/avatars/me.png")
    return inspector


@pytest.fixture
def always_unique() -> AlwaysUnique:
    return AlwaysUnique()


@pytest.fixture
def never_unique() -> NeverUnique:
    return NeverUnique()
