"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.profile_creation_repository import IProfileCreationRepository
from domain.repositories.profile_repository import IProfileRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    profiles: IProfileRepository
    profile_creations: IProfileCreationRepository

    def commit(self) -> None:
        """Commit the current transaction."""
        ...

    def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    def __enter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
