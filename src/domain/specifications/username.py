"""Username uniqueness specifications."""

from typing import TYPE_CHECKING, Protocol

from domain.repositories.profile_repository import IProfileRepository

if TYPE_CHECKING:
    from domain.entities.profile_creation import CreatePersonProfile


class UniqueUsernameSpecification(Protocol):
    """Answers whether a username is not yet used by any profile."""

    def is_satisfied_by(self, candidate: str) -> bool:
        """Check if the candidate username is currently unique."""
        ...


class RepositoryUniqueUsernameSpecification:
    """Uniqueness check backed by the profile repository."""

    def __init__(self, profiles: IProfileRepository) -> None:
        self._profiles = profiles

    def is_satisfied_by(self, candidate: str) -> bool:
        return not self._profiles.exists_by_username(candidate)


class ProfileCreationSpecification:
    """Business rules a profile creation process must meet before completing."""

    def __init__(self, unique_username: UniqueUsernameSpecification) -> None:
        self._unique_username = unique_username

    def is_satisfied_by(self, process: "CreatePersonProfile") -> bool:
        if process is None:
            raise ValueError("Aggregate cannot be null")
        if process.username is None:
            return True
        return self._unique_username.is_satisfied_by(process.username.value)
