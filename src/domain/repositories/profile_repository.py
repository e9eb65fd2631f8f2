"""Profile repository protocol."""

from typing import Protocol

from domain.entities.profile import Profile
from domain.value_objects.identifiers import ProfileId


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    def get(self, id: ProfileId) -> Profile | None:
        """Get a profile by ID."""
        ...

    def add(self, profile: Profile) -> Profile:
        """Store a newly created profile."""
        ...

    def update(self, profile: Profile) -> Profile:
        """Persist changes to an existing profile.

        Implementations compare the stored version to detect concurrent writes.
        """
        ...

    def exists_by_username(self, username: str) -> bool:
        """Check if any profile already uses the username."""
        ...
