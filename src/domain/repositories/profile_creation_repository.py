"""Profile creation process repository protocol."""

from typing import Protocol

from domain.entities.profile_creation import CreatePersonProfile
from domain.value_objects.identifiers import AggregateId


class IProfileCreationRepository(Protocol):
    """Repository interface for CreatePersonProfile processes."""

    def get(self, id: AggregateId) -> CreatePersonProfile | None:
        """Get a process by ID, rehydrated through from_persistence."""
        ...

    def add(self, process: CreatePersonProfile) -> CreatePersonProfile:
        """Store a newly initiated process."""
        ...

    def update(self, process: CreatePersonProfile) -> CreatePersonProfile:
        """Persist a process state change."""
        ...
