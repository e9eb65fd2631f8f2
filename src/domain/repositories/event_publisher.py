"""Domain event publisher protocol."""

from collections.abc import Sequence
from typing import Protocol

from domain.events.base import DomainEvent


class IEventPublisher(Protocol):
    """Delivers drained domain events to subscribers."""

    def publish(self, events: Sequence[DomainEvent]) -> None:
        """Publish events in the order they were recorded."""
        ...
