"""Aggregate root base with version tracking and a domain event buffer."""

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime

from domain.events.base import DomainEvent


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(kw_only=True, eq=False)
class AggregateRoot:
    """Base for aggregates.

    Subclasses declare their own ``id`` field. Equality is by type and id.
    Pending events are kept in an append-only buffer until drained by a
    publisher; draining is atomic with respect to concurrent recording.
    """

    version: int = 0
    updated_at: datetime = field(default_factory=_utcnow)
    _pending_events: deque[DomainEvent] = field(
        default_factory=deque, init=False, repr=False
    )
    _events_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def _touch(self, now: datetime) -> None:
        self.version += 1
        self.updated_at = now

    def _record_event(self, event: DomainEvent) -> None:
        with self._events_lock:
            self._pending_events.append(event)

    def drain_events(self) -> list[DomainEvent]:
        """Return all pending events and clear the buffer."""
        with self._events_lock:
            events = list(self._pending_events)
            self._pending_events.clear()
        return events

    @property
    def pending_events(self) -> list[DomainEvent]:
        """Snapshot of pending events without draining them."""
        with self._events_lock:
            return list(self._pending_events)

    @property
    def has_pending_events(self) -> bool:
        with self._events_lock:
            return bool(self._pending_events)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.id == other.id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.id))  # type: ignore[attr-defined]
