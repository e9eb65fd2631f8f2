"""Domain event base type."""

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Any

from domain.value_objects.identifiers import EventId, Identifier


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Immutable record of something that happened to an aggregate."""

    aggregate_id: Identifier
    aggregate_version: int
    event_id: EventId = field(default_factory=EventId.generate)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """Flatten the event into primitives for logging or transport."""
        data = asdict(self)
        return {key: _primitive(value) for key, value in data.items()} | {
            "event_type": self.event_type
        }


def _primitive(value: Any) -> Any:
    if isinstance(value, dict) and "value" in value and len(value) == 1:
        return _primitive(value["value"])
    if isinstance(value, datetime):
        return value.isoformat()
    if hasattr(value, "value") and not isinstance(value, (str, int, float, bool)):
        return _primitive(value.value)
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)
