"""Event publisher that writes domain events to the structured log."""

from collections.abc import Sequence

import structlog

from domain.events.base import DomainEvent

logger = structlog.get_logger()


class LoggingEventPublisher:
    """Logs each event; used where no message bus is configured."""

    def publish(self, events: Sequence[DomainEvent]) -> None:
        for event in events:
            logger.info("domain_event", **event.to_dict())
