"""Composition root wiring the profile service from settings."""

from collections.abc import Callable

import structlog

from core.config import Settings, get_settings
from core.files import FileInspector, PathFileInspector
from core.logging import setup_logging
from domain.factories.phone_number_specification_factory import (
    PhoneNumberSpecificationFactory,
)
from domain.repositories.event_publisher import IEventPublisher
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.profile_service import ProfileService
from infrastructure.events.logging_publisher import LoggingEventPublisher

logger = structlog.get_logger()


def create_file_inspector(settings: Settings) -> FileInspector:
    """Pick the avatar content type probe configured in settings."""
    if settings.avatar_inspection == "extension":
        return PathFileInspector()

    from infrastructure.files.magic_inspector import MagicFileInspector

    return MagicFileInspector()


def create_profile_service(
    uow_factory: Callable[[], IUnitOfWork],
    event_publisher: IEventPublisher | None = None,
    settings: Settings | None = None,
) -> ProfileService:
    """Build a ProfileService with logging configured."""
    settings = settings or get_settings()
    setup_logging(settings)

    phone_specifications = PhoneNumberSpecificationFactory.from_settings(settings)
    service = ProfileService(
        uow_factory,
        phone_specifications,
        file_inspector=create_file_inspector(settings),
        event_publisher=event_publisher or LoggingEventPublisher(),
    )

    logger.info(
        "profile_service_configured",
        app_name=settings.app_name,
        environment=settings.app_env,
        phone_countries=sorted(c.alpha2 for c in phone_specifications.supported_countries),
        avatar_inspection=settings.avatar_inspection,
    )
    return service
