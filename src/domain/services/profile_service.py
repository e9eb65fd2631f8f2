"""Profile service layer orchestrating creation and updates."""

from collections.abc import Callable
from datetime import date
from pathlib import Path

import structlog

from core.exceptions import (
    ProfileCreationError,
    ProfileCreationNotFoundError,
    ProfileNotFoundError,
    UsernameChangeCooldownError,
    UsernameNotUniqueError,
)
from core.files import FileInspector, PathFileInspector
from domain.entities.aggregate import AggregateRoot
from domain.entities.profile import Profile
from domain.entities.profile_creation import CreatePersonProfile
from domain.factories.phone_number_specification_factory import (
    PhoneNumberSpecificationFactory,
)
from domain.repositories.event_publisher import IEventPublisher
from domain.repositories.unit_of_work import IUnitOfWork
from domain.specifications.username import RepositoryUniqueUsernameSpecification
from domain.value_objects.country import IsoCountry
from domain.value_objects.identifiers import AggregateId, ProfileId, UserId
from domain.value_objects.names import NameField, Username
from domain.value_objects.personal import Avatar, DateOfBirth, Gender, GenderType
from domain.value_objects.phone_number import PhoneNumber

logger = structlog.get_logger()


class ProfileService:
    """Service layer for profile creation and profile field updates."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        phone_specifications: PhoneNumberSpecificationFactory,
        file_inspector: FileInspector | None = None,
        event_publisher: IEventPublisher | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._phone_specifications = phone_specifications
        self._file_inspector = file_inspector or PathFileInspector()
        self._publisher = event_publisher

    # --- Profile creation ---

    def start_profile_creation(
        self,
        user_id: UserId,
        first_name: str,
        last_name: str,
        raw_phone_number: str,
        country: IsoCountry,
        *,
        middle_name: str | None = None,
        username: str | None = None,
        avatar_path: Path | None = None,
        date_of_birth: date | None = None,
        gender: GenderType | None = None,
    ) -> CreatePersonProfile:
        """Initiate a profile creation process and attach optional fields.

        Every value is validated by its value type before the process is
        stored, so invalid input never reaches persistence.

        Raises:
            DomainValidationError: If any supplied value is invalid.
        """
        process = CreatePersonProfile.initiate(
            user_id,
            NameField(first_name),
            NameField(last_name),
            raw_phone_number,
            country,
            self._phone_specifications,
        )
        if middle_name is not None:
            process.set_middle_name(NameField(middle_name))
        if username is not None:
            process.set_username(Username(username))
        if avatar_path is not None:
            process.set_avatar(Avatar(avatar_path, self._file_inspector))
        if date_of_birth is not None:
            process.set_date_of_birth(DateOfBirth(date_of_birth))
        if gender is not None:
            process.set_gender(Gender(gender))

        with self._uow_factory() as uow:
            uow.profile_creations.add(process)
            uow.commit()

        logger.info(
            "profile_creation_initiated",
            process_id=str(process.id),
            user_id=str(user_id),
            country=country.alpha2,
        )
        self._publish(process)
        return process

    def complete_profile_creation(self, process_id: AggregateId) -> Profile:
        """Run the creation step of a stored process.

        The resulting state is persisted and its events published whether
        creation succeeds or fails.

        Raises:
            ProfileCreationNotFoundError: If the process does not exist.
            ProfileAlreadyCreatedError: If the process already completed.
            ProfileCreationClosedError: If the process already failed.
            ProfileCreationError: If validation or a business rule failed.
        """
        with self._uow_factory() as uow:
            process = uow.profile_creations.get(process_id)
            if not process:
                raise ProfileCreationNotFoundError(str(process_id))

            unique_username = RepositoryUniqueUsernameSpecification(uow.profiles)
            try:
                profile = process.create_profile(unique_username)
            except ProfileCreationError as e:
                uow.profile_creations.update(process)
                uow.commit()
                logger.warning(
                    "profile_creation_failed",
                    process_id=str(process_id),
                    user_id=str(process.user_id),
                    reason=e.reason,
                )
                self._publish(process)
                raise

            uow.profiles.add(profile)
            uow.profile_creations.update(process)
            uow.commit()

        logger.info(
            "profile_creation_completed",
            process_id=str(process_id),
            profile_id=str(profile.id),
        )
        self._publish(process)
        return profile

    # --- Profile updates ---

    def change_username(self, profile_id: ProfileId, username: str) -> Profile:
        """Change a profile's username.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
            UsernameNotUniqueError: If another profile uses the username.
            UsernameChangeCooldownError: If the cooldown has not elapsed.
        """
        new_username = Username(username)
        with self._uow_factory() as uow:
            profile = self._get_profile(uow, profile_id)

            if profile.username != new_username and uow.profiles.exists_by_username(username):
                raise UsernameNotUniqueError(username)

            try:
                changed = profile.update_username(new_username)
            except UsernameChangeCooldownError:
                logger.info(
                    "username_change_rejected",
                    profile_id=str(profile_id),
                    available_at=str(profile.username_change_available_at),
                )
                raise

            if changed:
                uow.profiles.update(profile)
                uow.commit()

        self._publish(profile)
        return profile

    def change_phone_number(
        self, profile_id: ProfileId, raw_phone_number: str, country: IsoCountry
    ) -> Profile:
        """Replace a profile's phone number, validated for ``country``.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
            UnsupportedCountryError: If no rule exists for the country.
            InvalidPhoneNumberError: If the number is invalid for the country.
        """
        specification = self._phone_specifications.get_specification(country)
        phone_number = PhoneNumber.create(raw_phone_number, specification)

        with self._uow_factory() as uow:
            profile = self._get_profile(uow, profile_id)
            if profile.update_phone_number(phone_number):
                uow.profiles.update(profile)
                uow.commit()

        self._publish(profile)
        return profile

    def change_names(
        self,
        profile_id: ProfileId,
        *,
        first_name: str | None = None,
        middle_name: str | None = None,
        last_name: str | None = None,
        clear_middle_name: bool = False,
    ) -> Profile:
        """Update any of the profile's names; omitted names are left as is."""
        new_first = NameField(first_name) if first_name is not None else None
        new_middle = NameField(middle_name) if middle_name is not None else None
        new_last = NameField(last_name) if last_name is not None else None

        with self._uow_factory() as uow:
            profile = self._get_profile(uow, profile_id)

            changed = False
            if new_first is not None:
                changed |= profile.update_first_name(new_first)
            if new_middle is not None or clear_middle_name:
                changed |= profile.update_middle_name(new_middle)
            if new_last is not None:
                changed |= profile.update_last_name(new_last)

            if changed:
                uow.profiles.update(profile)
                uow.commit()

        self._publish(profile)
        return profile

    # --- Helpers ---

    @staticmethod
    def _get_profile(uow: IUnitOfWork, profile_id: ProfileId) -> Profile:
        profile = uow.profiles.get(profile_id)
        if not profile:
            raise ProfileNotFoundError(str(profile_id))
        return profile

    def _publish(self, aggregate: AggregateRoot) -> None:
        events = aggregate.drain_events()
        if not events or self._publisher is None:
            return
        self._publisher.publish(events)
        logger.debug(
            "domain_events_published",
            count=len(events),
            event_types=[e.event_type for e in events],
        )
