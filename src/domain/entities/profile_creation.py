"""Profile creation process aggregate."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from core.exceptions import (
    AppException,
    ProfileAlreadyCreatedError,
    ProfileCreationClosedError,
    ProfileCreationError,
    UsernameNotUniqueError,
)
from domain.entities.aggregate import AggregateRoot
from domain.entities.profile import Profile
from domain.events.profile_events import (
    ProfileCreationCompleted,
    ProfileCreationFailed,
    ProfileCreationInitiated,
)
from domain.factories.phone_number_specification_factory import (
    PhoneNumberSpecificationFactory,
)
from domain.specifications.username import (
    ProfileCreationSpecification,
    UniqueUsernameSpecification,
)
from domain.value_objects.country import IsoCountry
from domain.value_objects.identifiers import AggregateId, UserId
from domain.value_objects.names import NameField, Username
from domain.value_objects.personal import Avatar, DateOfBirth, Gender
from domain.value_objects.phone_number import PhoneNumber


class ProfileCreationStatus(StrEnum):
    """Lifecycle state of a profile creation process."""

    INITIATED = "initiated"
    COMPLETED = "completed"
    FAILED = "failed"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _require(value: Any, message: str) -> None:
    if value is None:
        raise ValueError(message)


@dataclass(kw_only=True, eq=False)
class CreatePersonProfile(AggregateRoot):
    """Collects profile inputs and turns them into a Profile exactly once.

    A process starts INITIATED and moves irreversibly to COMPLETED or FAILED
    through ``create_profile``. Optional fields can only be attached while
    the process is INITIATED.
    """

    id: AggregateId
    user_id: UserId
    first_name: NameField
    last_name: NameField
    raw_phone_number: str
    phone_number_country: IsoCountry
    phone_specifications: PhoneNumberSpecificationFactory = field(repr=False)
    status: ProfileCreationStatus = ProfileCreationStatus.INITIATED
    created_at: datetime = field(default_factory=_utcnow)
    middle_name: NameField | None = None
    username: Username | None = None
    avatar: Avatar | None = None
    date_of_birth: DateOfBirth | None = None
    gender: Gender | None = None
    created_profile: Profile | None = None
    failure_reason: str | None = None

    @classmethod
    def initiate(
        cls,
        user_id: UserId,
        first_name: NameField,
        last_name: NameField,
        raw_phone_number: str,
        phone_number_country: IsoCountry,
        phone_specifications: PhoneNumberSpecificationFactory,
    ) -> "CreatePersonProfile":
        """Start a new profile creation process.

        Raises:
            ValueError: If any required argument is None.
        """
        _require(user_id, "User ID cannot be null")
        _require(first_name, "First name cannot be null")
        _require(last_name, "Last name cannot be null")
        _require(raw_phone_number, "Phone number cannot be null")
        _require(phone_number_country, "Country cannot be null")
        _require(phone_specifications, "Phone number specification factory cannot be null")

        now = _utcnow()
        process = cls(
            id=AggregateId.generate(),
            version=1,
            created_at=now,
            updated_at=now,
            user_id=user_id,
            status=ProfileCreationStatus.INITIATED,
            first_name=first_name,
            last_name=last_name,
            raw_phone_number=raw_phone_number,
            phone_number_country=phone_number_country,
            phone_specifications=phone_specifications,
        )
        process._record_event(
            ProfileCreationInitiated(
                aggregate_id=process.id,
                aggregate_version=process.version,
                user_id=user_id,
                first_name=first_name,
                last_name=last_name,
                raw_phone_number=raw_phone_number,
            )
        )
        return process

    @classmethod
    def from_persistence(
        cls,
        *,
        id: AggregateId,
        version: int,
        created_at: datetime,
        updated_at: datetime,
        user_id: UserId,
        status: ProfileCreationStatus,
        first_name: NameField,
        last_name: NameField,
        raw_phone_number: str,
        phone_number_country: IsoCountry,
        phone_specifications: PhoneNumberSpecificationFactory,
        created_profile: Profile | None = None,
        failure_reason: str | None = None,
        middle_name: NameField | None = None,
        username: Username | None = None,
        avatar: Avatar | None = None,
        date_of_birth: DateOfBirth | None = None,
        gender: Gender | None = None,
    ) -> "CreatePersonProfile":
        """Rebuild a stored process without validation or events."""
        return cls(
            id=id,
            version=version,
            created_at=created_at,
            updated_at=updated_at,
            user_id=user_id,
            status=status,
            created_profile=created_profile,
            failure_reason=failure_reason,
            first_name=first_name,
            last_name=last_name,
            raw_phone_number=raw_phone_number,
            phone_number_country=phone_number_country,
            middle_name=middle_name,
            username=username,
            avatar=avatar,
            date_of_birth=date_of_birth,
            gender=gender,
            phone_specifications=phone_specifications,
        )

    @property
    def is_profile_created(self) -> bool:
        return self.status == ProfileCreationStatus.COMPLETED and self.created_profile is not None

    @property
    def is_creation_failed(self) -> bool:
        return self.status == ProfileCreationStatus.FAILED

    # --- Optional fields ---

    def set_middle_name(self, middle_name: NameField | None) -> None:
        self._ensure_in_progress()
        self.middle_name = middle_name
        self._touch(_utcnow())

    def set_username(self, username: Username | None) -> None:
        self._ensure_in_progress()
        self.username = username
        self._touch(_utcnow())

    def set_avatar(self, avatar: Avatar | None) -> None:
        self._ensure_in_progress()
        self.avatar = avatar
        self._touch(_utcnow())

    def set_date_of_birth(self, date_of_birth: DateOfBirth | None) -> None:
        self._ensure_in_progress()
        self.date_of_birth = date_of_birth
        self._touch(_utcnow())

    def set_gender(self, gender: Gender | None) -> None:
        self._ensure_in_progress()
        self.gender = gender
        self._touch(_utcnow())

    # --- Completion ---

    def create_profile(self, unique_username: UniqueUsernameSpecification) -> Profile:
        """Validate the collected inputs and build the Profile.

        On success the process is COMPLETED and ``ProfileCreationCompleted``
        is recorded. On any error, including a failing uniqueness lookup,
        the process is FAILED, ``ProfileCreationFailed`` is recorded and
        ``ProfileCreationError`` is raised; a failed process cannot be
        retried.

        Raises:
            ProfileAlreadyCreatedError: If the process already completed.
            ProfileCreationClosedError: If the process already failed.
            ProfileCreationError: If building the profile failed for any reason.
        """
        _require(unique_username, "Unique username specification cannot be null")
        self._ensure_in_progress()

        try:
            self._validate_business_rules(unique_username)

            specification = self.phone_specifications.get_specification(
                self.phone_number_country
            )
            phone_number = PhoneNumber.create(self.raw_phone_number, specification)

            profile = Profile.create(
                self.first_name,
                self.last_name,
                phone_number,
                middle_name=self.middle_name,
                username=self.username,
                avatar=self.avatar,
                date_of_birth=self.date_of_birth,
                gender=self.gender,
            )
        except Exception as e:
            reason = e.message if isinstance(e, AppException) else str(e) or type(e).__name__
            self._fail(reason)
            raise ProfileCreationError(reason) from e

        self.created_profile = profile
        self.status = ProfileCreationStatus.COMPLETED
        self._touch(_utcnow())
        self._record_event(
            ProfileCreationCompleted(
                aggregate_id=self.id,
                aggregate_version=self.version,
                user_id=self.user_id,
                profile_id=profile.id,
            )
        )
        return profile

    def _validate_business_rules(self, unique_username: UniqueUsernameSpecification) -> None:
        if not ProfileCreationSpecification(unique_username).is_satisfied_by(self):
            # Only an attached username can fail the creation rules
            raise UsernameNotUniqueError(self.username.value if self.username else "")

    def _fail(self, reason: str) -> None:
        self.status = ProfileCreationStatus.FAILED
        self.failure_reason = reason
        self._touch(_utcnow())
        self._record_event(
            ProfileCreationFailed(
                aggregate_id=self.id,
                aggregate_version=self.version,
                user_id=self.user_id,
                reason=reason,
            )
        )

    def _ensure_in_progress(self) -> None:
        if self.status == ProfileCreationStatus.COMPLETED:
            raise ProfileAlreadyCreatedError()
        if self.status == ProfileCreationStatus.FAILED:
            raise ProfileCreationClosedError()
