"""Profile domain entity."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from core.exceptions import UsernameChangeCooldownError
from domain.entities.aggregate import AggregateRoot
from domain.events.profile_events import ProfileField, ProfileFieldChanged
from domain.value_objects.identifiers import ProfileId
from domain.value_objects.names import NameField, Username
from domain.value_objects.personal import Avatar, DateOfBirth, Gender
from domain.value_objects.phone_number import PhoneNumber

USERNAME_CHANGE_COOLDOWN_DAYS = 30


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _require(value: Any, message: str) -> None:
    if value is None:
        raise ValueError(message)


@dataclass(kw_only=True, eq=False)
class Profile(AggregateRoot):
    """A user's completed profile.

    Fields change only through the ``update_*`` methods. An update that
    carries the current value is a no-op; a real change bumps ``version``,
    refreshes ``updated_at`` and records a ``ProfileFieldChanged`` event.
    """

    first_name: NameField
    last_name: NameField
    phone_number: PhoneNumber
    id: ProfileId = field(default_factory=ProfileId.generate)
    middle_name: NameField | None = None
    username: Username | None = None
    avatar: Avatar | None = None
    date_of_birth: DateOfBirth | None = None
    gender: Gender | None = None

    @classmethod
    def create(
        cls,
        first_name: NameField,
        last_name: NameField,
        phone_number: PhoneNumber,
        *,
        middle_name: NameField | None = None,
        username: Username | None = None,
        avatar: Avatar | None = None,
        date_of_birth: DateOfBirth | None = None,
        gender: Gender | None = None,
    ) -> "Profile":
        """Create a brand-new profile with version 0."""
        _require(first_name, "First name cannot be null")
        _require(last_name, "Last name cannot be null")
        _require(phone_number, "Phone number cannot be null")

        return cls(
            id=ProfileId.generate(),
            first_name=first_name,
            middle_name=middle_name,
            last_name=last_name,
            username=username,
            phone_number=phone_number,
            avatar=avatar,
            date_of_birth=date_of_birth,
            gender=gender,
            version=0,
            updated_at=_utcnow(),
        )

    @classmethod
    def from_persistence(
        cls,
        *,
        id: ProfileId,
        first_name: NameField,
        last_name: NameField,
        phone_number: PhoneNumber,
        version: int,
        updated_at: datetime,
        middle_name: NameField | None = None,
        username: Username | None = None,
        avatar: Avatar | None = None,
        date_of_birth: DateOfBirth | None = None,
        gender: Gender | None = None,
    ) -> "Profile":
        """Rebuild a stored profile, keeping its version and timestamp."""
        _require(id, "Profile ID cannot be null")
        _require(first_name, "First name cannot be null")
        _require(last_name, "Last name cannot be null")
        _require(phone_number, "Phone number cannot be null")
        _require(version, "Version cannot be null")
        _require(updated_at, "Updated at cannot be null")

        return cls(
            id=id,
            first_name=first_name,
            middle_name=middle_name,
            last_name=last_name,
            username=username,
            phone_number=phone_number,
            avatar=avatar,
            date_of_birth=date_of_birth,
            gender=gender,
            version=version,
            updated_at=updated_at,
        )

    # --- Field updates ---

    def update_first_name(self, first_name: NameField) -> bool:
        _require(first_name, "First name cannot be null")
        return self._apply(ProfileField.FIRST_NAME, first_name)

    def update_middle_name(self, middle_name: NameField | None) -> bool:
        return self._apply(ProfileField.MIDDLE_NAME, middle_name)

    def update_last_name(self, last_name: NameField) -> bool:
        _require(last_name, "Last name cannot be null")
        return self._apply(ProfileField.LAST_NAME, last_name)

    def update_phone_number(self, phone_number: PhoneNumber) -> bool:
        _require(phone_number, "Phone number cannot be null")
        return self._apply(ProfileField.PHONE_NUMBER, phone_number)

    def update_username(self, username: Username | None) -> bool:
        """Change the username, at most once per cooldown window.

        Raises:
            UsernameChangeCooldownError: If a username is already set and the
                cooldown started at ``updated_at`` has not elapsed.
        """
        return self._apply(
            ProfileField.USERNAME, username, guard=self._username_cooldown_guard
        )

    def update_avatar(self, avatar: Avatar | None) -> bool:
        return self._apply(ProfileField.AVATAR, avatar)

    def update_date_of_birth(self, date_of_birth: DateOfBirth | None) -> bool:
        return self._apply(ProfileField.DATE_OF_BIRTH, date_of_birth)

    def update_gender(self, gender: Gender | None) -> bool:
        return self._apply(ProfileField.GENDER, gender)

    # --- Username cooldown ---

    @property
    def username_change_available_at(self) -> datetime | None:
        """When the next username change is allowed; None if allowed now."""
        if self.username is None:
            return None
        return self.updated_at + timedelta(days=USERNAME_CHANGE_COOLDOWN_DAYS)

    def can_change_username(self) -> bool:
        available_at = self.username_change_available_at
        return available_at is None or _utcnow() > available_at

    def _username_cooldown_guard(self) -> None:
        if not self.can_change_username():
            raise UsernameChangeCooldownError(USERNAME_CHANGE_COOLDOWN_DAYS)

    def _apply(
        self,
        profile_field: ProfileField,
        new_value: Any,
        guard: Callable[[], None] | None = None,
    ) -> bool:
        """Shared update step: guard, skip unchanged values, then assign.

        Returns True when the field actually changed.
        """
        if guard is not None:
            guard()

        if getattr(self, profile_field.value) == new_value:
            return False

        setattr(self, profile_field.value, new_value)
        self._touch(_utcnow())
        self._record_event(
            ProfileFieldChanged(
                aggregate_id=self.id,
                aggregate_version=self.version,
                field=profile_field,
            )
        )
        return True
