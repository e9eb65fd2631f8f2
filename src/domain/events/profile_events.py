"""Events emitted by profile creation and profile updates."""

from dataclasses import dataclass
from enum import StrEnum

from domain.events.base import DomainEvent
from domain.value_objects.identifiers import ProfileId, UserId
from domain.value_objects.names import NameField


class ProfileField(StrEnum):
    """Updatable profile fields, valued by attribute name."""

    FIRST_NAME = "first_name"
    MIDDLE_NAME = "middle_name"
    LAST_NAME = "last_name"
    USERNAME = "username"
    PHONE_NUMBER = "phone_number"
    AVATAR = "avatar"
    DATE_OF_BIRTH = "date_of_birth"
    GENDER = "gender"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").capitalize()


@dataclass(frozen=True, kw_only=True)
class ProfileCreationInitiated(DomainEvent):
    user_id: UserId
    first_name: NameField
    last_name: NameField
    raw_phone_number: str


@dataclass(frozen=True, kw_only=True)
class ProfileCreationCompleted(DomainEvent):
    user_id: UserId
    profile_id: ProfileId


@dataclass(frozen=True, kw_only=True)
class ProfileCreationFailed(DomainEvent):
    user_id: UserId
    reason: str


@dataclass(frozen=True, kw_only=True)
class ProfileFieldChanged(DomainEvent):
    """A profile field received a new value."""

    field: ProfileField
