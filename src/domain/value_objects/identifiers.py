"""Identifier value objects backed by version-4 UUIDs."""

from dataclasses import dataclass
from typing import Self
from uuid import UUID, uuid4

from core.exceptions import DomainValidationError

REQUIRED_MESSAGE = "Value cannot be null"
VERSION_MESSAGE = "Invalid UUID version"


@dataclass(frozen=True, slots=True)
class Identifier:
    """Base for identifiers; the wrapped UUID must be version 4."""

    value: UUID

    def __post_init__(self) -> None:
        self.validate(self.value)

    @staticmethod
    def validate(value: UUID | None) -> None:
        if value is None:
            raise DomainValidationError(REQUIRED_MESSAGE)
        if not isinstance(value, UUID) or value.version != 4:
            raise DomainValidationError(VERSION_MESSAGE)

    @classmethod
    def generate(cls) -> Self:
        return cls(uuid4())

    @classmethod
    def from_string(cls, raw: str) -> Self:
        try:
            value = UUID(raw)
        except (TypeError, ValueError) as e:
            raise DomainValidationError(f"Invalid UUID: {raw}") from e
        return cls(value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class UserId(Identifier):
    """Identity of the platform user owning a profile."""


@dataclass(frozen=True, slots=True)
class ProfileId(Identifier):
    """Identity of a Profile entity."""


@dataclass(frozen=True, slots=True)
class AggregateId(Identifier):
    """Identity of a process aggregate."""


@dataclass(frozen=True, slots=True)
class EventId(Identifier):
    """Identity of a domain event."""
