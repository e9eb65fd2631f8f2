"""Name and username value objects."""

import re
from dataclasses import dataclass

from core.exceptions import DomainValidationError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")


def _is_name_character(char: str) -> bool:
    # Unicode letters, whitespace, apostrophes and hyphens
    return char.isalpha() or char.isspace() or char in "'-"


@dataclass(frozen=True, slots=True)
class NameField:
    """A person's first, middle or last name.

    The input is trimmed before validation and stored with its first
    character upper-cased, so ``NameField("  maria ")`` holds ``"Maria"``.
    """

    value: str

    def __post_init__(self) -> None:
        normalized = self.value.strip() if isinstance(self.value, str) else self.value
        self.validate(normalized)
        object.__setattr__(self, "value", normalized[0].upper() + normalized[1:])

    @staticmethod
    def validate(value: str | None) -> None:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise DomainValidationError("Name cannot be null")
        if not isinstance(value, str):
            raise DomainValidationError("Name must be a string")
        if len(value) < NAME_MIN_LENGTH:
            raise DomainValidationError(
                f"Name cannot be shorter than {NAME_MIN_LENGTH} characters"
            )
        if len(value) > NAME_MAX_LENGTH:
            raise DomainValidationError(
                f"Name cannot be longer than {NAME_MAX_LENGTH} characters"
            )
        if not all(_is_name_character(c) for c in value):
            raise DomainValidationError("Name contains invalid characters")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Username:
    """Public handle of a profile."""

    value: str

    def __post_init__(self) -> None:
        self.validate(self.value)

    @staticmethod
    def validate(value: str | None) -> None:
        if value is None:
            raise DomainValidationError("Username is required")
        if not isinstance(value, str):
            raise DomainValidationError("Username must be a string")
        if not USERNAME_MIN_LENGTH <= len(value) <= USERNAME_MAX_LENGTH:
            raise DomainValidationError(
                f"Username must be between {USERNAME_MIN_LENGTH} and "
                f"{USERNAME_MAX_LENGTH} characters"
            )
        if not USERNAME_PATTERN.fullmatch(value):
            raise DomainValidationError(
                "Username can only contain letters, digits, and underscores"
            )

    def __str__(self) -> str:
        return self.value
