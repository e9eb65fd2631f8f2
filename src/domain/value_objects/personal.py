"""Personal detail value objects: date of birth, gender and avatar."""

from dataclasses import InitVar, dataclass
from datetime import date, datetime
from enum import StrEnum
from pathlib import Path

from core.exceptions import DomainValidationError
from core.files import (
    AllowedFileType,
    FileInspector,
    FileSizeUnit,
    FileValidationConfig,
    validate_file,
)

MAX_AGE_YEARS = 100

AVATAR_MAX_SIZE_MB = 5
AVATAR_VALIDATION_CONFIG = FileValidationConfig(
    allowed_file_types=frozenset(
        {
            AllowedFileType.JPEG,
            AllowedFileType.PNG,
            AllowedFileType.WEBP,
            AllowedFileType.HEIC,
        }
    ),
    max_file_size_bytes=FileSizeUnit.MB.to_bytes(AVATAR_MAX_SIZE_MB),
    strict_mime_type_validation=True,
    allow_empty_files=False,
)


def _today() -> date:
    return date.today()


def years_before(day: date, years: int) -> date:
    """Same calendar day ``years`` earlier; 29 February falls back to the 28th."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


@dataclass(frozen=True, slots=True)
class DateOfBirth:
    """Birth date of a person; at most MAX_AGE_YEARS in the past."""

    value: date

    def __post_init__(self) -> None:
        if isinstance(self.value, datetime):
            object.__setattr__(self, "value", self.value.date())
        self.validate(self.value)

    @staticmethod
    def validate(value: date | None) -> None:
        if value is None:
            raise DomainValidationError("Date of birth is required")
        if not isinstance(value, date) or isinstance(value, datetime):
            raise DomainValidationError("Date of birth must be a date")

        today = _today()
        if value > today:
            raise DomainValidationError("Date of birth cannot be in the future")
        if value < years_before(today, MAX_AGE_YEARS):
            raise DomainValidationError(
                f"Date of birth cannot be more than {MAX_AGE_YEARS} years ago"
            )


class GenderType(StrEnum):
    """Supported gender values."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Gender:
    value: GenderType

    def __post_init__(self) -> None:
        self.validate(self.value)

    @staticmethod
    def validate(value: GenderType | None) -> None:
        if value is None:
            raise DomainValidationError("Gender cannot be null")
        if not isinstance(value, GenderType):
            raise DomainValidationError(f"Unknown gender: {value}")


@dataclass(frozen=True)
class Avatar:
    """Profile picture stored as a local image file.

    The file is checked through ``inspector`` at construction: it must be a
    non-empty JPEG, PNG, WEBP or HEIC image of at most 5 MB whose detected
    content type matches the allowed set.
    """

    value: Path
    inspector: InitVar[FileInspector]

    def __post_init__(self, inspector: FileInspector) -> None:
        if self.value is None:
            raise DomainValidationError("Avatar file is required")
        object.__setattr__(self, "value", Path(self.value))
        self.validate(self.value, inspector)

    @staticmethod
    def validate(value: Path, inspector: FileInspector) -> None:
        if not validate_file(value, AVATAR_VALIDATION_CONFIG, inspector):
            raise DomainValidationError(
                "Invalid avatar file", details={"path": str(value)}
            )
