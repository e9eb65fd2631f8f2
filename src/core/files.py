"""File type rules and validation used for uploaded media."""

import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()


class FileCategory(str, Enum):
    """Broad grouping of allowed file types."""

    IMAGE = "image"
    DOCUMENT = "document"


class AllowedFileType(Enum):
    """File types the platform knows how to accept."""

    JPEG = ("jpeg", frozenset({"jpg", "jpeg"}), "image/jpeg", FileCategory.IMAGE)
    PNG = ("png", frozenset({"png"}), "image/png", FileCategory.IMAGE)
    WEBP = ("webp", frozenset({"webp"}), "image/webp", FileCategory.IMAGE)
    HEIC = ("heic", frozenset({"heic", "heif"}), "image/heic", FileCategory.IMAGE)
    GIF = ("gif", frozenset({"gif"}), "image/gif", FileCategory.IMAGE)
    PDF = ("pdf", frozenset({"pdf"}), "application/pdf", FileCategory.DOCUMENT)
    DOCX = (
        "docx",
        frozenset({"docx"}),
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        FileCategory.DOCUMENT,
    )
    TXT = ("txt", frozenset({"txt"}), "text/plain", FileCategory.DOCUMENT)

    def __init__(
        self,
        display_name: str,
        extensions: frozenset[str],
        mime_type: str,
        category: FileCategory,
    ) -> None:
        self.display_name = display_name
        self.extensions = extensions
        self.mime_type = mime_type
        self.category = category

    def matches_extension(self, extension: str) -> bool:
        return extension.lower() in self.extensions

    def matches_mime_type(self, mime_type: str) -> bool:
        return self.mime_type.lower() == mime_type.lower()

    @classmethod
    def by_category(cls, category: FileCategory) -> frozenset["AllowedFileType"]:
        """All file types in a category."""
        return frozenset(t for t in cls if t.category == category)


class FileSizeUnit(Enum):
    """Binary file size units."""

    BYTES = 1
    KB = 1024
    MB = 1024**2
    GB = 1024**3
    TB = 1024**4

    def to_bytes(self, size: int) -> int:
        if size < 0:
            raise ValueError("Size cannot be negative")
        return size * self.value

    def from_bytes(self, size_bytes: int) -> float:
        if size_bytes < 0:
            raise ValueError("Bytes cannot be negative")
        return size_bytes / self.value


@dataclass(frozen=True, slots=True)
class FileValidationConfig:
    """Rules a file must satisfy to be accepted."""

    allowed_file_types: frozenset[AllowedFileType]
    max_file_size_bytes: int
    min_file_size_bytes: int | None = None
    strict_mime_type_validation: bool = True
    allow_empty_files: bool = False

    def __post_init__(self) -> None:
        if not self.allowed_file_types:
            raise ValueError("At least one file type must be allowed")
        if self.max_file_size_bytes <= 0:
            raise ValueError("Maximum file size must be positive")
        if self.min_file_size_bytes is not None:
            if self.min_file_size_bytes < 0:
                raise ValueError("Minimum file size cannot be negative")
            if self.min_file_size_bytes > self.max_file_size_bytes:
                raise ValueError(
                    "Minimum file size cannot be greater than maximum file size"
                )
            if not self.allow_empty_files and self.min_file_size_bytes == 0:
                raise ValueError(
                    "Cannot reject empty files while setting minimum size to 0 bytes"
                )
            if self.allow_empty_files and self.min_file_size_bytes > 0:
                raise ValueError(
                    "Cannot allow empty files while setting minimum size to "
                    f"{self.min_file_size_bytes} bytes"
                )

    def is_extension_allowed(self, extension: str) -> bool:
        return any(t.matches_extension(extension) for t in self.allowed_file_types)

    def is_mime_type_allowed(self, mime_type: str) -> bool:
        return any(t.matches_mime_type(mime_type) for t in self.allowed_file_types)

    def is_file_size_valid(self, size_bytes: int) -> bool:
        if size_bytes == 0:
            return self.allow_empty_files
        if self.min_file_size_bytes is not None and size_bytes < self.min_file_size_bytes:
            return False
        return size_bytes <= self.max_file_size_bytes

    @property
    def allowed_extensions(self) -> frozenset[str]:
        return frozenset(ext for t in self.allowed_file_types for ext in t.extensions)

    @property
    def allowed_mime_types(self) -> frozenset[str]:
        return frozenset(t.mime_type for t in self.allowed_file_types)


class FileInspector(Protocol):
    """Filesystem capability used to inspect a candidate file."""

    def exists(self, path: Path) -> bool:
        """Check whether anything exists at the path."""
        ...

    def is_file(self, path: Path) -> bool:
        """Check whether the path is a regular file."""
        ...

    def size(self, path: Path) -> int:
        """Size of the file in bytes."""
        ...

    def probe_content_type(self, path: Path) -> str | None:
        """Detected MIME type, or None when it cannot be determined."""
        ...


class PathFileInspector:
    """Inspects local files with pathlib; content type guessed from the name."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def size(self, path: Path) -> int:
        return path.stat().st_size

    def probe_content_type(self, path: Path) -> str | None:
        mime_type, _ = mimetypes.guess_type(path.name)
        return mime_type


def file_extension(file_name: str) -> str | None:
    """Lower-cased extension without the dot, or None if there is none."""
    dot = file_name.rfind(".")
    if dot == -1 or dot == len(file_name) - 1:
        return None
    return file_name[dot + 1 :].lower()


def validate_file(
    path: Path,
    config: FileValidationConfig,
    inspector: FileInspector,
) -> bool:
    """Check a file against a validation config.

    Returns False for any rule violation. I/O failures while inspecting the
    file are logged and reported as an invalid file.
    """
    try:
        if not inspector.exists(path) or not inspector.is_file(path):
            return False

        extension = file_extension(path.name)
        if not extension or not config.is_extension_allowed(extension):
            return False

        if not config.is_file_size_valid(inspector.size(path)):
            return False

        if not config.strict_mime_type_validation:
            return True

        mime_type = inspector.probe_content_type(path)
        if mime_type is None:
            return False
        return config.is_mime_type_allowed(mime_type)
    except OSError as e:
        logger.error("file_validation_error", path=str(path), error=str(e))
        return False
