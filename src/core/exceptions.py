"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the profile domain."""

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    PROFILE_CREATION_NOT_FOUND = "PROFILE_CREATION_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNSUPPORTED_COUNTRY = "UNSUPPORTED_COUNTRY"
    INVALID_PHONE_NUMBER = "INVALID_PHONE_NUMBER"

    # Business rule errors (422)
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    USERNAME_CHANGE_COOLDOWN = "USERNAME_CHANGE_COOLDOWN"
    PROFILE_ALREADY_CREATED = "PROFILE_ALREADY_CREATED"
    PROFILE_CREATION_CLOSED = "PROFILE_CREATION_CLOSED"
    PROFILE_CREATION_FAILED = "PROFILE_CREATION_FAILED"

    # Conflict errors (409)
    USERNAME_TAKEN = "USERNAME_TAKEN"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class DomainValidationError(AppException):
    """A value type invariant was violated."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
            details=details,
        )


class UnsupportedCountryError(DomainValidationError):
    """No phone number rule is registered for the country."""

    def __init__(self, country: str) -> None:
        super().__init__(
            message=f"Unsupported country: {country}",
            error_code=ErrorCode.UNSUPPORTED_COUNTRY,
            details={"country": country},
        )


class InvalidPhoneNumberError(DomainValidationError):
    """Phone number does not satisfy the country rule."""

    def __init__(self, country: str) -> None:
        super().__init__(
            message=f"Invalid phone number for country: {country}",
            error_code=ErrorCode.INVALID_PHONE_NUMBER,
            details={"country": country},
        )


class BusinessRuleViolationError(AppException):
    """A business rule rejected the operation."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.BUSINESS_RULE_VIOLATION,
        status_code: int = 422,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status_code,
            details=details,
        )


class UsernameNotUniqueError(BusinessRuleViolationError):
    """Username is already used by another profile."""

    def __init__(self, username: str) -> None:
        super().__init__(
            message=f"Username already taken: {username}",
            error_code=ErrorCode.USERNAME_TAKEN,
            status_code=409,
            details={"username": username},
        )


class UsernameChangeCooldownError(BusinessRuleViolationError):
    """Username was changed too recently."""

    def __init__(self, cooldown_days: int) -> None:
        super().__init__(
            message=f"Username can only be changed once every {cooldown_days} days",
            error_code=ErrorCode.USERNAME_CHANGE_COOLDOWN,
            details={"cooldown_days": cooldown_days},
        )


class ProfileAlreadyCreatedError(BusinessRuleViolationError):
    """Profile creation process has already completed."""

    def __init__(self) -> None:
        super().__init__(
            message="Profile has already been created",
            error_code=ErrorCode.PROFILE_ALREADY_CREATED,
        )


class ProfileCreationClosedError(BusinessRuleViolationError):
    """Profile creation process has failed and is closed for good."""

    def __init__(self) -> None:
        super().__init__(
            message="Profile creation has failed and cannot be retried",
            error_code=ErrorCode.PROFILE_CREATION_CLOSED,
        )


class ProfileCreationError(BusinessRuleViolationError):
    """Profile creation attempt failed; the process is now FAILED."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            message=f"Profile creation failed: {reason}",
            error_code=ErrorCode.PROFILE_CREATION_FAILED,
            details={"reason": reason},
        )
        self.reason = reason


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {profile_id}",
            status_code=404,
            details={"profile_id": profile_id},
        )


class ProfileCreationNotFoundError(AppException):
    """Profile creation process not found."""

    def __init__(self, process_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_CREATION_NOT_FOUND,
            message=f"Profile creation not found: {process_id}",
            status_code=404,
            details={"process_id": process_id},
        )
