"""Phone number value object."""

from dataclasses import dataclass, field

from core.exceptions import DomainValidationError, InvalidPhoneNumberError
from domain.specifications.phone_number import PhoneNumberSpecification
from domain.value_objects.country import IsoCountry


@dataclass(frozen=True, slots=True)
class PhoneNumber:
    """Normalized phone number together with the rule that accepted it.

    Only the normalized form is kept. Equality compares the normalized value
    and the country of the specification.
    """

    value: str
    specification: PhoneNumberSpecification = field(compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.specification is None:
            raise ValueError("Phone number specification cannot be null")
        if self.value is None or not self.value.strip():
            raise DomainValidationError("Phone number cannot be null or empty")

        normalized = self.specification.normalize(self.value)
        self.validate(normalized)
        object.__setattr__(self, "value", normalized)

    def validate(self, value: str) -> None:
        if not value or not value.strip():
            raise DomainValidationError("Phone number cannot be null or empty")
        if not self.specification.is_satisfied_by(value):
            raise InvalidPhoneNumberError(self.specification.iso_country.display_name)

    @classmethod
    def create(cls, raw: str, specification: PhoneNumberSpecification) -> "PhoneNumber":
        return cls(raw, specification)

    @property
    def country(self) -> IsoCountry:
        return self.specification.iso_country

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PhoneNumber):
            return NotImplemented
        return self.value == other.value and self.country == other.country

    def __hash__(self) -> int:
        return hash((self.value, self.country))

    def __str__(self) -> str:
        return self.value
