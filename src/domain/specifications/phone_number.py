"""Country-specific phone number specifications."""

import re
from abc import ABC, abstractmethod
from typing import ClassVar

from domain.value_objects.country import IsoCountry

FORMATTING_CHARACTERS = re.compile(r"[\s\-()]")


class PhoneNumberSpecification(ABC):
    """Rule deciding whether a phone number is valid for one country."""

    @property
    @abstractmethod
    def iso_country(self) -> IsoCountry:
        """Country whose numbering plan this rule encodes."""

    @abstractmethod
    def normalize(self, phone_number: str) -> str:
        """Rewrite a raw phone number into its canonical form."""

    @abstractmethod
    def is_satisfied_by(self, candidate: str | None) -> bool:
        """Check whether the candidate is a valid number for the country."""


class PatternPhoneNumberSpecification(PhoneNumberSpecification):
    """Phone number rule driven by a country and a regular expression.

    Normalization strips whitespace, dashes and parentheses, then rewrites
    both the ``00<dial code>`` international prefix and the national trunk
    ``0`` to ``+<dial code>``.
    """

    country: ClassVar[IsoCountry]
    pattern: ClassVar[re.Pattern[str]]

    @property
    def iso_country(self) -> IsoCountry:
        return self.country

    def normalize(self, phone_number: str) -> str:
        dial_code = self.country.dial_code
        cleaned = FORMATTING_CHARACTERS.sub("", phone_number)
        if cleaned.startswith("00" + dial_code):
            return "+" + cleaned[2:]
        if cleaned.startswith("0") and not cleaned.startswith("00"):
            return f"+{dial_code}{cleaned[1:]}"
        return cleaned

    def is_satisfied_by(self, candidate: str | None) -> bool:
        if candidate is None or not candidate.strip():
            return False
        return self.pattern.fullmatch(self.normalize(candidate)) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PatternPhoneNumberSpecification):
            return NotImplemented
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class BulgarianPhoneNumberSpecification(PatternPhoneNumberSpecification):
    country = IsoCountry.BULGARIA
    pattern = re.compile(r"^(\+359|0)[789]\d{8}$")


class RomanianPhoneNumberSpecification(PatternPhoneNumberSpecification):
    country = IsoCountry.ROMANIA
    pattern = re.compile(r"^(\+40|0)7\d{8}$")
