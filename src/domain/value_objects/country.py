"""ISO countries known to the profile domain."""

from enum import Enum

from core.exceptions import UnsupportedCountryError


class IsoCountry(Enum):
    """ISO 3166 country with its international dialing code."""

    BULGARIA = ("BG", "BGR", "359", "Bulgaria")
    ROMANIA = ("RO", "ROU", "40", "Romania")
    GREECE = ("GR", "GRC", "30", "Greece")

    def __init__(self, alpha2: str, alpha3: str, dial_code: str, display_name: str) -> None:
        self.alpha2 = alpha2
        self.alpha3 = alpha3
        self.dial_code = dial_code
        self.display_name = display_name

    @classmethod
    def from_code(cls, code: str) -> "IsoCountry":
        """Look up a country by alpha-2 or alpha-3 code (case-insensitive)."""
        wanted = code.strip().upper()
        for country in cls:
            if wanted in (country.alpha2, country.alpha3):
                return country
        raise UnsupportedCountryError(code)

    def __str__(self) -> str:
        return self.display_name
