"""Registry-backed factory selecting a phone number rule per country."""

from collections.abc import Iterable, Mapping

from core.config import Settings
from core.exceptions import UnsupportedCountryError
from domain.specifications.phone_number import (
    BulgarianPhoneNumberSpecification,
    PhoneNumberSpecification,
    RomanianPhoneNumberSpecification,
)
from domain.value_objects.country import IsoCountry

DEFAULT_SPECIFICATIONS: Mapping[IsoCountry, type[PhoneNumberSpecification]] = {
    IsoCountry.BULGARIA: BulgarianPhoneNumberSpecification,
    IsoCountry.ROMANIA: RomanianPhoneNumberSpecification,
}


class PhoneNumberSpecificationFactory:
    """Resolves the PhoneNumberSpecification for a country."""

    def __init__(
        self,
        specifications: Mapping[IsoCountry, type[PhoneNumberSpecification]] | None = None,
    ) -> None:
        self._registry: dict[IsoCountry, type[PhoneNumberSpecification]] = dict(
            DEFAULT_SPECIFICATIONS if specifications is None else specifications
        )

    @classmethod
    def for_countries(cls, countries: Iterable[IsoCountry]) -> "PhoneNumberSpecificationFactory":
        """Factory limited to a subset of the default registry."""
        wanted = set(countries)
        unknown = wanted - DEFAULT_SPECIFICATIONS.keys()
        if unknown:
            raise UnsupportedCountryError(", ".join(sorted(c.display_name for c in unknown)))
        return cls({c: s for c, s in DEFAULT_SPECIFICATIONS.items() if c in wanted})

    @classmethod
    def from_settings(cls, settings: Settings) -> "PhoneNumberSpecificationFactory":
        return cls.for_countries(
            IsoCountry.from_code(code) for code in settings.enabled_phone_countries_list
        )

    def register(
        self, country: IsoCountry, specification: type[PhoneNumberSpecification]
    ) -> None:
        self._registry[country] = specification

    @property
    def supported_countries(self) -> frozenset[IsoCountry]:
        return frozenset(self._registry)

    def get_specification(self, country: IsoCountry) -> PhoneNumberSpecification:
        """Return the rule for ``country``.

        Raises:
            UnsupportedCountryError: If no rule is registered for the country.
        """
        if country is None:
            raise ValueError("Country cannot be null")
        try:
            specification = self._registry[country]
        except KeyError:
            raise UnsupportedCountryError(str(country)) from None
        return specification()
