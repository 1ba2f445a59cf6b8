"""Registry of calculation conventions and per-country defaults."""

import logging
from types import MappingProxyType

from noortimes.models import CalculationConvention, JuristicSchool

logger = logging.getLogger(__name__)

FALLBACK_CONVENTION = "Custom"

CONVENTIONS: MappingProxyType[str, CalculationConvention] = MappingProxyType(
    {
        c.name: c
        for c in (
            CalculationConvention("MWL", fajr_angle=18, isha_angle=17),
            CalculationConvention("ISNA", fajr_angle=15, isha_angle=15),
            CalculationConvention("Egypt", fajr_angle=19.5, isha_angle=17.5),
            CalculationConvention("Karachi", fajr_angle=18, isha_angle=18),
            CalculationConvention("UmmAlQura", fajr_angle=18.5, isha_interval=90),
            CalculationConvention("Dubai", fajr_angle=18.2, isha_angle=18.2),
            CalculationConvention("Turkey", fajr_angle=18, isha_angle=17),
            CalculationConvention(FALLBACK_CONVENTION, fajr_angle=18, isha_angle=18),
        )
    }
)

# Country code → (convention, school), for callers that know only the country.
_COUNTRY_DEFAULTS: dict[str, tuple[str, JuristicSchool]] = {
    "pk": ("Karachi", JuristicSchool.HANAFI),
    "bd": ("Karachi", JuristicSchool.HANAFI),
    "in": ("Karachi", JuristicSchool.HANAFI),
    "sa": ("UmmAlQura", JuristicSchool.STANDARD),
    "eg": ("Egypt", JuristicSchool.STANDARD),
}
_WORLD_DEFAULT = ("ISNA", JuristicSchool.STANDARD)


def resolve_convention(name: str | None) -> CalculationConvention:
    """Look up a convention by name, falling back to Custom for unknown names.

    Matching is exact first, then case-insensitive. Never raises.
    """
    if name in CONVENTIONS:
        return CONVENTIONS[name]
    if name:
        for key, convention in CONVENTIONS.items():
            if key.lower() == name.lower():
                return convention
    logger.warning(
        "Unknown calculation convention %r; using %s", name, FALLBACK_CONVENTION
    )
    return CONVENTIONS[FALLBACK_CONVENTION]


def default_for_country(country_code: str | None) -> tuple[str, JuristicSchool]:
    """Suggested (convention name, school) for an ISO 3166-1 alpha-2 code."""
    return _COUNTRY_DEFAULTS.get((country_code or "").strip().lower(), _WORLD_DEFAULT)
