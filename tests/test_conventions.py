import logging

import pytest

from noortimes.conventions import (
    CONVENTIONS,
    FALLBACK_CONVENTION,
    default_for_country,
    resolve_convention,
)
from noortimes.models import CalculationConvention, JuristicSchool


def test_registry_entries_define_exactly_one_isha_rule():
    for convention in CONVENTIONS.values():
        assert (convention.isha_angle is None) != (convention.isha_interval is None)


def test_karachi_angles():
    karachi = resolve_convention("Karachi")
    assert (karachi.fajr_angle, karachi.isha_angle) == (18, 18)


def test_umm_al_qura_uses_fixed_interval():
    umm = resolve_convention("UmmAlQura")
    assert umm.isha_angle is None
    assert umm.isha_interval == 90


def test_lookup_is_case_insensitive():
    assert resolve_convention("karachi") is CONVENTIONS["Karachi"]


@pytest.mark.parametrize("name", ["Atlantis", "", None])
def test_unknown_names_fall_back(name, caplog):
    with caplog.at_level(logging.WARNING, logger="noortimes.conventions"):
        convention = resolve_convention(name)
    assert convention.name == FALLBACK_CONVENTION
    assert caplog.records


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        CONVENTIONS["Mine"] = CalculationConvention("Mine", 10, 10)  # type: ignore[index]


@pytest.mark.parametrize(
    ("country", "expected"),
    [
        ("bd", ("Karachi", JuristicSchool.HANAFI)),
        ("PK", ("Karachi", JuristicSchool.HANAFI)),
        ("in", ("Karachi", JuristicSchool.HANAFI)),
        ("sa", ("UmmAlQura", JuristicSchool.STANDARD)),
        ("eg", ("Egypt", JuristicSchool.STANDARD)),
        ("gb", ("ISNA", JuristicSchool.STANDARD)),
        ("", ("ISNA", JuristicSchool.STANDARD)),
        (None, ("ISNA", JuristicSchool.STANDARD)),
    ],
)
def test_default_for_country(country, expected):
    assert default_for_country(country) == expected
