"""
Full Retirement Age (FRA) lookup.

The FRA rose from 66 to 67, two months per birth year, for people born in
1955 through 1959. Birth years outside the transition use the nearest end of
the table.
"""

from typing import Dict

from .formatting import AgeFormat, to_years_months

FIRST_TRANSITION_YEAR = 1954
LAST_TRANSITION_YEAR = 1960

FRA_TRANSITION_TABLE: Dict[int, float] = {
    1954: 66 + 0 / 12,
    1955: 66 + 2 / 12,
    1956: 66 + 4 / 12,
    1957: 66 + 6 / 12,
    1958: 66 + 8 / 12,
    1959: 66 + 10 / 12,
    1960: 67 + 0 / 12,
}


def full_retirement_age(birth_year: int) -> float:
    """
    Get the Full Retirement Age for a birth year.

    Args:
        birth_year: Calendar year of birth

    Returns:
        FRA in fractional years (e.g. 66.5 for 66 years 6 months)
    """
    clamped = min(max(int(birth_year), FIRST_TRANSITION_YEAR), LAST_TRANSITION_YEAR)
    return FRA_TRANSITION_TABLE[clamped]


def full_retirement_age_description(birth_year: int) -> str:
    """Human-readable FRA message shown when a birth date is entered."""
    fra = full_retirement_age(birth_year)
    return f"Full retirement age: {to_years_months(fra, AgeFormat.LONG)}"
