"""Client-side categorical filters over already-fetched advocates."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from solace.schemas import AdvocateDTO


class YearsBucket(str, Enum):
    """Years-of-experience buckets offered by the years picker."""
    ONE_TO_FIVE = "1-5 years"
    SIX_TO_TEN = "6-10 years"
    OVER_TEN = "10+ years"

    def contains(self, years: int) -> bool:
        if self is YearsBucket.ONE_TO_FIVE:
            return 1 <= years <= 5
        if self is YearsBucket.SIX_TO_TEN:
            return 6 <= years <= 10
        return years > 10


YEARS_OPTIONS = [bucket.value for bucket in YearsBucket]


@dataclass(frozen=True)
class FilterState:
    """Selected picker values; empty means "All"."""
    city: str = ""
    degree: str = ""
    years: YearsBucket | None = None

    @property
    def active(self) -> bool:
        return bool(self.city or self.degree or self.years)

    def matches(self, advocate: AdvocateDTO) -> bool:
        if self.city and advocate.city != self.city:
            return False
        if self.degree and advocate.degree != self.degree:
            return False
        if self.years is not None and not self.years.contains(advocate.years_of_experience):
            return False
        return True


def apply_filters(advocates: Iterable[AdvocateDTO], state: FilterState) -> list[AdvocateDTO]:
    """Subset of ``advocates`` passing every selected filter, order preserved."""
    return [a for a in advocates if state.matches(a)]


def _distinct_sorted(values: Iterable[str]) -> list[str]:
    return sorted({v for v in values if v})


def city_options(advocates: Iterable[AdvocateDTO]) -> list[str]:
    return _distinct_sorted(a.city for a in advocates)


def degree_options(advocates: Iterable[AdvocateDTO]) -> list[str]:
    return _distinct_sorted(a.degree for a in advocates)


def _normalize(text: str) -> str:
    return text.replace("'", "").lower()


def relevant_specialties(specialties: Sequence[str], term: str) -> list[str]:
    """Specialties containing ``term`` (apostrophes ignored), or all of them.

    Falls back to the full list when the term is empty or nothing matches.
    """
    if not term:
        return list(specialties)
    needle = _normalize(term)
    matching = [s for s in specialties if needle in _normalize(s)]
    return matching or list(specialties)
