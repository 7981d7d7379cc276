"""Filter and rank a donor roster snapshot.

Ranking always puts donors who can give blood today first. Within each
tier, donors are ordered by how long ago they last donated, with donors who
never donated at the very front.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from donors.records import DonorRecord
from donors.services.compatibility import compatible_donors_for, normalize_blood_group
from donors.services.eligibility import is_available, resolve_today

logger = logging.getLogger(__name__)

AVAILABILITY_ALL = "all"
AVAILABILITY_AVAILABLE = "available"
AVAILABILITY_UNAVAILABLE = "unavailable"
AVAILABILITY_CHOICES = (AVAILABILITY_ALL, AVAILABILITY_AVAILABLE, AVAILABILITY_UNAVAILABLE)


@dataclass(frozen=True)
class SearchFilters:
    blood_group: Optional[str] = None
    query: str = ""
    name: str = ""
    contact: str = ""
    city: str = ""
    university: str = ""
    availability: str = AVAILABILITY_ALL
    gender: Optional[str] = None
    hostel_resident: Optional[bool] = None
    date_added_from: Optional[date] = None
    date_added_to: Optional[date] = None

    def __post_init__(self):
        if self.blood_group:
            object.__setattr__(self, "blood_group", normalize_blood_group(self.blood_group))
        else:
            object.__setattr__(self, "blood_group", None)
        if self.availability not in AVAILABILITY_CHOICES:
            raise ValueError(f"availability must be one of {', '.join(AVAILABILITY_CHOICES)}")

    def is_empty(self) -> bool:
        return self == SearchFilters()

    def active(self) -> dict:
        """Only the dimensions that constrain the result, for logging/display."""
        default = SearchFilters()
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) != getattr(default, f.name)
        }


@dataclass(frozen=True)
class SearchResult:
    matches: Tuple[DonorRecord, ...]
    alternatives: Tuple[DonorRecord, ...]
    filters: SearchFilters
    today: date


def _contains(haystack: str, needle: str) -> bool:
    return needle.strip().lower() in (haystack or "").lower()


def _matches_query(donor: DonorRecord, query: str) -> bool:
    term = query.strip()
    return (
        _contains(donor.name, term)
        or term in donor.contact
        or _contains(donor.city, term)
        or _contains(donor.university, term)
        or _contains(donor.blood_group, term)
    )


def _in_date_range(donor: DonorRecord, start: Optional[date], end: Optional[date]) -> bool:
    if start is None and end is None:
        return True
    if donor.date_added is None:
        return False
    if start is not None and donor.date_added < start:
        return False
    if end is not None and donor.date_added > end:
        return False
    return True


def _accepts(donor: DonorRecord, filters: SearchFilters, today: date) -> bool:
    if filters.blood_group and donor.blood_group != filters.blood_group:
        return False
    if filters.query.strip() and not _matches_query(donor, filters.query):
        return False
    if filters.name.strip() and not _contains(donor.name, filters.name):
        return False
    if filters.contact.strip() and filters.contact.strip() not in donor.contact:
        return False
    if filters.city.strip() and not _contains(donor.city, filters.city):
        return False
    if filters.university.strip() and not _contains(donor.university, filters.university):
        return False
    if filters.availability != AVAILABILITY_ALL:
        wanted = filters.availability == AVAILABILITY_AVAILABLE
        if is_available(donor.last_donation_date, today=today) != wanted:
            return False
    if filters.gender and donor.gender != filters.gender:
        return False
    if filters.hostel_resident is not None and donor.is_hostel_resident != filters.hostel_resident:
        return False
    return _in_date_range(donor, filters.date_added_from, filters.date_added_to)


def filter_donors(
    donors: Iterable[DonorRecord],
    filters: SearchFilters,
    *,
    today: Optional[date] = None,
) -> List[DonorRecord]:
    today = resolve_today(today)
    return [donor for donor in donors if _accepts(donor, filters, today)]


def sort_donors(donors: Iterable[DonorRecord], *, today: Optional[date] = None) -> List[DonorRecord]:
    """Available donors first, then oldest last donation first.

    ``sorted`` is stable, so donors with identical keys keep their input order.
    """

    today = resolve_today(today)

    def rank(donor: DonorRecord):
        available = is_available(donor.last_donation_date, today=today)
        return (not available, donor.last_donation_date or date.min)

    return sorted(donors, key=rank)


def find_alternatives(
    donors: Iterable[DonorRecord],
    requested_group: str,
    *,
    today: Optional[date] = None,
) -> List[DonorRecord]:
    """Donors who can give to ``requested_group`` without being that exact group."""

    requested = normalize_blood_group(requested_group)
    accepted = compatible_donors_for(requested) - {requested}
    candidates = [donor for donor in donors if donor.blood_group in accepted]
    return sort_donors(candidates, today=today)


def search_donors(
    donors: Sequence[DonorRecord],
    filters: SearchFilters,
    *,
    today: Optional[date] = None,
) -> SearchResult:
    """Run a full roster query: ranked matches plus compatible alternatives.

    Alternatives are only computed when a blood group is requested. They are
    drawn from the whole roster, not from the other filters' result.
    """

    today = resolve_today(today)
    matches = sort_donors(filter_donors(donors, filters, today=today), today=today)
    alternatives: List[DonorRecord] = []
    if filters.blood_group:
        alternatives = find_alternatives(donors, filters.blood_group, today=today)

    logger.debug(
        "Donor search over %d records (%s): %d matches, %d alternatives",
        len(donors),
        "no filters" if filters.is_empty() else filters.active(),
        len(matches),
        len(alternatives),
    )
    return SearchResult(
        matches=tuple(matches),
        alternatives=tuple(alternatives),
        filters=filters,
        today=today,
    )
