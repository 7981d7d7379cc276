from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Tuple

from donors.records import DonorRecord
from donors.services.compatibility import BLOOD_GROUPS
from donors.services.eligibility import evaluate_donor, resolve_today


@dataclass(frozen=True)
class RosterSummary:
    """Dashboard figures for one roster snapshot."""

    total: int
    available: int
    available_percentage: float
    hostel_residents: int
    graduated: int
    blood_group_count: int
    university_count: int
    by_blood_group: Tuple[Tuple[str, int], ...]
    by_city: Tuple[Tuple[str, int], ...]


def _distinct_sorted(values: Iterable[str]) -> List[str]:
    return sorted({value for value in values if value})


def universities_from_donors(donors: Iterable[DonorRecord]) -> List[str]:
    return _distinct_sorted(donor.university for donor in donors)


def cities_from_donors(donors: Iterable[DonorRecord]) -> List[str]:
    return _distinct_sorted(donor.city for donor in donors)


def summarize_roster(donors: Iterable[DonorRecord], *, today: Optional[date] = None) -> RosterSummary:
    today = resolve_today(today)
    donors = list(donors)

    available = 0
    graduated = 0
    for donor in donors:
        status = evaluate_donor(donor, today=today)
        available += status.available
        graduated += status.graduated

    total = len(donors)
    groups = Counter(donor.blood_group for donor in donors)
    cities = Counter(donor.city for donor in donors if donor.city)

    return RosterSummary(
        total=total,
        available=available,
        available_percentage=round(available / total * 100, 1) if total else 0.0,
        hostel_residents=sum(1 for donor in donors if donor.is_hostel_resident),
        graduated=graduated,
        blood_group_count=len(groups),
        university_count=len(universities_from_donors(donors)),
        by_blood_group=tuple((group, groups.get(group, 0)) for group in BLOOD_GROUPS),
        # Busiest cities first; ties alphabetical.
        by_city=tuple(sorted(cities.items(), key=lambda kv: (-kv[1], kv[0]))),
    )
