from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta
from django.utils import timezone

from donors.records import DonorRecord, parse_iso_date

logger = logging.getLogger(__name__)

DONATION_COOLDOWN_MONTHS = 3

DateInput = Union[date, str, None]


@dataclass(frozen=True)
class DonorStatus:
    available: bool
    next_eligible_date: Optional[date]
    graduated: bool


def resolve_today(today: Optional[date] = None) -> date:
    """Evaluation date: ``today`` if given, else the local date of ``TIME_ZONE``."""

    if today is None:
        return timezone.localdate()
    if isinstance(today, datetime):
        return today.date()
    return today


def add_months(value: date, months: int) -> date:
    """Shift the month field of ``value`` by ``months``, keeping the day.

    Days that do not exist in the target month roll over into the next one,
    so Jan 31 + 1 month lands on Mar 3 (Mar 2 in a leap year).
    """

    return value.replace(day=1) + relativedelta(months=months) + timedelta(days=value.day - 1)


def next_eligible_date(last_donation_date: DateInput = None) -> Optional[date]:
    last = parse_iso_date(last_donation_date)
    if last is None:
        return None
    try:
        return add_months(last, DONATION_COOLDOWN_MONTHS)
    except (OverflowError, ValueError):
        logger.debug("Next eligible date after %s is past date.max", last)
        return None


def is_available(last_donation_date: DateInput = None, *, today: Optional[date] = None) -> bool:
    """True when the donor never donated or the cooldown has fully elapsed.

    The boundary is inclusive: a donation exactly three calendar months ago
    makes the donor available again today.
    """

    last = parse_iso_date(last_donation_date)
    if last is None:
        return True
    try:
        cutoff = add_months(resolve_today(today), -DONATION_COOLDOWN_MONTHS)
    except (OverflowError, ValueError):
        # Cutoff falls before date.min, so no recorded donation is old enough.
        return False
    return last <= cutoff


def has_graduated(semester_end_date: DateInput = None, *, today: Optional[date] = None) -> bool:
    end = parse_iso_date(semester_end_date)
    if end is None:
        return False
    return end < resolve_today(today)


def evaluate_donor(donor: DonorRecord, *, today: Optional[date] = None) -> DonorStatus:
    today = resolve_today(today)
    return DonorStatus(
        available=is_available(donor.last_donation_date, today=today),
        next_eligible_date=next_eligible_date(donor.last_donation_date),
        graduated=has_graduated(donor.semester_end_date, today=today),
    )
