"""CSV rendering of donor lists for drive organisers."""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable, List, Optional, TextIO

from django.conf import settings

from donors.records import DonorRecord
from donors.services.eligibility import evaluate_donor, resolve_today

EXPORT_HEADERS = (
    "Name",
    "Contact",
    "City",
    "University",
    "Department",
    "Semester",
    "Blood Group",
    "Last Donation Date",
    "Next Donation Date",
    "Available",
    "Hostel Resident",
    "Semester End Date",
    "Graduated",
    "Date Added",
)


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _iso(value: Optional[date], missing: str = "N/A") -> str:
    return value.isoformat() if value else missing


def export_row(donor: DonorRecord, *, today: Optional[date] = None) -> List[str]:
    status = evaluate_donor(donor, today=today)
    return [
        donor.name,
        donor.contact,
        donor.city,
        donor.university,
        donor.department,
        donor.semester,
        donor.blood_group,
        _iso(donor.last_donation_date, missing="Never"),
        _iso(status.next_eligible_date),
        _yes_no(status.available),
        _yes_no(donor.is_hostel_resident),
        _iso(donor.semester_end_date),
        _yes_no(status.graduated),
        _iso(donor.date_added),
    ]


def write_donors_csv(donors: Iterable[DonorRecord], stream: TextIO, *, today: Optional[date] = None) -> int:
    """Write a header plus one row per donor to ``stream``; returns the row count.

    Every cell is quoted so spreadsheet tools keep phone numbers (leading
    zeros, ``+`` prefixes) as text.
    """

    today = resolve_today(today)
    writer = csv.writer(stream, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    count = 0
    for donor in donors:
        writer.writerow(export_row(donor, today=today))
        count += 1
    return count


def donors_to_csv(donors: Iterable[DonorRecord], *, today: Optional[date] = None) -> str:
    buffer = io.StringIO()
    write_donors_csv(donors, buffer, today=today)
    return buffer.getvalue()


def export_filename(today: Optional[date] = None) -> str:
    prefix = getattr(settings, "DONOR_EXPORT_FILENAME_PREFIX", "blood_donors")
    return f"{prefix}_{resolve_today(today).isoformat()}.csv"
