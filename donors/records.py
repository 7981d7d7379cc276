from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from donors.services.compatibility import normalize_blood_group

logger = logging.getLogger(__name__)


def parse_iso_date(value: Any) -> Optional[date]:
    """Coerce ``value`` into a calendar date.

    Accepts ``date``/``datetime`` objects, ``YYYY-MM-DD`` strings and full
    ISO-8601 timestamps (only the calendar date is kept). Blank or
    unparseable input is treated as "no date" and returns None.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        logger.debug("Ignoring non-string date value %r", value)
        return None

    raw = value.strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        logger.debug("Ignoring unparseable date %r", value)
        return None


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y")
    return bool(value)


@dataclass(frozen=True)
class DonorRecord:
    """Point-in-time snapshot of a donor as supplied by the donor store."""

    id: str
    blood_group: str
    last_donation_date: Optional[date] = None
    semester_end_date: Optional[date] = None
    date_added: Optional[date] = None
    name: str = ""
    contact: str = ""
    city: str = ""
    university: str = ""
    department: str = ""
    semester: str = ""
    gender: str = ""
    is_hostel_resident: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DonorRecord":
        """Build a record from a store payload (camelCase or snake_case keys)."""

        return cls(
            id=_text(_pick(data, "id", default="")),
            blood_group=normalize_blood_group(_pick(data, "bloodGroup", "blood_group")),
            last_donation_date=parse_iso_date(_pick(data, "lastDonationDate", "last_donation_date")),
            semester_end_date=parse_iso_date(_pick(data, "semesterEndDate", "semester_end_date")),
            date_added=parse_iso_date(_pick(data, "dateAdded", "date_added")),
            name=_text(_pick(data, "name")),
            contact=_text(_pick(data, "contact")),
            city=_text(_pick(data, "city")),
            university=_text(_pick(data, "university")),
            department=_text(_pick(data, "department")),
            semester=_text(_pick(data, "semester")),
            gender=_text(_pick(data, "gender")),
            is_hostel_resident=_flag(_pick(data, "isHostelResident", "is_hostel_resident", default=False)),
        )

    def to_dict(self) -> dict:
        """Serialise back to the store's camelCase shape."""

        def iso(value: Optional[date]) -> str:
            return value.isoformat() if value else ""

        return {
            "id": self.id,
            "name": self.name,
            "contact": self.contact,
            "city": self.city,
            "university": self.university,
            "department": self.department,
            "semester": self.semester,
            "gender": self.gender,
            "bloodGroup": self.blood_group,
            "lastDonationDate": iso(self.last_donation_date),
            "isHostelResident": self.is_hostel_resident,
            "semesterEndDate": iso(self.semester_end_date),
            "dateAdded": iso(self.date_added),
        }
