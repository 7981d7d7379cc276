from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, TextIO, Union

from donors.records import DonorRecord
from donors.services.compatibility import InvalidBloodGroup

logger = logging.getLogger(__name__)


class RosterError(ValueError):
    """Raised when a roster document cannot be read as a list of donors."""


def _read_document(source: Union[str, Path, TextIO]):
    try:
        if isinstance(source, (str, Path)):
            with open(source, encoding="utf-8") as handle:
                return json.load(handle)
        return json.load(source)
    except json.JSONDecodeError as exc:
        raise RosterError(f"Roster is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise RosterError(f"Could not read roster {source}: {exc}") from exc


def load_roster(source: Union[str, Path, TextIO]) -> List[DonorRecord]:
    """Load donor records from a JSON export of the donor store.

    The document is either a list of donor objects or ``{"donors": [...]}``.
    """

    document = _read_document(source)
    if isinstance(document, dict):
        document = document.get("donors")
    if not isinstance(document, list):
        raise RosterError("Roster must be a JSON list of donors or an object with a 'donors' list")

    records: List[DonorRecord] = []
    for index, item in enumerate(document):
        if not isinstance(item, dict):
            raise RosterError(f"Roster entry #{index} is not an object")
        try:
            records.append(DonorRecord.from_dict(item))
        except InvalidBloodGroup:
            logger.error("Roster entry #%s (id=%s) has an invalid blood group", index, item.get("id"))
            raise

    logger.debug("Loaded %d donor records", len(records))
    return records
