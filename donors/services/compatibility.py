"""ABO/Rh compatibility lookups for donor matching.

Only ``COMPATIBLE_DONORS`` is maintained by hand. The donor-side view
(``CAN_DONATE_TO``) is derived from it so both directions always agree.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Optional, Tuple

BLOOD_GROUPS: Tuple[str, ...] = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")

MATCH_DIRECT = "direct"
MATCH_COMPATIBLE = "compatible"


class InvalidBloodGroup(ValueError):
    """Raised when a value is not one of the eight canonical blood groups."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid blood group: {value!r} (expected one of {', '.join(BLOOD_GROUPS)})")


# Recipient group -> donor groups it can safely receive from.
COMPATIBLE_DONORS: Dict[str, FrozenSet[str]] = {
    "A+": frozenset({"A+", "A-", "O+", "O-"}),
    "A-": frozenset({"A-", "O-"}),
    "B+": frozenset({"B+", "B-", "O+", "O-"}),
    "B-": frozenset({"B-", "O-"}),
    "AB+": frozenset(BLOOD_GROUPS),  # Universal recipient
    "AB-": frozenset({"A-", "B-", "AB-", "O-"}),
    "O+": frozenset({"O+", "O-"}),
    "O-": frozenset({"O-"}),
}


def _invert(table: Dict[str, FrozenSet[str]]) -> Dict[str, FrozenSet[str]]:
    inverted: Dict[str, set] = {group: set() for group in BLOOD_GROUPS}
    for recipient, donors in table.items():
        for donor in donors:
            inverted[donor].add(recipient)
    return {group: frozenset(recipients) for group, recipients in inverted.items()}


# Donor group -> recipient groups it can give to.
CAN_DONATE_TO: Dict[str, FrozenSet[str]] = _invert(COMPATIBLE_DONORS)


def normalize_blood_group(value: Optional[str]) -> str:
    """Return the canonical spelling of ``value`` or raise ``InvalidBloodGroup``.

    Surrounding whitespace and letter case are forgiven (``" ab+ "`` -> ``"AB+"``);
    anything else, including blank input, is rejected.
    """

    if not isinstance(value, str):
        raise InvalidBloodGroup(value)
    group = value.strip().upper()
    if group not in COMPATIBLE_DONORS:
        raise InvalidBloodGroup(value)
    return group


def compatible_donors_for(requested_group: str) -> FrozenSet[str]:
    """Donor groups whose blood can be given to a recipient of ``requested_group``."""
    return COMPATIBLE_DONORS[normalize_blood_group(requested_group)]


def can_donate_to(donor_group: str) -> FrozenSet[str]:
    """Recipient groups a donor of ``donor_group`` can give to."""
    return CAN_DONATE_TO[normalize_blood_group(donor_group)]


def is_compatible(donor_group: str, recipient_group: str) -> bool:
    return normalize_blood_group(donor_group) in compatible_donors_for(recipient_group)


def classify_match(donor_group: str, requested_group: str) -> Optional[str]:
    """Label a donor against a request: ``"direct"``, ``"compatible"`` or None."""

    donor = normalize_blood_group(donor_group)
    requested = normalize_blood_group(requested_group)
    if donor == requested:
        return MATCH_DIRECT
    if is_compatible(donor, requested):
        return MATCH_COMPATIBLE
    return None
