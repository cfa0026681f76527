"""
Data models and validation for the patient snapshot.

The dashboard is driven by a single JSON document, the *snapshot*, that an
external process pre-computes from the patient dataset.  This module gives
that document a typed shape and checks it at the fetch boundary so malformed
payloads become an explicit error instead of ``NaN`` scattered across cards.

Dataclasses
-----------
::

    DashboardSnapshot
        The whole payload: total patient count plus one label -> count
        mapping per distribution and the contact availability record.

    ContactAvailability
        Exactly three counts: home phone, mobile phone, no contact.

    ChartRecord
        One ``{name, value, fill}`` triple ready for a chart trace.  Built
        fresh on every render by ``utils.metrics``; never persisted.

What validation does NOT check
------------------------------
Validation only enforces the *top-level* schema (required fields present,
distributions are mappings, counts are non-negative numbers).  Category keys
inside a mapping (``Female``, ``60-74`` ...) are not required; when one is
missing the derived percentage renders as ``NaN`` and the rest of the view
is unaffected.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


class SnapshotLoadError(ValueError):
    """Raised when the snapshot cannot be read or parsed."""


class SnapshotValidationError(SnapshotLoadError):
    """Raised when the snapshot payload does not match the expected schema."""


# JSON key -> dataclass attribute for every label -> count mapping.
DISTRIBUTION_FIELDS = {
    'genderDistribution':    'gender_distribution',
    'ethnicityDistribution': 'ethnicity_distribution',
    'ageGroups':             'age_groups',
    'prescriberStats':       'prescriber_stats',
    'surgeryStats':          'surgery_stats',
}

CONTACT_FIELDS = {
    'homePhone':   'home_phone',
    'mobilePhone': 'mobile_phone',
    'noContact':   'no_contact',
}

REQUIRED_FIELDS = ['totalPatients', *DISTRIBUTION_FIELDS, 'contactAvailability']


# ============================================================================
# SNAPSHOT
# ============================================================================

@dataclass(frozen=True)
class ContactAvailability:
    """How many patients can be reached, and how."""
    home_phone: int
    mobile_phone: int
    no_contact: int

    @property
    def reachable(self) -> int:
        return self.home_phone + self.mobile_phone


@dataclass(frozen=True)
class DashboardSnapshot:
    """Immutable aggregate counts behind the whole view.

    Dict insertion order follows the source JSON and is significant: it
    drives bar order for age groups and the top-N cut for ethnicity,
    prescribers and surgeries.
    """
    total_patients: int
    gender_distribution: Dict[str, float]
    ethnicity_distribution: Dict[str, float]
    age_groups: Dict[str, float]
    prescriber_stats: Dict[str, float]
    contact_availability: ContactAvailability
    surgery_stats: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Any) -> 'DashboardSnapshot':
        """Validate a decoded JSON payload and build a snapshot from it.

        Raises:
            SnapshotValidationError: If the payload is not an object, a
                required field is missing, or any count is negative or
                not a number.
        """
        if not isinstance(payload, Mapping):
            raise SnapshotValidationError(
                f"Snapshot must be a JSON object, got {type(payload).__name__}"
            )

        missing = [key for key in REQUIRED_FIELDS if key not in payload]
        if missing:
            raise SnapshotValidationError(f"Missing required fields: {missing}")

        total = _count(payload['totalPatients'], 'totalPatients')
        if not float(total).is_integer():
            raise SnapshotValidationError(
                f"'totalPatients' must be a whole number, got {total}"
            )

        distributions = {
            attr: _distribution(payload[key], key)
            for key, attr in DISTRIBUTION_FIELDS.items()
        }

        contact = payload['contactAvailability']
        if not isinstance(contact, Mapping):
            raise SnapshotValidationError("'contactAvailability' must be an object")
        missing = [key for key in CONTACT_FIELDS if key not in contact]
        if missing:
            raise SnapshotValidationError(
                f"Missing contactAvailability fields: {missing}"
            )
        contact_availability = ContactAvailability(**{
            attr: _count(contact[key], f"contactAvailability.{key}")
            for key, attr in CONTACT_FIELDS.items()
        })

        return cls(
            total_patients=int(total),
            contact_availability=contact_availability,
            **distributions,
        )


def _count(value: Any, where: str) -> float:
    # bool is an int subclass; a JSON true/false is never a count.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SnapshotValidationError(
            f"'{where}' must be a number, got {type(value).__name__}"
        )
    if not math.isfinite(value) or value < 0:
        raise SnapshotValidationError(f"'{where}' must be non-negative, got {value}")
    return value


def _distribution(value: Any, where: str) -> Dict[str, float]:
    if not isinstance(value, Mapping):
        raise SnapshotValidationError(f"'{where}' must be an object of counts")
    return {str(label): _count(count, f"{where}.{label}") for label, count in value.items()}


# ============================================================================
# CHART RECORD
# ============================================================================

@dataclass(frozen=True)
class ChartRecord:
    """A single chart-ready datum.

    ``fill`` is a hex color; ``None`` means "use the chart default".
    """
    name: str
    value: float
    fill: Optional[str] = None
