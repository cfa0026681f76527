"""
Patient Insights - Metric Transformer
=====================================

Pure functions that turn the raw label -> count mappings of a
``DashboardSnapshot`` into ordered, colored ``ChartRecord`` sequences and
into the formatted percentages shown on the cards.  Nothing here touches
Streamlit or Plotly, so every rule can be unit tested in isolation.

Ordering rules
--------------
Every distribution keeps the order of the source JSON.  "Top N" always
means *the first N entries as given*, never a sort by value.

Percentage formatting
---------------------
Percentages are returned as strings with a fixed number of decimals
(``"52.0"``, ``"31"``), ready to be suffixed with ``%``:

* a category key that is absent from its mapping yields ``"NaN"``
* a zero ``total_patients`` yields ``"N/A"``
"""

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Mapping, Optional, Sequence

from patient_insights.utils.models import ChartRecord, ContactAvailability, DashboardSnapshot
from patient_insights.utils.styles import (
    CHART_COLORS, CONTACT_COLORS, GENDER_COLORS, GENDER_DEFAULT_COLOR,
)

ETHNICITY_LIMIT = 6
PRESCRIBER_LIMIT = 5
SURGERY_LIMIT = 5

# Prefixes dropped from ethnicity labels so the bar axis stays readable.
ETHNICITY_PREFIXES = ('White - ', 'Asian or Asian British - ')

# Age buckets counted as "over 60" by the aging population insight.
SENIOR_AGE_BUCKETS = ('60-74', '75-99', '100+')

NOT_AVAILABLE = "N/A"


def palette_color(index: int, palette: Sequence[str] = CHART_COLORS) -> str:
    """Color for the record at *index*, cycling through *palette*."""
    return palette[index % len(palette)]


# ============================================================================
# CHART RECORDS
# ============================================================================

def gender_records(distribution: Mapping[str, float],
                   color_map: Mapping[str, str] = GENDER_COLORS,
                   default_color: str = GENDER_DEFAULT_COLOR) -> List[ChartRecord]:
    """One record per gender, colored by label identity rather than position."""
    return [
        ChartRecord(name, value, color_map.get(name, default_color))
        for name, value in distribution.items()
    ]


def age_records(age_groups: Mapping[str, float],
                palette: Sequence[str] = CHART_COLORS) -> List[ChartRecord]:
    return [
        ChartRecord(name, value, palette_color(i, palette))
        for i, (name, value) in enumerate(age_groups.items())
    ]


def clean_ethnicity_label(label: str) -> str:
    """Strip the broad-group prefix from an ethnicity label.

    ``'White - British'`` becomes ``'British'``; labels without a known
    prefix (``'Mixed - Other'``) are returned unchanged.  Stripping repeats
    until no prefix is left, so cleaning a cleaned label is a no-op.
    """
    stripped = True
    while stripped:
        stripped = False
        for prefix in ETHNICITY_PREFIXES:
            if label.startswith(prefix):
                label = label[len(prefix):]
                stripped = True
    return label


def ethnicity_records(distribution: Mapping[str, float],
                      palette: Sequence[str] = CHART_COLORS,
                      limit: int = ETHNICITY_LIMIT) -> List[ChartRecord]:
    """First *limit* ethnicity entries with their group prefixes removed."""
    entries = list(distribution.items())[:limit]
    return [
        ChartRecord(clean_ethnicity_label(name), value, palette_color(i, palette))
        for i, (name, value) in enumerate(entries)
    ]


def prescriber_label(key: str) -> str:
    """Prescriber keys look like ``"SMITH, John (GP)"``; keep the part before the comma."""
    return key.split(',')[0]


def prescriber_records(stats: Mapping[str, float],
                       palette: Sequence[str] = CHART_COLORS,
                       limit: int = PRESCRIBER_LIMIT) -> List[ChartRecord]:
    entries = list(stats.items())[:limit]
    return [
        ChartRecord(prescriber_label(name), value, palette_color(i, palette))
        for i, (name, value) in enumerate(entries)
    ]


def surgery_records(stats: Mapping[str, float],
                    palette: Sequence[str] = CHART_COLORS,
                    limit: int = SURGERY_LIMIT) -> List[ChartRecord]:
    entries = list(stats.items())[:limit]
    return [
        ChartRecord(name, value, palette_color(i, palette))
        for i, (name, value) in enumerate(entries)
    ]


def contact_records(contact: ContactAvailability) -> List[ChartRecord]:
    """Always three slices, always Mobile / Home / No Contact."""
    values = {
        'Mobile Phone': contact.mobile_phone,
        'Home Phone': contact.home_phone,
        'No Contact': contact.no_contact,
    }
    return [ChartRecord(name, values[name], color) for name, color in CONTACT_COLORS.items()]


# ============================================================================
# PERCENTAGES
# ============================================================================

def format_percent(part: float, total: float, digits: int) -> str:
    """``part / total * 100`` rounded half-up to *digits* decimals, as a string.

    A zero total returns ``"N/A"``; a NaN part returns ``"NaN"``.
    """
    if not total:
        return NOT_AVAILABLE
    value = part / total * 100
    if math.isnan(value):
        return "NaN"
    step = Decimal(1).scaleb(-digits)
    return f"{Decimal(value).quantize(step, rounding=ROUND_HALF_UP):f}"


def format_count(value: float) -> str:
    """Thousands-separated count; NaN stays visible as ``"NaN"``."""
    if isinstance(value, float) and math.isnan(value):
        return "NaN"
    return f"{int(value):,}" if float(value).is_integer() else f"{value:,}"


def _get(mapping: Mapping[str, float], key: str) -> float:
    return mapping.get(key, math.nan)


def gender_percent(snapshot: DashboardSnapshot, label: str) -> str:
    return format_percent(_get(snapshot.gender_distribution, label), snapshot.total_patients, 1)


def female_percent(snapshot: DashboardSnapshot) -> str:
    return gender_percent(snapshot, 'Female')


def male_percent(snapshot: DashboardSnapshot) -> str:
    return gender_percent(snapshot, 'Male')


def contact_rate(snapshot: DashboardSnapshot) -> str:
    """Share of patients reachable by home or mobile phone, 1 decimal."""
    return format_percent(snapshot.contact_availability.reachable, snapshot.total_patients, 1)


def senior_patient_count(age_groups: Mapping[str, float]) -> float:
    """Patients aged 60+; NaN unless all three senior buckets are present."""
    return sum(_get(age_groups, bucket) for bucket in SENIOR_AGE_BUCKETS)


def aging_population_percent(snapshot: DashboardSnapshot) -> str:
    return format_percent(senior_patient_count(snapshot.age_groups), snapshot.total_patients, 0)


def no_contact_percent(snapshot: DashboardSnapshot) -> str:
    return format_percent(snapshot.contact_availability.no_contact, snapshot.total_patients, 0)


def primary_surgery(snapshot: DashboardSnapshot) -> Optional[tuple]:
    """``(name, count)`` of the largest practice, or None when there are none.

    Ties go to the entry listed first.
    """
    if not snapshot.surgery_stats:
        return None
    return max(snapshot.surgery_stats.items(), key=lambda kv: kv[1])


def primary_surgery_share(snapshot: DashboardSnapshot) -> Optional[str]:
    top = primary_surgery(snapshot)
    if top is None:
        return None
    return format_percent(top[1], snapshot.total_patients, 0)


# ============================================================================
# VIEW MODEL
# ============================================================================

@dataclass
class DashboardView:
    """Everything the page needs, derived from one snapshot."""
    total_patients: str
    female_percent: str
    male_percent: str
    female_count: str
    male_count: str
    contact_rate: str
    aging_percent: str
    senior_count: str
    no_contact_percent: str
    no_contact_count: str
    gender: List[ChartRecord] = field(default_factory=list)
    age: List[ChartRecord] = field(default_factory=list)
    ethnicity: List[ChartRecord] = field(default_factory=list)
    prescribers: List[ChartRecord] = field(default_factory=list)
    contact: List[ChartRecord] = field(default_factory=list)
    surgeries: List[ChartRecord] = field(default_factory=list)
    primary_surgery_name: Optional[str] = None
    primary_surgery_share: Optional[str] = None


def build_dashboard_view(snapshot: DashboardSnapshot,
                         palette: Sequence[str] = CHART_COLORS,
                         gender_colors: Dict[str, str] = GENDER_COLORS) -> DashboardView:
    """Derive every chart record and formatted figure for *snapshot*.

    Args:
        snapshot: The loaded snapshot.
        palette: Cycling palette for positional colors.  Override for theming.
        gender_colors: Label -> color map for the gender chart.

    Returns:
        A ``DashboardView`` consumed by ``patient_insights.view``.
    """
    genders = snapshot.gender_distribution
    top_surgery = primary_surgery(snapshot)
    return DashboardView(
        total_patients=format_count(snapshot.total_patients),
        female_percent=female_percent(snapshot),
        male_percent=male_percent(snapshot),
        female_count=format_count(_get(genders, 'Female')),
        male_count=format_count(_get(genders, 'Male')),
        contact_rate=contact_rate(snapshot),
        aging_percent=aging_population_percent(snapshot),
        senior_count=format_count(senior_patient_count(snapshot.age_groups)),
        no_contact_percent=no_contact_percent(snapshot),
        no_contact_count=format_count(snapshot.contact_availability.no_contact),
        gender=gender_records(genders, gender_colors),
        age=age_records(snapshot.age_groups, palette),
        ethnicity=ethnicity_records(snapshot.ethnicity_distribution, palette),
        prescribers=prescriber_records(snapshot.prescriber_stats, palette),
        contact=contact_records(snapshot.contact_availability),
        surgeries=surgery_records(snapshot.surgery_stats, palette),
        primary_surgery_name=top_surgery[0] if top_surgery else None,
        primary_surgery_share=primary_surgery_share(snapshot),
    )
