"""
Patient Insights - Page Layout
==============================

Renders the single dashboard view for whatever the load state currently is.

Layout (Loaded, top to bottom):
    1. Header          - kicker, title, patient count, "data as of" badge
    2. Stat cards      - total, female %, male %, contact rate
    3. Chart grid      - gender donut, age bars, top prescribers, contact pie
    4. Key insights    - aging population, primary surgery, contact gap
    5. Ethnicity panel - top ethnicity categories, horizontal bars
    6. Surgery panel   - radial share of the leading surgeries (if any)
    7. Data tables     - collapsed expander with every distribution
    8. Footer

Loading shows only the loading placeholder; Failed shows the error card
and a Retry button.
"""

from typing import Callable, Mapping, Optional

import pandas as pd
import streamlit as st

from patient_insights.utils.charts import (
    chart_donut, chart_horizontal_bar, chart_pie, chart_radial, chart_vertical_bar,
)
from patient_insights.utils.components import (
    error_html, footer_html, header_html, insight_card_html, loading_html,
    render_chart_panel, render_html, stat_card_html,
)
from patient_insights.utils.data_loader import Failed, Loaded, LoadState, Loading
from patient_insights.utils.metrics import (
    NOT_AVAILABLE, DashboardView, build_dashboard_view, format_percent,
)
from patient_insights.utils.models import DashboardSnapshot
from patient_insights.utils.styles import StatTheme


def render(state: LoadState, on_retry: Optional[Callable[[], None]] = None) -> None:
    """Dispatch to the renderer for *state*."""
    if isinstance(state, Loaded):
        render_loaded(state.snapshot)
    elif isinstance(state, Failed):
        render_failed(state.error, on_retry)
    elif isinstance(state, Loading):
        render_loading()
    else:
        raise TypeError(f"Unknown load state: {state!r}")


def render_loading() -> None:
    render_html(loading_html())


def render_failed(error: str, on_retry: Optional[Callable[[], None]] = None) -> None:
    render_html(error_html(error))
    if on_retry is not None:
        st.button("Retry", on_click=on_retry, type="primary")


def render_loaded(snapshot: DashboardSnapshot) -> None:
    view = build_dashboard_view(snapshot)

    render_html(header_html(view.total_patients))
    _render_stat_cards(view)
    _render_chart_grid(view)
    _render_insights(view)

    render_chart_panel(
        "Ethnicity Distribution (Top Categories)",
        chart_horizontal_bar(view.ethnicity, label_width=140, height=288),
        key="ethnicity",
    )
    if view.surgeries:
        render_chart_panel("Surgery Share (Top Practices)",
                           chart_radial(view.surgeries), key="surgeries")

    _render_data_tables(snapshot)
    render_html(footer_html(view.total_patients))


# ============================================================================
# SECTIONS
# ============================================================================

def percent_text(value: str) -> str:
    """Append a percent sign unless the figure is unavailable."""
    return value if value == NOT_AVAILABLE else f"{value}%"


def _render_stat_cards(view: DashboardView) -> None:
    cards = [
        stat_card_html("Total Patients", view.total_patients, StatTheme.CYAN),
        stat_card_html("Female Patients", percent_text(view.female_percent), StatTheme.PINK,
                       subvalue=view.female_count),
        stat_card_html("Male Patients", percent_text(view.male_percent), StatTheme.CYAN,
                       subvalue=view.male_count),
        stat_card_html("Contact Rate", percent_text(view.contact_rate), StatTheme.GREEN,
                       subvalue="Reachable patients"),
    ]
    for col, card in zip(st.columns(len(cards)), cards):
        with col:
            render_html(card)


def _render_chart_grid(view: DashboardView) -> None:
    left, right = st.columns(2)
    with left:
        render_chart_panel("Gender Distribution",
                           chart_donut(view.gender, inner_radius=60, outer_radius=100),
                           key="gender")
        render_chart_panel("Top Prescribers", chart_vertical_bar(view.prescribers),
                           key="prescribers")
    with right:
        render_chart_panel("Age Distribution",
                           chart_horizontal_bar(view.age, hover_prefix="Age "),
                           key="age")
        render_chart_panel("Contact Availability", chart_pie(view.contact),
                           key="contact")


def insight_cards(view: DashboardView) -> list:
    """HTML for each insight card that has data behind it."""
    cards = [insight_card_html(
        "Aging Population",
        f"{percent_text(view.aging_percent)} of patients are over 60 years old, "
        f"indicating significant elderly care needs.",
        view.senior_count,
        "patients 60+",
    )]
    if view.primary_surgery_name is not None:
        cards.append(insight_card_html(
            "Primary Surgery",
            f"{view.primary_surgery_name} handles "
            f"{percent_text(view.primary_surgery_share)} of all patients, "
            f"making it the primary healthcare provider in this dataset.",
            percent_text(view.primary_surgery_share),
            f"at {view.primary_surgery_name}",
        ))
    cards.append(insight_card_html(
        "Contact Gap",
        f"{percent_text(view.no_contact_percent)} of patients have no contact "
        f"information on file, a critical communication barrier.",
        view.no_contact_count,
        "unreachable",
    ))
    return cards


def _render_insights(view: DashboardView) -> None:
    render_html('<h2 class="section-heading gradient-text">Key Insights</h2>')
    cards = insight_cards(view)
    for col, card in zip(st.columns(len(cards)), cards):
        with col:
            render_html(card)


def distribution_table(distribution: Mapping[str, float], total_patients: int) -> pd.DataFrame:
    """Category / Patients / Share (%) table in source order."""
    df = pd.DataFrame(list(distribution.items()), columns=['Category', 'Patients'])
    df['Share (%)'] = [format_percent(v, total_patients, 1) for v in df['Patients']]
    return df


def _render_data_tables(snapshot: DashboardSnapshot) -> None:
    tables = {
        "Gender": snapshot.gender_distribution,
        "Age Groups": snapshot.age_groups,
        "Ethnicity": snapshot.ethnicity_distribution,
        "Prescribers": snapshot.prescriber_stats,
        "Surgeries": snapshot.surgery_stats,
    }
    with st.expander("Underlying data"):
        for tab, (name, distribution) in zip(st.tabs(list(tables)), tables.items()):
            with tab:
                st.dataframe(distribution_table(distribution, snapshot.total_patients),
                             hide_index=True, use_container_width=True)
