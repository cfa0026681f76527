"""
Patient Insights - Presentation Components
==========================================

Stateless building blocks for the page.  The ``*_html`` functions return
HTML strings for ``st.markdown(..., unsafe_allow_html=True)``; the CSS
classes they reference are defined in ``utils/styles.py`` -> ``inject_css()``.
The ``render_*`` helpers are thin Streamlit wrappers around them.

All caller-supplied text is HTML-escaped, since labels come straight from
the snapshot.
"""

from html import escape
from typing import Optional, Union

import plotly.graph_objects as go
import streamlit as st

from patient_insights.utils.config import DATA_AS_OF, LOADING_TEXT, REPORT_KICKER, REPORT_TITLE
from patient_insights.utils.styles import STAT_THEME_CLASSES, StatTheme


# ============================================================================
# CARDS
# ============================================================================

def stat_card_html(label: str, value: str, color: Union[StatTheme, str],
                   subvalue: Optional[str] = None) -> str:
    """Build a stat card: large value, muted label, optional sub-value.

    Parameters
    ----------
    label : str
        Caption under the value (e.g. "Female Patients").
    value : str
        The headline figure (e.g. "52.0%").
    color : StatTheme or str
        One of cyan, pink, green, purple, orange.
    subvalue : str, optional
        Small secondary line (e.g. the raw count).

    Raises
    ------
    ValueError
        If *color* is not a ``StatTheme``.
    """
    theme = StatTheme(color)
    sub_html = f'<div class="stat-subvalue">{escape(subvalue)}</div>' if subvalue else ''
    return (
        f'<div class="stat-card glass-card {STAT_THEME_CLASSES[theme]}">'
        f'<div class="stat-value">{escape(value)}</div>'
        f'<div class="stat-label">{escape(label)}</div>'
        f'{sub_html}'
        f'</div>'
    )


def insight_card_html(title: str, description: str, highlight: str,
                      highlight_label: str) -> str:
    """Build an insight card: title, sentence, and a highlighted metric."""
    return (
        f'<div class="glass-card insight-card">'
        f'<div class="insight-title">{escape(title)}</div>'
        f'<p class="insight-description">{escape(description)}</p>'
        f'<div class="insight-highlight-block">'
        f'<div class="insight-highlight gradient-text">{escape(highlight)}</div>'
        f'<div class="insight-highlight-label">{escape(highlight_label)}</div>'
        f'</div>'
        f'</div>'
    )


# ============================================================================
# PAGE CHROME
# ============================================================================

def header_html(total_patients: str, data_as_of: str = DATA_AS_OF) -> str:
    return (
        f'<header class="report-header">'
        f'<p class="report-kicker">{escape(REPORT_KICKER)}</p>'
        f'<h1 class="report-title gradient-text">{escape(REPORT_TITLE)}</h1>'
        f'<p class="report-subtitle">Comprehensive analysis of {escape(total_patients)} unique patients</p>'
        f'<div class="as-of-badge"><span class="live-dot"></span>'
        f'<span>Data as of {escape(data_as_of)}</span></div>'
        f'</header>'
    )


def footer_html(total_patients: str) -> str:
    return (
        f'<footer class="report-footer">'
        f'<div class="footer-pill">Healthcare Analytics Dashboard</div>'
        f'<p class="footer-note">Data processed from {escape(total_patients)} patient records</p>'
        f'</footer>'
    )


def loading_html(text: str = LOADING_TEXT) -> str:
    return f'<div class="loading-screen"><div class="loading-text">{escape(text)}</div></div>'


def error_html(detail: str) -> str:
    return (
        f'<div class="glass-card error-card">'
        f'<div class="error-title">Could not load the patient snapshot</div>'
        f'<div class="error-detail">{escape(detail)}</div>'
        f'</div>'
    )


# ============================================================================
# STREAMLIT RENDERERS
# ============================================================================

def render_html(html: str) -> None:
    st.markdown(html, unsafe_allow_html=True)


def render_chart_panel(title: str, fig: go.Figure, key: Optional[str] = None) -> None:
    """Titled glass-card panel around a Plotly figure."""
    with st.container(border=True):
        render_html(f'<div class="panel-title">{escape(title)}</div>')
        st.plotly_chart(fig, use_container_width=True, key=key,
                        config={'displayModeBar': False})
