"""
Patient Insights - Styles & Theme Configuration
===============================================

Single source of truth for every color and every piece of CSS used by the
dashboard.  Nothing else in the application hard-codes a hex value.

Palette
-------
``COLORS`` holds the ten named accent colors.  ``CHART_COLORS`` is the same
ten colors in the order used for *palette cycling*: record ``i`` of a
categorical chart is painted ``CHART_COLORS[i % len(CHART_COLORS)]``.

Category colors
---------------
Some categories have a fixed identity color regardless of their position
(e.g. Female is always pink).  Those live in explicit label -> color maps
such as ``GENDER_COLORS`` so an unknown label falls back to a default color
instead of being silently re-bucketed.

Module Contents at a Glance
----------------------------
- ``COLORS`` / ``CHART_COLORS`` / ``DEFAULT_FILL`` -- palettes
- ``GENDER_COLORS`` / ``GENDER_DEFAULT_COLOR`` -- gender identity colors
- ``StatTheme`` / ``STAT_THEME_CLASSES`` -- closed set of stat card themes
- ``get_plotly_theme()`` / ``AXIS_STYLE`` / ``TOOLTIP_STYLE`` -- Plotly theming
- ``inject_css()`` -- page config + dark glass-card stylesheet
"""

from enum import Enum

import streamlit as st

from patient_insights.utils.config import PAGE_TITLE

# ============================================================================
# COLOR PALETTE
# ============================================================================

COLORS = {
    'cyan':   '#00d4ff',
    'purple': '#a855f7',
    'pink':   '#ec4899',
    'green':  '#10b981',
    'orange': '#f97316',
    'yellow': '#fbbf24',
    'blue':   '#3b82f6',
    'red':    '#ef4444',
    'teal':   '#14b8a6',
    'indigo': '#6366f1',
}

# Cycling order for categorical charts (age, ethnicity, prescribers, ...).
CHART_COLORS = [
    COLORS['cyan'], COLORS['purple'], COLORS['pink'], COLORS['green'],
    COLORS['orange'], COLORS['yellow'], COLORS['blue'], COLORS['red'],
    COLORS['teal'], COLORS['indigo'],
]

# Used by chart builders when a record carries no fill of its own.
DEFAULT_FILL = '#94a3b8'

# Gender identity colors.  Labels not listed here get GENDER_DEFAULT_COLOR.
GENDER_COLORS = {
    'Female': COLORS['pink'],
    'Male':   COLORS['cyan'],
}
GENDER_DEFAULT_COLOR = COLORS['purple']

# Contact availability slices, in display order.
CONTACT_COLORS = {
    'Mobile Phone': COLORS['cyan'],
    'Home Phone':   COLORS['purple'],
    'No Contact':   COLORS['pink'],
}


# ============================================================================
# STAT CARD THEMES
# ============================================================================

class StatTheme(str, Enum):
    """Closed set of accent themes a stat card may use."""
    CYAN = 'cyan'
    PINK = 'pink'
    GREEN = 'green'
    PURPLE = 'purple'
    ORANGE = 'orange'


# CSS class applied to the card for each theme (rules live in inject_css()).
STAT_THEME_CLASSES = {theme: f"stat-{theme.value}" for theme in StatTheme}


# ============================================================================
# PLOTLY THEME
# ============================================================================

def get_plotly_theme() -> dict:
    """Return the base Plotly layout for the dark glass theme.

    Unpack into ``fig.update_layout(**get_plotly_theme())``.  Backgrounds are
    transparent so the card gradient shows through.
    """
    return dict(
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
        font=dict(family='Inter', color='#ffffff'),
        margin=dict(l=20, r=20, t=20, b=20),
        hoverlabel=TOOLTIP_STYLE,
    )


# Axis lines and tick labels at 60% / 80% white, matching the card text.
AXIS_STYLE = dict(
    linecolor='rgba(255,255,255,0.38)',
    tickfont=dict(color='rgba(255,255,255,0.5)'),
    gridcolor='rgba(255,255,255,0.06)',
    zerolinecolor='rgba(255,255,255,0.06)',
)

# Hover tooltip box: near-black with a faint white border.
TOOLTIP_STYLE = dict(
    bgcolor='rgba(15,15,20,0.95)',
    bordercolor='rgba(255,255,255,0.2)',
    font=dict(color='#ffffff', size=14),
)


# ============================================================================
# CSS INJECTION
# ============================================================================

def inject_css():
    """Set the page config and inject the dashboard stylesheet.

    Must be the first Streamlit call of the page script, because
    ``st.set_page_config`` is only accepted before any other element.
    """
    st.set_page_config(
        page_title=PAGE_TITLE,
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    st.markdown("""
<style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap');

    html, body, [class*="css"] { font-family: 'Inter', sans-serif; }

    /* Deep navy gradient background with a faint grid overlay */
    .stApp {
        background:
            linear-gradient(rgba(255,255,255,0.02) 1px, transparent 1px) 0 0 / 40px 40px,
            linear-gradient(90deg, rgba(255,255,255,0.02) 1px, transparent 1px) 0 0 / 40px 40px,
            radial-gradient(ellipse at top, #1a1033 0%, #0a0a12 60%);
        color: #ffffff;
    }

    .gradient-text {
        background: linear-gradient(135deg, #00d4ff 0%, #a855f7 50%, #ec4899 100%);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
    }

    /* ================================================================
       HEADER / FOOTER
       ================================================================ */
    .report-header { text-align: center; padding: 2.5rem 1rem 1.5rem 1rem; }
    .report-kicker {
        font-size: 0.8rem; letter-spacing: 0.3em; text-transform: uppercase;
        color: #22d3ee; font-weight: 500; margin-bottom: 1rem;
    }
    .report-title { font-size: 4rem; font-weight: 700; margin: 0 0 1rem 0; line-height: 1.1; }
    .report-subtitle { color: rgba(255,255,255,0.5); font-size: 1.1rem; }
    .as-of-badge {
        display: inline-flex; align-items: center; gap: 0.5rem;
        margin-top: 1.5rem; padding: 0.5rem 1rem; border-radius: 9999px;
        background: rgba(255,255,255,0.05); border: 1px solid rgba(255,255,255,0.1);
        color: rgba(255,255,255,0.6); font-size: 0.85rem;
    }
    .live-dot { width: 8px; height: 8px; border-radius: 50%; background: #4ade80; }
    .report-footer { text-align: center; padding: 3rem 0; }
    .footer-pill {
        display: inline-block; padding: 0.75rem 1.5rem; border-radius: 9999px;
        background: linear-gradient(90deg, rgba(6,182,212,0.1), rgba(168,85,247,0.1));
        border: 1px solid rgba(255,255,255,0.1); color: rgba(255,255,255,0.6);
    }
    .footer-note { margin-top: 1rem; color: rgba(255,255,255,0.3); font-size: 0.85rem; }

    /* ================================================================
       GLASS CARDS
       ================================================================ */
    .glass-card {
        background: rgba(255,255,255,0.03);
        border: 1px solid rgba(255,255,255,0.08);
        border-radius: 16px;
        backdrop-filter: blur(12px);
        padding: 1.5rem;
    }
    .panel-title { font-size: 1.25rem; font-weight: 600; margin-bottom: 1rem; color: #ffffff; }

    /* Stat cards: big number, muted label, optional sub-value */
    .stat-card { transition: transform 0.2s ease; }
    .stat-card:hover { transform: scale(1.02); }
    .stat-value { font-size: 2.25rem; font-weight: 700; margin-bottom: 0.25rem; color: #ffffff; }
    .stat-label { color: rgba(255,255,255,0.5); font-size: 0.875rem; }
    .stat-subvalue { color: rgba(255,255,255,0.3); font-size: 0.75rem; margin-top: 0.25rem; }
    .stat-cyan   { background: linear-gradient(135deg, rgba(6,182,212,0.2), rgba(6,182,212,0.05)); border-color: rgba(6,182,212,0.3); }
    .stat-pink   { background: linear-gradient(135deg, rgba(236,72,153,0.2), rgba(236,72,153,0.05)); border-color: rgba(236,72,153,0.3); }
    .stat-green  { background: linear-gradient(135deg, rgba(34,197,94,0.2), rgba(34,197,94,0.05)); border-color: rgba(34,197,94,0.3); }
    .stat-purple { background: linear-gradient(135deg, rgba(168,85,247,0.2), rgba(168,85,247,0.05)); border-color: rgba(168,85,247,0.3); }
    .stat-orange { background: linear-gradient(135deg, rgba(249,115,22,0.2), rgba(249,115,22,0.05)); border-color: rgba(249,115,22,0.3); }

    /* Insight cards: title, description, highlighted metric under a rule */
    .insight-title { font-size: 1.1rem; font-weight: 600; margin-bottom: 0.5rem; color: #ffffff; }
    .insight-description { color: rgba(255,255,255,0.6); font-size: 0.875rem; line-height: 1.6; margin-bottom: 1rem; }
    .insight-highlight-block { padding-top: 1rem; border-top: 1px solid rgba(255,255,255,0.1); }
    .insight-highlight { font-size: 1.5rem; font-weight: 700; }
    .insight-highlight-label { color: rgba(255,255,255,0.4); font-size: 0.75rem; }

    .section-heading { text-align: center; font-size: 1.9rem; font-weight: 700; margin: 2rem 0 1.5rem 0; }

    /* ================================================================
       LOADING / ERROR STATES
       ================================================================ */
    @keyframes pulse { 0%, 100% { opacity: 1; } 50% { opacity: 0.4; } }
    .loading-screen {
        min-height: 70vh; display: flex; align-items: center; justify-content: center;
    }
    .loading-text { font-size: 1.5rem; color: rgba(255,255,255,0.6); animation: pulse 2s infinite; }
    .error-card { border-color: rgba(239,68,68,0.4); background: rgba(239,68,68,0.08); }
    .error-title { font-size: 1.25rem; font-weight: 600; color: #fca5a5; margin-bottom: 0.5rem; }
    .error-detail { color: rgba(255,255,255,0.6); font-size: 0.875rem; font-family: monospace; }

    #MainMenu, footer, header { visibility: hidden; }
    .block-container { padding: 0.5rem 2rem 1rem 2rem; max-width: 1280px; }
</style>
""", unsafe_allow_html=True)
