"""
Patient Insights - Chart Library
================================

Every public function takes an ordered sequence of ``ChartRecord`` and
returns a ``plotly.graph_objects.Figure`` that the page renders with
``st.plotly_chart()``.

Design
------
* **Records drive everything** - trace order is record order, and each
  record's ``fill`` is its color.  A record without a fill is drawn in
  ``DEFAULT_FILL``.
* **Tooltips** - hovering a mark shows ``<name>: <value>`` with thousands
  separators, optionally wrapped in a prefix/suffix (``"Age 18-29: 1,204
  patients"``).
* **Legends** - categorical charts (pie, donut, radial) list record names
  in a horizontal legend under the chart; bar charts do not.
* **Consistency via ``_apply_theme()``** - one helper applies the dark layout
  and axis styling so every panel shares typography and grid colors.
"""

from typing import List, Sequence

import plotly.graph_objects as go

from patient_insights.utils.models import ChartRecord
from patient_insights.utils.styles import AXIS_STYLE, DEFAULT_FILL, get_plotly_theme

PANEL_HEIGHT = 256

# Slice separator drawn in the page background color to imitate a pad angle.
SLICE_GAP_COLOR = '#0a0a12'

LEGEND_STYLE = dict(
    orientation='h', yanchor='top', y=-0.05, xanchor='center', x=0.5,
    font=dict(color='#ffffff'),
)


def _apply_theme(fig: go.Figure, height: int = PANEL_HEIGHT) -> go.Figure:
    """Apply the dashboard layout and axis styling to *fig* (in place)."""
    fig.update_layout(**get_plotly_theme())
    fig.update_layout(height=height)
    fig.update_xaxes(**AXIS_STYLE)
    fig.update_yaxes(**AXIS_STYLE)
    return fig


def record_colors(records: Sequence[ChartRecord]) -> List[str]:
    return [r.fill or DEFAULT_FILL for r in records]


def _hover(label_ref: str, value_ref: str, prefix: str, suffix: str) -> str:
    return f"{prefix}%{{{label_ref}}}: %{{{value_ref}:,}}{suffix}<extra></extra>"


# ============================================================================
# PIE / DONUT
# ============================================================================

def chart_donut(records: Sequence[ChartRecord], inner_radius: float = 60,
                outer_radius: float = 100, pad_width: float = 3,
                hover_suffix: str = '') -> go.Figure:
    """Donut chart; the hole is sized by the inner/outer radius ratio."""
    return _pie(records, hole=inner_radius / outer_radius, pad_width=pad_width,
                show_percent_labels=False, hover_suffix=hover_suffix)


def chart_pie(records: Sequence[ChartRecord], show_percent_labels: bool = True,
              pad_width: float = 2, hover_suffix: str = ' patients') -> go.Figure:
    """Full pie; slices are labelled with their whole-number percentage."""
    return _pie(records, hole=0, pad_width=pad_width,
                show_percent_labels=show_percent_labels, hover_suffix=hover_suffix)


def _pie(records, hole, pad_width, show_percent_labels, hover_suffix) -> go.Figure:
    fig = go.Figure(go.Pie(
        labels=[r.name for r in records],
        values=[r.value for r in records],
        hole=hole,
        sort=False,                       # keep record order
        direction='clockwise',
        marker=dict(colors=record_colors(records),
                    line=dict(color=SLICE_GAP_COLOR, width=pad_width)),
        textinfo='percent' if show_percent_labels else 'none',
        texttemplate='%{percent:.0%}' if show_percent_labels else None,
        textfont=dict(color='#ffffff'),
        hovertemplate=_hover('label', 'value', '', hover_suffix),
    ))
    _apply_theme(fig)
    fig.update_layout(showlegend=True, legend=LEGEND_STYLE)
    return fig


# ============================================================================
# BARS
# ============================================================================

def chart_horizontal_bar(records: Sequence[ChartRecord], hover_prefix: str = '',
                         hover_suffix: str = ' patients', label_width: int = 50,
                         height: int = PANEL_HEIGHT) -> go.Figure:
    """Horizontal bars, first record at the top.

    Args:
        label_width: Left margin reserved for category labels, in px.
    """
    fig = go.Figure(go.Bar(
        x=[r.value for r in records],
        y=[r.name for r in records],
        orientation='h',
        marker=dict(color=record_colors(records), cornerradius=8),
        hovertemplate=_hover('y', 'x', hover_prefix, hover_suffix),
    ))
    _apply_theme(fig, height)
    fig.update_layout(showlegend=False, margin=dict(l=label_width, r=20, t=10, b=30))
    fig.update_yaxes(type='category', autorange='reversed')
    return fig


def chart_vertical_bar(records: Sequence[ChartRecord], hover_prefix: str = '',
                       hover_suffix: str = ' patients',
                       height: int = PANEL_HEIGHT) -> go.Figure:
    """Vertical bars in record order, categories along the x axis."""
    fig = go.Figure(go.Bar(
        x=[r.name for r in records],
        y=[r.value for r in records],
        marker=dict(color=record_colors(records), cornerradius=8),
        hovertemplate=_hover('x', 'y', hover_prefix, hover_suffix),
    ))
    _apply_theme(fig, height)
    fig.update_layout(showlegend=False, margin=dict(l=40, r=20, t=10, b=40))
    fig.update_xaxes(type='category', tickfont=dict(size=11))
    return fig


# ============================================================================
# RADIAL
# ============================================================================

def chart_radial(records: Sequence[ChartRecord], hover_suffix: str = ' patients',
                 height: int = PANEL_HEIGHT) -> go.Figure:
    """Radial bar chart: one wedge per record, radius proportional to value.

    One trace per record so the legend lists every record name.
    """
    fig = go.Figure()
    for record, color in zip(records, record_colors(records)):
        fig.add_trace(go.Barpolar(
            r=[record.value],
            theta=[record.name],
            name=record.name,
            marker=dict(color=color, line=dict(color=SLICE_GAP_COLOR, width=1)),
            hovertemplate=_hover('theta', 'r', '', hover_suffix),
        ))
    _apply_theme(fig, height)
    fig.update_layout(
        showlegend=True,
        legend=LEGEND_STYLE,
        polar=dict(
            bgcolor='rgba(0,0,0,0)',
            radialaxis=dict(showticklabels=False, gridcolor=AXIS_STYLE['gridcolor']),
            angularaxis=dict(showticklabels=False, gridcolor=AXIS_STYLE['gridcolor']),
        ),
    )
    return fig
