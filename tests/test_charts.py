"""
Unit tests for utils/charts.py

Checks that every chart panel follows its records: order, colors, default
fill, tooltips and legends.
"""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from patient_insights.utils.charts import (
    chart_donut, chart_horizontal_bar, chart_pie, chart_radial, chart_vertical_bar,
    record_colors,
)
from patient_insights.utils.models import ChartRecord
from patient_insights.utils.styles import DEFAULT_FILL

RECORDS = [
    ChartRecord('Female', 5200, '#ec4899'),
    ChartRecord('Male', 4800, '#00d4ff'),
    ChartRecord('Other', 12),
]


class TestRecordColors(unittest.TestCase):
    """Test suite for fill resolution."""

    def test_missing_fill_uses_default(self):
        """Test a record without a fill is drawn in the default color."""
        self.assertEqual(record_colors(RECORDS), ['#ec4899', '#00d4ff', DEFAULT_FILL])


class TestPieCharts(unittest.TestCase):
    """Test suite for pie and donut panels."""

    def test_donut_hole_from_radii(self):
        """Test the hole is the inner/outer radius ratio."""
        fig = chart_donut(RECORDS, inner_radius=60, outer_radius=100)
        self.assertAlmostEqual(fig.data[0].hole, 0.6)

    def test_donut_keeps_record_order_and_colors(self):
        """Test slices are not re-sorted by value."""
        fig = chart_donut(RECORDS)
        pie = fig.data[0]
        self.assertEqual(list(pie.labels), ['Female', 'Male', 'Other'])
        self.assertEqual(list(pie.values), [5200, 4800, 12])
        self.assertFalse(pie.sort)
        self.assertEqual(list(pie.marker.colors), record_colors(RECORDS))

    def test_donut_tooltip_and_legend(self):
        """Test tooltip shows name and separated value; legend is on."""
        fig = chart_donut(RECORDS)
        self.assertIn('%{label}: %{value:,}', fig.data[0].hovertemplate)
        self.assertTrue(fig.layout.showlegend)

    def test_pie_percent_labels(self):
        """Test the contact pie labels slices with whole percentages."""
        fig = chart_pie(RECORDS)
        self.assertEqual(fig.data[0].hole, 0)
        self.assertEqual(fig.data[0].texttemplate, '%{percent:.0%}')
        self.assertIn(' patients', fig.data[0].hovertemplate)

    def test_pie_without_labels(self):
        """Test percent labels can be switched off."""
        fig = chart_pie(RECORDS, show_percent_labels=False)
        self.assertEqual(fig.data[0].textinfo, 'none')


class TestBarCharts(unittest.TestCase):
    """Test suite for bar panels."""

    def test_horizontal_bar(self):
        """Test categories on the y axis with the first record on top."""
        fig = chart_horizontal_bar(RECORDS, hover_prefix='Age ')
        bar = fig.data[0]
        self.assertEqual(bar.orientation, 'h')
        self.assertEqual(list(bar.y), ['Female', 'Male', 'Other'])
        self.assertEqual(list(bar.x), [5200, 4800, 12])
        self.assertEqual(fig.layout.yaxis.autorange, 'reversed')
        self.assertTrue(bar.hovertemplate.startswith('Age %{y}: %{x:,} patients'))
        self.assertFalse(fig.layout.showlegend)

    def test_horizontal_bar_label_width(self):
        """Test the left margin follows the requested label width."""
        fig = chart_horizontal_bar(RECORDS, label_width=140, height=288)
        self.assertEqual(fig.layout.margin.l, 140)
        self.assertEqual(fig.layout.height, 288)

    def test_vertical_bar(self):
        """Test categories on the x axis in record order."""
        fig = chart_vertical_bar(RECORDS)
        bar = fig.data[0]
        self.assertEqual(list(bar.x), ['Female', 'Male', 'Other'])
        self.assertEqual(list(bar.marker.color), record_colors(RECORDS))
        self.assertIn('%{x}: %{y:,} patients', bar.hovertemplate)

    def test_empty_records(self):
        """Test charts build with no records."""
        fig = chart_vertical_bar([])
        self.assertEqual(len(fig.data[0].x), 0)


class TestRadialChart(unittest.TestCase):
    """Test suite for the radial panel."""

    def test_one_trace_per_record(self):
        """Test each record gets its own named, colored trace for the legend."""
        fig = chart_radial(RECORDS)
        self.assertEqual([t.name for t in fig.data], ['Female', 'Male', 'Other'])
        self.assertEqual([t.marker.color for t in fig.data], record_colors(RECORDS))
        self.assertTrue(fig.layout.showlegend)


if __name__ == '__main__':
    unittest.main()
