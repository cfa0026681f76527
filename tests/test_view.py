"""
Unit tests for view.py

Tests what the page renders in each load state, with Streamlit mocked out:
- Loading shows only the placeholder
- Loaded shows every chart panel with records behind it
- Failed shows the error card and a Retry button
"""

import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

sys.path.insert(0, str(Path(__file__).parent.parent))

from patient_insights import view
from patient_insights.utils.data_loader import Failed, Loaded, Loading
from patient_insights.utils.metrics import build_dashboard_view
from tests.fixtures.sample_data import create_sample_snapshot


def _mock_streamlit():
    st = MagicMock()
    st.columns.side_effect = lambda n: [MagicMock() for _ in range(n)]
    st.tabs.side_effect = lambda names: [MagicMock() for _ in names]
    return st


class TestRenderDispatch(unittest.TestCase):
    """Test suite for view.render state dispatch."""

    def setUp(self):
        """Patch Streamlit and the HTML/chart renderers."""
        self.st = _mock_streamlit()
        patchers = [
            patch.object(view, 'st', self.st),
            patch.object(view, 'render_html'),
            patch.object(view, 'render_chart_panel'),
        ]
        self.mocks = [p.start() for p in patchers]
        self.render_html = self.mocks[1]
        self.render_chart_panel = self.mocks[2]
        for p in patchers:
            self.addCleanup(p.stop)

    def panel_titles(self):
        return [c.args[0] for c in self.render_chart_panel.call_args_list]

    def test_loading_renders_placeholder_only(self):
        """Test Loading paints the loading text and no chart panel."""
        view.render(Loading())
        self.render_html.assert_called_once()
        self.assertIn("Loading insights...", self.render_html.call_args.args[0])
        self.render_chart_panel.assert_not_called()

    def test_loaded_renders_every_panel(self):
        """Test Loaded renders all chart panels with non-empty data."""
        view.render(Loaded(create_sample_snapshot()))
        self.assertEqual(self.panel_titles(), [
            "Gender Distribution",
            "Top Prescribers",
            "Age Distribution",
            "Contact Availability",
            "Ethnicity Distribution (Top Categories)",
            "Surgery Share (Top Practices)",
        ])
        for c in self.render_chart_panel.call_args_list:
            fig = c.args[1]
            self.assertTrue(fig.data, c.args[0])

    def test_loaded_renders_cards_header_and_footer(self):
        """Test stat cards, insights, header and footer are all emitted."""
        view.render(Loaded(create_sample_snapshot()))
        html = "".join(c.args[0] for c in self.render_html.call_args_list)
        self.assertIn("Comprehensive analysis of 1,000 unique patients", html)
        self.assertIn(">52.0%<", html)
        self.assertIn(">75.0%<", html)
        self.assertIn("31% of patients are over 60", html)
        self.assertIn("Rother House handles 71%", html)
        self.assertIn("25% of patients have no contact information", html)
        self.assertIn("Data processed from 1,000 patient records", html)

    def test_zero_total_stat_cards_read_not_available(self):
        """Test the percentage cards show N/A without a trailing percent sign."""
        view.render(Loaded(create_sample_snapshot(totalPatients=0)))
        html = "".join(c.args[0] for c in self.render_html.call_args_list)
        self.assertIn(">N/A<", html)
        self.assertNotIn("N/A%", html)

    def test_surgery_panel_omitted_without_surgeries(self):
        """Test an empty surgeryStats drops the radial panel."""
        view.render(Loaded(create_sample_snapshot(surgeryStats={})))
        self.assertNotIn("Surgery Share (Top Practices)", self.panel_titles())
        self.assertEqual(len(self.panel_titles()), 5)

    def test_failed_renders_error_and_retry(self):
        """Test Failed shows the error and wires Retry to the callback."""
        on_retry = MagicMock()
        view.render(Failed("HTTP 500"), on_retry=on_retry)
        self.assertIn("HTTP 500", self.render_html.call_args.args[0])
        self.st.button.assert_called_once()
        self.assertIs(self.st.button.call_args.kwargs['on_click'], on_retry)
        self.render_chart_panel.assert_not_called()

    def test_unknown_state(self):
        """Test an unexpected state object is rejected."""
        with self.assertRaises(TypeError):
            view.render(object())


class TestInsightCards(unittest.TestCase):
    """Test suite for the insight card selection."""

    def test_three_cards_with_surgeries(self):
        """Test all three insights render when surgery data exists."""
        cards = view.insight_cards(build_dashboard_view(create_sample_snapshot()))
        self.assertEqual(len(cards), 3)
        self.assertIn("at Rother House", cards[1])

    def test_primary_surgery_names_largest_practice(self):
        """Test the insight picks the biggest practice, not the first listed."""
        snapshot = create_sample_snapshot(
            surgeryStats={'Small Clinic': 10, 'Rother House': 710})
        cards = view.insight_cards(build_dashboard_view(snapshot))
        self.assertIn("Rother House handles 71% of all patients", cards[1])
        self.assertNotIn("Small Clinic", cards[1])

    def test_zero_total_has_no_percent_sign(self):
        """Test unavailable figures read N/A rather than N/A%."""
        snapshot = create_sample_snapshot(totalPatients=0)
        cards = "".join(view.insight_cards(build_dashboard_view(snapshot)))
        self.assertIn("N/A of patients are over 60", cards)
        self.assertIn("N/A of patients have no contact", cards)
        self.assertNotIn("N/A%", cards)

    def test_missing_age_bucket_shows_nan(self):
        """Test the aging insight degrades to NaN instead of failing."""
        snapshot = create_sample_snapshot(ageGroups={'60-74': 1})
        cards = view.insight_cards(build_dashboard_view(snapshot))
        self.assertIn("NaN% of patients are over 60", cards[0])


class TestPercentText(unittest.TestCase):
    """Test suite for percent suffixing."""

    def test_suffix(self):
        """Test figures get a percent sign and N/A does not."""
        self.assertEqual(view.percent_text("52.0"), "52.0%")
        self.assertEqual(view.percent_text("NaN"), "NaN%")
        self.assertEqual(view.percent_text("N/A"), "N/A")


class TestDistributionTable(unittest.TestCase):
    """Test suite for the underlying-data tables."""

    def test_table_columns_and_order(self):
        """Test rows follow source order with a share column."""
        df = view.distribution_table({'B': 300, 'A': 700}, 1000)
        self.assertEqual(list(df.columns), ['Category', 'Patients', 'Share (%)'])
        self.assertEqual(list(df['Category']), ['B', 'A'])
        self.assertEqual(list(df['Share (%)']), ['30.0', '70.0'])

    def test_empty_distribution(self):
        """Test an empty mapping gives an empty table."""
        self.assertTrue(view.distribution_table({}, 1000).empty)


if __name__ == '__main__':
    unittest.main()
