"""
Patient Insights Test Suite

Unit tests for the snapshot model, metric transforms, loader, charts and
page layout, plus shared fixtures.

Run tests with:
    pytest tests/
    pytest tests/test_metrics.py -v
    pytest tests/test_data_loader.py::TestSnapshotLoader -v
"""
