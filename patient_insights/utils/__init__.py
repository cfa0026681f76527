"""Snapshot loading, metric transforms, charts and presentation helpers."""
