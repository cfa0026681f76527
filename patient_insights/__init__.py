"""
Patient Insights Dashboard.

Single-page Streamlit view of a pre-computed patient snapshot: stat cards,
insight cards and Plotly charts derived from aggregate counts.

Run with:
    streamlit run patient_insights/app.py
"""

__version__ = "1.0.0"
