"""
Patient Insights - Configuration
================================

Central place for every tunable the dashboard reads at startup.  Values are
plain module constants; the ones that differ between deployments can be
overridden through environment variables so a container or a CI job can
point the dashboard at a different snapshot without code changes.

    PATIENT_INSIGHTS_DATA_SOURCE    Local JSON path or http(s) URL
    PATIENT_INSIGHTS_FETCH_TIMEOUT  Seconds before a fetch is abandoned
    PATIENT_INSIGHTS_DATA_AS_OF     Text shown in the header badge
    PATIENT_INSIGHTS_LOG_LEVEL      Console log level (INFO, DEBUG, ...)
"""

import logging
import os
from pathlib import Path

# Project root: patient_insights/utils/config.py -> utils/ -> patient_insights/ -> root
PROJECT_ROOT = Path(__file__).parent.parent.parent

# ==========================================
# DATA SOURCE
# ==========================================
# The snapshot is produced by an external process and dropped next to the
# app.  A URL works as well (e.g. a static bucket serving data.json).
DEFAULT_DATA_SOURCE = str(PROJECT_ROOT / 'data' / 'data.json')
DATA_SOURCE = os.environ.get("PATIENT_INSIGHTS_DATA_SOURCE", DEFAULT_DATA_SOURCE)

# Upper bound on a single fetch.  A fetch that has not resolved by then is
# cancelled and the page switches to the error state.
FETCH_TIMEOUT = float(os.environ.get("PATIENT_INSIGHTS_FETCH_TIMEOUT", "10"))

# ==========================================
# PAGE TEXT
# ==========================================
PAGE_TITLE = "Patient Insights | Healthcare Analytics"
REPORT_KICKER = "Healthcare Analytics Report"
REPORT_TITLE = "Patient Insights"
LOADING_TEXT = "Loading insights..."
DATA_AS_OF = os.environ.get("PATIENT_INSIGHTS_DATA_AS_OF", "December 2025")

# ==========================================
# LOGGING
# ==========================================
LOG_LEVEL = os.environ.get("PATIENT_INSIGHTS_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a console handler to the ``patient_insights`` logger.

    Streamlit re-executes the page script on every interaction, so this is
    safe to call repeatedly: the handler is only added once.

    Args:
        level: Log level name.  Defaults to ``LOG_LEVEL``.

    Returns:
        The package logger.
    """
    logger = logging.getLogger("patient_insights")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))
    return logger
