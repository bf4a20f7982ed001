"""Runtime configuration.

Every setting can be overridden through an environment variable; the defaults
work for local development against the public dataset.
"""

from __future__ import annotations

import logging
import os

# Data source: a single JSON array of records, fetched once per load.
DATA_URL = os.getenv("DASHBOARD_DATA_URL", "https://dashboard-one-delta-61.vercel.app/")
HTTP_TIMEOUT = float(os.getenv("DASHBOARD_HTTP_TIMEOUT", "30"))

LOG_LEVEL = os.getenv("DASHBOARD_LOG_LEVEL", "INFO").upper()

# Chart layout (pixels).
CHART_HEIGHT = 400
MAX_CHART_WIDTH = 5000
PX_PER_RECORD = 100


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
