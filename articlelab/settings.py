"""Project settings for articlelab.

Plain module-level constants.  Only the server block reads the environment
(``ARTICLELAB_*``); everything else is fixed at import time.
"""

from __future__ import annotations

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Project identity
# ---------------------------------------------------------------------------
PROJECT_NAME = "articlelab"
PROJECT_DESCRIPTION = "Side-by-side readability extraction sandbox"

# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

# Characters of plain text kept when an excerpt has to be derived
EXCERPT_LENGTH = 200

# newspaper needs a URL even when handed raw HTML; it is never requested
PLACEHOLDER_URL = "http://localhost"

# Sentinel readability-lxml returns when the page has no usable <title>
READABILITY_NO_TITLE = "[no-title]"

# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------
API_PREFIX = "/api"

SAMPLE_HTML_PATH = Path(__file__).parent / "samples" / "article.html"

# ---------------------------------------------------------------------------
# Server (override via ARTICLELAB_HOST / ARTICLELAB_PORT / ARTICLELAB_LOG_LEVEL)
# ---------------------------------------------------------------------------
HOST = os.getenv("ARTICLELAB_HOST", "127.0.0.1")
PORT = int(os.getenv("ARTICLELAB_PORT", "8000"))

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("ARTICLELAB_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(message)s"
LOG_DATE_FORMAT = "[%X]"
