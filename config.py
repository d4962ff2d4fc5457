"""
config.py
─────────
Runtime settings, read once from the environment.

A local `.env` file is loaded first (handy during development);
anything already exported in the shell wins over it.
"""
from __future__ import annotations
import os

from dotenv import load_dotenv

load_dotenv()

# `production` disables auto-reload and tweaks the startup banner
IS_PRODUCTION = os.environ.get("ENVIRONMENT", "development") == "production"

PORT      = int(os.environ.get("PORT", 3001))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# ── Outbound fetch limits ─────────────────────────────────────────────────────
FETCH_TIMEOUT     = float(os.environ.get("FETCH_TIMEOUT", 15))                  # seconds
MAX_CONTENT_BYTES = int(os.environ.get("MAX_CONTENT_BYTES", 5 * 1024 * 1024))  # 5 MiB

# When set, the analyzer goes through a remote /fetch-url instead of fetching itself
PROXY_URL = os.environ.get("PROXY_URL", "").strip().rstrip("/")

# BeautifulSoup tree builder: html.parser | lxml | html5lib
HTML_PARSER = os.environ.get("HTML_PARSER", "html.parser")
