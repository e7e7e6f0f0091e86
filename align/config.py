"""
Centralized configuration for Align.

Values that vary by deployment belong here.
Override via environment variables where marked.
"""

import os

# ============================================================
# Logging
# ============================================================

LOG_LEVEL: str = os.environ.get("ALIGN_LOG_LEVEL", "INFO")
"""Root log level for CLI and API processes."""

_log_json = os.environ.get("ALIGN_LOG_JSON", "").strip().lower()
LOG_JSON: bool | None = None if not _log_json else _log_json in ("1", "true", "yes")
"""Force JSON (true) or human (false) log output. Unset: auto-detect from TTY."""

# ============================================================
# Time
# ============================================================

TIMEZONE: str | None = os.environ.get("ALIGN_TIMEZONE") or None
"""IANA zone for baseline windows. Unset: naive local datetimes."""

# ============================================================
# Governor
# ============================================================

GOVERNOR_CONFIG_FILE: str = os.environ.get("ALIGN_GOVERNOR_CONFIG", "governor.yaml")
"""File name (inside the config dir) holding minimum segment durations."""

# ============================================================
# API
# ============================================================

API_PORT: int = int(os.environ.get("PORT", "8420"))
"""Port for `python -m api.server`."""

_cors = os.environ.get("CORS_ORIGINS", "*").strip()
CORS_ORIGINS: list[str] = (
    ["*"] if _cors == "*" else [o.strip() for o in _cors.split(",") if o.strip()]
)
"""Allowed browser origins. Comma-separated; "*" allows any origin."""
