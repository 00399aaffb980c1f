"""Configuration constants and .env loading.

WHY: Centralizes the values that differ between deployments (backend
URL, how the backend should store and render cell values, timeouts, and
the credentials) so they are easy to find and override without touching
code.

HOW: python-dotenv loads the .env file on import. Constants are
module-level strings read from the environment with defaults. Two
credential sources are read here:
  SHEETS_ACCESS_TOKEN   - a ready bearer token, used as-is
  SERVICE_ACCOUNT_JSON  - a Google service-account key (the JSON text),
                          exchanged for short-lived tokens by
                          api/auth.py
load_access_token() and load_service_account_info() return None when
their variable is unset; api/auth.py decides which one wins.

RULES:
- SHEETS_VALUE_INPUT_OPTION defaults to RAW so cell text is stored
  verbatim (USER_ENTERED would turn "007" into 7)
- Credentials are loaded from .env via python-dotenv, never hardcoded
- SERVICE_ACCOUNT_JSON that is set but not a JSON object raises ValueError
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Backend configuration defaults
# ---------------------------------------------------------------------------

SHEETS_BASE_URL = os.getenv("SHEETS_BASE_URL", "https://sheets.googleapis.com/v4")
SHEETS_VALUE_INPUT_OPTION = os.getenv("SHEETS_VALUE_INPUT_OPTION", "RAW")
SHEETS_VALUE_RENDER_OPTION = os.getenv("SHEETS_VALUE_RENDER_OPTION", "FORMATTED_VALUE")
SHEETS_TIMEOUT_S = float(os.getenv("SHEETS_TIMEOUT_S", "60"))

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
"""OAuth2 scopes requested for service-account tokens."""


def load_access_token() -> Optional[str]:
    """Load a ready OAuth2 bearer token from SHEETS_ACCESS_TOKEN, if set."""
    token = os.getenv("SHEETS_ACCESS_TOKEN", "").strip()
    return token or None


def load_service_account_info() -> Optional[Dict[str, Any]]:
    """Load the service-account key from SERVICE_ACCOUNT_JSON, if set.

    RULES:
    - The variable holds the key file's JSON text, not a path
    - Raises ValueError if the text is not a JSON object
    """
    raw = os.getenv("SERVICE_ACCOUNT_JSON", "").strip()
    if not raw:
        return None
    try:
        info = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"SERVICE_ACCOUNT_JSON is not valid JSON: {e}") from e
    if not isinstance(info, dict):
        raise ValueError("SERVICE_ACCOUNT_JSON must hold a JSON object")
    return info
