"""Grid store package: where grids come from and go to.

WHY: The conversion engine never talks to a backend itself. It consumes
an abstract grid store, so the same engine works against the Google
Sheets API, an in-memory fake in tests, or any other tabular backend.

HOW: base.py defines the BaseGridStore ABC (get_grid / put_grid plus
default append_rows / clear_tab). client.py implements it over the
Sheets v4 REST values API with httpx; auth.py turns a bearer token or a
service-account key into the credentials it sends.

RULES:
- All HTTP calls go through SheetsClient (no direct httpx usage elsewhere)
- Authentication, addressing and retries are the store's concern
"""

from sheet_records.api.base import BaseGridStore
from sheet_records.api.client import SheetsAPIError, SheetsClient

__all__ = ["BaseGridStore", "SheetsAPIError", "SheetsClient"]
