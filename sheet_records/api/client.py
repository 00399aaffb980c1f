"""HTTP grid store for the Google Sheets v4 REST values API.

WHY: The usual backend is Google Sheets. This module
implements BaseGridStore against its values endpoints so callers can
pass a SheetsClient straight to write_page() / read_all().

HOW: Wraps httpx.Client with bearer-token auth (api/auth.py). SheetsClient
is a context manager. Enter it to get an authenticated client, exit to
close the connection pool. Each grid operation is one values call:
  get_grid    → GET  values/{range}
  clear_tab   → POST values/{range}:clear
  put_grid    → clear_tab, then PUT values/{range}
  append_rows → POST values/{range}:append

RULES:
- Always use the context manager (with SheetsClient(...) as client:)
- access_token, then credentials, then load_credentials() from .env
- The range is the whole tab, quoted A1-style ('My Tab')
- Cells are returned as str; a tab with no values returns []
- Non-2xx responses raise SheetsAPIError; nothing is retried here
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

import httpx

from sheet_records.api.auth import BearerAuth, load_credentials, token_credentials
from sheet_records.api.base import BaseGridStore
from sheet_records.config import (
    SHEETS_BASE_URL,
    SHEETS_TIMEOUT_S,
    SHEETS_VALUE_INPUT_OPTION,
    SHEETS_VALUE_RENDER_OPTION,
)

logger = logging.getLogger(__name__)


class SheetsAPIError(Exception):
    """Raised when the Sheets API returns an error response.

    HOW: Wraps the HTTP status code and response body.

    RULES:
    - Always include status_code and message
    - message is the response body text
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Sheets API error {status_code}: {message}")


def tab_range(tab_name: str) -> str:
    """A1 range covering a whole tab, with the name quoted and escaped."""
    return "'{}'".format(tab_name.replace("'", "''"))


class SheetsClient(BaseGridStore):
    """Grid store backed by the Sheets values API.

    RULES:
    - Use as: with SheetsClient() as client: ...
    - base_url defaults to SHEETS_BASE_URL from config
    - credentials is any google-auth credentials object, e.g. a
      service_account.Credentials built by the caller
    - transport is for tests (httpx.MockTransport)
    """

    def __init__(
        self,
        access_token: str | None = None,
        credentials: Any = None,
        base_url: str | None = None,
        value_input_option: str | None = None,
        value_render_option: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if access_token:
            credentials = token_credentials(access_token)
        elif credentials is None:
            credentials = load_credentials()
        self._auth = BearerAuth(credentials)
        self._base_url = (base_url or SHEETS_BASE_URL).rstrip("/")
        self._value_input_option = value_input_option or SHEETS_VALUE_INPUT_OPTION
        self._value_render_option = value_render_option or SHEETS_VALUE_RENDER_OPTION
        self._transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> SheetsClient:
        self._client = httpx.Client(
            base_url=self._base_url,
            auth=self._auth,
            timeout=httpx.Timeout(SHEETS_TIMEOUT_S, connect=10.0),
            transport=self._transport,
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            self._client.close()
            self._client = None

    def _ensure_client(self) -> httpx.Client:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "SheetsClient must be used as a context manager: "
                "with SheetsClient() as client: ..."
            )
        return self._client

    @staticmethod
    def _values_url(page_id: str, tab_name: str, action: str = "") -> str:
        return "/spreadsheets/{}/values/{}{}".format(
            quote(page_id, safe=""),
            quote(tab_range(tab_name), safe=""),
            action,
        )

    @staticmethod
    def _check(resp: httpx.Response) -> None:
        if resp.status_code not in (200, 201):
            raise SheetsAPIError(resp.status_code, resp.text)

    # ------------------------------------------------------------------
    # Grid operations
    # ------------------------------------------------------------------

    def get_grid(self, page_id: str, tab_name: str) -> list[list[str]]:
        client = self._ensure_client()
        resp = client.get(
            self._values_url(page_id, tab_name),
            params={
                "majorDimension": "ROWS",
                "valueRenderOption": self._value_render_option,
            },
        )
        self._check(resp)

        values = resp.json().get("values", [])
        logger.debug("Fetched %d rows from %s/%s", len(values), page_id, tab_name)
        return [[str(cell) for cell in row] for row in values]

    def clear_tab(self, page_id: str, tab_name: str) -> None:
        client = self._ensure_client()
        resp = client.post(self._values_url(page_id, tab_name, ":clear"), json={})
        self._check(resp)

    def put_grid(self, page_id: str, tab_name: str, grid: Sequence[Sequence[str]]) -> None:
        self.clear_tab(page_id, tab_name)
        if not grid:
            return

        client = self._ensure_client()
        resp = client.put(
            self._values_url(page_id, tab_name),
            params={
                "valueInputOption": self._value_input_option,
                "includeValuesInResponse": "false",
            },
            json={
                "range": tab_range(tab_name),
                "majorDimension": "ROWS",
                "values": [list(row) for row in grid],
            },
        )
        self._check(resp)
        logger.debug("Stored %d rows in %s/%s", len(grid), page_id, tab_name)

    def append_rows(self, page_id: str, tab_name: str, rows: Sequence[Sequence[str]]) -> None:
        if not rows:
            return

        client = self._ensure_client()
        resp = client.post(
            self._values_url(page_id, tab_name, ":append"),
            params={
                "valueInputOption": self._value_input_option,
                "insertDataOption": "INSERT_ROWS",
                "includeValuesInResponse": "false",
            },
            json={
                "range": tab_range(tab_name),
                "majorDimension": "ROWS",
                "values": [list(row) for row in rows],
            },
        )
        self._check(resp)
        logger.debug("Appended %d rows to %s/%s", len(rows), page_id, tab_name)
