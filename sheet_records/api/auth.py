"""Credentials for the Sheets API.

WHY: A static bearer token expires within the hour, which is fine for a
one-off CLI call but not for a long-running job. Google service accounts
mint their own short-lived tokens, so jobs can authenticate without a
human refreshing anything.

HOW: Both sources become google-auth credentials objects:
  SHEETS_ACCESS_TOKEN  → google.oauth2.credentials.Credentials (no refresh)
  SERVICE_ACCOUNT_JSON → google.oauth2.service_account.Credentials with
                         the spreadsheets scope
BearerAuth is an httpx.Auth that asks the credentials for a valid token
before every request, refreshing through google-auth when it has expired.

RULES:
- SHEETS_ACCESS_TOKEN overrides SERVICE_ACCOUNT_JSON when both are set
- Neither set → ValueError naming both variables
- Anything with .valid, .token and .refresh(request) works as credentials
"""

from __future__ import annotations

import logging
from typing import Any, Generator

import httpx
from google.auth.transport.requests import Request
from google.oauth2 import credentials as oauth2_credentials
from google.oauth2 import service_account

from sheet_records.config import SHEETS_SCOPES, load_access_token, load_service_account_info

logger = logging.getLogger(__name__)


def token_credentials(token: str) -> oauth2_credentials.Credentials:
    """Wrap a ready bearer token; it is used until the API rejects it."""
    return oauth2_credentials.Credentials(token=token)


def load_credentials() -> Any:
    """Build credentials from the environment.

    Raises:
        ValueError: no credential source is configured, or the
                    service-account key is malformed.
    """
    token = load_access_token()
    if token:
        return token_credentials(token)

    info = load_service_account_info()
    if info is not None:
        logger.debug("Using service account %s", info.get("client_email", "<unknown>"))
        return service_account.Credentials.from_service_account_info(
            info, scopes=SHEETS_SCOPES
        )

    raise ValueError(
        "Sheets credentials not configured. "
        "Add SHEETS_ACCESS_TOKEN or SERVICE_ACCOUNT_JSON to the .env file or the environment."
    )


class BearerAuth(httpx.Auth):
    """Sets "Authorization: Bearer <token>", refreshing expired tokens first."""

    def __init__(self, credentials: Any) -> None:
        self.credentials = credentials

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if not self.credentials.valid:
            logger.debug("Refreshing Sheets API access token")
            self.credentials.refresh(Request())
        request.headers["Authorization"] = f"Bearer {self.credentials.token}"
        yield request
