"""Supabase PostgREST client - thin HTTP wrapper shared by the Supabase adapters."""

import logging

import requests

logger = logging.getLogger(__name__)


class SupabaseRequestError(Exception):
    """Raised when a PostgREST call fails or is not configured."""

    pass


class SupabaseClient:
    """Authenticated requests session against a project's /rest/v1 endpoint."""

    def __init__(self, url: str, key: str, timeout: int = 30):
        if not url or not key:
            raise SupabaseRequestError("Missing Supabase credentials. Set SUPABASE_URL and SUPABASE_KEY.")
        self.base_url = f"{url.rstrip('/')}/rest/v1"
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(
            {
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Content-Type": "application/json",
            }
        )

    def request(
        self,
        method: str,
        table: str,
        params: dict | None = None,
        json_body: dict | list | None = None,
        prefer: str | None = None,
    ) -> list[dict]:
        """Call a table endpoint and return the decoded rows."""
        headers = {"Prefer": prefer} if prefer else None
        try:
            resp = self._session.request(
                method,
                f"{self.base_url}/{table}",
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Supabase {method} {table} failed: {e}")
            raise SupabaseRequestError(f"Supabase {method} {table} failed: {e}") from e

        if not resp.content:
            return []
        try:
            return resp.json()
        except ValueError as e:
            logger.error(f"Supabase {method} {table} returned a non-JSON body")
            raise SupabaseRequestError(f"Supabase {method} {table} returned invalid JSON: {e}") from e
