"""Supabase catalog adapter - reads captured newsletters over PostgREST."""

import logging

from funnelcraft.core.items import Item

from .errors import CatalogError
from .supabase_rest import SupabaseClient, SupabaseRequestError

logger = logging.getLogger(__name__)

CATALOG_TABLE = "captured_newsletters"
CATALOG_COLUMNS = "id,from_email,from_name,subject,html_content,received_at,category"


class SupabaseCatalog:
    """
    Captured newsletter catalog backed by Supabase.

    Implements CatalogRepository protocol. No business logic - just I/O.
    """

    def __init__(self, client: SupabaseClient):
        self._client = client

    def fetch_all(self) -> list[Item]:
        """Fetch every captured newsletter, newest first."""
        try:
            rows = self._client.request(
                "GET",
                CATALOG_TABLE,
                params={"select": CATALOG_COLUMNS, "order": "received_at.desc"},
            )
        except SupabaseRequestError as e:
            raise CatalogError(str(e)) from e

        items = []
        for row in rows:
            try:
                items.append(Item.from_api(row))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed newsletter {row.get('id')}: {e}")
        logger.debug(f"Fetched {len(items)} newsletters from Supabase")
        return items
