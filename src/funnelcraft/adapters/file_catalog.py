"""File-based email catalog adapter."""

import json
import logging
from pathlib import Path

from funnelcraft.core.items import Item, sort_by_recency

from .errors import CatalogError

logger = logging.getLogger(__name__)


class FileCatalog:
    """
    Catalog snapshot stored as a JSON array of captured_newsletters rows.

    Implements CatalogRepository protocol.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def fetch_all(self) -> list[Item]:
        """Read every row, newest first. Malformed rows are skipped."""
        if not self.path.exists():
            raise CatalogError(f"Catalog file not found: {self.path}")

        try:
            rows = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise CatalogError(f"Catalog file is not valid JSON: {e}") from e

        if not isinstance(rows, list):
            raise CatalogError("Catalog file must contain a JSON array")

        items = []
        for row in rows:
            try:
                items.append(Item.from_api(row))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed catalog row {row.get('id') if isinstance(row, dict) else row!r}: {e}")
        logger.debug(f"Loaded {len(items)} emails from {self.path}")
        return sort_by_recency(items)
