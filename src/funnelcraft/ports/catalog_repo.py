"""Email catalog repository interface."""

from typing import Protocol

from funnelcraft.core.items import Item


class CatalogRepository(Protocol):
    """Interface for fetching captured emails from any backend."""

    def fetch_all(self) -> list[Item]:
        """Fetch every captured email, newest first."""
        ...
