"""Ports - interfaces/protocols for external dependencies."""

from .catalog_repo import CatalogRepository
from .funnel_store import FunnelStore

__all__ = [
    "CatalogRepository",
    "FunnelStore",
]
