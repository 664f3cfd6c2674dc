"""Adapters - I/O implementations of ports."""

from .errors import CatalogError, FunnelStoreError
from .file_catalog import FileCatalog
from .file_funnel_store import FileFunnelStore
from .supabase_rest import SupabaseClient, SupabaseRequestError
from .supabase_catalog import SupabaseCatalog
from .supabase_funnels import SupabaseFunnelStore

__all__ = [
    "CatalogError",
    "FunnelStoreError",
    "FileCatalog",
    "FileFunnelStore",
    "SupabaseClient",
    "SupabaseRequestError",
    "SupabaseCatalog",
    "SupabaseFunnelStore",
]
