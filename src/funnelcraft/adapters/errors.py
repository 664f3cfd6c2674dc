"""Adapter-level errors."""


class CatalogError(Exception):
    """Raised when the email catalog cannot be read."""

    pass


class FunnelStoreError(Exception):
    """Raised when a funnel cannot be saved or loaded."""

    pass
