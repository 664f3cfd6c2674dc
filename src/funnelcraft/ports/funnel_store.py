"""Funnel persistence interface."""

from typing import Protocol

from funnelcraft.core.composer import FunnelDraft


class FunnelStore(Protocol):
    """Interface for creating and updating funnel records."""

    def save(self, draft: FunnelDraft) -> str:
        """Create (no funnel_id) or update a funnel. Returns the funnel id."""
        ...

    def load(self, funnel_id: str) -> FunnelDraft | None:
        """Load a stored funnel. Returns None if not found."""
        ...

    def list_all(self) -> list[FunnelDraft]:
        """All stored funnels, newest first where the store knows the order."""
        ...
