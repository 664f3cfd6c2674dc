"""Supabase funnel store adapter - writes email_funnels rows over PostgREST."""

import logging

from funnelcraft.core.composer import FunnelDraft

from .errors import FunnelStoreError
from .supabase_rest import SupabaseClient, SupabaseRequestError

logger = logging.getLogger(__name__)

FUNNELS_TABLE = "email_funnels"


class SupabaseFunnelStore:
    """
    Funnel records backed by Supabase.

    Implements FunnelStore protocol.
    """

    def __init__(self, client: SupabaseClient, user_id: str):
        if not user_id:
            raise FunnelStoreError("Missing SUPABASE_USER_ID; funnels are owned by a user.")
        self._client = client
        self.user_id = user_id

    def save(self, draft: FunnelDraft) -> str:
        """Insert a new funnel or update the existing one. Returns the funnel id."""
        record = draft.to_record()
        try:
            if draft.is_update:
                rows = self._client.request(
                    "PATCH",
                    FUNNELS_TABLE,
                    params={"id": f"eq.{draft.funnel_id}"},
                    json_body=record,
                    prefer="return=representation",
                )
            else:
                rows = self._client.request(
                    "POST",
                    FUNNELS_TABLE,
                    json_body={**record, "user_id": self.user_id, "is_active": True},
                    prefer="return=representation",
                )
        except SupabaseRequestError as e:
            raise FunnelStoreError(str(e)) from e

        if not rows:
            raise FunnelStoreError(f"Funnel {draft.funnel_id or draft.name!r} was not saved")

        funnel_id = rows[0]["id"]
        logger.info(f"{'Updated' if draft.is_update else 'Created'} funnel {funnel_id}")
        return funnel_id

    def load(self, funnel_id: str) -> FunnelDraft | None:
        """Load a funnel row by id. Returns None if not found."""
        try:
            rows = self._client.request(
                "GET",
                FUNNELS_TABLE,
                params={"select": "*", "id": f"eq.{funnel_id}"},
            )
        except SupabaseRequestError as e:
            raise FunnelStoreError(str(e)) from e

        if not rows:
            return None
        return FunnelDraft.from_record(rows[0])

    def list_all(self) -> list[FunnelDraft]:
        """Funnels owned by the configured user, newest first."""
        try:
            rows = self._client.request(
                "GET",
                FUNNELS_TABLE,
                params={"select": "*", "user_id": f"eq.{self.user_id}", "order": "created_at.desc"},
            )
        except SupabaseRequestError as e:
            raise FunnelStoreError(str(e)) from e
        return [FunnelDraft.from_record(row) for row in rows]
