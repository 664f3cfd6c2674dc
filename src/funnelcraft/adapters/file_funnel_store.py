"""File-based funnel storage adapter."""

import json
import logging
import uuid
from pathlib import Path

from funnelcraft.core.composer import FunnelDraft

from .errors import FunnelStoreError

logger = logging.getLogger(__name__)


class FileFunnelStore:
    """
    File-based funnel storage.

    Implements FunnelStore protocol. Each funnel gets a JSON file named
    after its id.
    """

    def __init__(self, funnels_dir: Path | str):
        self.funnels_dir = Path(funnels_dir).expanduser()
        self.funnels_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_id(self, funnel_id: str) -> Path:
        return self.funnels_dir / f"{funnel_id}.json"

    def save(self, draft: FunnelDraft) -> str:
        """Create or overwrite a funnel file. Returns the funnel id."""
        funnel_id = draft.funnel_id or uuid.uuid4().hex
        record = {"id": funnel_id, **draft.to_record()}
        self._path_for_id(funnel_id).write_text(json.dumps(record, indent=2))
        action = "Updated" if draft.is_update else "Created"
        logger.info(f"{action} funnel {funnel_id} ({draft.total_emails} emails)")
        return funnel_id

    def load(self, funnel_id: str) -> FunnelDraft | None:
        """Load a funnel by id. Returns None if not found."""
        path = self._path_for_id(funnel_id)
        if not path.exists():
            return None
        try:
            return FunnelDraft.from_record(json.loads(path.read_text()))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise FunnelStoreError(f"Funnel file {path} is unreadable: {e}") from e

    def list_ids(self) -> list[str]:
        """Ids of all stored funnels."""
        return sorted(p.stem for p in self.funnels_dir.glob("*.json"))

    def list_all(self) -> list[FunnelDraft]:
        """Load every stored funnel, skipping unreadable files."""
        drafts = []
        for funnel_id in self.list_ids():
            try:
                draft = self.load(funnel_id)
            except FunnelStoreError as e:
                logger.warning(str(e))
                continue
            if draft is not None:
                drafts.append(draft)
        return drafts
