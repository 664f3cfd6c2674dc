"""Shared workflow layer between the CLI and the adapters.

Resolves configured adapters, keeps the in-progress composition in a
session file between commands, and hands finished drafts to the funnel
store.
"""

import json
import logging
from pathlib import Path

from .adapters.errors import CatalogError, FunnelStoreError
from .adapters.file_catalog import FileCatalog
from .adapters.file_funnel_store import FileFunnelStore
from .adapters.supabase_catalog import SupabaseCatalog
from .adapters.supabase_funnels import SupabaseFunnelStore
from .adapters.supabase_rest import SupabaseClient, SupabaseRequestError
from .config import DATA_DIR, Config
from .core.composer import FunnelComposer, FunnelDraft
from .ports import CatalogRepository, FunnelStore

logger = logging.getLogger(__name__)


def get_data_dir(config: Config) -> Path:
    """Resolve data directory from config."""
    if config.data_dir:
        return Path(config.data_dir).expanduser()
    return DATA_DIR


def get_session_path(config: Config) -> Path:
    return get_data_dir(config) / "session.json"


def _supabase_client(config: Config) -> SupabaseClient:
    return SupabaseClient(config.supabase_url, config.supabase_key, timeout=config.request_timeout)


def get_catalog(config: Config) -> CatalogRepository:
    """Build the configured catalog adapter."""
    match config.catalog_source:
        case "supabase":
            try:
                return SupabaseCatalog(_supabase_client(config))
            except SupabaseRequestError as e:
                raise CatalogError(str(e)) from e
        case "file":
            path = config.catalog_file or get_data_dir(config) / "catalog.json"
            return FileCatalog(path)
        case other:
            raise CatalogError(f"Unknown CATALOG_SOURCE: {other!r}")


def get_funnel_store(config: Config) -> FunnelStore:
    """Build the configured funnel store adapter."""
    match config.funnel_store:
        case "supabase":
            try:
                return SupabaseFunnelStore(_supabase_client(config), config.supabase_user_id)
            except SupabaseRequestError as e:
                raise FunnelStoreError(str(e)) from e
        case "file":
            return FileFunnelStore(get_data_dir(config) / "funnels")
        case other:
            raise FunnelStoreError(f"Unknown FUNNEL_STORE: {other!r}")


# ============== Session ==============


def new_composer(config: Config, catalog: CatalogRepository | None = None) -> FunnelComposer:
    """Start an empty composition with the configured default colour."""
    catalog = catalog or get_catalog(config)
    return FunnelComposer(catalog.fetch_all(), color=config.default_color)


def open_composer(config: Config, catalog: CatalogRepository | None = None) -> FunnelComposer:
    """Resume the saved session against a fresh catalog snapshot, or start a new one."""
    catalog = catalog or get_catalog(config)
    path = get_session_path(config)
    if not path.exists():
        return FunnelComposer(catalog.fetch_all(), color=config.default_color)

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        logger.warning(f"Discarding unreadable session {path}: {e}")
        return FunnelComposer(catalog.fetch_all(), color=config.default_color)

    composer = FunnelComposer.from_snapshot(catalog.fetch_all(), data)
    missing = len(composer.selected_ids) - len(composer.get_state().selected_items)
    if missing:
        logger.warning(f"{missing} timeline email(s) not found in the current catalog")
    return composer


def save_composer(config: Config, composer: FunnelComposer) -> Path:
    """Write the composition to the session file."""
    path = get_session_path(config)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(composer.snapshot(), indent=2))
    logger.debug(f"Saved session with {len(composer.selected_ids)} emails to {path}")
    return path


def discard_session(config: Config) -> None:
    path = get_session_path(config)
    if path.exists():
        path.unlink()


def edit_funnel(
    config: Config,
    funnel_id: str,
    catalog: CatalogRepository | None = None,
    store: FunnelStore | None = None,
) -> FunnelComposer:
    """Load a stored funnel into a new session."""
    store = store or get_funnel_store(config)
    draft = store.load(funnel_id)
    if draft is None:
        raise FunnelStoreError(f"Funnel not found: {funnel_id}")

    catalog = catalog or get_catalog(config)
    composer = FunnelComposer.from_draft(catalog.fetch_all(), draft)
    save_composer(config, composer)
    return composer


def list_funnels(config: Config, store: FunnelStore | None = None) -> list[FunnelDraft]:
    store = store or get_funnel_store(config)
    return store.list_all()


def submit_funnel(
    config: Config,
    composer: FunnelComposer,
    store: FunnelStore | None = None,
) -> str:
    """Validate, persist and close the session. Returns the funnel id.

    ValidationFailure propagates before anything is written.
    """
    draft = composer.submit()
    store = store or get_funnel_store(config)
    funnel_id = store.save(draft)
    discard_session(config)
    return funnel_id
