"""Dependency container wiring for the application."""

from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo

from supabase import create_client

from carb_counter.adapters.json_file_document_store import JsonFileDocumentStore
from carb_counter.adapters.memory_document_store import InMemoryDocumentStore
from carb_counter.adapters.supabase_document_store import SupabaseDocumentStore
from carb_counter.config import Settings, parse_storage_backend
from carb_counter.services.favorites import FavoriteService
from carb_counter.services.history import HistoryService
from carb_counter.services.persistence import DocumentStore, PersistenceService
from carb_counter.services.rows import RowService
from carb_counter.services.store import CarbStore
from carb_counter.services.usage import UsageService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    document_store: DocumentStore
    store: CarbStore


def build_document_store(settings: Settings) -> DocumentStore:
    """Create the document store selected by the settings."""
    backend = parse_storage_backend(settings.storage_backend)
    if backend == "memory":
        return InMemoryDocumentStore()
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage needs a URL and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseDocumentStore(client, table=settings.supabase_table)
    return JsonFileDocumentStore(Path(settings.data_dir).expanduser())


def build_store(settings: Settings, document_store: DocumentStore) -> CarbStore:
    """Wire the session store on top of a document store."""
    persistence = PersistenceService(document_store)
    usage_service = UsageService(persistence, window=settings.usage_window)
    favorite_service = FavoriteService(persistence, usage_service)
    history_service = HistoryService(persistence, limit=settings.history_limit)
    row_service = RowService(
        history_service,
        timezone=ZoneInfo(settings.timezone) if settings.timezone else None,
    )
    return CarbStore(
        row_service=row_service,
        favorite_service=favorite_service,
        usage_service=usage_service,
        history_service=history_service,
        quick_add_limit=settings.quick_add_limit,
        recent_history_limit=settings.recent_history_limit,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    document_store = build_document_store(resolved_settings)
    return AppContainer(
        settings=resolved_settings,
        document_store=document_store,
        store=build_store(resolved_settings, document_store),
    )
