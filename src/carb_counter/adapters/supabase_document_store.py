"""Supabase implementation of the document store."""

from dataclasses import dataclass

from supabase import Client

from carb_counter.services.persistence import DocumentStore


@dataclass
class SupabaseDocumentStore(DocumentStore):
    """Keeps documents as ``{key, value}`` rows in a single table."""

    client: Client
    table: str = "documents"

    def read(self, key: str) -> str | None:
        """Return the stored text for a key."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return value if isinstance(value, str) else None

    def write(self, key: str, text: str) -> None:
        """Insert or replace the row for a key."""
        self.client.table(self.table).upsert(
            {"key": key, "value": text}, on_conflict="key"
        ).execute()
