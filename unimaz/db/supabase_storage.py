"""Storage backend on a Supabase table: user_data(user_id, storage_key, value)."""

import logging
from datetime import datetime, timezone
from typing import Optional

from supabase import Client

from unimaz.db.storage import StorageBackend, StorageError
from unimaz.utils.retry import retry_with_backoff

logger = logging.getLogger(__name__)


class SupabaseStorage(StorageBackend):
    """One row per (user_id, storage_key); the value column holds the blob."""

    def __init__(self, client: Client, table: str = "user_data", user_id: str = "local") -> None:
        self.client = client
        self.table = table
        self.user_id = user_id

    @retry_with_backoff()
    def _select(self, key: str):
        return (
            self.client.table(self.table)
            .select("value")
            .eq("user_id", self.user_id)
            .eq("storage_key", key)
            .limit(1)
            .execute()
        )

    @retry_with_backoff()
    def _upsert(self, key: str, value: str):
        record = {
            "user_id": self.user_id,
            "storage_key": key,
            "value": value,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        return (
            self.client.table(self.table)
            .upsert(record, on_conflict="user_id,storage_key")
            .execute()
        )

    @retry_with_backoff()
    def _delete(self, key: str):
        return (
            self.client.table(self.table)
            .delete()
            .eq("user_id", self.user_id)
            .eq("storage_key", key)
            .execute()
        )

    def get_item(self, key: str) -> Optional[str]:
        try:
            response = self._select(key)
        except Exception as e:
            raise StorageError(f"Failed to read '{key}' from {self.table}: {e}") from e
        if response.data and len(response.data) > 0:
            row = response.data[0] if isinstance(response.data, list) else response.data
            return row.get("value")
        return None

    def set_item(self, key: str, value: str) -> None:
        try:
            self._upsert(key, value)
        except Exception as e:
            raise StorageError(f"Failed to write '{key}' to {self.table}: {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            self._delete(key)
        except Exception as e:
            raise StorageError(f"Failed to delete '{key}' from {self.table}: {e}") from e
        logger.debug("Removed %s for user %s", key, self.user_id)
