import logging
from typing import Any, Dict, List, Optional, Tuple

from supabase import Client, ClientOptions, create_client

from ..core.config import Config
from ..core.errors import StoreUnavailable


logger = logging.getLogger(__name__)

KEY_COLUMN = "name"


def get_client() -> Client:
    options = ClientOptions(postgrest_client_timeout=Config.STORE_TIMEOUT_SECONDS)
    return create_client(Config.SUPABASE_URL, Config.SUPABASE_SERVICE_KEY, options=options)


def _split_row(row: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
    """Turn a table row into a (document key, document body) pair."""
    body = {column: value for column, value in row.items() if column != KEY_COLUMN}
    return row[KEY_COLUMN], body


class SupabaseDocumentStore:
    """Document store backed by a Supabase table keyed by item name.

    Each row is one document: the ``name`` column is the key and the remaining
    columns form the body. Every failure is logged and re-raised as
    StoreUnavailable.
    """

    def __init__(self, client: Optional[Client] = None, table: Optional[str] = None):
        self._client = client
        self.table = table or Config.INVENTORY_TABLE

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_client()
        return self._client

    def list_documents(self) -> List[Tuple[str, Dict[str, Any]]]:
        try:
            result = self.client.table(self.table).select('*').execute()
            return [_split_row(row) for row in (result.data or [])]
        except Exception as e:
            logger.error(f"Failed to list documents in {self.table}: {e}")
            raise StoreUnavailable("list", str(e)) from e

    def get_document(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            result = (
                self.client
                .table(self.table)
                .select('*')
                .eq(KEY_COLUMN, key)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch document {key!r} from {self.table}: {e}")
            raise StoreUnavailable("get", str(e)) from e

        if not result.data:
            return None
        _, body = _split_row(result.data[0])
        return body

    def put_document(self, key: str, body: Dict[str, Any]) -> None:
        row = dict(body)
        row[KEY_COLUMN] = key
        try:
            self.client.table(self.table).upsert(row, on_conflict=KEY_COLUMN).execute()
        except Exception as e:
            logger.error(f"Failed to write document {key!r} to {self.table}: {e}")
            raise StoreUnavailable("put", str(e)) from e

    def delete_document(self, key: str) -> None:
        try:
            self.client.table(self.table).delete().eq(KEY_COLUMN, key).execute()
        except Exception as e:
            logger.error(f"Failed to delete document {key!r} from {self.table}: {e}")
            raise StoreUnavailable("delete", str(e)) from e

    def ping(self) -> None:
        """Cheap round trip used by the health check."""
        try:
            self.client.table(self.table).select(KEY_COLUMN).limit(1).execute()
        except Exception as e:
            raise StoreUnavailable("ping", str(e)) from e
