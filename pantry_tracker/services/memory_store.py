import copy
import logging
import threading
from typing import Any, Dict, List, Optional, Tuple


logger = logging.getLogger(__name__)


class InMemoryDocumentStore:
    """Process-local document store with the same interface as SupabaseDocumentStore.

    Used when ENVIRONMENT is ``development`` and by the test suite. Documents
    keep insertion order, like a freshly created table listed without ORDER BY.
    """

    def __init__(self, documents: Optional[Dict[str, Dict[str, Any]]] = None):
        self._documents: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()
        for key, body in (documents or {}).items():
            self._documents[key] = dict(body)

    def list_documents(self) -> List[Tuple[str, Dict[str, Any]]]:
        with self._lock:
            return [(key, copy.deepcopy(body)) for key, body in self._documents.items()]

    def get_document(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            body = self._documents.get(key)
            return copy.deepcopy(body) if body is not None else None

    def put_document(self, key: str, body: Dict[str, Any]) -> None:
        with self._lock:
            self._documents[key] = dict(body)

    def delete_document(self, key: str) -> None:
        with self._lock:
            self._documents.pop(key, None)

    def ping(self) -> None:
        return None

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, key: str) -> bool:
        return key in self._documents
