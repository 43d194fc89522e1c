import asyncio
import logging
from typing import Dict, List, Optional, Tuple

from ..core.config import Config
from ..core.models import InventoryItem
from .search import filter_items


logger = logging.getLogger(__name__)


class InventorySyncController:
    """Keeps a local mirror of the inventory collection in step with the store.

    The store is any object with ``list_documents``, ``get_document``,
    ``put_document`` and ``delete_document``. Its calls block, so they run in
    the default thread pool via asyncio.to_thread.

    Mutations are read-modify-write sequences without a concurrency token.
    With ``serialize_mutations`` on, calls for the same name are queued
    behind a per-name lock so two clicks in this process cannot lose an
    update; writers in other processes can still race.
    """

    def __init__(
        self,
        store,
        *,
        refresh_after_mutation: Optional[bool] = None,
        serialize_mutations: Optional[bool] = None,
    ):
        self.store = store
        self.refresh_after_mutation = (
            Config.REFRESH_AFTER_MUTATION if refresh_after_mutation is None else refresh_after_mutation
        )
        self.serialize_mutations = (
            Config.SERIALIZE_MUTATIONS if serialize_mutations is None else serialize_mutations
        )
        self._inventory: Tuple[InventoryItem, ...] = ()
        self._filtered: Tuple[InventoryItem, ...] = ()
        self._search_term = ""
        # name -> (lock, callers holding or waiting on it)
        self._locks: Dict[str, Tuple[asyncio.Lock, int]] = {}

    @property
    def inventory(self) -> List[InventoryItem]:
        return list(self._inventory)

    @property
    def filtered_inventory(self) -> List[InventoryItem]:
        return list(self._filtered)

    @property
    def search_term(self) -> str:
        return self._search_term

    def search(self, term: str) -> List[InventoryItem]:
        """Filter the last snapshot. Never touches the store."""
        self._search_term = term or ""
        self._filtered = tuple(filter_items(self._inventory, self._search_term))
        return self.filtered_inventory

    def _replace_snapshot(self, items: List[InventoryItem]) -> None:
        self._inventory = tuple(items)
        self._filtered = tuple(filter_items(self._inventory, self._search_term))

    async def refresh(self) -> List[InventoryItem]:
        """Re-read the whole collection and replace both local lists.

        StoreUnavailable propagates and the previous snapshot is kept.
        """
        documents = await asyncio.to_thread(self.store.list_documents)
        items = [InventoryItem.from_document(key, body) for key, body in documents]
        self._replace_snapshot(items)
        logger.debug(f"Refreshed inventory: {len(items)} items")
        return self.inventory

    def _lock_for(self, name: str) -> asyncio.Lock:
        lock, users = self._locks.get(name, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[name] = (lock, users + 1)
        return lock

    def _release_lock_for(self, name: str) -> None:
        lock, users = self._locks[name]
        if users <= 1:
            del self._locks[name]
        else:
            self._locks[name] = (lock, users - 1)

    async def _mutate(self, name: str, delta: int) -> Optional[InventoryItem]:
        if self.serialize_mutations:
            lock = self._lock_for(name)
            try:
                async with lock:
                    updated, changed = await self._read_modify_write(name, delta)
            finally:
                self._release_lock_for(name)
        else:
            updated, changed = await self._read_modify_write(name, delta)

        if self.refresh_after_mutation:
            await self.refresh()
        elif changed:
            self._patch_snapshot(name, updated)
        return updated

    async def _read_modify_write(self, name: str, delta: int) -> Tuple[Optional[InventoryItem], bool]:
        """Apply ``delta`` to one document.

        Returns the item as stored afterwards (None when absent) and whether
        the store was written.
        """
        body = await asyncio.to_thread(self.store.get_document, name)

        if body is None:
            if delta < 0:
                logger.info(f"Remove requested for unknown item {name!r}; nothing to do")
                return None, False
            item = InventoryItem(name=name, quantity=delta)
            await asyncio.to_thread(self.store.put_document, name, item.to_document())
            logger.info(f"Created item {name!r} with quantity {item.quantity}")
            return item, True

        current = InventoryItem.from_document(name, body)
        quantity = current.quantity + delta
        if quantity <= 0:
            await asyncio.to_thread(self.store.delete_document, name)
            logger.info(f"Deleted item {name!r}")
            return None, True

        item = InventoryItem(name=name, quantity=quantity)
        await asyncio.to_thread(self.store.put_document, name, item.to_document())
        logger.info(f"Updated item {name!r}: {current.quantity} -> {quantity}")
        return item, True

    def _patch_snapshot(self, name: str, updated: Optional[InventoryItem]) -> None:
        items: List[InventoryItem] = []
        found = False
        for item in self._inventory:
            if item.name != name:
                items.append(item)
                continue
            found = True
            if updated is not None:
                items.append(updated)
        if not found and updated is not None:
            items.append(updated)
        self._replace_snapshot(items)

    async def add_item(self, name: str) -> Optional[InventoryItem]:
        """Increment ``name``, creating it with quantity 1 when absent."""
        return await self._mutate(name, 1)

    async def remove_item(self, name: str) -> Optional[InventoryItem]:
        """Decrement ``name``; the document is deleted instead of reaching 0.

        Unknown names are a no-op. Returns the remaining item or None.
        """
        return await self._mutate(name, -1)
