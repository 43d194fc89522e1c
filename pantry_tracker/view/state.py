"""View state for the single inventory page.

ViewState is immutable; every user action produces a new state. ViewSession
holds the current state for the one inventory this process serves and drives
the sync controller for actions that touch the store.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Awaitable, Callable, Optional, Tuple

from ..core.errors import StoreUnavailable
from ..core.models import InventoryItem
from ..services.inventory_sync import InventorySyncController
from ..services.search import filter_items


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewState:
    inventory: Tuple[InventoryItem, ...] = ()
    filtered_inventory: Tuple[InventoryItem, ...] = ()
    search_term: str = ""
    dialog_open: bool = False
    item_name: str = ""
    notification: Optional[str] = None

    def open_dialog(self) -> "ViewState":
        return replace(self, dialog_open=True)

    def close_dialog(self) -> "ViewState":
        return replace(self, dialog_open=False)

    def set_item_name(self, item_name: str) -> "ViewState":
        return replace(self, item_name=item_name)

    def submit_dialog(self) -> Tuple["ViewState", str]:
        """Hand back the typed name, with the input cleared and the dialog closed."""
        return replace(self, item_name="", dialog_open=False), self.item_name

    def search(self, term: str) -> "ViewState":
        term = term or ""
        return replace(self, search_term=term, filtered_inventory=tuple(filter_items(self.inventory, term)))

    def apply_snapshot(self, items) -> "ViewState":
        items = tuple(items)
        return replace(self, inventory=items, filtered_inventory=tuple(filter_items(items, self.search_term)))

    def notify(self, message: str) -> "ViewState":
        return replace(self, notification=message)

    def dismiss_notification(self) -> "ViewState":
        return replace(self, notification=None)


@dataclass
class ViewSession:
    controller: InventorySyncController
    state: ViewState = field(default_factory=ViewState)

    async def _run(self, action: Callable[[], Awaitable[object]]) -> bool:
        """Run a store action and fold its outcome into the state.

        On StoreUnavailable the mirror is left as it was and a notification
        is shown instead.
        """
        try:
            await action()
        except StoreUnavailable as e:
            logger.error(f"Inventory action failed: {e}")
            self.state = self.state.notify("Could not reach the inventory store. Please try again.")
            return False
        self.sync()
        return True

    def sync(self) -> None:
        """Pick up the controller's latest snapshot, keeping the search term."""
        self.state = self.state.apply_snapshot(self.controller.inventory)

    async def load(self) -> bool:
        return await self._run(self.controller.refresh)

    async def add(self, name: str) -> bool:
        return await self._run(lambda: self.controller.add_item(name))

    async def remove(self, name: str) -> bool:
        return await self._run(lambda: self.controller.remove_item(name))

    def open_dialog(self) -> None:
        self.state = self.state.open_dialog()

    def close_dialog(self) -> None:
        self.state = self.state.close_dialog()

    async def submit_dialog(self, item_name: str) -> str:
        """Add the typed item, then clear the input and close the dialog.

        The name is expected to be validated already.
        """
        self.state = self.state.set_item_name(item_name)
        await self.add(item_name)
        self.state, submitted = self.state.submit_dialog()
        return submitted

    def search(self, term: str) -> None:
        self.state = self.state.search(term)

    def dismiss_notification(self) -> None:
        self.state = self.state.dismiss_notification()
