from typing import List, Sequence

from ..core.models import InventoryItem


def filter_items(items: Sequence[InventoryItem], term: str) -> List[InventoryItem]:
    """Items whose name contains ``term``, ignoring case, in their original order."""
    if not term:
        return list(items)
    needle = term.lower()
    return [item for item in items if needle in item.name.lower()]
