from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict


class InventoryItem(BaseModel):
    """One pantry entry. ``name`` doubles as the document key in the store."""

    model_config = ConfigDict(frozen=True)

    name: str
    quantity: int

    @classmethod
    def from_document(cls, key: str, body: Dict[str, Any]) -> "InventoryItem":
        return cls(name=key, quantity=int(body.get("quantity", 0)))

    def to_document(self) -> Dict[str, Any]:
        return {"quantity": self.quantity}

    @property
    def display_name(self) -> str:
        return self.name[:1].upper() + self.name[1:]


class AddItemRequest(BaseModel):
    name: str


class InventoryResponse(BaseModel):
    items: List[InventoryItem]
    total: int
    search_term: str = ""
