import logging

from fastapi import HTTPException

from .config import Config


logger = logging.getLogger(__name__)


def validate_item_name(name: str | None, max_length: int | None = None) -> str:
    """Trim an item name and reject it when empty or too long.

    Returns the trimmed name, which is also the document key.
    """
    limit = max_length if max_length is not None else Config.MAX_NAME_LENGTH
    cleaned = (name or "").strip()

    if not cleaned:
        raise HTTPException(status_code=400, detail="Item name is required")

    if len(cleaned) > limit:
        logger.warning(f"Rejected item name of length {len(cleaned)} (max {limit})")
        raise HTTPException(status_code=400, detail=f"Item name too long. Maximum length is {limit} characters")

    # Document keys never carry control characters
    if any(ord(ch) < 32 for ch in cleaned):
        raise HTTPException(status_code=400, detail="Item name contains control characters")

    return cleaned
