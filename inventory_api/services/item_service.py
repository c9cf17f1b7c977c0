"""
Item service - business logic for items (SOLID: Single Responsibility).
Challenge: Validation, status derivation and code uniqueness; keep controllers thin.
Design: Service depends on the ItemRepository abstraction; easy to test with the in-memory store.
"""

import logging
import math
from dataclasses import dataclass, fields

from inventory_api.core.exceptions import (
    CodeRequiredError,
    DescriptionRequiredError,
    DuplicateCodeError,
    InvalidPriceError,
    InvalidStockError,
    TitleRequiredError,
)
from inventory_api.db.repositories.interfaces import ItemRepository
from inventory_api.domain.models import Item, derive_status

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 20


def validate_item(item: Item) -> None:
    """Raise the first failing field rule, in field order."""
    if not item.code:
        raise CodeRequiredError()
    if not item.title:
        raise TitleRequiredError()
    if not item.description:
        raise DescriptionRequiredError()
    if item.price <= 0:
        raise InvalidPriceError()
    if item.stock < 0:
        raise InvalidStockError()


@dataclass
class ItemPage:
    items: list[Item]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        if self.total <= 0:
            return 0
        return math.ceil(self.total / self.limit)


class ItemService:
    """Handles all item use cases. Status is always derived from stock, never taken from input."""

    def __init__(self, item_repo: ItemRepository, max_page_size: int = MAX_PAGE_SIZE):
        self.item_repo = item_repo
        self.max_page_size = max_page_size

    async def create(self, item: Item, acting_user_id: int) -> Item:
        """Validate, check code uniqueness, stamp creator, persist."""
        validate_item(item)
        if await self.item_repo.exists_by_code(item.code, 0):
            raise DuplicateCodeError()
        item.status = derive_status(item.stock)
        item.created_by = acting_user_id
        item.updated_by = acting_user_id
        created = await self.item_repo.save(item)
        logger.info("item %s created (code=%s) by user %s", created.id, created.code, acting_user_id)
        return created

    async def update(self, item_id: int, values: Item, acting_user_id: int) -> Item:
        """
        Full replace of the mutable fields.
        `values` is overwritten with the persisted state on success.
        """
        existing = await self.item_repo.find_by_id(item_id)
        existing.code = values.code
        existing.title = values.title
        existing.description = values.description
        existing.price = values.price
        existing.stock = values.stock
        existing.status = derive_status(existing.stock)
        existing.updated_by = acting_user_id

        validate_item(existing)
        if await self.item_repo.exists_by_code(existing.code, item_id):
            raise DuplicateCodeError()

        updated = await self.item_repo.update(existing)
        for f in fields(Item):
            setattr(values, f.name, getattr(updated, f.name))
        logger.info("item %s updated by user %s", item_id, acting_user_id)
        return values

    async def get_by_id(self, item_id: int) -> Item:
        return await self.item_repo.find_by_id(item_id)

    async def list(self, status: str = "", page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> ItemPage:
        """Paginated list. Out-of-range page/limit are normalized, not rejected."""
        if page < 1:
            page = 1
        if limit < 1 or limit > self.max_page_size:
            limit = DEFAULT_PAGE_SIZE
        offset = (page - 1) * limit
        items, total = await self.item_repo.find_all(status, limit, offset)
        return ItemPage(items=items, total=total, page=page, limit=limit)

    async def delete(self, item_id: int) -> None:
        await self.item_repo.delete(item_id)
        logger.info("item %s deleted", item_id)
