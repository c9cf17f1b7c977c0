"""
Item repository - item data access and query optimization (SOLID: Single Responsibility).
Challenge: Filtered pagination with a total count; code uniqueness under concurrent writes.
"""

from datetime import datetime, timezone

from sqlalchemy import delete, exists, func, select, update
from sqlalchemy.exc import IntegrityError

from inventory_api.core.exceptions import DuplicateCodeError, ItemNotFoundError, StorageError
from inventory_api.db.models.item import ItemRecord
from inventory_api.db.repositories.base_repository import SqlRepository, as_utc, is_unique_violation
from inventory_api.db.repositories.interfaces import ItemRepository
from inventory_api.domain.models import Item


def _to_entity(record: ItemRecord) -> Item:
    return Item(
        id=record.id,
        code=record.code,
        title=record.title,
        description=record.description,
        price=record.price,
        stock=record.stock,
        status=record.status,
        created_at=as_utc(record.created_at),
        updated_at=as_utc(record.updated_at),
        created_by=record.created_by,
        updated_by=record.updated_by,
    )


def _raise_for_integrity(exc: IntegrityError, action: str):
    if is_unique_violation(exc):
        raise DuplicateCodeError() from exc
    raise StorageError(f"failed to {action}: {exc}") from exc


class SqlItemRepository(SqlRepository[ItemRecord], ItemRepository):
    """Item-specific queries. Indexes on code, status and updated_at back the hot paths."""

    def __init__(self, session_maker):
        super().__init__(session_maker, ItemRecord)

    async def save(self, item: Item) -> Item:
        now = datetime.now(timezone.utc)
        record = ItemRecord(
            code=item.code,
            title=item.title,
            description=item.description,
            price=item.price,
            stock=item.stock,
            status=item.status,
            created_at=now,
            updated_at=now,
            created_by=item.created_by,
            updated_by=item.updated_by,
        )
        try:
            async with self.session("save item") as session:
                session.add(record)
                await session.flush()
                await session.refresh(record)
        except IntegrityError as exc:
            _raise_for_integrity(exc, "save item")
        return _to_entity(record)

    async def update(self, item: Item) -> Item:
        now = datetime.now(timezone.utc)
        stmt = (
            update(ItemRecord)
            .where(ItemRecord.id == item.id)
            .values(
                code=item.code,
                title=item.title,
                description=item.description,
                price=item.price,
                stock=item.stock,
                status=item.status,
                updated_at=now,
                updated_by=item.updated_by,
            )
        )
        try:
            async with self.session("update item") as session:
                result = await session.execute(stmt)
                if result.rowcount == 0:
                    raise ItemNotFoundError()
                record = await self.get_record(session, item.id)
        except IntegrityError as exc:
            _raise_for_integrity(exc, "update item")
        return _to_entity(record)

    async def find_by_id(self, item_id: int) -> Item:
        async with self.session("find item") as session:
            record = await self.get_record(session, item_id)
        if record is None:
            raise ItemNotFoundError()
        return _to_entity(record)

    async def find_all(self, status: str, limit: int, offset: int) -> tuple[list[Item], int]:
        """Paginated list, most recently updated first. Count and page share the same filter."""
        count_stmt = select(func.count()).select_from(ItemRecord)
        page_stmt = select(ItemRecord)
        if status:
            count_stmt = count_stmt.where(ItemRecord.status == status)
            page_stmt = page_stmt.where(ItemRecord.status == status)
        page_stmt = (
            page_stmt.order_by(ItemRecord.updated_at.desc(), ItemRecord.id.desc())
            .offset(offset)
            .limit(limit)
        )
        async with self.session("list items") as session:
            total = (await session.execute(count_stmt)).scalar_one()
            if total == 0 or offset >= total:
                return [], total
            records = (await session.execute(page_stmt)).scalars().all()
        return [_to_entity(r) for r in records], total

    async def delete(self, item_id: int) -> None:
        async with self.session("delete item") as session:
            result = await session.execute(delete(ItemRecord).where(ItemRecord.id == item_id))
            if result.rowcount == 0:
                raise ItemNotFoundError()

    async def exists_by_code(self, code: str, exclude_id: int = 0) -> bool:
        stmt = select(exists().where(ItemRecord.code == code, ItemRecord.id != exclude_id))
        async with self.session("check item code") as session:
            return bool((await session.execute(stmt)).scalar())
