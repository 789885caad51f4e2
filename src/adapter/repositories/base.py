import base64
from typing import Any, Generic, List, Optional, Type, TypeVar
from uuid import UUID, uuid4

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.base import IRepository, PageResult, Predicate, QueryOptions

T = TypeVar("T", bound=SQLModel)


def encode_continuation_token(offset: int) -> str:
    return base64.urlsafe_b64encode(str(offset).encode("utf-8")).decode("utf-8")


def decode_continuation_token(token: Optional[str]) -> int:
    if not token:
        return 0
    try:
        offset = int(base64.urlsafe_b64decode(token.encode("utf-8")).decode("utf-8"))
    except (ValueError, TypeError):
        raise ValueError(f"Invalid continuation token: {token}")
    if offset < 0:
        raise ValueError(f"Invalid continuation token: {token}")
    return offset


class SqlModelRepository(IRepository[T], Generic[T]):
    """
    Partitioned repository implementation using SQLModel.

    The partition column and QueryOptions.equals are filtered in SQL;
    predicates are evaluated on the loaded rows.
    """

    model: Type[T]
    partition_column: str
    order_column: str = "id"

    def __init__(self, session: AsyncSession):
        self.session = session

    def _partition_value(self, key: str) -> Any:
        return key

    def _in_partition(self, item: T, options: Optional[QueryOptions]) -> bool:
        if options is None or options.partition_key is None:
            return True
        return getattr(item, self.partition_column) == self._partition_value(
            options.partition_key
        )

    async def _load(self, options: QueryOptions) -> List[T]:
        options.ensure_targeted()
        stmt = select(self.model)
        if options.partition_key is not None:
            column = getattr(self.model, self.partition_column)
            stmt = stmt.where(column == self._partition_value(options.partition_key))
        for name, value in options.equals:
            stmt = stmt.where(getattr(self.model, name) == value)
        stmt = stmt.order_by(getattr(self.model, self.order_column), self.model.id)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_id(
        self, item_id: UUID, options: Optional[QueryOptions] = None
    ) -> Optional[T]:
        """Get item by ID"""
        item = await self.session.get(self.model, item_id)
        if item is None or not self._in_partition(item, options):
            return None
        return item

    async def get_many(self, predicate: Predicate, options: QueryOptions) -> List[T]:
        """Get all items matching predicate"""
        return [item for item in await self._load(options) if predicate(item)]

    async def create(self, item: T) -> T:
        """Create a new item"""
        if item.id is None:
            item.id = uuid4()
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item

    async def update(self, item_id: UUID, item: T) -> T:
        """Replace existing item"""
        item.id = item_id
        merged = await self.session.merge(item)
        await self.session.flush()
        await self.session.refresh(merged)
        return merged

    async def delete(self, item_id: UUID) -> None:
        """Delete item by ID"""
        item = await self.session.get(self.model, item_id)
        if item is not None:
            await self.session.delete(item)
            await self.session.flush()

    async def query_page(
        self,
        predicate: Predicate,
        options: QueryOptions,
        page_size: int = 50,
        continuation_token: Optional[str] = None,
    ) -> PageResult[T]:
        """
        Get one page of matching items.

        Continuation token format: base64-encoded offset into the matching sequence
        """
        if page_size <= 0:
            raise ValueError("page_size must be positive")

        offset = decode_continuation_token(continuation_token)
        matching = await self.get_many(predicate, options)
        items = matching[offset : offset + page_size]

        next_offset = offset + len(items)
        is_last_chunk = next_offset >= len(matching)
        return PageResult(
            items=items,
            continuation_token=None if is_last_chunk else encode_continuation_token(next_offset),
            is_last_chunk=is_last_chunk,
        )
