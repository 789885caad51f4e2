from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar
from uuid import UUID

T = TypeVar("T")

Predicate = Callable[[T], bool]


@dataclass(frozen=True)
class QueryOptions:
    """
    Partition targeting for a repository query.

    Either a partition key or an explicit cross-partition opt-in is required.
    equals holds (field, value) pairs the store can match on before the
    predicate runs.
    """

    partition_key: Optional[str] = None
    enable_cross_partition: bool = False
    equals: Tuple[Tuple[str, Any], ...] = ()

    @classmethod
    def partition(cls, key: str) -> "QueryOptions":
        return cls(partition_key=key)

    @classmethod
    def cross_partition(cls) -> "QueryOptions":
        return cls(enable_cross_partition=True)

    def where(self, **equals: Any) -> "QueryOptions":
        return replace(self, equals=self.equals + tuple(equals.items()))

    def matches(self, item: Any) -> bool:
        return all(getattr(item, name) == value for name, value in self.equals)

    def ensure_targeted(self) -> None:
        if self.partition_key is None and not self.enable_cross_partition:
            raise ValueError(
                "Query must target a partition key or explicitly enable cross-partition"
            )


@dataclass
class PageResult(Generic[T]):
    items: List[T] = field(default_factory=list)
    continuation_token: Optional[str] = None
    is_last_chunk: bool = True


class IRepository(ABC, Generic[T]):
    """Partitioned document repository interface - application layer"""

    @abstractmethod
    async def get_by_id(
        self, item_id: UUID, options: Optional[QueryOptions] = None
    ) -> Optional[T]:
        """Get item by ID, optionally scoped to a partition"""
        pass

    @abstractmethod
    async def get_many(self, predicate: Predicate, options: QueryOptions) -> List[T]:
        """Get all items matching predicate within the targeted partition(s)"""
        pass

    @abstractmethod
    async def create(self, item: T) -> T:
        """Create a new item; the repository assigns its ID"""
        pass

    @abstractmethod
    async def update(self, item_id: UUID, item: T) -> T:
        """Replace the stored item with the given ID"""
        pass

    @abstractmethod
    async def delete(self, item_id: UUID) -> None:
        """Delete item by ID"""
        pass

    @abstractmethod
    async def query_page(
        self,
        predicate: Predicate,
        options: QueryOptions,
        page_size: int = 50,
        continuation_token: Optional[str] = None,
    ) -> PageResult[T]:
        """
        Get one ordered page of items matching predicate.

        Returns:
            PageResult with items, the continuation token for the next page
            (None when exhausted) and is_last_chunk
        """
        pass
