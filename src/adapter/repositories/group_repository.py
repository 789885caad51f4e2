from typing import Optional
from uuid import UUID

from src.adapter.repositories.base import SqlModelRepository
from src.app.repositories.group_repository import IGroupRepository
from src.domain.entities import Group


class GroupRepository(SqlModelRepository[Group], IGroupRepository):
    """Group repository implementation using SQLModel"""

    model = Group
    partition_column = "tenant_id"
    order_column = "name"

    def _partition_value(self, key: str) -> Optional[UUID]:
        return UUID(key)
