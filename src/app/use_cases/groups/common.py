from typing import List
from uuid import UUID

from src.app.exceptions import NotFoundError
from src.app.repositories.base import QueryOptions
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Group, Principal


async def load_tenant_group(uow: UnitOfWork, group_id: UUID, tenant_id: UUID) -> Group:
    """Groups of other tenants are reported as missing"""
    group = await uow.groups.get_by_id(group_id, QueryOptions.partition(str(tenant_id)))
    if group is None:
        raise NotFoundError("Group", group_id)
    return group


async def group_members(uow: UnitOfWork, group: Group) -> List[Principal]:
    return await uow.principals.get_many(
        lambda p: p.has_group(group.id),
        QueryOptions.cross_partition().where(tenant_id=group.tenant_id),
    )
