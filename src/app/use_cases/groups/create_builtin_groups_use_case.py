"""
Create Built-In Groups Use Case

Seeds a tenant with its locked basic and tenant admin groups.
"""

import logging
from typing import List
from uuid import UUID

from src.app.repositories.base import QueryOptions
from src.app.services.audit_recorder import record_audit_event
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import ValidatorRegistry, ValidatorType
from src.domain.entities import Group, GroupType

logger = logging.getLogger(__name__)

BUILTIN_GROUPS = [
    (GroupType.basic, "Basic"),
    (GroupType.tenant_admin, "TenantAdmin"),
]


class CreateBuiltInGroupsUseCase:
    """
    Use case for seeding a tenant's built-in groups.

    Business Rules:
    - Built-in groups are locked
    - A built-in group type the tenant already has is not created again
    """

    def __init__(self, uow: UnitOfWork, validators: ValidatorRegistry):
        self.uow = uow
        self.validators = validators

    async def execute(self, tenant_id: UUID) -> List[Group]:
        """Returns the tenant's built-in groups, created or existing"""
        self.validators.validate(ValidatorType.tenant_id, tenant_id)

        async with self.uow:
            existing = {
                g.type: g
                for g in await self.uow.groups.get_many(
                    lambda g: g.type in (GroupType.basic, GroupType.tenant_admin),
                    QueryOptions.partition(str(tenant_id)),
                )
            }

            groups: List[Group] = []
            created: List[Group] = []
            for group_type, name in BUILTIN_GROUPS:
                group = existing.get(group_type)
                if group is None:
                    group = await self.uow.groups.create(
                        Group(tenant_id=tenant_id, name=name, type=group_type, is_locked=True)
                    )
                    created.append(group)
                groups.append(group)

            if created:
                await self.uow.commit()
                logger.info(f"Created {len(created)} built-in groups for tenant {tenant_id}")
                await record_audit_event(
                    self.uow,
                    "builtin_groups_created",
                    tenant_id,
                    None,
                    {"group_ids": [str(g.id) for g in created]},
                )
            return groups
