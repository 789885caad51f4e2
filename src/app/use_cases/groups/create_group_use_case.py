"""
Create Group Use Case

Creates a custom group inside a tenant.
"""

import logging
from uuid import UUID

from src.app.exceptions import DuplicateEntityError, ValidationFailure
from src.app.repositories.base import QueryOptions
from src.app.services.audit_recorder import record_audit_event
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import ValidatorRegistry, ValidatorType
from src.domain.entities import Group, GroupType

from .dtos import CreateGroupRequest

logger = logging.getLogger(__name__)


class CreateGroupUseCase:
    """
    Use case for creating a tenant group.

    Business Rules:
    - Ad hoc groups are always custom and unlocked
    - Group names are unique within a tenant
    """

    def __init__(self, uow: UnitOfWork, validators: ValidatorRegistry):
        self.uow = uow
        self.validators = validators

    async def execute(
        self, request: CreateGroupRequest, tenant_id: UUID, created_by: UUID
    ) -> Group:
        """
        Execute create group use case.

        Raises:
            ValidationFailedError: Missing or overlong name, unset tenant
            DuplicateEntityError: Name already used in the tenant
        """
        self.validators.validate_many(
            [
                (ValidatorType.create_group_request, request),
                (ValidatorType.tenant_id, tenant_id),
            ]
        )
        name = request.name.strip()

        async with self.uow:
            if await self.uow.groups.get_many(
                lambda g: True, QueryOptions.partition(str(tenant_id)).where(name=name)
            ):
                logger.warning(f"Group name {name!r} already used in tenant {tenant_id}")
                raise DuplicateEntityError(
                    [
                        ValidationFailure(
                            "name", "A group with that Group name already exists.", is_duplicate=True
                        )
                    ]
                )

            group = await self.uow.groups.create(
                Group(tenant_id=tenant_id, name=name, type=GroupType.custom, is_locked=False)
            )
            await self.uow.commit()
            logger.info(f"Group {group.id} created in tenant {tenant_id}")
            await record_audit_event(
                self.uow,
                "group_created",
                tenant_id,
                created_by,
                {"group_id": str(group.id), "name": name},
            )
            return group
