"""
Delete Group Use Case

Deletes a custom group and removes it from every member.
"""

import logging
from uuid import UUID

from src.app.exceptions import LockedGroupError
from src.app.services.audit_recorder import record_audit_event
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import ValidatorRegistry, ValidatorType

from .common import group_members, load_tenant_group

logger = logging.getLogger(__name__)


class DeleteGroupUseCase:
    """
    Use case for deleting a tenant group.

    Business Rules:
    - Locked (built-in) groups are never deleted
    - Members lose the group before the group is deleted
    """

    def __init__(self, uow: UnitOfWork, validators: ValidatorRegistry):
        self.uow = uow
        self.validators = validators

    async def execute(self, group_id: UUID, tenant_id: UUID, acting_user_id: UUID) -> None:
        """
        Raises:
            NotFoundError: No such group in the tenant
            LockedGroupError: The group is built-in
        """
        self.validators.validate_many(
            [
                (ValidatorType.group_id, group_id),
                (ValidatorType.tenant_id, tenant_id),
            ]
        )

        async with self.uow:
            group = await load_tenant_group(self.uow, group_id, tenant_id)
            if group.is_locked:
                logger.warning(f"Refused to delete locked group {group_id}")
                raise LockedGroupError(group_id)

            members = await group_members(self.uow, group)
            for member in members:
                member.remove_group(group_id)
                await self.uow.principals.update(member.id, member)

            await self.uow.groups.delete(group_id)
            await self.uow.commit()
            logger.info(f"Group {group_id} deleted; removed from {len(members)} members")
            await record_audit_event(
                self.uow,
                "group_deleted",
                tenant_id,
                acting_user_id,
                {"group_id": str(group_id), "member_count": len(members)},
            )
