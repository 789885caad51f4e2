"""
Group Membership Use Cases

Add principals to, remove them from, and list members of tenant groups.
Membership is stored on Principal.groups.
"""

import logging
from typing import List
from uuid import UUID

from src.app.exceptions import NotFoundError, ValidationFailedError, ValidationFailure
from src.app.services.audit_recorder import record_audit_event
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import ValidatorRegistry, ValidatorType
from src.domain.entities import Principal

from .common import group_members, load_tenant_group

logger = logging.getLogger(__name__)


def _validate_ids(validators: ValidatorRegistry, principal_id, group_id, tenant_id) -> None:
    validators.validate_many(
        [
            (ValidatorType.principal_id, principal_id),
            (ValidatorType.group_id, group_id),
            (ValidatorType.tenant_id, tenant_id),
        ]
    )


class AddPrincipalToGroupUseCase:
    """
    Use case for adding a principal to a group.

    Business Rules:
    - Principal and group must both belong to the caller's tenant
    - Adding an existing membership is rejected
    """

    def __init__(self, uow: UnitOfWork, validators: ValidatorRegistry):
        self.uow = uow
        self.validators = validators

    async def execute(
        self, principal_id: UUID, group_id: UUID, tenant_id: UUID, acting_user_id: UUID
    ) -> Principal:
        _validate_ids(self.validators, principal_id, group_id, tenant_id)

        async with self.uow:
            principal = await self.uow.principals.get_by_id(principal_id)
            if principal is None or principal.tenant_id != tenant_id:
                raise ValidationFailedError(
                    [
                        ValidationFailure(
                            "principal_id", f"Unable to find the user with the id {principal_id}"
                        )
                    ]
                )

            await load_tenant_group(self.uow, group_id, tenant_id)

            if principal.has_group(group_id):
                raise ValidationFailedError(
                    [
                        ValidationFailure(
                            "group_id",
                            f"User group {group_id} already exists for User id {principal_id}",
                        )
                    ]
                )

            principal.add_group(group_id)
            principal = await self.uow.principals.update(principal.id, principal)
            await self.uow.commit()
            await record_audit_event(
                self.uow,
                "group_member_added",
                tenant_id,
                principal.id,
                {"group_id": str(group_id), "acting_user_id": str(acting_user_id)},
            )
            return principal


class RemovePrincipalFromGroupUseCase:
    """Removing a membership the principal does not have changes nothing"""

    def __init__(self, uow: UnitOfWork, validators: ValidatorRegistry):
        self.uow = uow
        self.validators = validators

    async def execute(
        self, principal_id: UUID, group_id: UUID, tenant_id: UUID, acting_user_id: UUID
    ) -> Principal:
        _validate_ids(self.validators, principal_id, group_id, tenant_id)

        async with self.uow:
            principal = await self.uow.principals.get_by_id(principal_id)
            if principal is None or principal.tenant_id != tenant_id:
                raise NotFoundError("Principal", principal_id)

            if not principal.has_group(group_id):
                logger.info(f"Principal {principal_id} is not in group {group_id}")
                return principal

            principal.remove_group(group_id)
            principal = await self.uow.principals.update(principal.id, principal)
            await self.uow.commit()
            await record_audit_event(
                self.uow,
                "group_member_removed",
                tenant_id,
                principal.id,
                {"group_id": str(group_id), "acting_user_id": str(acting_user_id)},
            )
            return principal


class GetGroupMembersUseCase:
    def __init__(self, uow: UnitOfWork, validators: ValidatorRegistry):
        self.uow = uow
        self.validators = validators

    async def execute(self, group_id: UUID, tenant_id: UUID) -> List[UUID]:
        self.validators.validate_many(
            [
                (ValidatorType.group_id, group_id),
                (ValidatorType.tenant_id, tenant_id),
            ]
        )

        async with self.uow:
            group = await load_tenant_group(self.uow, group_id, tenant_id)
            return [member.id for member in await group_members(self.uow, group)]
