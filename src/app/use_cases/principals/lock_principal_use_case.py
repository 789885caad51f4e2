"""
Lock Or Unlock Principal Use Case

Locks a principal and releases its license, or unlocks it and assigns one.
"""

import logging
from uuid import UUID

from src.app.exceptions import NotFoundError, ValidationFailedError, ValidationFailure
from src.app.services.audit_recorder import record_audit_event
from src.app.services.license_gateway import ILicenseGateway
from src.app.services.provisioning_policy import ProvisioningPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import ValidatorRegistry, ValidatorType
from src.domain.entities import Principal

logger = logging.getLogger(__name__)


class LockOrUnlockPrincipalUseCase:
    """
    Use case for locking or unlocking a tenant principal.

    Business Rules:
    - Only principals of the caller's tenant can be changed
    - Locking releases the license, unlocking assigns one
    - The lock state only changes if the license service agrees
    - Requests matching the current state change nothing
    """

    def __init__(
        self,
        uow: UnitOfWork,
        licenses: ILicenseGateway,
        validators: ValidatorRegistry,
        policy: ProvisioningPolicy,
    ):
        self.uow = uow
        self.licenses = licenses
        self.validators = validators
        self.policy = policy

    async def execute(
        self, principal_id: UUID, tenant_id: UUID, is_locked: bool, acting_user_id: UUID
    ) -> Principal:
        self.validators.validate_many(
            [
                (ValidatorType.principal_id, principal_id),
                (ValidatorType.tenant_id, tenant_id),
            ]
        )

        async with self.uow:
            principal = await self.uow.principals.get_by_id(principal_id)
            if principal is None or principal.tenant_id != tenant_id:
                raise NotFoundError("Principal", principal_id)

            if principal.is_locked == is_locked:
                return principal

            if is_locked:
                result = await self.licenses.release(tenant_id, principal_id)
            else:
                result = await self.licenses.assign(
                    tenant_id,
                    principal_id,
                    principal.license_tier or self.policy.default_license_tier,
                )

            if not result.success:
                action = "lock" if is_locked else "unlock"
                logger.warning(f"License service refused to {action} principal {principal_id}")
                raise ValidationFailedError(
                    [
                        ValidationFailure(
                            "is_locked",
                            f"Unable to {action} the user: {result.message or 'license change failed'}",
                        )
                    ]
                )

            principal.is_locked = is_locked
            principal = await self.uow.principals.update(principal.id, principal)
            await self.uow.commit()
            await record_audit_event(
                self.uow,
                "principal_locked" if is_locked else "principal_unlocked",
                tenant_id,
                principal.id,
                {"acting_user_id": str(acting_user_id)},
            )
            return principal
