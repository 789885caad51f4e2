"""
Create Principal Use Case

Creates a tenant principal and acquires its license, locking the principal
and alerting tenant admins when no license can be assigned.
"""

import logging
from typing import List
from uuid import UUID

from src.app.exceptions import (
    DuplicateEntityError,
    ValidationFailedError,
    ValidationFailure,
)
from src.app.repositories.base import QueryOptions
from src.app.services.audit_recorder import record_audit_event
from src.app.services.license_gateway import ILicenseGateway
from src.app.services.notification_gateway import INotificationGateway
from src.app.services.provisioning_policy import ProvisioningPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import ValidatorRegistry, ValidatorType
from src.domain.entities import GroupType, Principal, email_domain_of

from .common import (
    lock_principal,
    notify_tenant_admins,
    run_to_completion,
    send_welcome_email,
    try_assign_license,
)
from .dtos import CreatePrincipalRequest

logger = logging.getLogger(__name__)


class CreatePrincipalUseCase:
    """
    Use case for creating a principal inside a tenant.

    Business Rules:
    - Protected provisioning tenants cannot own principals
    - Username, email and external id are unique; every collision is reported
    - New principals join the tenant's basic group when one exists
    - License failure never fails creation: the principal is locked and
      every tenant admin gets one locked notice
    - Welcome email failures are logged only
    """

    def __init__(
        self,
        uow: UnitOfWork,
        licenses: ILicenseGateway,
        notifications: INotificationGateway,
        validators: ValidatorRegistry,
        policy: ProvisioningPolicy,
    ):
        self.uow = uow
        self.licenses = licenses
        self.notifications = notifications
        self.validators = validators
        self.policy = policy

    async def execute(
        self, request: CreatePrincipalRequest, tenant_id: UUID, created_by: UUID
    ) -> Principal:
        """
        Execute create principal use case.

        Args:
            request: Principal attributes
            tenant_id: Owning tenant
            created_by: Acting principal

        Returns:
            The persisted principal, locked if no license was assigned

        Raises:
            ValidationFailedError: Invalid fields or protected tenant
            DuplicateEntityError: Only uniqueness collisions were found
        """
        # 1. Field validation and tenant policy
        failures = self.validators.failures(
            [(ValidatorType.create_principal_request, request)]
        )
        if self.policy.is_protected(tenant_id):
            failures.append(
                ValidationFailure(
                    "tenant_id", "Users cannot be created under provisioning tenant"
                )
            )
        if failures:
            logger.warning(f"Create principal rejected: {[f.error_message for f in failures]}")
            raise ValidationFailedError(failures)

        async with self.uow:
            # 2. Uniqueness, reported all at once
            failures = await self._uniqueness_failures(request)
            failures += self.validators.failures([(ValidatorType.tenant_id, tenant_id)])
            if failures:
                logger.warning(f"Create principal rejected: {[f.error_message for f in failures]}")
                if all(f.is_duplicate for f in failures):
                    raise DuplicateEntityError(failures)
                raise ValidationFailedError(failures)

            email = request.email.strip().lower()
            principal = Principal(
                tenant_id=tenant_id,
                email=email,
                email_domain=email_domain_of(email),
                username=request.username.strip().lower(),
                first_name=request.first_name.strip(),
                last_name=request.last_name.strip(),
                external_id=request.external_id.strip() if request.external_id else None,
                is_idp_user=request.is_idp_user,
                is_locked=False,
                license_tier=request.license_tier or self.policy.default_license_tier,
                created_by=created_by,
            )

            # 3. Basic group membership
            basic_groups = await self.uow.groups.get_many(
                lambda g: g.type == GroupType.basic,
                QueryOptions.partition(str(tenant_id)),
            )
            if basic_groups:
                principal.add_group(basic_groups[0].id)

            # 4. Persist
            principal = await self.uow.principals.create(principal)
            await self.uow.commit()
            logger.info(f"Principal {principal.id} created in tenant {tenant_id}")
            await record_audit_event(
                self.uow,
                "principal_created",
                tenant_id,
                principal.id,
                {"created_by": str(created_by), "username": principal.username},
            )

            # 5. License, compensating on failure
            if await try_assign_license(
                self.licenses, tenant_id, principal.id, principal.license_tier
            ):
                await send_welcome_email(self.notifications, principal)
                return principal

            return await run_to_completion(self._compensate(principal, tenant_id))

    async def _compensate(self, principal: Principal, tenant_id: UUID) -> Principal:
        principal = await lock_principal(self.uow, principal)
        await notify_tenant_admins(self.uow, self.notifications, tenant_id, principal)
        return principal

    async def _uniqueness_failures(
        self, request: CreatePrincipalRequest
    ) -> List[ValidationFailure]:
        failures: List[ValidationFailure] = []

        username = request.username.strip().lower()
        if await self.uow.principals.get_many(
            lambda p: True, QueryOptions.cross_partition().where(username=username)
        ):
            failures.append(
                ValidationFailure(
                    "username", "A user with that Username already exists.", is_duplicate=True
                )
            )

        email = request.email.strip().lower()
        if await self.uow.principals.get_many(
            lambda p: p.email == email, QueryOptions.partition(email_domain_of(email))
        ):
            failures.append(
                ValidationFailure(
                    "email", "A user with that email address already exists.", is_duplicate=True
                )
            )

        if request.external_id and request.external_id.strip():
            external_id = request.external_id.strip().lower()
            if await self.uow.principals.get_many(
                lambda p: bool(p.external_id) and p.external_id.lower() == external_id,
                QueryOptions.cross_partition(),
            ):
                failures.append(
                    ValidationFailure(
                        "external_id",
                        "Unable to provision user. The LDAP User Account is already in use.",
                        is_duplicate=True,
                    )
                )

        return failures
