"""
Promote Guest Use Case

Converts a guest principal into a member of a tenant.
"""

import logging
from uuid import UUID

from src.app.exceptions import (
    LicenseAssignmentFailedError,
    NotFoundError,
    PromotionFailedError,
)
from src.app.services.audit_recorder import record_audit_event
from src.app.services.directory_gateway import IDirectoryGateway
from src.app.services.license_gateway import ILicenseGateway
from src.app.services.notification_gateway import INotificationGateway
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import ValidatorRegistry, ValidatorType
from src.domain.entities import LicenseTier, PromoteGuestResultCode

from .common import (
    is_email_in_tenant_domains,
    lock_principal,
    run_to_completion,
    send_welcome_email,
    try_assign_license,
)

logger = logging.getLogger(__name__)


class PromoteGuestUseCase:
    """
    Use case for promoting a guest into a tenant.

    Business Rules:
    - Auto promotion requires an available license of the tier up front
    - Already affiliated principals are left untouched
    - The guest's email domain must be accepted by the tenant
    - Affiliation is kept when the license step fails; the principal is
      locked instead and the failure is raised
    - Routine ineligibility is an outcome on the auto path, an error on the
      manual path
    """

    def __init__(
        self,
        uow: UnitOfWork,
        licenses: ILicenseGateway,
        directory: IDirectoryGateway,
        notifications: INotificationGateway,
        validators: ValidatorRegistry,
    ):
        self.uow = uow
        self.licenses = licenses
        self.directory = directory
        self.notifications = notifications
        self.validators = validators

    async def execute(
        self,
        principal_id: UUID,
        tenant_id: UUID,
        license_tier: LicenseTier = LicenseTier.user_license,
        auto_promote: bool = False,
    ) -> PromoteGuestResultCode:
        """
        Execute promote guest use case.

        Args:
            principal_id: Guest to promote
            tenant_id: Target tenant
            license_tier: Tier to assign after promotion
            auto_promote: True when driven by identity-provider login

        Returns:
            PromoteGuestResultCode outcome

        Raises:
            NotFoundError: Principal does not exist
            PromotionFailedError: Manual promotion of an ineligible guest
            LicenseAssignmentFailedError: Promoted but no license assigned
        """
        self.validators.validate_many(
            [
                (ValidatorType.principal_id, principal_id),
                (ValidatorType.tenant_id, tenant_id),
            ]
        )

        async with self.uow:
            # 1. License availability gates auto promotion
            if auto_promote and not await self._is_license_available(tenant_id, license_tier):
                logger.warning(
                    f"No {license_tier.value} license available in tenant {tenant_id}"
                )
                return PromoteGuestResultCode.failed

            # 2. Load and check eligibility
            principal = await self.uow.principals.get_by_id(principal_id)
            if principal is None:
                raise NotFoundError("Principal", principal_id)

            if not principal.is_guest:
                return PromoteGuestResultCode.already_promoted

            if not principal.email:
                if auto_promote:
                    return PromoteGuestResultCode.failed
                raise PromotionFailedError(
                    f"Principal {principal_id} has no email and cannot be promoted"
                )

            if not await is_email_in_tenant_domains(self.directory, tenant_id, principal.email):
                logger.warning(
                    f"Principal {principal_id} email domain not accepted by tenant {tenant_id}"
                )
                if auto_promote:
                    return PromoteGuestResultCode.domain_rejected
                raise PromotionFailedError(
                    "The user's email domain is not accepted by the tenant"
                )

            # 3. Affiliate
            principal.tenant_id = tenant_id
            principal.license_tier = license_tier
            principal = await self.uow.principals.update(principal.id, principal)
            await self.uow.commit()
            await record_audit_event(
                self.uow,
                "principal_promoted",
                tenant_id,
                principal.id,
                {"license_tier": license_tier.value, "auto_promote": auto_promote},
            )

            # 4. License; affiliation stays even when this fails
            if not await try_assign_license(
                self.licenses, tenant_id, principal.id, license_tier
            ):
                await run_to_completion(lock_principal(self.uow, principal))
                raise LicenseAssignmentFailedError(principal.id)

            await send_welcome_email(self.notifications, principal)
            return PromoteGuestResultCode.success

    async def _is_license_available(self, tenant_id: UUID, license_tier: LicenseTier) -> bool:
        summaries = await self.licenses.tenant_summary(tenant_id)
        return any(
            s.tier_name.lower() == license_tier.value.lower() and s.total_available > 0
            for s in summaries
        )
