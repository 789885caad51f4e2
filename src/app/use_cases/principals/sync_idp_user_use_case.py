"""
Sync IDP User Use Case

Provisions principals on first identity-provider login and keeps their
group memberships in line with the provider's group claims.
"""

import logging
from typing import List, Optional
from uuid import UUID

from src.app.exceptions import NotFoundError, PromotionFailedError
from src.app.repositories.base import QueryOptions
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import ValidatorRegistry, ValidatorType
from src.domain.entities import LicenseTier, Principal, PromoteGuestResultCode

from .create_principal_use_case import CreatePrincipalUseCase
from .dtos import CreatePrincipalRequest, IdpUserRequest
from .promote_guest_use_case import PromoteGuestUseCase

logger = logging.getLogger(__name__)


class SyncIdpUserUseCase:
    """
    Use case for identity-provider auto-provisioning and group sync.

    Business Rules:
    - Unknown users are created as IDP users with a user license
    - Known guests are auto-promoted; ineligible guests fail the login
    - Group claims add and remove memberships, one update per changed group
    - Groups outside idp_mapped_groups (when given) are never touched
    - No claims means no reconciliation
    """

    def __init__(
        self,
        uow: UnitOfWork,
        create_principal: CreatePrincipalUseCase,
        promote_guest: PromoteGuestUseCase,
        validators: ValidatorRegistry,
    ):
        self.uow = uow
        self.create_principal = create_principal
        self.promote_guest = promote_guest
        self.validators = validators

    async def execute(
        self, request: IdpUserRequest, tenant_id: UUID, created_by: UUID
    ) -> Principal:
        self.validators.validate(ValidatorType.tenant_id, tenant_id)

        async with self.uow:
            if request.user_id is None:
                self.validators.validate(ValidatorType.idp_user_request, request)
                principal = await self.create_principal.execute(
                    CreatePrincipalRequest(
                        username=request.email,
                        email=request.email,
                        first_name=request.first_name,
                        last_name=request.last_name,
                        is_idp_user=True,
                        license_tier=LicenseTier.user_license,
                    ),
                    tenant_id,
                    created_by,
                )
                principal_id = principal.id
            else:
                principal_id = request.user_id
                if request.is_guest_user:
                    await self._promote(principal_id, tenant_id)

            if request.groups:
                await self._reconcile_groups(
                    principal_id, tenant_id, request.groups, request.idp_mapped_groups
                )

            return await self._load(principal_id)

    async def _promote(self, principal_id: UUID, tenant_id: UUID) -> None:
        outcome = await self.promote_guest.execute(
            principal_id, tenant_id, LicenseTier.user_license, auto_promote=True
        )
        if outcome == PromoteGuestResultCode.failed:
            raise PromotionFailedError(
                "Failed to promote the user. No license is available or the user is ineligible"
            )
        if outcome == PromoteGuestResultCode.domain_rejected:
            raise PromotionFailedError(
                "Failed to promote the user. The email domain is not accepted by the tenant"
            )

    async def _reconcile_groups(
        self,
        principal_id: UUID,
        tenant_id: UUID,
        claimed_group_ids: List[str],
        idp_mapped_groups: Optional[List[str]],
    ) -> None:
        principal = await self._load(principal_id)
        claims = {claim.strip().lower() for claim in claimed_group_ids}
        groups = await self.uow.groups.get_many(
            lambda g: True, QueryOptions.partition(str(tenant_id))
        )

        updates = 0
        for group in groups:
            if idp_mapped_groups is not None and group.name not in idp_mapped_groups:
                continue

            claimed = str(group.id).lower() in claims
            member = principal.has_group(group.id)
            if claimed and not member:
                principal.add_group(group.id)
            elif member and not claimed:
                principal.remove_group(group.id)
            else:
                continue

            principal = await self.uow.principals.update(principal.id, principal)
            await self.uow.commit()
            updates += 1

        logger.info(f"Reconciled {updates} group memberships for principal {principal_id}")

    async def _load(self, principal_id: UUID) -> Principal:
        principal = await self.uow.principals.get_by_id(principal_id)
        if principal is None:
            raise NotFoundError("Principal", principal_id)
        return principal
