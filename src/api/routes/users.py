from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.app.services.directory_gateway import IDirectoryGateway
from src.app.services.license_gateway import ILicenseGateway
from src.app.services.notification_gateway import INotificationGateway
from src.app.services.provisioning_policy import ProvisioningPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.principals import (
    CanPromotePrincipalUseCase,
    CanPromoteResponse,
    CreatePrincipalRequest,
    CreatePrincipalUseCase,
    GetPrincipalLicenseTierUseCase,
    GetPrincipalUseCase,
    LicenseTierResponse,
    LockOrUnlockPrincipalUseCase,
    PrincipalResponse,
    PromoteGuestResponse,
    PromoteGuestUseCase,
    UpdatePrincipalRequest,
    UpdatePrincipalUseCase,
)
from src.app.validators import ValidatorRegistry
from src.depends import (
    CurrentUser,
    get_current_user,
    get_directory_gateway,
    get_license_gateway,
    get_notification_gateway,
    get_provisioning_policy,
    get_unit_of_work,
    get_validator_registry,
)
from src.domain.entities import LicenseTier

router = APIRouter(prefix="/users", tags=["Users"])


class PromoteGuestRequest(BaseModel):
    license_tier: LicenseTier = Field(
        LicenseTier.user_license, description="Tier to assign after promotion"
    )


class LockPrincipalRequest(BaseModel):
    is_locked: bool


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PrincipalResponse,
)
async def create_principal(
    request: CreatePrincipalRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    licenses: ILicenseGateway = Depends(get_license_gateway),
    notifications: INotificationGateway = Depends(get_notification_gateway),
    validators: ValidatorRegistry = Depends(get_validator_registry),
    policy: ProvisioningPolicy = Depends(get_provisioning_policy),
):
    """
    Create Principal

    Creates a principal in the caller's tenant. A principal that could not be
    licensed is still created, locked.

    Raises:
        - 400 Bad Request: VALIDATION_FAILED
        - 409 Conflict: DUPLICATE_ENTITY
    """
    use_case = CreatePrincipalUseCase(uow, licenses, notifications, validators, policy)
    principal = await use_case.execute(
        request, current_user.tenant_id, current_user.user_id
    )
    return PrincipalResponse.from_entity(principal)


@router.get(
    "/can-promote",
    status_code=status.HTTP_200_OK,
    response_model=CanPromoteResponse,
)
async def can_promote_principal(
    email: str = Query(..., description="Email of the guest"),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    directory: IDirectoryGateway = Depends(get_directory_gateway),
    validators: ValidatorRegistry = Depends(get_validator_registry),
):
    """Check whether the principal behind an email could join the caller's tenant"""
    use_case = CanPromotePrincipalUseCase(uow, directory, validators)
    return await use_case.execute(email, current_user.tenant_id)


@router.post(
    "/{principal_id}/promote",
    status_code=status.HTTP_200_OK,
    response_model=PromoteGuestResponse,
)
async def promote_guest(
    principal_id: UUID,
    request: Optional[PromoteGuestRequest] = None,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    licenses: ILicenseGateway = Depends(get_license_gateway),
    directory: IDirectoryGateway = Depends(get_directory_gateway),
    notifications: INotificationGateway = Depends(get_notification_gateway),
    validators: ValidatorRegistry = Depends(get_validator_registry),
):
    """
    Promote Guest

    Raises:
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: PROMOTION_FAILED, LICENSE_ASSIGNMENT_FAILED
    """
    request = request or PromoteGuestRequest()
    use_case = PromoteGuestUseCase(uow, licenses, directory, notifications, validators)
    result_code = await use_case.execute(
        principal_id, current_user.tenant_id, request.license_tier, auto_promote=False
    )
    return PromoteGuestResponse(result_code=result_code)


@router.post(
    "/{principal_id}/lock",
    status_code=status.HTTP_200_OK,
    response_model=PrincipalResponse,
)
async def lock_or_unlock_principal(
    principal_id: UUID,
    request: LockPrincipalRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    licenses: ILicenseGateway = Depends(get_license_gateway),
    validators: ValidatorRegistry = Depends(get_validator_registry),
    policy: ProvisioningPolicy = Depends(get_provisioning_policy),
):
    """Lock (releasing the license) or unlock (assigning one) a principal"""
    use_case = LockOrUnlockPrincipalUseCase(uow, licenses, validators, policy)
    principal = await use_case.execute(
        principal_id, current_user.tenant_id, request.is_locked, current_user.user_id
    )
    return PrincipalResponse.from_entity(principal)


@router.get(
    "/{principal_id}/license",
    status_code=status.HTTP_200_OK,
    response_model=LicenseTierResponse,
)
async def get_principal_license_tier(
    principal_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    licenses: ILicenseGateway = Depends(get_license_gateway),
    validators: ValidatorRegistry = Depends(get_validator_registry),
):
    use_case = GetPrincipalLicenseTierUseCase(uow, licenses, validators)
    return await use_case.execute(principal_id, current_user.tenant_id)


@router.get(
    "/{principal_id}",
    status_code=status.HTTP_200_OK,
    response_model=PrincipalResponse,
)
async def get_principal(
    principal_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    validators: ValidatorRegistry = Depends(get_validator_registry),
):
    use_case = GetPrincipalUseCase(uow, validators)
    principal = await use_case.execute(principal_id, current_user.tenant_id)
    return PrincipalResponse.from_entity(principal)


@router.put(
    "/{principal_id}",
    status_code=status.HTTP_200_OK,
    response_model=PrincipalResponse,
)
async def update_principal(
    principal_id: UUID,
    request: UpdatePrincipalRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    validators: ValidatorRegistry = Depends(get_validator_registry),
):
    """
    Update Principal

    Raises:
        - 400 Bad Request: VALIDATION_FAILED
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: DUPLICATE_ENTITY
    """
    use_case = UpdatePrincipalUseCase(uow, validators)
    principal = await use_case.execute(
        principal_id, request, current_user.tenant_id, current_user.user_id
    )
    return PrincipalResponse.from_entity(principal)
