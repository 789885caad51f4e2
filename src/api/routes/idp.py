from fastapi import APIRouter, Depends, status

from src.app.services.directory_gateway import IDirectoryGateway
from src.app.services.license_gateway import ILicenseGateway
from src.app.services.notification_gateway import INotificationGateway
from src.app.services.provisioning_policy import ProvisioningPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.principals import (
    CreatePrincipalUseCase,
    IdpUserRequest,
    PrincipalResponse,
    PromoteGuestUseCase,
    SyncIdpUserUseCase,
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

router = APIRouter(prefix="/idp", tags=["IDP"])


@router.post(
    "/users",
    status_code=status.HTTP_200_OK,
    response_model=PrincipalResponse,
)
async def auto_provision_or_sync(
    request: IdpUserRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    licenses: ILicenseGateway = Depends(get_license_gateway),
    directory: IDirectoryGateway = Depends(get_directory_gateway),
    notifications: INotificationGateway = Depends(get_notification_gateway),
    validators: ValidatorRegistry = Depends(get_validator_registry),
    policy: ProvisioningPolicy = Depends(get_provisioning_policy),
):
    """
    Auto-provision or sync an identity-provider user

    Creates unknown users, promotes known guests, then aligns group
    memberships with the claimed group ids.

    Raises:
        - 400 Bad Request: VALIDATION_FAILED
        - 409 Conflict: DUPLICATE_ENTITY, PROMOTION_FAILED, LICENSE_ASSIGNMENT_FAILED
    """
    use_case = SyncIdpUserUseCase(
        uow,
        CreatePrincipalUseCase(uow, licenses, notifications, validators, policy),
        PromoteGuestUseCase(uow, licenses, directory, notifications, validators),
        validators,
    )
    principal = await use_case.execute(
        request, current_user.tenant_id, current_user.user_id
    )
    return PrincipalResponse.from_entity(principal)
