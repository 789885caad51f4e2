from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.error import ClientError
from src.app.services.directory_gateway import IDirectoryGateway
from src.app.services.notification_gateway import INotificationGateway
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invites import (
    CreateInvitesUseCase,
    InvitePage,
    InviteRequest,
    InviteResult,
    ListTenantInvitesUseCase,
    ResendInvitesUseCase,
)
from src.depends import (
    CurrentUser,
    get_current_user,
    get_directory_gateway,
    get_notification_gateway,
    get_unit_of_work,
)

router = APIRouter(prefix="/invites", tags=["Invites"])


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_model=List[InviteResult],
)
async def create_invites(
    request: List[InviteRequest],
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    directory: IDirectoryGateway = Depends(get_directory_gateway),
    notifications: INotificationGateway = Depends(get_notification_gateway),
):
    """
    Create Invites

    Returns one result per requested invitee, in request order.

    Raises:
        - 400 Bad Request: TENANT_REQUIRED, TENANT_DOMAINS_NOT_FOUND
    """
    use_case = CreateInvitesUseCase(uow, directory, notifications)
    result = await use_case.execute(request, current_user.tenant_id)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_400_BAD_REQUEST)

    return result.value


@router.post(
    "/resend",
    status_code=status.HTTP_200_OK,
    response_model=List[InviteResult],
)
async def resend_invites(
    request: List[InviteRequest],
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifications: INotificationGateway = Depends(get_notification_gateway),
):
    """
    Resend Invites

    Unknown emails come back as UserNotExist.

    Raises:
        - 400 Bad Request: TENANT_REQUIRED
    """
    use_case = ResendInvitesUseCase(uow, notifications)
    result = await use_case.execute(request, current_user.tenant_id)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_400_BAD_REQUEST)

    return result.value


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=InvitePage,
)
async def list_tenant_invites(
    all_users: bool = Query(True, description="Include invites of existing members"),
    page_size: int = Query(50, ge=1, le=500),
    continuation_token: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    directory: IDirectoryGateway = Depends(get_directory_gateway),
):
    """
    List Tenant Invites

    Raises:
        - 400 Bad Request: INVALID_CONTINUATION_TOKEN
    """
    use_case = ListTenantInvitesUseCase(uow, directory)
    result = await use_case.execute(
        current_user.tenant_id, all_users, page_size, continuation_token
    )

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_400_BAD_REQUEST)

    return result.value
