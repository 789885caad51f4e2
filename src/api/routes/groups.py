from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.groups import (
    AddPrincipalToGroupUseCase,
    CreateBuiltInGroupsUseCase,
    CreateGroupRequest,
    CreateGroupUseCase,
    DeleteGroupUseCase,
    GetGroupMembersUseCase,
    GroupMembersResponse,
    GroupMembershipRequest,
    GroupResponse,
    ListTenantGroupsUseCase,
    RemovePrincipalFromGroupUseCase,
)
from src.app.use_cases.principals import PrincipalResponse
from src.app.validators import ValidatorRegistry
from src.depends import (
    CurrentUser,
    get_current_user,
    get_unit_of_work,
    get_validator_registry,
)

router = APIRouter(prefix="/groups", tags=["Groups"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=GroupResponse,
)
async def create_group(
    request: CreateGroupRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    validators: ValidatorRegistry = Depends(get_validator_registry),
):
    """
    Create Group

    Creates a custom group in the caller's tenant.

    Raises:
        - 400 Bad Request: VALIDATION_FAILED
        - 409 Conflict: DUPLICATE_ENTITY
    """
    use_case = CreateGroupUseCase(uow, validators)
    group = await use_case.execute(request, current_user.tenant_id, current_user.user_id)
    return GroupResponse.from_entity(group)


@router.post(
    "/built-in",
    status_code=status.HTTP_200_OK,
    response_model=List[GroupResponse],
)
async def create_builtin_groups(
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    validators: ValidatorRegistry = Depends(get_validator_registry),
):
    """Seed the caller's tenant with its locked basic and tenant admin groups"""
    use_case = CreateBuiltInGroupsUseCase(uow, validators)
    groups = await use_case.execute(current_user.tenant_id)
    return [GroupResponse.from_entity(group) for group in groups]


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=List[GroupResponse],
)
async def list_tenant_groups(
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    validators: ValidatorRegistry = Depends(get_validator_registry),
):
    use_case = ListTenantGroupsUseCase(uow, validators)
    groups = await use_case.execute(current_user.tenant_id)
    return [GroupResponse.from_entity(group) for group in groups]


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(
    group_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    validators: ValidatorRegistry = Depends(get_validator_registry),
):
    """
    Delete Group

    Raises:
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: GROUP_LOCKED
    """
    use_case = DeleteGroupUseCase(uow, validators)
    await use_case.execute(group_id, current_user.tenant_id, current_user.user_id)


@router.get(
    "/{group_id}/members",
    status_code=status.HTTP_200_OK,
    response_model=GroupMembersResponse,
)
async def get_group_members(
    group_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    validators: ValidatorRegistry = Depends(get_validator_registry),
):
    use_case = GetGroupMembersUseCase(uow, validators)
    principal_ids = await use_case.execute(group_id, current_user.tenant_id)
    return GroupMembersResponse(group_id=group_id, principal_ids=principal_ids)


@router.post(
    "/{group_id}/members",
    status_code=status.HTTP_200_OK,
    response_model=PrincipalResponse,
)
async def add_group_member(
    group_id: UUID,
    request: GroupMembershipRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    validators: ValidatorRegistry = Depends(get_validator_registry),
):
    """
    Add Group Member

    Raises:
        - 400 Bad Request: VALIDATION_FAILED (unknown principal, existing membership)
        - 404 Not Found: NOT_FOUND (group)
    """
    use_case = AddPrincipalToGroupUseCase(uow, validators)
    principal = await use_case.execute(
        request.principal_id, group_id, current_user.tenant_id, current_user.user_id
    )
    return PrincipalResponse.from_entity(principal)


@router.delete(
    "/{group_id}/members/{principal_id}",
    status_code=status.HTTP_200_OK,
    response_model=PrincipalResponse,
)
async def remove_group_member(
    group_id: UUID,
    principal_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    validators: ValidatorRegistry = Depends(get_validator_registry),
):
    use_case = RemovePrincipalFromGroupUseCase(uow, validators)
    principal = await use_case.execute(
        principal_id, group_id, current_user.tenant_id, current_user.user_id
    )
    return PrincipalResponse.from_entity(principal)
