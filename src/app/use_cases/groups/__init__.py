from .create_builtin_groups_use_case import CreateBuiltInGroupsUseCase
from .create_group_use_case import CreateGroupUseCase
from .delete_group_use_case import DeleteGroupUseCase
from .dtos import (
    CreateGroupRequest,
    GroupMembersResponse,
    GroupMembershipRequest,
    GroupResponse,
)
from .group_membership_use_case import (
    AddPrincipalToGroupUseCase,
    GetGroupMembersUseCase,
    RemovePrincipalFromGroupUseCase,
)
from .list_tenant_groups_use_case import ListTenantGroupsUseCase

__all__ = [
    "AddPrincipalToGroupUseCase",
    "CreateBuiltInGroupsUseCase",
    "CreateGroupUseCase",
    "DeleteGroupUseCase",
    "GetGroupMembersUseCase",
    "ListTenantGroupsUseCase",
    "RemovePrincipalFromGroupUseCase",
    "CreateGroupRequest",
    "GroupMembersResponse",
    "GroupMembershipRequest",
    "GroupResponse",
]
