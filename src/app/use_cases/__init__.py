"""
Use Cases

Organized into domain folders:
- principals/: Provisioning, promotion, IDP sync, lock state, licenses
- invites/: Invite batches
- groups/: Tenant groups and membership
"""

from .principals import (
    CanPromotePrincipalUseCase,
    CreatePrincipalUseCase,
    GetPrincipalLicenseTierUseCase,
    GetPrincipalUseCase,
    LockOrUnlockPrincipalUseCase,
    PromoteGuestUseCase,
    SyncIdpUserUseCase,
    UpdatePrincipalUseCase,
)
from .invites import (
    CreateInvitesUseCase,
    ListTenantInvitesUseCase,
    ResendInvitesUseCase,
)
from .groups import (
    AddPrincipalToGroupUseCase,
    CreateBuiltInGroupsUseCase,
    CreateGroupUseCase,
    DeleteGroupUseCase,
    GetGroupMembersUseCase,
    ListTenantGroupsUseCase,
    RemovePrincipalFromGroupUseCase,
)

__all__ = [
    # Principals
    "CanPromotePrincipalUseCase",
    "CreatePrincipalUseCase",
    "GetPrincipalLicenseTierUseCase",
    "GetPrincipalUseCase",
    "LockOrUnlockPrincipalUseCase",
    "PromoteGuestUseCase",
    "SyncIdpUserUseCase",
    "UpdatePrincipalUseCase",
    # Invites
    "CreateInvitesUseCase",
    "ListTenantInvitesUseCase",
    "ResendInvitesUseCase",
    # Groups
    "AddPrincipalToGroupUseCase",
    "CreateBuiltInGroupsUseCase",
    "CreateGroupUseCase",
    "DeleteGroupUseCase",
    "GetGroupMembersUseCase",
    "ListTenantGroupsUseCase",
    "RemovePrincipalFromGroupUseCase",
]
