from .can_promote_principal_use_case import CanPromotePrincipalUseCase
from .create_principal_use_case import CreatePrincipalUseCase
from .dtos import (
    CanPromoteResponse,
    CreatePrincipalRequest,
    IdpUserRequest,
    LicenseTierResponse,
    PrincipalResponse,
    PromoteGuestResponse,
    UpdatePrincipalRequest,
)
from .get_license_tier_use_case import GetPrincipalLicenseTierUseCase
from .get_principal_use_case import GetPrincipalUseCase
from .lock_principal_use_case import LockOrUnlockPrincipalUseCase
from .promote_guest_use_case import PromoteGuestUseCase
from .sync_idp_user_use_case import SyncIdpUserUseCase
from .update_principal_use_case import UpdatePrincipalUseCase

__all__ = [
    "CanPromotePrincipalUseCase",
    "CreatePrincipalUseCase",
    "GetPrincipalLicenseTierUseCase",
    "GetPrincipalUseCase",
    "LockOrUnlockPrincipalUseCase",
    "PromoteGuestUseCase",
    "SyncIdpUserUseCase",
    "UpdatePrincipalUseCase",
    "CanPromoteResponse",
    "CreatePrincipalRequest",
    "IdpUserRequest",
    "LicenseTierResponse",
    "PrincipalResponse",
    "PromoteGuestResponse",
    "UpdatePrincipalRequest",
]
