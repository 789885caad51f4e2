"""
Principal Use Case DTOs (Data Transfer Objects)

Request and Response classes for the principal domain.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities import (
    CanPromoteResultCode,
    LicenseTier,
    Principal,
    PromoteGuestResultCode,
)


# ============================================================================
# Request DTOs
# ============================================================================


class CreatePrincipalRequest(BaseModel):
    """Attributes of a principal to create"""

    username: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    external_id: Optional[str] = None
    license_tier: Optional[LicenseTier] = None
    is_idp_user: Optional[bool] = None


class UpdatePrincipalRequest(BaseModel):
    """Profile fields; an omitted username keeps the current one"""

    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class IdpUserRequest(BaseModel):
    """Attributes and group claims asserted by an identity provider"""

    user_id: Optional[UUID] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_guest_user: bool = False
    groups: Optional[List[str]] = Field(
        default=None, description="Claimed group ids"
    )
    idp_mapped_groups: Optional[List[str]] = Field(
        default=None, description="Group names the IDP is allowed to manage"
    )


# ============================================================================
# Response DTOs
# ============================================================================


class PrincipalResponse(BaseModel):
    """Principal as returned to API callers"""

    id: UUID
    tenant_id: Optional[UUID]
    email: Optional[str]
    username: str
    first_name: str
    last_name: str
    external_id: Optional[str]
    groups: List[str]
    is_locked: bool
    is_idp_user: Optional[bool]
    license_tier: Optional[LicenseTier]
    created_by: Optional[UUID]
    created_date: datetime

    @classmethod
    def from_entity(cls, principal: Principal) -> "PrincipalResponse":
        return cls(
            id=principal.id,
            tenant_id=principal.tenant_id,
            email=principal.email,
            username=principal.username,
            first_name=principal.first_name,
            last_name=principal.last_name,
            external_id=principal.external_id,
            groups=list(principal.groups or []),
            is_locked=principal.is_locked,
            is_idp_user=principal.is_idp_user,
            license_tier=principal.license_tier,
            created_by=principal.created_by,
            created_date=principal.created_date,
        )


class PromoteGuestResponse(BaseModel):
    result_code: PromoteGuestResultCode


class CanPromoteResponse(BaseModel):
    result_code: CanPromoteResultCode
    principal_id: Optional[UUID] = None


class LicenseTierResponse(BaseModel):
    principal_id: UUID
    license_tier: Optional[str] = None
