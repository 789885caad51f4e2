"""
Group Use Case DTOs (Data Transfer Objects)

Request and Response classes for the group domain.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import Group, GroupType


# ============================================================================
# Request DTOs
# ============================================================================


class CreateGroupRequest(BaseModel):
    name: Optional[str] = None


class GroupMembershipRequest(BaseModel):
    principal_id: UUID


# ============================================================================
# Response DTOs
# ============================================================================


class GroupResponse(BaseModel):
    """Group as returned to API callers"""

    id: UUID
    tenant_id: Optional[UUID]
    name: str
    type: GroupType
    is_locked: bool

    @classmethod
    def from_entity(cls, group: Group) -> "GroupResponse":
        return cls(
            id=group.id,
            tenant_id=group.tenant_id,
            name=group.name,
            type=group.type,
            is_locked=group.is_locked,
        )


class GroupMembersResponse(BaseModel):
    group_id: UUID
    principal_ids: List[UUID]
