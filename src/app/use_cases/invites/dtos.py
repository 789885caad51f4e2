"""
Invite Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import Invite, InviteStatus


class InviteRequest(BaseModel):
    """One invitee of a batch"""

    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class InviteResult(BaseModel):
    """Per-item outcome of a batch, in request order"""

    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    status: InviteStatus
    last_invited_date: Optional[datetime] = None

    @classmethod
    def rejected(cls, request: InviteRequest, status: InviteStatus) -> "InviteResult":
        return cls(
            email=request.email,
            first_name=request.first_name,
            last_name=request.last_name,
            status=status,
        )

    @classmethod
    def from_entity(cls, invite: Invite) -> "InviteResult":
        return cls(
            email=invite.email,
            first_name=invite.first_name,
            last_name=invite.last_name,
            status=invite.status,
            last_invited_date=invite.last_invited_date,
        )


class InvitePage(BaseModel):
    items: List[InviteResult]
    continuation_token: Optional[str] = None
    is_last_chunk: bool = True
