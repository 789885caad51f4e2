"""
Invite Entity

Pending invitation of an email address into a tenant.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import InviteStatus


class Invite(SQLModel, table=True):
    """
    Invite entity - keyed by tenant + email.

    Business Rules:
    - At most one invite per (tenant, email)
    - No invite for an email that already belongs to a principal
    - last_invited_date only moves on a successful send
    - email_domain is the partition key
    """

    __tablename__ = "invites"

    id: Optional[UUID] = Field(default=None, primary_key=True)
    tenant_id: UUID = Field(nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False, index=True)
    email_domain: str = Field(max_length=255, nullable=False)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)

    status: InviteStatus = Field(default=InviteStatus.success)

    last_invited_date: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    created_date: datetime = Field(
        default_factory=datetime.utcnow, sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_invite_tenant_email", "tenant_id", "email"),
        Index("idx_invite_email_domain", "email_domain"),
    )
