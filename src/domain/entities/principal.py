"""
Principal Entity

A tenant member or an unaffiliated guest.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from .enums import LicenseTier

UNSET_TENANT_ID = UUID(int=0)


def email_domain_of(email: Optional[str]) -> Optional[str]:
    """Domain part of an email address, lower-cased"""
    if not email or "@" not in email:
        return None
    return email[email.index("@") + 1 :].lower()


def is_unset_tenant(tenant_id: Optional[UUID]) -> bool:
    return tenant_id is None or tenant_id == UNSET_TENANT_ID


class Principal(SQLModel, table=True):
    """
    Principal entity - a user identity, tenant-affiliated or guest.

    Business Rules:
    - email and username are stored lower-cased and are unique
    - external_id (LDAP account) is unique when present
    - tenant_id unset means guest; affiliation is set once and never cleared
    - a locked principal holds no license
    - email_domain is the partition key
    """

    __tablename__ = "principals"

    id: Optional[UUID] = Field(default=None, primary_key=True)
    tenant_id: Optional[UUID] = Field(default=None, index=True)

    email: Optional[str] = Field(default=None, max_length=255, index=True)
    email_domain: Optional[str] = Field(default=None, max_length=255)
    username: str = Field(max_length=255, index=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    external_id: Optional[str] = Field(default=None, max_length=255)

    # Group ids as strings; reassign the list to mark the column dirty
    groups: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    is_locked: bool = Field(default=False)
    is_idp_user: Optional[bool] = Field(default=None)
    license_tier: Optional[LicenseTier] = Field(default=None)

    created_by: Optional[UUID] = Field(default=None)
    created_date: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_principal_email_domain", "email_domain"),
        Index("idx_principal_external_id", "external_id"),
    )

    @property
    def is_guest(self) -> bool:
        return is_unset_tenant(self.tenant_id)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def has_group(self, group_id: UUID) -> bool:
        return str(group_id) in self.groups

    def add_group(self, group_id: UUID) -> None:
        if not self.has_group(group_id):
            self.groups = [*self.groups, str(group_id)]

    def remove_group(self, group_id: UUID) -> None:
        self.groups = [g for g in self.groups if g != str(group_id)]
