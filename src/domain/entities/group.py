"""
Group Entity

Tenant-scoped named collection of principals.
"""

from typing import Optional
from uuid import UUID

from sqlmodel import Field, Index, SQLModel

from .enums import GroupType


class Group(SQLModel, table=True):
    """
    Group entity - membership lives on Principal.groups.

    Business Rules:
    - Built-in groups (default, basic, tenant_admin) are locked
    - tenant_id is the partition key; None for global built-in groups
    """

    __tablename__ = "groups"

    id: Optional[UUID] = Field(default=None, primary_key=True)
    tenant_id: Optional[UUID] = Field(default=None, index=True)
    name: str = Field(max_length=255)
    type: GroupType = Field(default=GroupType.custom)
    is_locked: bool = Field(default=False)

    __table_args__ = (Index("idx_group_tenant_type", "tenant_id", "type"),)
