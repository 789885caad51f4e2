"""
Principal Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    CanPromoteResultCode,
    GroupType,
    InviteStatus,
    LicenseTier,
    PromoteGuestResultCode,
)

# Export all entities
from .principal import (
    UNSET_TENANT_ID,
    Principal,
    email_domain_of,
    is_unset_tenant,
)
from .group import Group
from .invite import Invite
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "CanPromoteResultCode",
    "GroupType",
    "InviteStatus",
    "LicenseTier",
    "PromoteGuestResultCode",
    # Entities
    "Principal",
    "Group",
    "Invite",
    "AuditEvent",
    # Helpers
    "UNSET_TENANT_ID",
    "email_domain_of",
    "is_unset_tenant",
]
