"""
Principal Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class GroupType(str, Enum):
    """Built-in group roles; custom groups are created by tenant admins"""

    default = "default"
    basic = "basic"
    tenant_admin = "tenant_admin"
    custom = "custom"


class LicenseTier(str, Enum):
    """License tiers known to the license service"""

    default = "default"
    user_license = "user_license"
    legacy_license = "legacy_license"
    trial_license = "trial_license"
    guest_license = "guest_license"
    on_prem_license = "on_prem_license"


class InviteStatus(str, Enum):
    """Per-item outcome of an invite batch"""

    success = "Success"
    duplicate_user_email = "DuplicateUserEmail"
    duplicate_user_entry = "DuplicateUserEntry"
    user_email_format_invalid = "UserEmailFormatInvalid"
    user_email_not_domain_allowed = "UserEmailNotDomainAllowed"
    user_not_exist = "UserNotExist"


class PromoteGuestResultCode(str, Enum):
    """Outcome of promoting a guest principal into a tenant"""

    success = "success"
    already_promoted = "already_promoted"
    domain_rejected = "domain_rejected"
    failed = "failed"


class CanPromoteResultCode(str, Enum):
    """Answer to "could this email be promoted into the tenant?\""""

    user_does_not_exist = "user_does_not_exist"
    user_already_promoted = "user_already_promoted"
    email_not_in_tenant_domain = "email_not_in_tenant_domain"
    user_can_be_promoted = "user_can_be_promoted"
