"""
Invite Use Cases

Batch invitation of emails into a tenant.
"""

from .create_invites_use_case import CreateInvitesUseCase
from .dtos import InvitePage, InviteRequest, InviteResult
from .list_tenant_invites_use_case import ListTenantInvitesUseCase
from .resend_invites_use_case import ResendInvitesUseCase

__all__ = [
    "CreateInvitesUseCase",
    "ListTenantInvitesUseCase",
    "ResendInvitesUseCase",
    "InvitePage",
    "InviteRequest",
    "InviteResult",
]
