"""
Resend Invites Use Case

Re-sends existing tenant invites.
"""

from typing import Dict, List, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.base import QueryOptions
from src.app.services.notification_gateway import INotificationGateway
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import is_valid_email
from src.domain.entities import Invite, InviteStatus

from .common import group_by_domain, send_invites
from .dtos import InviteRequest, InviteResult


class ResendInvitesUseCase:
    """
    Use case for resending invites.

    Business Rules:
    - Emails without an invite in the tenant are reported as UserNotExist
      and are not emailed
    - last_invited_date moves only for accepted sends
    - Empty input touches nothing
    - A caller without a tenant is rejected
    """

    def __init__(self, uow: UnitOfWork, notifications: INotificationGateway):
        self.uow = uow
        self.notifications = notifications

    async def execute(
        self, invites: List[InviteRequest], tenant_id: Optional[UUID]
    ) -> Result[List[InviteResult]]:
        if tenant_id is None:
            return Return.err(Error("TENANT_REQUIRED", "Resending invites requires a tenant"))
        if not invites:
            return Return.ok([])

        requested = [(request.email or "").strip().lower() for request in invites]

        async with self.uow:
            found: Dict[str, Invite] = {}
            valid_emails = {email for email in requested if is_valid_email(email)}
            for domain, domain_emails in group_by_domain(valid_emails).items():
                rows = await self.uow.invites.get_many(
                    lambda i: i.tenant_id == tenant_id and i.email.lower() in domain_emails,
                    QueryOptions.partition(domain),
                )
                for row in rows:
                    found[row.email.lower()] = row

            if found:
                for invite in await send_invites(
                    self.uow, self.notifications, list(found.values())
                ):
                    found[invite.email.lower()] = invite

            return Return.ok(
                [
                    InviteResult.from_entity(found[email])
                    if email in found
                    else InviteResult.rejected(request, InviteStatus.user_not_exist)
                    for email, request in zip(requested, invites)
                ]
            )
