"""
Create Invites Use Case

Validates, deduplicates, persists and emails a batch of tenant invites.
"""

import logging
from typing import Dict, List, Optional, Set, Tuple
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.base import QueryOptions
from src.app.services.audit_recorder import record_audit_event
from src.app.services.directory_gateway import IDirectoryGateway
from src.app.services.notification_gateway import INotificationGateway
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import is_valid_email
from src.domain.entities import Invite, InviteStatus, email_domain_of

from .common import group_by_domain, send_invites
from .dtos import InviteRequest, InviteResult

logger = logging.getLogger(__name__)


class CreateInvitesUseCase:
    """
    Use case for inviting a batch of emails into a tenant.

    Business Rules:
    - A caller without a tenant is rejected
    - The tenant must have accepted domains, otherwise the batch fails
    - Malformed or missing emails and foreign domains are never persisted
    - Emails of existing principals or existing tenant invites are duplicates
    - Repeats within one batch are duplicate entries; the first one wins
    - Only persisted invites are emailed
    - One result per requested item, in request order
    """

    def __init__(
        self,
        uow: UnitOfWork,
        directory: IDirectoryGateway,
        notifications: INotificationGateway,
    ):
        self.uow = uow
        self.directory = directory
        self.notifications = notifications

    async def execute(
        self, invites: List[InviteRequest], tenant_id: Optional[UUID]
    ) -> Result[List[InviteResult]]:
        """
        Execute create invites use case.

        Args:
            invites: Requested invitees
            tenant_id: Inviting tenant

        Returns:
            Result with one InviteResult per request item, or Error when the
            caller has no tenant or the tenant has no accepted domains
        """
        if tenant_id is None:
            return Return.err(Error("TENANT_REQUIRED", "Creating invites requires a tenant"))

        async with self.uow:
            # 1. Tenant domains
            domains = await self.directory.accepted_domains(tenant_id)
            allowed = {d.strip().lower() for d in domains if d and d.strip()}
            if not allowed:
                return Return.err(
                    Error(
                        "TENANT_DOMAINS_NOT_FOUND",
                        f"No accepted email domains configured for tenant {tenant_id}",
                    )
                )

            # 2. Format and domain checks
            results: List[Optional[InviteResult]] = [None] * len(invites)
            candidates: List[Tuple[int, str, InviteRequest]] = []
            for index, request in enumerate(invites):
                email = (request.email or "").strip().lower()
                if not is_valid_email(email):
                    results[index] = InviteResult.rejected(
                        request, InviteStatus.user_email_format_invalid
                    )
                elif email_domain_of(email) not in allowed:
                    results[index] = InviteResult.rejected(
                        request, InviteStatus.user_email_not_domain_allowed
                    )
                else:
                    candidates.append((index, email, request))

            # 3. Existing principals and invites, one lookup per domain
            existing = await self._existing_emails(
                {email for _, email, _ in candidates}, tenant_id
            )

            # 4. Walk in request order
            seen: Set[str] = set()
            persisted: Dict[int, Invite] = {}
            for index, email, request in candidates:
                if email in existing:
                    results[index] = InviteResult.rejected(
                        request, InviteStatus.duplicate_user_email
                    )
                    continue
                if email in seen:
                    results[index] = InviteResult.rejected(
                        request, InviteStatus.duplicate_user_entry
                    )
                    continue

                seen.add(email)
                invite = await self.uow.invites.create(
                    Invite(
                        tenant_id=tenant_id,
                        email=email,
                        email_domain=email_domain_of(email),
                        first_name=request.first_name,
                        last_name=request.last_name,
                        status=InviteStatus.success,
                    )
                )
                await self.uow.commit()
                persisted[index] = invite

            if not persisted:
                return Return.ok(results)

            # 5. Email the persisted invites
            sent = await send_invites(
                self.uow, self.notifications, list(persisted.values())
            )
            for index, invite in zip(persisted.keys(), sent):
                results[index] = InviteResult.from_entity(invite)

            logger.info(f"Created {len(persisted)} invites for tenant {tenant_id}")
            await record_audit_event(
                self.uow,
                "invites_created",
                tenant_id,
                None,
                {"emails": [invite.email for invite in sent]},
            )

            return Return.ok(results)

    async def _existing_emails(self, emails: Set[str], tenant_id: UUID) -> Set[str]:
        existing: Set[str] = set()
        for domain, domain_emails in group_by_domain(emails).items():
            options = QueryOptions.partition(domain)
            principals = await self.uow.principals.get_many(
                lambda p: (p.email or "").lower() in domain_emails, options
            )
            invites = await self.uow.invites.get_many(
                lambda i: i.tenant_id == tenant_id and i.email.lower() in domain_emails,
                options,
            )
            existing |= {p.email.lower() for p in principals}
            existing |= {i.email.lower() for i in invites}
        return existing
