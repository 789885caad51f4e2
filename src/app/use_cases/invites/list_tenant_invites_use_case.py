from typing import Optional, Set
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.base import QueryOptions
from src.app.services.directory_gateway import IDirectoryGateway
from src.app.services.unit_of_work import UnitOfWork

from .dtos import InvitePage, InviteResult


class ListTenantInvitesUseCase:
    """
    Use case for paging through a tenant's invites.

    With all_users=False, invites whose email already belongs to a tenant
    member are left out.
    """

    def __init__(self, uow: UnitOfWork, directory: IDirectoryGateway):
        self.uow = uow
        self.directory = directory

    async def execute(
        self,
        tenant_id: UUID,
        all_users: bool = True,
        page_size: int = 50,
        continuation_token: Optional[str] = None,
    ) -> Result[InvitePage]:
        async with self.uow:
            member_emails: Set[str] = set()
            if not all_users:
                member_ids = set(await self.directory.member_ids(tenant_id))
                if member_ids:
                    members = await self.uow.principals.get_many(
                        lambda p: p.id in member_ids, QueryOptions.cross_partition()
                    )
                    member_emails = {m.email.lower() for m in members if m.email}

            try:
                page = await self.uow.invites.query_page(
                    lambda i: i.email.lower() not in member_emails,
                    QueryOptions.cross_partition().where(tenant_id=tenant_id),
                    page_size=page_size,
                    continuation_token=continuation_token,
                )
            except ValueError as exc:
                return Return.err(Error("INVALID_CONTINUATION_TOKEN", str(exc)))

            return Return.ok(
                InvitePage(
                    items=[InviteResult.from_entity(invite) for invite in page.items],
                    continuation_token=page.continuation_token,
                    is_last_chunk=page.is_last_chunk,
                )
            )
