from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.group_repository import GroupRepository
from src.adapter.repositories.invite_repository import InviteRepository
from src.adapter.repositories.principal_repository import PrincipalRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.principals = PrincipalRepository(self.session)
        self.groups = GroupRepository(self.session)
        self.invites = InviteRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        # Each step commits on its own; only a failed step leaves work to discard.
        # A rollback on success would expire entities the caller still reads.
        if exc_type is not None:
            await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
