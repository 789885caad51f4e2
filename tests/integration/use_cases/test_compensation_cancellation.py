import asyncio
from uuid import uuid4

import pytest
from sqlmodel import select

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.provisioning_policy import ProvisioningPolicy
from src.app.use_cases.principals import (
    CreatePrincipalRequest,
    CreatePrincipalUseCase,
    PromoteGuestUseCase,
)
from src.app.validators import default_registry
from src.domain.entities import Principal
from tests.fixtures.fake_gateways import FakeLicenseGateway
from tests.fixtures.factories import make_principal

# Persisted step, audit event, then the lock: the lock's commit is the third
LOCK_COMMIT = 3


class HeldCommitUnitOfWork(SqlAlchemyUnitOfWork):
    """Blocks the Nth commit until released"""

    def __init__(self, session, hold_commit: int):
        super().__init__(session)
        self.hold_commit = hold_commit
        self.commits = 0
        self.held = asyncio.Event()
        self.release = asyncio.Event()

    async def commit(self):
        self.commits += 1
        if self.commits == self.hold_commit:
            self.held.set()
            await self.release.wait()
        await super().commit()


async def cancel_while_lock_commit_is_held(uow: HeldCommitUnitOfWork, coro):
    task = asyncio.create_task(coro)
    await uow.held.wait()
    task.cancel()
    for _ in range(5):
        await asyncio.sleep(0)
    uow.release.set()
    with pytest.raises(asyncio.CancelledError):
        await task


async def stored_lock_state(db_session, username: str):
    result = await db_session.exec(
        select(Principal.tenant_id, Principal.is_locked).where(Principal.username == username)
    )
    return [tuple(row) for row in result.all()]


@pytest.mark.asyncio
async def test_create_principal_lock_survives_cancellation(db_session, notifications):
    # Arrange
    tenant_id = uuid4()
    uow = HeldCommitUnitOfWork(db_session, LOCK_COMMIT)
    use_case = CreatePrincipalUseCase(
        uow, FakeLicenseGateway(), notifications, default_registry(), ProvisioningPolicy()
    )
    request = CreatePrincipalRequest(
        username="new.user",
        email="new.user@acme.com",
        first_name="New",
        last_name="User",
    )

    # Act
    await cancel_while_lock_commit_is_held(
        uow, use_case.execute(request, tenant_id, uuid4())
    )

    # Assert
    assert await stored_lock_state(db_session, "new.user") == [(tenant_id, True)]


@pytest.mark.asyncio
async def test_promote_guest_lock_survives_cancellation(
    db_session, directory, notifications
):
    # Arrange
    tenant_id = uuid4()
    guest = make_principal(email="guest@acme.com")
    db_session.add(guest)
    await db_session.commit()
    uow = HeldCommitUnitOfWork(db_session, LOCK_COMMIT)
    use_case = PromoteGuestUseCase(
        uow, FakeLicenseGateway(), directory, notifications, default_registry()
    )

    # Act
    await cancel_while_lock_commit_is_held(uow, use_case.execute(guest.id, tenant_id))

    # Assert
    assert await stored_lock_state(db_session, "guest@acme.com") == [(tenant_id, True)]
