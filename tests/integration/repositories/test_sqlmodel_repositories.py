from uuid import uuid4

import pytest

from src.adapter.repositories.group_repository import GroupRepository
from src.adapter.repositories.invite_repository import InviteRepository
from src.adapter.repositories.principal_repository import PrincipalRepository
from src.app.repositories.base import QueryOptions
from src.domain.entities import GroupType, Principal
from tests.fixtures.factories import make_group, make_invite, make_principal


@pytest.mark.asyncio
async def test_create_assigns_id(db_session):
    repo = PrincipalRepository(db_session)

    principal = await repo.create(
        Principal(
            email="a@acme.com",
            email_domain="acme.com",
            username="a",
            first_name="A",
            last_name="B",
        )
    )
    await db_session.commit()

    assert principal.id is not None
    assert await repo.get_by_id(principal.id) is principal


@pytest.mark.asyncio
async def test_get_many_requires_partition_or_cross_partition(db_session):
    repo = PrincipalRepository(db_session)

    with pytest.raises(ValueError):
        await repo.get_many(lambda p: True, QueryOptions())


@pytest.mark.asyncio
async def test_partition_filter_and_predicate(db_session):
    repo = PrincipalRepository(db_session)
    for email in ("a@acme.com", "b@acme.com", "c@other.com"):
        await repo.create(make_principal(email=email))
    await db_session.commit()

    in_acme = await repo.get_many(lambda p: True, QueryOptions.partition("ACME.com"))
    only_b = await repo.get_many(lambda p: p.email.startswith("b"), QueryOptions.partition("acme.com"))
    everywhere = await repo.get_many(lambda p: True, QueryOptions.cross_partition())

    assert {p.email for p in in_acme} == {"a@acme.com", "b@acme.com"}
    assert [p.email for p in only_b] == ["b@acme.com"]
    assert len(everywhere) == 3


@pytest.mark.asyncio
async def test_get_by_id_respects_partition(db_session):
    repo = PrincipalRepository(db_session)
    principal = await repo.create(make_principal(email="a@acme.com"))

    assert await repo.get_by_id(principal.id, QueryOptions.partition("acme.com")) is principal
    assert await repo.get_by_id(principal.id, QueryOptions.partition("other.com")) is None


@pytest.mark.asyncio
async def test_update_persists_group_changes(db_session):
    repo = PrincipalRepository(db_session)
    principal = await repo.create(make_principal(email="a@acme.com"))
    await db_session.commit()
    group_id = uuid4()

    principal.add_group(group_id)
    await repo.update(principal.id, principal)
    await db_session.commit()
    db_session.expire_all()

    reloaded = await repo.get_by_id(principal.id)
    await db_session.refresh(reloaded)
    assert reloaded.groups == [str(group_id)]


@pytest.mark.asyncio
async def test_delete(db_session):
    repo = InviteRepository(db_session)
    invite = await repo.create(make_invite("a@acme.com", uuid4()))

    await repo.delete(invite.id)

    assert await repo.get_by_id(invite.id) is None


@pytest.mark.asyncio
async def test_groups_partitioned_by_tenant(db_session):
    repo = GroupRepository(db_session)
    tenant_id = uuid4()
    await repo.create(make_group(tenant_id, GroupType.basic))
    await repo.create(make_group(uuid4(), GroupType.basic))

    groups = await repo.get_many(
        lambda g: g.type == GroupType.basic, QueryOptions.partition(str(tenant_id))
    )

    assert [g.tenant_id for g in groups] == [tenant_id]


@pytest.mark.asyncio
async def test_query_page_walks_all_items(db_session):
    repo = InviteRepository(db_session)
    tenant_id = uuid4()
    for index in range(5):
        await repo.create(make_invite(f"user{index}@acme.com", tenant_id))
    await repo.create(make_invite("x@acme.com", uuid4()))

    emails, token, pages = [], None, 0
    while True:
        page = await repo.query_page(
            lambda i: i.tenant_id == tenant_id,
            QueryOptions.partition("acme.com"),
            page_size=2,
            continuation_token=token,
        )
        pages += 1
        emails.extend(i.email for i in page.items)
        if page.is_last_chunk:
            assert page.continuation_token is None
            break
        token = page.continuation_token

    assert pages == 3
    assert sorted(emails) == [f"user{index}@acme.com" for index in range(5)]


@pytest.mark.asyncio
async def test_query_page_rejects_bad_token(db_session):
    repo = InviteRepository(db_session)

    with pytest.raises(ValueError):
        await repo.query_page(
            lambda i: True, QueryOptions.cross_partition(), continuation_token="%%%"
        )


@pytest.mark.asyncio
async def test_equality_filters_narrow_the_query(db_session):
    repo = PrincipalRepository(db_session)
    tenant_id = uuid4()
    await repo.create(make_principal(email="a@acme.com", tenant_id=tenant_id))
    await repo.create(make_principal(email="b@other.com", tenant_id=tenant_id))
    await repo.create(make_principal(email="c@acme.com", tenant_id=uuid4()))
    await db_session.commit()

    in_tenant = await repo.get_many(
        lambda p: True, QueryOptions.cross_partition().where(tenant_id=tenant_id)
    )
    in_tenant_and_domain = await repo.get_many(
        lambda p: True, QueryOptions.partition("acme.com").where(tenant_id=tenant_id)
    )

    assert {p.email for p in in_tenant} == {"a@acme.com", "b@other.com"}
    assert [p.email for p in in_tenant_and_domain] == ["a@acme.com"]
