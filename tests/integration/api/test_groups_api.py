from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import Group, GroupType, Principal
from tests.fixtures.factories import make_group, make_principal


async def seed(db_session, *items):
    db_session.add_all(items)
    await db_session.commit()


@pytest.mark.asyncio
async def test_create_and_list_groups(client: AsyncClient, tenant_id, auth_headers):
    seeded = await client.post("/groups/built-in", headers=auth_headers)
    created = await client.post("/groups", json={"name": "Designers"}, headers=auth_headers)
    duplicate = await client.post("/groups", json={"name": "Designers"}, headers=auth_headers)
    listed = await client.get("/groups", headers=auth_headers)

    assert seeded.status_code == 200
    assert {g["type"]: g["is_locked"] for g in seeded.json()} == {
        "basic": True,
        "tenant_admin": True,
    }
    assert created.status_code == 201
    assert created.json()["type"] == "custom"
    assert created.json()["is_locked"] is False
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "DUPLICATE_ENTITY"
    assert sorted(g["name"] for g in listed.json()) == ["Basic", "Designers", "TenantAdmin"]


@pytest.mark.asyncio
async def test_delete_locked_group_is_refused(client: AsyncClient, db_session, tenant_id, auth_headers):
    basic = make_group(tenant_id, GroupType.basic)
    await seed(db_session, basic)

    response = await client.delete(f"/groups/{basic.id}", headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "GROUP_LOCKED"


@pytest.mark.asyncio
async def test_delete_group_removes_memberships(
    client: AsyncClient, db_session, tenant_id, auth_headers
):
    custom = make_group(tenant_id, name="Designers")
    member = make_principal(email="m@acme.com", tenant_id=tenant_id, groups=[str(custom.id)])
    await seed(db_session, custom, member)

    response = await client.delete(f"/groups/{custom.id}", headers=auth_headers)

    assert response.status_code == 204
    groups = (await db_session.exec(select(Group.id))).all()
    assert custom.id not in groups
    stored = (
        await db_session.exec(select(Principal.groups).where(Principal.id == member.id))
    ).one()
    assert stored == []


@pytest.mark.asyncio
async def test_group_of_other_tenant_is_not_found(client: AsyncClient, db_session, auth_headers):
    foreign = make_group(uuid4(), name="Foreign")
    await seed(db_session, foreign)

    response = await client.delete(f"/groups/{foreign.id}", headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_membership_lifecycle(client: AsyncClient, db_session, tenant_id, auth_headers):
    custom = make_group(tenant_id, name="Designers")
    member = make_principal(email="m@acme.com", tenant_id=tenant_id)
    await seed(db_session, custom, member)

    added = await client.post(
        f"/groups/{custom.id}/members",
        json={"principal_id": str(member.id)},
        headers=auth_headers,
    )
    again = await client.post(
        f"/groups/{custom.id}/members",
        json={"principal_id": str(member.id)},
        headers=auth_headers,
    )
    members = await client.get(f"/groups/{custom.id}/members", headers=auth_headers)
    removed = await client.delete(
        f"/groups/{custom.id}/members/{member.id}", headers=auth_headers
    )

    assert added.status_code == 200
    assert added.json()["groups"] == [str(custom.id)]
    assert again.status_code == 400
    assert members.json()["principal_ids"] == [str(member.id)]
    assert removed.status_code == 200
    assert removed.json()["groups"] == []
