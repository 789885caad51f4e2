from uuid import UUID, uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import AuditEvent, GroupType, Principal
from tests.fixtures.factories import make_group, make_principal


async def seed(db_session, *items):
    db_session.add_all(items)
    await db_session.commit()


def user_payload(**overrides):
    payload = {
        "username": "ada",
        "email": "Ada@Acme.com",
        "first_name": "Ada",
        "last_name": "Lovelace",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_principal(client: AsyncClient, db_session, tenant_id, auth_headers, notifications):
    """Licensed principal is created unlocked in the basic group and welcomed"""
    basic = make_group(tenant_id, GroupType.basic)
    await seed(db_session, basic)

    response = await client.post("/users", json=user_payload(), headers=auth_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "ada@acme.com"
    assert data["tenant_id"] == str(tenant_id)
    assert data["is_locked"] is False
    assert data["groups"] == [str(basic.id)]
    assert notifications.welcomes == ["ada@acme.com"]

    stmt = select(AuditEvent).where(AuditEvent.action == "principal_created")
    events = (await db_session.exec(stmt)).all()
    assert len(events) == 1
    assert str(events[0].user_id) == data["id"]


@pytest.mark.asyncio
async def test_create_principal_duplicates(client: AsyncClient, db_session, tenant_id, auth_headers):
    await seed(
        db_session,
        make_principal(email="ada@acme.com", tenant_id=tenant_id, username="ada"),
    )

    response = await client.post("/users", json=user_payload(), headers=auth_headers)

    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "DUPLICATE_ENTITY"
    assert {e["property_name"] for e in error["errors"]} == {"username", "email"}


@pytest.mark.asyncio
async def test_create_principal_invalid(client: AsyncClient, auth_headers):
    response = await client.post(
        "/users", json=user_payload(email="nope", last_name=""), headers=auth_headers
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_FAILED"
    assert {e["property_name"] for e in error["errors"]} == {"email", "last_name"}


@pytest.mark.asyncio
async def test_create_principal_without_license_is_locked(
    client: AsyncClient, db_session, tenant_id, auth_headers, licenses, notifications
):
    """Compensation: persisted locked, admins notified once"""
    licenses.available["default"] = 0
    admin_group = make_group(tenant_id, GroupType.tenant_admin)
    admin = make_principal(
        email="boss@acme.com", tenant_id=tenant_id, username="boss", groups=[str(admin_group.id)]
    )
    await seed(db_session, admin_group, admin)

    response = await client.post("/users", json=user_payload(), headers=auth_headers)

    assert response.status_code == 201
    assert response.json()["is_locked"] is True
    stored = (
        await db_session.exec(select(Principal).where(Principal.email == "ada@acme.com"))
    ).one()
    assert stored.is_locked is True
    assert notifications.locked_notices == [
        {"admins": ["boss@acme.com"], "user_email": "ada@acme.com"}
    ]
    assert notifications.welcomes == []


@pytest.mark.asyncio
async def test_requires_token(client: AsyncClient):
    response = await client.post("/users", json=user_payload())

    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_promote_guest(client: AsyncClient, db_session, tenant_id, auth_headers, licenses):
    guest = make_principal(email="guest@acme.com")
    await seed(db_session, guest)

    response = await client.post(f"/users/{guest.id}/promote", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"result_code": "success"}
    assert licenses.assigned[guest.id] == "user_license"

    again = await client.post(f"/users/{guest.id}/promote", headers=auth_headers)
    assert again.json() == {"result_code": "already_promoted"}


@pytest.mark.asyncio
async def test_promote_guest_foreign_domain(client: AsyncClient, db_session, auth_headers):
    guest = make_principal(email="guest@other.com")
    await seed(db_session, guest)

    response = await client.post(f"/users/{guest.id}/promote", headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "PROMOTION_FAILED"


@pytest.mark.asyncio
async def test_promote_guest_license_failure(
    client: AsyncClient, db_session, tenant_id, auth_headers, licenses
):
    """Tenant stays assigned and the principal is locked"""
    licenses.available["user_license"] = 0
    guest = make_principal(email="guest@acme.com")
    await seed(db_session, guest)

    response = await client.post(f"/users/{guest.id}/promote", headers=auth_headers)

    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "LICENSE_ASSIGNMENT_FAILED"
    assert error["principal_id"] == str(guest.id)
    stored = await db_session.get(Principal, guest.id)
    assert stored.tenant_id == tenant_id
    assert stored.is_locked is True


@pytest.mark.asyncio
async def test_promote_unknown_principal(client: AsyncClient, auth_headers):
    response = await client.post(f"/users/{uuid4()}/promote", headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_can_promote(client: AsyncClient, db_session, auth_headers):
    guest = make_principal(email="guest@acme.com")
    await seed(db_session, guest)

    response = await client.get(
        "/users/can-promote", params={"email": "Guest@acme.com"}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json() == {
        "result_code": "user_can_be_promoted",
        "principal_id": str(guest.id),
    }


@pytest.mark.asyncio
async def test_lock_unlock_and_license_tier(
    client: AsyncClient, auth_headers, licenses
):
    created = await client.post("/users", json=user_payload(), headers=auth_headers)
    principal_id = created.json()["id"]

    tier = await client.get(f"/users/{principal_id}/license", headers=auth_headers)
    assert tier.json()["license_tier"] == "default"

    locked = await client.post(
        f"/users/{principal_id}/lock", json={"is_locked": True}, headers=auth_headers
    )
    assert locked.status_code == 200
    assert locked.json()["is_locked"] is True
    assert UUID(principal_id) not in licenses.assigned

    tier = await client.get(f"/users/{principal_id}/license", headers=auth_headers)
    assert tier.json()["license_tier"] is None

    unlocked = await client.post(
        f"/users/{principal_id}/lock", json={"is_locked": False}, headers=auth_headers
    )
    assert unlocked.json()["is_locked"] is False
    assert licenses.assigned[UUID(principal_id)] == "default"


@pytest.mark.asyncio
async def test_get_and_update_principal(client: AsyncClient, db_session, tenant_id, auth_headers):
    member = make_principal(email="m@acme.com", tenant_id=tenant_id, username="m")
    await seed(db_session, member, make_principal(email="t@acme.com", username="taken"))

    fetched = await client.get(f"/users/{member.id}", headers=auth_headers)
    updated = await client.put(
        f"/users/{member.id}",
        json={"first_name": "Mary", "last_name": "Shelley", "username": "mary"},
        headers=auth_headers,
    )
    clash = await client.put(
        f"/users/{member.id}",
        json={"first_name": "Mary", "last_name": "Shelley", "username": "taken"},
        headers=auth_headers,
    )

    assert fetched.status_code == 200
    assert fetched.json()["email"] == "m@acme.com"
    assert updated.status_code == 200
    assert updated.json()["username"] == "mary"
    assert updated.json()["first_name"] == "Mary"
    assert clash.status_code == 409


@pytest.mark.asyncio
async def test_get_principal_of_other_tenant(client: AsyncClient, db_session, auth_headers):
    stranger = make_principal(email="s@acme.com", tenant_id=uuid4())
    await seed(db_session, stranger)

    response = await client.get(f"/users/{stranger.id}", headers=auth_headers)

    assert response.status_code == 404
