import json
from uuid import uuid4

import httpx
import pytest

from src.adapter.services.directory_gateway import HttpDirectoryGateway
from src.adapter.services.license_gateway import HttpLicenseGateway
from src.adapter.services.notification_gateway import HttpNotificationGateway
from src.app.exceptions import UpstreamUnavailableError
from src.app.services.notification_gateway import InviteEmail, LockedNoticeRecipient
from src.domain.entities import LicenseTier

TENANT_ID = uuid4()
PRINCIPAL_ID = uuid4()


def client_for(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://upstream")


@pytest.mark.asyncio
async def test_license_assign_success():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"result_code": "success"})

    async with client_for(handler) as client:
        result = await HttpLicenseGateway(client).assign(
            TENANT_ID, PRINCIPAL_ID, LicenseTier.user_license
        )

    assert result.success is True
    assert seen["path"] == f"/tenants/{TENANT_ID}/licenses/assign"
    assert seen["body"] == {"principal_id": str(PRINCIPAL_ID), "license_tier": "user_license"}


@pytest.mark.asyncio
async def test_license_release_failed_result_code():
    def handler(request):
        return httpx.Response(200, json={"result_code": "failed", "message": "not assigned"})

    async with client_for(handler) as client:
        result = await HttpLicenseGateway(client).release(TENANT_ID, PRINCIPAL_ID)

    assert result.success is False
    assert result.message == "not assigned"


@pytest.mark.asyncio
async def test_license_summary_and_detail():
    def handler(request):
        if request.url.path.endswith("/summary"):
            return httpx.Response(200, json=[{"tier_name": "user_license", "total_available": 2}])
        return httpx.Response(200, json=[{"tier": "trial_license"}])

    async with client_for(handler) as client:
        gateway = HttpLicenseGateway(client)
        summary = await gateway.tenant_summary(TENANT_ID)
        detail = await gateway.user_license_detail(TENANT_ID, PRINCIPAL_ID)

    assert summary[0].tier_name == "user_license"
    assert summary[0].total_available == 2
    assert detail[0].tier == "trial_license"


@pytest.mark.asyncio
async def test_non_success_status_is_upstream_unavailable():
    def handler(request):
        return httpx.Response(503)

    async with client_for(handler) as client:
        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await HttpDirectoryGateway(client).accepted_domains(TENANT_ID)

    assert exc_info.value.service == "tenant-service"
    assert exc_info.value.error.code == "UPSTREAM_UNAVAILABLE"


@pytest.mark.asyncio
async def test_transport_error_is_upstream_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with client_for(handler) as client:
        with pytest.raises(UpstreamUnavailableError):
            await HttpLicenseGateway(client).tenant_summary(TENANT_ID)


@pytest.mark.asyncio
async def test_directory_lookups():
    owner, member = uuid4(), uuid4()

    def handler(request):
        path = request.url.path
        if path.endswith("/domains"):
            return httpx.Response(200, json=["acme.com", ""])
        if path.endswith("/domain-owners"):
            return httpx.Response(200, json=[str(owner)])
        return httpx.Response(200, json=[str(member)])

    async with client_for(handler) as client:
        gateway = HttpDirectoryGateway(client)
        assert await gateway.accepted_domains(TENANT_ID) == ["acme.com"]
        assert await gateway.domain_owner_ids(TENANT_ID) == [owner]
        assert await gateway.member_ids(TENANT_ID) == [member]


@pytest.mark.asyncio
async def test_notifications():
    bodies = {}

    def handler(request):
        bodies[request.url.path] = json.loads(request.content)
        if request.url.path == "/emails/invites":
            return httpx.Response(200, json=[{"email": "a@x.com", "accepted": True}])
        return httpx.Response(200, json={"accepted": True})

    async with client_for(handler) as client:
        gateway = HttpNotificationGateway(client)
        assert await gateway.send_welcome("a@x.com", "Ada") is True
        assert await gateway.send_locked_notice(
            [LockedNoticeRecipient(email="boss@x.com", first_name="Bo")], "a@x.com", "Ada L"
        )
        results = await gateway.send_invite([InviteEmail(email="a@x.com")])

    assert results[0].accepted is True
    assert bodies["/emails/welcome"] == {"email": "a@x.com", "first_name": "Ada"}
    assert bodies["/emails/locked-notice"]["admins"] == [
        {"email": "boss@x.com", "first_name": "Bo"}
    ]
    assert bodies["/emails/invites"]["invites"][0]["email"] == "a@x.com"


@pytest.mark.asyncio
async def test_welcome_without_body_is_not_accepted():
    def handler(request):
        return httpx.Response(204)

    async with client_for(handler) as client:
        assert await HttpNotificationGateway(client).send_welcome("a@x.com", "Ada") is False
