from typing import List
from uuid import UUID

from src.adapter.services.http_gateway import HttpGateway
from src.app.services.directory_gateway import IDirectoryGateway


class HttpDirectoryGateway(HttpGateway, IDirectoryGateway):
    """Tenant directory client"""

    service_name = "tenant-service"

    async def accepted_domains(self, tenant_id: UUID) -> List[str]:
        payload = await self._request("GET", f"/tenants/{tenant_id}/domains")
        return [domain for domain in payload or [] if domain]

    async def domain_owner_ids(self, tenant_id: UUID) -> List[UUID]:
        payload = await self._request("GET", f"/tenants/{tenant_id}/domain-owners")
        return [UUID(value) for value in payload or []]

    async def member_ids(self, tenant_id: UUID) -> List[UUID]:
        payload = await self._request("GET", f"/tenants/{tenant_id}/members")
        return [UUID(value) for value in payload or []]
