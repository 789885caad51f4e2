from typing import List
from uuid import UUID

from src.adapter.services.http_gateway import HttpGateway
from src.app.services.license_gateway import (
    ILicenseGateway,
    LicenseResult,
    LicenseSummary,
    UserLicense,
)
from src.domain.entities import LicenseTier


class HttpLicenseGateway(HttpGateway, ILicenseGateway):
    """License service client"""

    service_name = "license-service"

    @staticmethod
    def _to_result(payload: dict) -> LicenseResult:
        payload = payload or {}
        return LicenseResult(
            success=payload.get("result_code") == "success",
            message=payload.get("message", ""),
        )

    async def assign(
        self, tenant_id: UUID, principal_id: UUID, license_tier: LicenseTier
    ) -> LicenseResult:
        payload = await self._request(
            "POST",
            f"/tenants/{tenant_id}/licenses/assign",
            json={"principal_id": str(principal_id), "license_tier": license_tier.value},
        )
        return self._to_result(payload)

    async def release(self, tenant_id: UUID, principal_id: UUID) -> LicenseResult:
        payload = await self._request(
            "POST",
            f"/tenants/{tenant_id}/licenses/release",
            json={"principal_id": str(principal_id)},
        )
        return self._to_result(payload)

    async def tenant_summary(self, tenant_id: UUID) -> List[LicenseSummary]:
        payload = await self._request("GET", f"/tenants/{tenant_id}/licenses/summary")
        return [LicenseSummary(**item) for item in payload or []]

    async def user_license_detail(
        self, tenant_id: UUID, principal_id: UUID
    ) -> List[UserLicense]:
        payload = await self._request(
            "GET", f"/tenants/{tenant_id}/users/{principal_id}/licenses"
        )
        return [UserLicense(**item) for item in payload or []]
