from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import LicenseTier


class LicenseResult(BaseModel):
    success: bool
    message: str = ""


class LicenseSummary(BaseModel):
    tier_name: str
    total_available: int


class UserLicense(BaseModel):
    tier: str


class ILicenseGateway(ABC):
    """License service interface - application layer"""

    @abstractmethod
    async def assign(
        self, tenant_id: UUID, principal_id: UUID, license_tier: LicenseTier
    ) -> LicenseResult:
        """Consume one license unit of the tier for the principal"""
        pass

    @abstractmethod
    async def release(self, tenant_id: UUID, principal_id: UUID) -> LicenseResult:
        """Return the principal's license unit to the tenant pool"""
        pass

    @abstractmethod
    async def tenant_summary(self, tenant_id: UUID) -> List[LicenseSummary]:
        """Per-tier availability for the tenant"""
        pass

    @abstractmethod
    async def user_license_detail(
        self, tenant_id: UUID, principal_id: UUID
    ) -> List[UserLicense]:
        """Licenses currently held by the principal"""
        pass
