from abc import ABC, abstractmethod
from typing import List
from uuid import UUID


class IDirectoryGateway(ABC):
    """Tenant directory interface - application layer"""

    @abstractmethod
    async def accepted_domains(self, tenant_id: UUID) -> List[str]:
        """Email domains the tenant accepts members from"""
        pass

    @abstractmethod
    async def domain_owner_ids(self, tenant_id: UUID) -> List[UUID]:
        """Principal ids owning the tenant's domains"""
        pass

    @abstractmethod
    async def member_ids(self, tenant_id: UUID) -> List[UUID]:
        """Principal ids affiliated with the tenant"""
        pass
