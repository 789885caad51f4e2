from dataclasses import dataclass, field
from typing import FrozenSet, Optional
from uuid import UUID

from src.domain.entities import LicenseTier


@dataclass(frozen=True)
class ProvisioningPolicy:
    """
    Deployment-level provisioning rules.

    protected_tenant_ids: provisioning-only tenants that may not own principals
    default_license_tier: tier requested when a create request names none
    """

    protected_tenant_ids: FrozenSet[UUID] = field(default_factory=frozenset)
    default_license_tier: LicenseTier = LicenseTier.default

    def is_protected(self, tenant_id: Optional[UUID]) -> bool:
        return tenant_id is not None and tenant_id in self.protected_tenant_ids

    @classmethod
    def from_config(cls, config) -> "ProvisioningPolicy":
        return cls(
            protected_tenant_ids=frozenset(
                UUID(str(value)) for value in config.PROTECTED_TENANT_IDS or []
            ),
            default_license_tier=LicenseTier(config.DEFAULT_LICENSE_TIER),
        )
