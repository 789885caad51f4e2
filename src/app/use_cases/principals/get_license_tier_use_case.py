from uuid import UUID

from src.app.exceptions import NotFoundError
from src.app.services.license_gateway import ILicenseGateway
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import ValidatorRegistry, ValidatorType

from .dtos import LicenseTierResponse


class GetPrincipalLicenseTierUseCase:
    """License tier currently held by a principal of the tenant"""

    def __init__(
        self, uow: UnitOfWork, licenses: ILicenseGateway, validators: ValidatorRegistry
    ):
        self.uow = uow
        self.licenses = licenses
        self.validators = validators

    async def execute(self, principal_id: UUID, tenant_id: UUID) -> LicenseTierResponse:
        self.validators.validate_many(
            [
                (ValidatorType.principal_id, principal_id),
                (ValidatorType.tenant_id, tenant_id),
            ]
        )

        async with self.uow:
            principal = await self.uow.principals.get_by_id(principal_id)
            if principal is None or principal.tenant_id != tenant_id:
                raise NotFoundError("Principal", principal_id)

        licenses = await self.licenses.user_license_detail(tenant_id, principal_id)
        return LicenseTierResponse(
            principal_id=principal_id,
            license_tier=licenses[0].tier if licenses else None,
        )
