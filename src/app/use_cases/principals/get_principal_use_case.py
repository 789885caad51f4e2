from uuid import UUID

from src.app.exceptions import NotFoundError
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import ValidatorRegistry, ValidatorType
from src.domain.entities import Principal


class GetPrincipalUseCase:
    """Principals of other tenants are reported as missing"""

    def __init__(self, uow: UnitOfWork, validators: ValidatorRegistry):
        self.uow = uow
        self.validators = validators

    async def execute(self, principal_id: UUID, tenant_id: UUID) -> Principal:
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
            return principal
