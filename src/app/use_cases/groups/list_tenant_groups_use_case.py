from typing import List
from uuid import UUID

from src.app.repositories.base import QueryOptions
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import ValidatorRegistry, ValidatorType
from src.domain.entities import Group, GroupType


class ListTenantGroupsUseCase:
    """Groups of a tenant, without the default group"""

    def __init__(self, uow: UnitOfWork, validators: ValidatorRegistry):
        self.uow = uow
        self.validators = validators

    async def execute(self, tenant_id: UUID) -> List[Group]:
        self.validators.validate(ValidatorType.tenant_id, tenant_id)

        async with self.uow:
            return await self.uow.groups.get_many(
                lambda g: g.type != GroupType.default,
                QueryOptions.partition(str(tenant_id)),
            )
