"""
Can Promote Principal Use Case

Answers whether the principal behind an email could join a tenant.
"""

from uuid import UUID

from src.app.services.directory_gateway import IDirectoryGateway
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import ValidatorRegistry, ValidatorType
from src.domain.entities import CanPromoteResultCode

from .common import find_principal_by_email, is_email_in_tenant_domains
from .dtos import CanPromoteResponse


class CanPromotePrincipalUseCase:
    """Read-only eligibility check mirroring the promotion rules"""

    def __init__(
        self,
        uow: UnitOfWork,
        directory: IDirectoryGateway,
        validators: ValidatorRegistry,
    ):
        self.uow = uow
        self.directory = directory
        self.validators = validators

    async def execute(self, email: str, tenant_id: UUID) -> CanPromoteResponse:
        self.validators.validate_many(
            [(ValidatorType.email, email), (ValidatorType.tenant_id, tenant_id)]
        )

        async with self.uow:
            principal = await find_principal_by_email(self.uow, email)
            if principal is None:
                return CanPromoteResponse(result_code=CanPromoteResultCode.user_does_not_exist)

            if not principal.is_guest:
                return CanPromoteResponse(
                    result_code=CanPromoteResultCode.user_already_promoted,
                    principal_id=principal.id,
                )

            if not await is_email_in_tenant_domains(self.directory, tenant_id, principal.email):
                return CanPromoteResponse(
                    result_code=CanPromoteResultCode.email_not_in_tenant_domain,
                    principal_id=principal.id,
                )

            return CanPromoteResponse(
                result_code=CanPromoteResultCode.user_can_be_promoted,
                principal_id=principal.id,
            )
