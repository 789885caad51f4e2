"""
Update Principal Use Case

Edits the profile fields of a tenant principal.
"""

import logging
from uuid import UUID

from src.app.exceptions import (
    DuplicateEntityError,
    NotFoundError,
    ValidationFailedError,
    ValidationFailure,
)
from src.app.repositories.base import QueryOptions
from src.app.services.audit_recorder import record_audit_event
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import ValidatorRegistry, ValidatorType
from src.domain.entities import Principal

from .dtos import UpdatePrincipalRequest

logger = logging.getLogger(__name__)


class UpdatePrincipalUseCase:
    """
    Use case for editing a principal's profile.

    Business Rules:
    - Only first name, last name and username change here; lock state and
      license go through their own workflows
    - An omitted username keeps the current one
    - Usernames stay unique
    """

    def __init__(self, uow: UnitOfWork, validators: ValidatorRegistry):
        self.uow = uow
        self.validators = validators

    async def execute(
        self,
        principal_id: UUID,
        request: UpdatePrincipalRequest,
        tenant_id: UUID,
        acting_user_id: UUID,
    ) -> Principal:
        """
        Raises:
            ValidationFailedError: Invalid fields
            DuplicateEntityError: Username taken by another principal
            NotFoundError: No such principal in the tenant
        """
        failures = self.validators.failures(
            [
                (ValidatorType.principal_id, principal_id),
                (ValidatorType.tenant_id, tenant_id),
                (ValidatorType.update_principal_request, request),
            ]
        )
        if failures:
            logger.warning(f"Update principal rejected: {[f.error_message for f in failures]}")
            raise ValidationFailedError(failures)

        async with self.uow:
            principal = await self.uow.principals.get_by_id(principal_id)
            if principal is None or principal.tenant_id != tenant_id:
                raise NotFoundError("Principal", principal_id)

            username = (
                request.username.strip().lower() if request.username else principal.username
            )
            if username != principal.username and await self.uow.principals.get_many(
                lambda p: p.id != principal_id,
                QueryOptions.cross_partition().where(username=username),
            ):
                raise DuplicateEntityError(
                    [
                        ValidationFailure(
                            "username", "A user with that Username already exists.", is_duplicate=True
                        )
                    ]
                )

            principal.username = username
            principal.first_name = request.first_name.strip()
            principal.last_name = request.last_name.strip()
            principal = await self.uow.principals.update(principal.id, principal)
            await self.uow.commit()
            await record_audit_event(
                self.uow,
                "principal_updated",
                tenant_id,
                principal.id,
                {"acting_user_id": str(acting_user_id)},
            )
            return principal
