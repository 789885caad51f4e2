"""
Validator strategies and the registry that selects them by tag.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple

from src.app.exceptions import ValidationFailedError, ValidationFailure

logger = logging.getLogger(__name__)


class ValidatorType(str, Enum):
    create_principal_request = "create_principal_request"
    idp_user_request = "idp_user_request"
    principal_id = "principal_id"
    tenant_id = "tenant_id"
    email = "email"
    group_id = "group_id"
    create_group_request = "create_group_request"
    update_principal_request = "update_principal_request"


class Validator(ABC):
    """Field-level validation of one value"""

    @abstractmethod
    def validate(self, value: Any) -> List[ValidationFailure]:
        """Return every violation found; empty when valid"""
        pass


class ValidatorRegistry:
    """
    Maps a ValidatorType to its Validator.

    validate() and validate_many() raise ValidationFailedError carrying every
    violation found across all the given values.
    """

    def __init__(self, validators: Dict[ValidatorType, Validator]):
        self._validators = dict(validators)

    def get(self, validator_type: ValidatorType) -> Validator:
        try:
            return self._validators[validator_type]
        except KeyError:
            raise KeyError(f"No validator registered for {validator_type.value}")

    def failures(self, pairs: Iterable[Tuple[ValidatorType, Any]]) -> List[ValidationFailure]:
        collected: List[ValidationFailure] = []
        for validator_type, value in pairs:
            collected.extend(self.get(validator_type).validate(value))
        return collected

    def validate(self, validator_type: ValidatorType, value: Any) -> None:
        self.validate_many([(validator_type, value)])

    def validate_many(self, pairs: Iterable[Tuple[ValidatorType, Any]]) -> None:
        failures = self.failures(pairs)
        if failures:
            logger.warning(f"Validation failed: {[f.error_message for f in failures]}")
            raise ValidationFailedError(failures)


def default_registry() -> ValidatorRegistry:
    from .validators import (
        CreateGroupRequestValidator,
        CreatePrincipalRequestValidator,
        EmailValidator,
        GroupIdValidator,
        IdpUserRequestValidator,
        PrincipalIdValidator,
        TenantIdValidator,
        UpdatePrincipalRequestValidator,
    )

    return ValidatorRegistry(
        {
            ValidatorType.create_principal_request: CreatePrincipalRequestValidator(),
            ValidatorType.idp_user_request: IdpUserRequestValidator(),
            ValidatorType.principal_id: PrincipalIdValidator(),
            ValidatorType.tenant_id: TenantIdValidator(),
            ValidatorType.email: EmailValidator(),
            ValidatorType.group_id: GroupIdValidator(),
            ValidatorType.create_group_request: CreateGroupRequestValidator(),
            ValidatorType.update_principal_request: UpdatePrincipalRequestValidator(),
        }
    )
