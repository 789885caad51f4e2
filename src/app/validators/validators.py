from typing import Any, List, Optional
from uuid import UUID

from email_validator import EmailNotValidError, validate_email

from src.app.exceptions import ValidationFailure
from src.domain.entities import is_unset_tenant

from .base import Validator

NAME_MAX_LENGTH = 100
USERNAME_MAX_LENGTH = 255


def is_valid_email(email: Optional[str]) -> bool:
    """Syntax check only; quoted local parts and unicode are rejected"""
    if not email or not email.strip():
        return False
    try:
        validate_email(email.strip(), check_deliverability=False, allow_smtputf8=False)
    except EmailNotValidError:
        return False
    return True


def _required(value: Optional[str], field: str, max_length: int) -> List[ValidationFailure]:
    if value is None or not value.strip():
        return [ValidationFailure(field, f"{field} is required.")]
    if len(value.strip()) > max_length:
        return [
            ValidationFailure(field, f"{field} must be at most {max_length} characters.")
        ]
    return []


class EmailValidator(Validator):
    def __init__(self, field: str = "email"):
        self.field = field

    def validate(self, value: Any) -> List[ValidationFailure]:
        if value is None or not str(value).strip():
            return [ValidationFailure(self.field, "Email is required.")]
        if not is_valid_email(str(value)):
            return [ValidationFailure(self.field, "Email is not a valid email address.")]
        return []


class PrincipalIdValidator(Validator):
    def validate(self, value: Any) -> List[ValidationFailure]:
        if not isinstance(value, UUID) or value.int == 0:
            return [
                ValidationFailure("principal_id", "The principal Id cannot be an empty Guid.")
            ]
        return []


class TenantIdValidator(Validator):
    def validate(self, value: Any) -> List[ValidationFailure]:
        if not isinstance(value, UUID) or is_unset_tenant(value):
            return [ValidationFailure("tenant_id", "The tenant Id cannot be an empty Guid.")]
        return []


class GroupIdValidator(Validator):
    def validate(self, value: Any) -> List[ValidationFailure]:
        if not isinstance(value, UUID) or value.int == 0:
            return [ValidationFailure("group_id", "The group Id cannot be an empty Guid.")]
        return []


class CreatePrincipalRequestValidator(Validator):
    """Checks username, names and email of a create request"""

    def __init__(self):
        self.email_validator = EmailValidator()

    def validate(self, value: Any) -> List[ValidationFailure]:
        failures: List[ValidationFailure] = []
        failures += _required(value.username, "username", USERNAME_MAX_LENGTH)
        failures += _required(value.first_name, "first_name", NAME_MAX_LENGTH)
        failures += _required(value.last_name, "last_name", NAME_MAX_LENGTH)
        failures += self.email_validator.validate(value.email)
        return failures


class IdpUserRequestValidator(Validator):
    def __init__(self):
        self.email_validator = EmailValidator()

    def validate(self, value: Any) -> List[ValidationFailure]:
        failures: List[ValidationFailure] = []
        failures += self.email_validator.validate(value.email)
        failures += _required(value.first_name, "first_name", NAME_MAX_LENGTH)
        failures += _required(value.last_name, "last_name", NAME_MAX_LENGTH)
        return failures


class CreateGroupRequestValidator(Validator):
    def validate(self, value: Any) -> List[ValidationFailure]:
        name = value.name
        if name is None or not name.strip():
            return [ValidationFailure("name", "The Group Name property must not be empty")]
        if len(name.strip()) > NAME_MAX_LENGTH:
            return [
                ValidationFailure(
                    "name", f"The Group Name must be less than {NAME_MAX_LENGTH} characters long"
                )
            ]
        return []


class UpdatePrincipalRequestValidator(Validator):
    """Names are required; username is optional and keeps its current value when omitted"""

    def validate(self, value: Any) -> List[ValidationFailure]:
        failures: List[ValidationFailure] = []
        if value.username is not None:
            failures += _required(value.username, "username", USERNAME_MAX_LENGTH)
        failures += _required(value.first_name, "first_name", NAME_MAX_LENGTH)
        failures += _required(value.last_name, "last_name", NAME_MAX_LENGTH)
        return failures
