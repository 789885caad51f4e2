from .base import Validator, ValidatorRegistry, ValidatorType, default_registry
from .validators import (
    CreateGroupRequestValidator,
    CreatePrincipalRequestValidator,
    EmailValidator,
    GroupIdValidator,
    IdpUserRequestValidator,
    PrincipalIdValidator,
    TenantIdValidator,
    UpdatePrincipalRequestValidator,
    is_valid_email,
)

__all__ = [
    "Validator",
    "ValidatorRegistry",
    "ValidatorType",
    "default_registry",
    "CreateGroupRequestValidator",
    "CreatePrincipalRequestValidator",
    "EmailValidator",
    "GroupIdValidator",
    "IdpUserRequestValidator",
    "PrincipalIdValidator",
    "TenantIdValidator",
    "UpdatePrincipalRequestValidator",
    "is_valid_email",
]
