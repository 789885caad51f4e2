"""
Application Exceptions

Typed failures raised by use cases. Each carries a libs.result.Error so the
API layer can render code and message uniformly.
"""

from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from libs.result import Error


@dataclass(frozen=True)
class ValidationFailure:
    """A single field-level violation"""

    property_name: str
    error_message: str
    is_duplicate: bool = False


class PrincipalServiceError(Exception):
    def __init__(self, error: Error):
        self.error = error
        super().__init__(error.message)


class ValidationFailedError(PrincipalServiceError):
    """One or more field-level violations, always reported together"""

    def __init__(self, failures: List[ValidationFailure], code: str = "VALIDATION_FAILED"):
        self.failures = list(failures)
        message = "; ".join(f.error_message for f in self.failures) or "Validation failed"
        super().__init__(Error(code, message))


class DuplicateEntityError(ValidationFailedError):
    """Username, email or external id collision"""

    def __init__(self, failures: List[ValidationFailure]):
        super().__init__(failures, code="DUPLICATE_ENTITY")


class NotFoundError(PrincipalServiceError):
    def __init__(self, entity: str, entity_id: Optional[UUID] = None):
        message = f"{entity} not found" if entity_id is None else f"{entity} {entity_id} not found"
        super().__init__(Error("NOT_FOUND", message))


class PromotionFailedError(PrincipalServiceError):
    """Guest is not eligible for promotion into the tenant"""

    def __init__(self, message: str):
        super().__init__(Error("PROMOTION_FAILED", message))


class LicenseAssignmentFailedError(PrincipalServiceError):
    """License step failed after the principal was mutated"""

    def __init__(self, principal_id: UUID, message: Optional[str] = None):
        self.principal_id = principal_id
        super().__init__(
            Error(
                "LICENSE_ASSIGNMENT_FAILED",
                message or f"Unable to assign a license to principal {principal_id}",
                {"principal_id": str(principal_id)},
            )
        )


class UpstreamUnavailableError(PrincipalServiceError):
    """An external service failed or answered with a non-success status"""

    def __init__(self, service: str, message: str):
        self.service = service
        super().__init__(Error("UPSTREAM_UNAVAILABLE", f"{service}: {message}"))


class LockedGroupError(PrincipalServiceError):
    """Built-in groups cannot be deleted or edited ad hoc"""

    def __init__(self, group_id: UUID):
        self.group_id = group_id
        super().__init__(
            Error(
                "GROUP_LOCKED",
                f"Group {group_id} is locked and cannot be changed",
                {"group_id": str(group_id)},
            )
        )
