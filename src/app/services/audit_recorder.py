from typing import Any, Dict, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent


async def record_audit_event(
    uow: UnitOfWork,
    action: str,
    tenant_id: Optional[UUID],
    user_id: Optional[UUID],
    metadata: Optional[Dict[str, Any]] = None,
) -> AuditEvent:
    """Persist and commit one lifecycle event"""
    event = await uow.audit_events.create(
        AuditEvent(
            tenant_id=tenant_id,
            user_id=user_id,
            action=action,
            event_metadata=metadata,
        )
    )
    await uow.commit()
    return event
