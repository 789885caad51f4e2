"""
Steps shared by the principal workflows: license acquisition, the
compensating lock, and best-effort welcome emails.
"""

import asyncio
import logging
from typing import Awaitable, TypeVar
from uuid import UUID

from src.app.repositories.base import QueryOptions
from src.app.services.audit_recorder import record_audit_event
from src.app.services.license_gateway import ILicenseGateway
from src.app.services.notification_gateway import (
    INotificationGateway,
    LockedNoticeRecipient,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import GroupType, LicenseTier, Principal, email_domain_of

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_to_completion(step: Awaitable[T]) -> T:
    """
    Run a compensating step that must finish even if the caller is cancelled.

    On cancellation the step keeps running and the caller waits for it
    before re-raising, so the unit of work is never rolled back or closed
    underneath it.
    """
    task = asyncio.ensure_future(step)
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        logger.warning("Cancelled during compensation; waiting for it to finish")
        while not task.done():
            try:
                await asyncio.wait([task])
            except asyncio.CancelledError:
                continue
        raise


async def try_assign_license(
    licenses: ILicenseGateway,
    tenant_id: UUID,
    principal_id: UUID,
    license_tier: LicenseTier,
) -> bool:
    """Returns False when the license service raises or reports failure"""
    try:
        result = await licenses.assign(tenant_id, principal_id, license_tier)
    except Exception as exc:
        logger.error(f"License assignment for principal {principal_id} raised: {exc!r}")
        return False

    if not result.success:
        logger.warning(
            f"License assignment for principal {principal_id} failed: {result.message}"
        )
        return False
    return True


async def lock_principal(uow: UnitOfWork, principal: Principal) -> Principal:
    """Lock the principal and persist it immediately"""
    principal.is_locked = True
    principal = await uow.principals.update(principal.id, principal)
    await uow.commit()
    logger.error(f"Principal {principal.id} locked: no license could be assigned")
    await record_audit_event(
        uow,
        "principal_locked",
        principal.tenant_id,
        principal.id,
        {"reason": "license_unavailable"},
    )
    return principal


async def notify_tenant_admins(
    uow: UnitOfWork,
    notifications: INotificationGateway,
    tenant_id: UUID,
    principal: Principal,
) -> None:
    """Send one locked notice covering every member of the tenant admin group"""
    admin_groups = await uow.groups.get_many(
        lambda g: g.type == GroupType.tenant_admin,
        QueryOptions.partition(str(tenant_id)),
    )
    if not admin_groups:
        logger.warning(f"Tenant {tenant_id} has no tenant admin group to notify")
        return

    admin_group_id = admin_groups[0].id
    admins = await uow.principals.get_many(
        lambda p: p.has_group(admin_group_id) and p.id != principal.id and bool(p.email),
        QueryOptions.cross_partition().where(tenant_id=tenant_id),
    )
    if not admins:
        logger.warning(f"Tenant {tenant_id} has no admins to notify")
        return

    await notifications.send_locked_notice(
        [LockedNoticeRecipient(email=a.email, first_name=a.first_name) for a in admins],
        principal.email,
        principal.full_name,
    )


async def send_welcome_email(
    notifications: INotificationGateway, principal: Principal
) -> None:
    """Welcome emails never fail the workflow"""
    try:
        accepted = await notifications.send_welcome(principal.email, principal.first_name)
    except Exception as exc:
        logger.error(f"Welcome email to principal {principal.id} raised: {exc!r}")
        return

    if not accepted:
        logger.error(f"Welcome email to principal {principal.id} was not accepted")


async def find_principal_by_email(uow: UnitOfWork, email: str):
    email = email.strip().lower()
    matches = await uow.principals.get_many(
        lambda p: p.email == email,
        QueryOptions.partition(email_domain_of(email)),
    )
    return matches[0] if matches else None


async def is_email_in_tenant_domains(directory, tenant_id: UUID, email: str) -> bool:
    domains = await directory.accepted_domains(tenant_id)
    return email_domain_of(email) in {d.strip().lower() for d in domains if d}
