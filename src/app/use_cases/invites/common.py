import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Set

from src.app.services.notification_gateway import INotificationGateway, InviteEmail
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Invite, email_domain_of

logger = logging.getLogger(__name__)


def group_by_domain(emails: Iterable[str]) -> Dict[str, Set[str]]:
    """Lower-cased emails keyed by their domain partition"""
    grouped: Dict[str, Set[str]] = defaultdict(set)
    for email in emails:
        grouped[email_domain_of(email)].add(email.lower())
    return grouped


async def send_invites(
    uow: UnitOfWork, notifications: INotificationGateway, invites: List[Invite]
) -> List[Invite]:
    """
    Email the invites and stamp last_invited_date on the accepted ones.

    Returns the invites with their persisted state.
    """
    responses = await notifications.send_invite(
        [
            InviteEmail(email=i.email, first_name=i.first_name, last_name=i.last_name)
            for i in invites
        ]
    )
    accepted = {r.email.lower() for r in responses if r.accepted}
    if len(accepted) < len(invites):
        logger.warning(f"{len(invites) - len(accepted)} invite emails were not accepted")

    sent_at = datetime.utcnow()
    stamped: List[Invite] = []
    for invite in invites:
        if invite.email in accepted:
            invite.last_invited_date = sent_at
            invite = await uow.invites.update(invite.id, invite)
            await uow.commit()
        stamped.append(invite)
    return stamped
