from typing import List

from src.adapter.services.http_gateway import HttpGateway
from src.app.services.notification_gateway import (
    INotificationGateway,
    InviteEmail,
    InviteEmailResult,
    LockedNoticeRecipient,
)


class HttpNotificationGateway(HttpGateway, INotificationGateway):
    """Email service client"""

    service_name = "email-service"

    async def send_welcome(self, email: str, first_name: str) -> bool:
        payload = await self._request(
            "POST", "/emails/welcome", json={"email": email, "first_name": first_name}
        )
        return bool((payload or {}).get("accepted", False))

    async def send_locked_notice(
        self,
        admins: List[LockedNoticeRecipient],
        user_email: str,
        user_full_name: str,
    ) -> bool:
        payload = await self._request(
            "POST",
            "/emails/locked-notice",
            json={
                "admins": [admin.model_dump() for admin in admins],
                "user_email": user_email,
                "user_full_name": user_full_name,
            },
        )
        return bool((payload or {}).get("accepted", False))

    async def send_invite(self, invites: List[InviteEmail]) -> List[InviteEmailResult]:
        payload = await self._request(
            "POST",
            "/emails/invites",
            json={"invites": [invite.model_dump() for invite in invites]},
        )
        return [InviteEmailResult(**item) for item in payload or []]
