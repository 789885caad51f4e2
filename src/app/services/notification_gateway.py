from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel


class InviteEmail(BaseModel):
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class InviteEmailResult(BaseModel):
    email: str
    accepted: bool


class LockedNoticeRecipient(BaseModel):
    email: str
    first_name: str


class INotificationGateway(ABC):
    """Email delivery interface - application layer"""

    @abstractmethod
    async def send_welcome(self, email: str, first_name: str) -> bool:
        """Send the welcome email; returns whether it was accepted"""
        pass

    @abstractmethod
    async def send_locked_notice(
        self,
        admins: List[LockedNoticeRecipient],
        user_email: str,
        user_full_name: str,
    ) -> bool:
        """Tell tenant admins a new principal was locked for lack of a license"""
        pass

    @abstractmethod
    async def send_invite(self, invites: List[InviteEmail]) -> List[InviteEmailResult]:
        """Send invite emails; one result per delivered address"""
        pass
