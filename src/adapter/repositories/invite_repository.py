from src.adapter.repositories.base import SqlModelRepository
from src.app.repositories.invite_repository import IInviteRepository
from src.domain.entities import Invite


class InviteRepository(SqlModelRepository[Invite], IInviteRepository):
    """Invite repository implementation using SQLModel"""

    model = Invite
    partition_column = "email_domain"
    order_column = "created_date"

    def _partition_value(self, key: str) -> str:
        return key.lower()
