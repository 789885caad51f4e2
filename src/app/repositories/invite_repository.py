from src.app.repositories.base import IRepository
from src.domain.entities import Invite


class IInviteRepository(IRepository[Invite]):
    """Invite repository interface - partitioned by email domain"""
