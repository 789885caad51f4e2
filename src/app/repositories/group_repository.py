from src.app.repositories.base import IRepository
from src.domain.entities import Group


class IGroupRepository(IRepository[Group]):
    """Group repository interface - partitioned by tenant id"""
