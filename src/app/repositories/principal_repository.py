from src.app.repositories.base import IRepository
from src.domain.entities import Principal


class IPrincipalRepository(IRepository[Principal]):
    """Principal repository interface - partitioned by email domain"""
