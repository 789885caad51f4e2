from src.adapter.repositories.base import SqlModelRepository
from src.app.repositories.principal_repository import IPrincipalRepository
from src.domain.entities import Principal


class PrincipalRepository(SqlModelRepository[Principal], IPrincipalRepository):
    """Principal repository implementation using SQLModel"""

    model = Principal
    partition_column = "email_domain"
    order_column = "created_date"

    def _partition_value(self, key: str) -> str:
        return key.lower()
