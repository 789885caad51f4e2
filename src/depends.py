from typing import Optional
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.directory_gateway import HttpDirectoryGateway
from src.adapter.services.license_gateway import HttpLicenseGateway
from src.adapter.services.notification_gateway import HttpNotificationGateway
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.provisioning_policy import ProvisioningPolicy
from src.app.validators import ValidatorRegistry, default_registry
from src.api.utils.jwt import verify_jwt

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


class CurrentUser(BaseModel):
    user_id: UUID
    tenant_id: Optional[UUID] = None


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def _upstream_client(base_url: str) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url, timeout=ApplicationConfig.UPSTREAM_TIMEOUT_SECONDS
    )


async def get_license_gateway():
    async with _upstream_client(ApplicationConfig.LICENSE_SERVICE_URL) as client:
        yield HttpLicenseGateway(client)


async def get_directory_gateway():
    async with _upstream_client(ApplicationConfig.TENANT_SERVICE_URL) as client:
        yield HttpDirectoryGateway(client)


async def get_notification_gateway():
    async with _upstream_client(ApplicationConfig.EMAIL_SERVICE_URL) as client:
        yield HttpNotificationGateway(client)


def get_provisioning_policy() -> ProvisioningPolicy:
    return ProvisioningPolicy.from_config(ApplicationConfig)


def get_validator_registry() -> ValidatorRegistry:
    return default_registry()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> CurrentUser:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        CurrentUser with user_id and tenant_id claims

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    token = credentials.credentials
    payload = verify_jwt(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    try:
        return CurrentUser(**payload)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token claims",
        )
