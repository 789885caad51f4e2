from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from src.app.exceptions import (
    DuplicateEntityError,
    LicenseAssignmentFailedError,
    LockedGroupError,
    NotFoundError,
    PrincipalServiceError,
    PromotionFailedError,
    UpstreamUnavailableError,
    ValidationFailedError,
)
from .error import ClientError
import logging

logger = logging.getLogger(__name__)

# Most specific first
ERROR_STATUS_CODES = [
    (DuplicateEntityError, status.HTTP_409_CONFLICT),
    (ValidationFailedError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PromotionFailedError, status.HTTP_409_CONFLICT),
    (LicenseAssignmentFailedError, status.HTTP_409_CONFLICT),
    (LockedGroupError, status.HTTP_409_CONFLICT),
    (UpstreamUnavailableError, status.HTTP_502_BAD_GATEWAY),
]


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {
        "code": exc.base_error.code,
        "message": exc.base_error.message,
        **exc.base_error.details,
    }
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_principal_service_error(request: Request, exc: PrincipalServiceError):
    status_code = next(
        (code for error_type, code in ERROR_STATUS_CODES if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    error_dict = {"code": exc.error.code, "message": exc.error.message, **exc.error.details}
    if isinstance(exc, ValidationFailedError):
        error_dict["errors"] = [
            {"property_name": f.property_name, "error_message": f.error_message}
            for f in exc.failures
        ]

    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR or isinstance(
        exc, UpstreamUnavailableError
    ):
        logger.error(f"Request failed: {error_dict}")
    else:
        logger.warning(f"Request rejected: {error_dict}")
    return JSONResponse(status_code=status_code, content={"error": error_dict})


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Principal Service", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import groups, health_check, idp, invites, users

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(users.router, tags=["Users"])
    app.include_router(groups.router, tags=["Groups"])
    app.include_router(idp.router, tags=["IDP"])
    app.include_router(invites.router, tags=["Invites"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(PrincipalServiceError, handle_principal_service_error)

    return app
