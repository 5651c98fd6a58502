"""Centralized exception handlers for the FastAPI application.

Identity exceptions are mapped to HTTP responses with a consistent error
format. The services raise precise error kinds; this is the only place
where messages are redacted for clients.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Usage:
    from warden.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from dataclasses import dataclass

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from warden_identity.exceptions import (
    AuthError,
    InvalidCredentialFormatError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotificationDeliveryError,
    NotificationRejectedError,
    NotificationServiceTimeoutError,
    NotificationServiceUnavailableError,
    RegistrationDeniedError,
    StorageConflictError,
    StorageError,
    TokenExpiredError,
)
from warden_identity.domain.user import EmailAlreadyUsedError, UserNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorMapping:
    status_code: int
    code: str
    # Replaces the exception message in the response when set
    public_message: str | None = None


# =============================================================================
# Exception to HTTP Status Mapping
# =============================================================================

# Ordered: subclasses must come before their bases.
EXCEPTION_MAPPINGS: list[tuple[type[Exception], ErrorMapping]] = [
    # 400 Bad Request - malformed email or password
    (
        InvalidCredentialFormatError,
        ErrorMapping(status.HTTP_400_BAD_REQUEST, "INVALID_CREDENTIAL_FORMAT"),
    ),
    # 401 Unauthorized
    (
        InvalidCredentialsError,
        ErrorMapping(status.HTTP_401_UNAUTHORIZED, "INVALID_CREDENTIALS"),
    ),
    (
        TokenExpiredError,
        ErrorMapping(status.HTTP_401_UNAUTHORIZED, "TOKEN_EXPIRED", "Token has expired"),
    ),
    (
        InvalidTokenError,
        ErrorMapping(status.HTTP_401_UNAUTHORIZED, "INVALID_TOKEN", "Invalid token"),
    ),
    # 403 Forbidden
    (
        RegistrationDeniedError,
        ErrorMapping(status.HTTP_403_FORBIDDEN, "REGISTRATION_DENIED"),
    ),
    # 404 Not Found
    (
        UserNotFoundError,
        ErrorMapping(status.HTTP_404_NOT_FOUND, "USER_NOT_FOUND", "User not found"),
    ),
    # 409 Conflict
    (
        EmailAlreadyUsedError,
        ErrorMapping(
            status.HTTP_409_CONFLICT,
            "EMAIL_ALREADY_USED",
            "Email is already being used",
        ),
    ),
    (
        StorageConflictError,
        ErrorMapping(status.HTTP_409_CONFLICT, "CONFLICT", "User already exists"),
    ),
    # 500 Internal Server Error
    (
        StorageError,
        ErrorMapping(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "STORAGE_ERROR",
            "An internal error occurred",
        ),
    ),
    # 5xx - notifications service
    (
        NotificationServiceUnavailableError,
        ErrorMapping(status.HTTP_503_SERVICE_UNAVAILABLE, "NOTIFICATION_SERVICE_UNAVAILABLE"),
    ),
    (
        NotificationServiceTimeoutError,
        ErrorMapping(status.HTTP_504_GATEWAY_TIMEOUT, "NOTIFICATION_SERVICE_TIMEOUT"),
    ),
    (
        NotificationRejectedError,
        ErrorMapping(
            status.HTTP_502_BAD_GATEWAY,
            "NOTIFICATION_REJECTED",
            "The notification could not be delivered.",
        ),
    ),
]

INTERNAL_ERROR = ErrorMapping(
    status.HTTP_500_INTERNAL_SERVER_ERROR,
    "INTERNAL_ERROR",
    "An internal error occurred",
)


def get_error_mapping(exc: Exception) -> ErrorMapping:
    """Return the mapping of the most specific matching exception type."""
    for exc_type, mapping in EXCEPTION_MAPPINGS:
        if isinstance(exc, exc_type):
            return mapping
    return INTERNAL_ERROR


def _message_of(exc: Exception) -> str:
    return getattr(exc, "message", None) or str(exc)


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
        },
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    async def identity_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle identity exceptions with structured response.

        Logs the full exception message while returning a safe message
        to the client.
        """
        mapping = get_error_mapping(exc)
        message = mapping.public_message or _message_of(exc)

        if mapping.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Identity exception on %s %s: %s (code=%s)",
                request.method,
                request.url.path,
                _message_of(exc),
                mapping.code,
            )
        else:
            logger.warning(
                "Identity exception on %s %s: %s (code=%s)",
                request.method,
                request.url.path,
                _message_of(exc),
                mapping.code,
            )

        headers = None
        if mapping.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        return _create_error_response(
            status_code=mapping.status_code,
            message=message,
            code=mapping.code,
            headers=headers,
        )

    for exc_type in (
        AuthError,
        EmailAlreadyUsedError,
        UserNotFoundError,
        StorageError,
        NotificationDeliveryError,
    ):
        app.add_exception_handler(exc_type, identity_exception_handler)

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=INTERNAL_ERROR.status_code,
            message=INTERNAL_ERROR.public_message or "An internal error occurred",
            code=INTERNAL_ERROR.code,
        )
