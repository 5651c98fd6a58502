"""FastAPI dependency injection for the Warden API.

Provides dependencies for:
- Database sessions
- Identity services (credential, session, request authentication)
- Authentication (current user from the bearer session token)

Every factory below takes its configuration from ``get_api_settings``, which
``create_app(settings=...)`` overrides. Shared resources (engine, session
maker, notifications client) are cached per configuration value, so an app
built with explicit settings never falls back to the environment.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from warden.presentation.api.config import get_api_settings
from warden_auth import PasswordHashingService, TokenCodec
from warden_config.settings import Settings
from warden_identity import (
    CredentialService,
    IdentityServices,
    NotificationSender,
    SessionService,
    User,
    UserContext,
    build_identity_services,
)
from warden_identity.application.middleware import USER_CONTEXT_KEY
from warden_identity.infrastructure.notifications import NotificationServiceClient
from warden_identity.infrastructure.persistence.sqlalchemy import (
    Base,
    UserRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

# Security scheme for bearer session tokens
security = HTTPBearer(auto_error=False)

APISettings = Annotated[Settings, Depends(get_api_settings)]


def _prepare_database_url(url: str) -> str:
    """Create the data directory of a file-backed SQLite URL."""
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (one per database URL)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=4)
def get_engine(database_url: str) -> AsyncEngine:
    """
    Get the shared async database engine for a database URL.

    The engine manages the connection pool and is reused across all requests.

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        _prepare_database_url(database_url),
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=4)
def get_session_maker(database_url: str) -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker for a database URL.

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(database_url),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session(settings: APISettings) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Routes commit after a successful mutating operation; anything left
    uncommitted when the request fails is rolled back.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker(settings.database_url)() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Database Schema Management
# -----------------------------------------------------------------------------


async def create_tables(database_url: str) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    """
    engine = get_engine(database_url)
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


async def dispose_engine(database_url: str) -> None:
    """Close the pooled connections of a database URL's engine."""
    if get_engine.cache_info().currsize:
        await get_engine(database_url).dispose()
        get_session_maker.cache_clear()
        get_engine.cache_clear()


# -----------------------------------------------------------------------------
# Notifications (one client per configuration)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=4)
def _get_notification_client(  # noqa: PLR0913
    base_url: str,
    send_path: str,
    sender: str,
    timeout: float,
    enabled: bool,
) -> NotificationServiceClient:
    return NotificationServiceClient(
        base_url=base_url,
        send_path=send_path,
        sender=sender,
        timeout=timeout,
        enabled=enabled,
    )


def get_notification_client(settings: Settings) -> NotificationServiceClient:
    """Get the shared notifications service client for these settings."""
    return _get_notification_client(
        settings.notifications_base_url,
        settings.notifications_send_path,
        settings.notifications_sender,
        settings.notifications_timeout,
        settings.notifications_enabled,
    )


async def close_notification_client(settings: Settings) -> None:
    """Close the shared client if it was ever created."""
    if _get_notification_client.cache_info().currsize:
        await get_notification_client(settings).close()
        _get_notification_client.cache_clear()


def get_notification_sender(settings: APISettings) -> NotificationSender:
    """Get the notification sender used by the identity services."""
    return get_notification_client(settings)


# -----------------------------------------------------------------------------
# Identity Services
# -----------------------------------------------------------------------------


def get_password_service(
    settings: Settings = Depends(get_api_settings),
) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.password_hash_rounds)


def get_token_codec() -> TokenCodec:
    """Get token codec using the system clock."""
    return TokenCodec()


async def get_identity_services(
    session: DBSession,
    settings: Settings = Depends(get_api_settings),
    notification_sender: NotificationSender = Depends(get_notification_sender),
    password_service: PasswordHashingService = Depends(get_password_service),
    token_codec: TokenCodec = Depends(get_token_codec),
) -> IdentityServices:
    """
    Get the identity services bound to the request's database session.

    The session and credential services share one repository, so every
    read and write of a request goes through the same transaction.
    """
    return build_identity_services(
        settings=settings,
        user_repository=UserRepositorySQLAlchemy(session),
        notification_sender=notification_sender,
        password_service=password_service,
        token_codec=token_codec,
    )


# Type alias for injected identity services
Identity = Annotated[IdentityServices, Depends(get_identity_services)]


async def get_credential_service(services: Identity) -> CredentialService:
    return services.credential_service


async def get_session_service(services: Identity) -> SessionService:
    return services.session_service


Credentials = Annotated[CredentialService, Depends(get_credential_service)]
Sessions = Annotated[SessionService, Depends(get_session_service)]


# -----------------------------------------------------------------------------
# Current User (bearer session token)
# -----------------------------------------------------------------------------


async def get_current_user(
    request: Request,
    services: Identity,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Runs the request through the AuthMiddleware, which verifies the bearer
    session token and loads the user it references. The resolved user and
    its UserContext are stored on ``request.state``.

    Raises
    ------
    HTTPException
        401 if the token is missing, invalid, expired, or its user is gone
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    context: dict = {}
    result = await services.auth_middleware.authenticate_request(
        request.headers,
        context,
    )

    if not result.is_authenticated or result.user is None:
        logger.warning("Rejected request to %s: %s", request.url.path, result.reason)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    for key, value in context.items():
        setattr(request.state, key, value)

    return result.user


# Type alias for injected current user
CurrentUser = Annotated[User, Depends(get_current_user)]


async def get_user_context(
    request: Request,
    user: User = Depends(get_current_user),
) -> UserContext:
    """Get the UserContext attached to the request by get_current_user."""
    return getattr(request.state, USER_CONTEXT_KEY, None) or UserContext.create(user)


# Type alias for injected user context
CurrentUserContext = Annotated[UserContext, Depends(get_user_context)]
