"""Authentication router for registration, login, password reset and invitations."""

import logging

from fastapi import APIRouter, Response, status

from warden.presentation.api.dependencies import (
    Credentials,
    CurrentUser,
    DBSession,
    Sessions,
)
from warden.presentation.api.schemas.auth import (
    CurrentUserResponse,
    ForgotPasswordRequest,
    InviteRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    ResetTokenValidityResponse,
    TokenResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Invalid email or password"},
        403: {"description": "Invitation missing, invalid or for another email"},
        409: {"description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    credential_service: Credentials,
    session: DBSession,
) -> UserResponse:
    user = await credential_service.register(
        email=request.email,
        password=request.password,
        invitation_token=request.token,
    )
    await session.commit()

    return UserResponse(
        id=user.id,
        email=user.email,
        is_email_verified=user.is_email_verified,
    )


@router.post(
    "/login",
    summary="Log in and obtain a session token",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    session_service: Sessions,
    session: DBSession,
) -> TokenResponse:
    token = await session_service.log_in(request.email, request.password)
    # Persists a password hash upgraded during login
    await session.commit()
    return TokenResponse(token=token)


@router.get(
    "/me",
    summary="Get the authenticated user",
    responses={
        200: {"description": "Current user"},
        401: {"description": "Missing, invalid or expired token"},
    },
)
async def me(user: CurrentUser) -> CurrentUserResponse:
    return CurrentUserResponse(user_id=user.id, email=user.email)


@router.post(
    "/password",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Request a password reset email",
    responses={
        204: {"description": "Reset email handed to the notifications service"},
        404: {"description": "No user with this email"},
        502: {"description": "Notifications service rejected the request"},
        503: {"description": "Notifications service unreachable"},
        504: {"description": "Notifications service timed out"},
    },
)
async def forgot_password(
    request: ForgotPasswordRequest,
    credential_service: Credentials,
) -> Response:
    await credential_service.forgot_password(request.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/password",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Set a new password with a reset token",
    responses={
        204: {"description": "Password updated"},
        400: {"description": "New password too weak"},
        401: {"description": "Reset token invalid or expired"},
        404: {"description": "User no longer exists"},
    },
)
async def reset_password(
    request: ResetPasswordRequest,
    credential_service: Credentials,
    session: DBSession,
) -> Response:
    await credential_service.update_password_with_token(
        token=request.token,
        new_password=request.new_password,
    )
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/password/reset-token/{token}/valid",
    summary="Check whether a password reset token is still valid",
)
async def reset_token_is_valid(
    token: str,
    credential_service: Credentials,
) -> ResetTokenValidityResponse:
    is_valid = await credential_service.reset_password_token_is_valid(token)
    return ResetTokenValidityResponse(is_valid=is_valid)


@router.post(
    "/invitation",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Invite an admin by email",
    responses={
        204: {"description": "Invitation handed to the notifications service"},
        400: {"description": "Invalid email"},
        401: {"description": "Authentication required"},
        409: {"description": "Email already registered"},
    },
)
async def invite(
    request: InviteRequest,
    user: CurrentUser,
    credential_service: Credentials,
) -> Response:
    logger.info("User %s invites %s", user.id, request.email)
    await credential_service.invite_user(request.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
