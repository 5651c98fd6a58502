"""Request and response models of the API."""

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

__all__ = [
    "CurrentUserResponse",
    "ForgotPasswordRequest",
    "InviteRequest",
    "LoginRequest",
    "RegisterRequest",
    "ResetPasswordRequest",
    "ResetTokenValidityResponse",
    "TokenResponse",
    "UserResponse",
]
