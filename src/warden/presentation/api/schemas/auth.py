"""Authentication schemas for request/response models.

Email and password rules are enforced by the identity services, not here,
so that malformed credentials map to the same 400 response everywhere.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Request schema for user registration."""

    email: str = Field(..., description="User's email address")
    password: str = Field(..., description="Password (at least 8 characters)")
    token: str | None = Field(
        default=None,
        description="Invitation token (or the master registration token)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123",
            },
        },
    )


class LoginRequest(BaseModel):
    """Request schema for user login."""

    email: str
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123",
            },
        },
    )


class ForgotPasswordRequest(BaseModel):
    """Request schema for requesting a password reset email."""

    email: str


class ResetPasswordRequest(BaseModel):
    """Request schema for setting a new password with a reset token."""

    token: str
    new_password: str


class InviteRequest(BaseModel):
    """Request schema for inviting an admin."""

    email: str


class UserResponse(BaseModel):
    """Response schema for a registered user."""

    id: UUID
    email: str
    is_email_verified: bool


class TokenResponse(BaseModel):
    """Response schema for a successful login."""

    token: str
    token_type: str = "bearer"


class CurrentUserResponse(BaseModel):
    """Response schema for the authenticated user."""

    user_id: UUID
    email: str


class ResetTokenValidityResponse(BaseModel):
    is_valid: bool
