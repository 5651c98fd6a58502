"""Credential service for registration, password reset and invitations."""

from __future__ import annotations

import asyncio
import hmac
import logging
from typing import TYPE_CHECKING
from uuid import UUID

from warden_auth import (
    InvalidTokenError,
    PasswordHashingService,
    TokenCodec,
    TokenPayload,
    TokenPolicies,
)
from warden_identity.application.ports import NotificationKind, NotificationSender
from warden_identity.application.token_claims import (
    EMAIL_CLAIM,
    TOKEN_PARAM,
    USER_ID_CLAIM,
)
from warden_identity.domain.user import (
    Email,
    EmailAlreadyUsedError,
    User,
    UserNotFoundError,
    normalize_email,
)
from warden_identity.exceptions import RegistrationDeniedError

if TYPE_CHECKING:
    from warden_identity.domain.user import UserRepository

logger = logging.getLogger(__name__)


class CredentialService:
    """
    Application service for credential lifecycle.

    Orchestrates warden_auth infrastructure (password hashing, tokens)
    with the User domain and the notification port to provide:
    - Registration (optionally bound to an invitation)
    - Password reset request, token validity check and password update
    - Admin invitations

    Each token purpose is signed with its own secret and lifetime, taken
    from the injected TokenPolicies.
    """

    def __init__(  # noqa: PLR0913
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        token_codec: TokenCodec,
        notification_sender: NotificationSender,
        token_policies: TokenPolicies,
        master_registration_token: str,
        require_invitation: bool = False,
    ):
        if not master_registration_token:
            msg = "Master registration token cannot be empty"
            raise ValueError(msg)

        self._user_repo = user_repository
        self._password_service = password_service
        self._token_codec = token_codec
        self._notification_sender = notification_sender
        self._policies = token_policies
        self._master_token = master_registration_token
        self._require_invitation = require_invitation

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    async def register(
        self,
        email: str,
        password: str,
        invitation_token: str | None = None,
    ) -> User:
        """Register a new user.

        The invitation is checked before the email is looked up, so a bad
        invitation never reveals whether the address is taken.

        Raises
        ------
        RegistrationDeniedError
            If the invitation is missing (when required), invalid, expired
            or bound to another email
        EmailAlreadyUsedError
            If the email already belongs to a user
        InvalidEmailError
            If the email is malformed
        WeakPasswordError
            If the password is too short or too long
        """
        normalized = normalize_email(email)
        logger.debug("Attempting to register user with email: %s", normalized)

        email_verified = self._validate_register_token(invitation_token, normalized)

        if await self._email_is_used(normalized):
            raise EmailAlreadyUsedError(normalized)

        email_obj = Email(normalized)
        self._password_service.validate_strength(password)

        password_hash = await asyncio.to_thread(self._password_service.hash, password)
        user = User.create(email_obj, password_hash, is_email_verified=email_verified)
        saved = await self._user_repo.save(user)

        logger.info("User registered: %s (id: %s)", saved.email, saved.id)
        return saved

    def _validate_register_token(self, token: str | None, email: str) -> bool:
        """Check the invitation binding.

        Returns True when the email ownership is proven by an invitation.
        """
        if token is None:
            if self._require_invitation:
                msg = "An invitation is required to register."
                raise RegistrationDeniedError(msg)
            return False

        if hmac.compare_digest(token.encode("utf-8"), self._master_token.encode("utf-8")):
            logger.debug("Registration of %s uses the master token", email)
            return False

        try:
            payload = self._token_codec.verify_for(self._policies.invitation, token)
        except InvalidTokenError as e:
            msg = "Invitation is invalid or has expired."
            raise RegistrationDeniedError(msg) from e

        invited_email = normalize_email(payload.claims.get(EMAIL_CLAIM, ""))
        if invited_email != email:
            msg = "Email does not match the token."
            raise RegistrationDeniedError(msg)

        return True

    async def _email_is_used(self, email: str) -> bool:
        return await self._user_repo.find_by_email(email) is not None

    # -------------------------------------------------------------------------
    # Password reset
    # -------------------------------------------------------------------------

    async def forgot_password(self, email: str) -> None:
        """Send a password reset token to the user's email.

        Unknown emails fail explicitly, unlike login which hides whether an
        account exists.

        Raises
        ------
        UserNotFoundError
            If no user has this email
        NotificationDeliveryError
            If the notification could not be handed off
        """
        normalized = normalize_email(email)
        logger.debug("Received request to reset password for: %s", normalized)

        user = await self._user_repo.find_by_email(normalized)
        if user is None:
            raise UserNotFoundError(normalized)

        token = self._token_codec.issue_for(
            self._policies.password_reset,
            {USER_ID_CLAIM: str(user.id)},
        )

        await self._notification_sender.send(
            NotificationKind.PASSWORD_RESET,
            {user.email},
            {TOKEN_PARAM: token},
        )
        logger.info("Password reset notification sent for user: %s", user.id)

    async def reset_password_token_is_valid(self, token: str) -> bool:
        """Check whether a password reset token is still valid. Never raises."""
        try:
            self._verify_reset_token(token)
        except InvalidTokenError as e:
            logger.debug("Password reset token rejected: %s", e.message)
            return False
        return True

    async def update_password_with_token(self, token: str, new_password: str) -> None:
        """Set a new password using a password reset token.

        Raises
        ------
        TokenExpiredError
            If the token has expired
        InvalidTokenError
            If the token is forged, malformed or of another purpose
        WeakPasswordError
            If the new password is too short or too long
        UserNotFoundError
            If the user referenced by the token no longer exists
        """
        payload = self._verify_reset_token(token)

        try:
            user_id = UUID(payload.claim(USER_ID_CLAIM))
        except ValueError as e:
            msg = "Password reset token carries a malformed user id"
            raise InvalidTokenError(msg) from e

        await self._update_password(user_id, new_password)

    def _verify_reset_token(self, token: str) -> TokenPayload:
        return self._token_codec.verify_for(self._policies.password_reset, token)

    async def _update_password(self, user_id: UUID, new_password: str) -> None:
        self._password_service.validate_strength(new_password)
        password_hash = await asyncio.to_thread(self._password_service.hash, new_password)

        await self._user_repo.update_user_password(user_id, password_hash)
        logger.info("Password updated for user: %s", user_id)

    # -------------------------------------------------------------------------
    # Invitations
    # -------------------------------------------------------------------------

    async def invite_user(self, email: str) -> None:
        """Invite an admin to register with the given email.

        No password is set here; the invitee chooses one at registration,
        presenting the invitation token bound to this email.

        Raises
        ------
        EmailAlreadyUsedError
            If the email already belongs to a user
        InvalidEmailError
            If the email is malformed
        NotificationDeliveryError
            If the invitation could not be handed off
        """
        normalized = normalize_email(email)
        logger.debug("Received request to invite: %s", normalized)

        if await self._email_is_used(normalized):
            raise EmailAlreadyUsedError(normalized)

        email_obj = Email(normalized)
        token = self._token_codec.issue_for(
            self._policies.invitation,
            {EMAIL_CLAIM: email_obj.value},
        )

        await self._notification_sender.send(
            NotificationKind.ADMIN_INVITATION,
            {email_obj.value},
            {TOKEN_PARAM: token},
        )
        logger.info("Invitation sent to %s", email_obj.value)
