"""HTTP client for the notifications service."""

from __future__ import annotations

import logging
from typing import AbstractSet, Any, Mapping

import httpx

from warden_identity.application.ports import NotificationKind, NotificationSender
from warden_identity.exceptions import (
    NotificationRejectedError,
    NotificationServiceTimeoutError,
    NotificationServiceUnavailableError,
)

logger = logging.getLogger(__name__)

EMAIL_CHANNEL = "email"


class NotificationServiceClient(NotificationSender):
    """Hands notifications to the delivery service over HTTP.

    Failures are raised, never swallowed: a password reset or invitation
    whose message could not be handed off fails as a whole.
    """

    def __init__(  # noqa: PLR0913
        self,
        base_url: str,
        send_path: str = "/v1/notifications",
        sender: str = "no-reply@warden.local",
        timeout: float = 10.0,
        enabled: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._send_path = "/" + send_path.lstrip("/")
        self._sender = sender
        self._timeout = timeout
        self._enabled = enabled
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def send(
        self,
        kind: NotificationKind,
        destinations: AbstractSet[str],
        params: Mapping[str, str],
    ) -> None:
        if not self._enabled:
            logger.warning(
                "Notifications disabled, %s not sent to %s",
                kind.value,
                ", ".join(sorted(destinations)),
            )
            return

        client = await self._get_client()
        try:
            response = await client.post(
                self._send_path,
                json=self._build_payload(kind, destinations, params),
            )
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            logger.warning("Notification service connection failed: %s", e)
            raise NotificationServiceUnavailableError from e
        except httpx.TimeoutException as e:
            logger.warning("Notification service timeout: %s", e)
            raise NotificationServiceTimeoutError from e
        except httpx.TransportError as e:
            logger.warning("Notification service transport error: %s", e)
            raise NotificationServiceUnavailableError from e

        if not response.is_success:
            logger.warning(
                "Notification service returned error %d: %s",
                response.status_code,
                response.text[:200] if response.text else "no body",
            )
            raise NotificationRejectedError(response.status_code)

        logger.debug("Notification %s handed off", kind.value)

    def _build_payload(
        self,
        kind: NotificationKind,
        destinations: AbstractSet[str],
        params: Mapping[str, str],
    ) -> dict[str, Any]:
        return {
            "type": kind.value,
            "params": dict(params),
            "notifications": {
                "type": EMAIL_CHANNEL,
                "destinations": sorted(destinations),
                "sender": self._sender,
            },
        }
