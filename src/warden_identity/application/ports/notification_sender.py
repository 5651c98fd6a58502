"""Port for outbound notification delivery."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import AbstractSet, Mapping


class NotificationKind(str, Enum):
    """Notification templates known to the delivery service."""

    PASSWORD_RESET = "reset-password"
    ADMIN_INVITATION = "admin-invitation"


class NotificationSender(ABC):
    """Hands a notification to the delivery service.

    Delivery failures propagate to the caller as NotificationDeliveryError
    subclasses; nothing is retried.
    """

    @abstractmethod
    async def send(
        self,
        kind: NotificationKind,
        destinations: AbstractSet[str],
        params: Mapping[str, str],
    ) -> None:
        """Send one notification to every destination address.

        Raises
        ------
        NotificationServiceUnavailableError
            If the service could not be reached
        NotificationServiceTimeoutError
            If the request was sent but no reply arrived
        NotificationRejectedError
            If the service answered with a non-success status
        """
