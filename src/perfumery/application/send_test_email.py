"""Application service: Send Test Email use case.

Unlike order notifications this is a direct, hard call: the admin asked
for a diagnostic email, so a delivery failure is reported as an error.
"""

from __future__ import annotations

import structlog

from perfumery.application.notifications.channels import EmailChannel
from perfumery.application.notifications.templates import MessageComposer
from perfumery.domain.exceptions import NotificationChannelFailure, ValidationError

logger = structlog.get_logger(__name__)


class SendTestEmailHandler:

    def __init__(
        self,
        email_channel: EmailChannel,
        composer: MessageComposer | None = None,
    ) -> None:
        self._email_channel = email_channel
        self._composer = composer or MessageComposer()

    def handle(self, to: str | None) -> None:
        address = (to or "").strip()
        if not address:
            raise ValidationError("Email is required")

        message = self._composer.test_email(address)
        try:
            self._email_channel.send(message)
        except Exception as exc:
            raise NotificationChannelFailure(f"Failed to send test email: {exc}") from exc
        logger.info("test_email_sent", to=address)
