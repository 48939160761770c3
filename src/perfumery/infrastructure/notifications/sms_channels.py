"""SMS delivery channels."""

from __future__ import annotations

import time

import httpx
import structlog

from perfumery.application.notifications.channels import SmsChannel, SmsMessage
from perfumery.domain.exceptions import NotificationChannelFailure

logger = structlog.get_logger(__name__)


class HttpSmsChannel(SmsChannel):
    """Posts to an SSL Wireless style push API as a urlencoded form."""

    def __init__(
        self,
        api_url: str,
        username: str,
        password: str,
        sender_id: str = "HermanPerfume",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_url = api_url
        self._username = username
        self._password = password
        self._sender_id = sender_id
        self._client = client or httpx.Client(timeout=timeout)

    def send(self, message: SmsMessage) -> None:
        form = {
            "user": self._username,
            "pass": self._password,
            "msisdn": message.phone,
            "sid": self._sender_id,
            "msg": message.body,
            "csms_id": str(int(time.time() * 1000)),
        }
        try:
            response = self._client.post(self._api_url, data=form)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise NotificationChannelFailure(f"SMS gateway error: {exc}") from exc
        logger.info("sms_sent", phone=message.phone)


class LoggingSmsChannel(SmsChannel):
    """Stand-in used when no SMS gateway credentials are configured.

    The message is logged and counted as delivered.
    """

    def send(self, message: SmsMessage) -> None:
        logger.info("sms_would_be_sent", phone=message.phone, body=message.body)
