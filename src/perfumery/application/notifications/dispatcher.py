"""Notification dispatcher: fire both channels, collect both outcomes.

Order persistence failures are hard errors; notification failures are
soft.  ``dispatch`` never raises: every channel error or timeout becomes
a ``ChannelOutcome`` in the returned ``NotificationResult``, and the
caller returns the committed order regardless.
"""

from __future__ import annotations

import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout

import structlog

from perfumery.application.notifications.channels import (
    ChannelOutcome,
    EmailChannel,
    NotificationKind,
    NotificationResult,
    SmsChannel,
    SmsMessage,
)
from perfumery.application.notifications.templates import MessageComposer
from perfumery.domain.model.order import Order

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class NotificationDispatcher:

    def __init__(
        self,
        email_channel: EmailChannel,
        sms_channel: SmsChannel,
        composer: MessageComposer | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._email_channel = email_channel
        self._sms_channel = sms_channel
        self._composer = composer or MessageComposer()
        self._timeout_seconds = timeout_seconds

    def dispatch(self, order: Order, kind: NotificationKind) -> NotificationResult:
        """Send the SMS (always) and the email (when the customer gave one).

        Both channels run concurrently; neither waits on the other's
        outcome.  Each is bounded by the dispatcher timeout.
        """
        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="notify")
        try:
            sms_future = executor.submit(self._send_sms, order, kind)
            email_future = (
                executor.submit(self._send_email, order, kind)
                if order.customer.email
                else None
            )
            deadline = time.monotonic() + self._timeout_seconds
            sms_outcome = self._collect("sms", sms_future, deadline)
            email_outcome = (
                self._collect("email", email_future, deadline)
                if email_future is not None
                else None
            )
        finally:
            # A timed-out send keeps its worker thread; do not wait for it.
            executor.shutdown(wait=False, cancel_futures=True)

        result = NotificationResult(email=email_outcome, sms=sms_outcome)
        logger.info(
            "notifications_dispatched",
            order_number=order.order_number,
            kind=kind.name,
            new_status=kind.new_status,
            **{f"{name}_ok": outcome.success for name, outcome in _outcomes(result)},
        )
        return result

    # --- Internal helpers -----------------------------------------------------

    def _send_sms(self, order: Order, kind: NotificationKind) -> None:
        if kind.is_confirmation:
            body = self._composer.confirmation_sms(order)
        else:
            body = self._composer.status_sms(order, kind.new_status or "")
        self._sms_channel.send(SmsMessage(phone=order.customer.phone, body=body))

    def _send_email(self, order: Order, kind: NotificationKind) -> None:
        if kind.is_confirmation:
            message = self._composer.confirmation_email(order)
        else:
            message = self._composer.status_email(order, kind.new_status or "")
        self._email_channel.send(message)

    def _collect(self, channel: str, future: Future, deadline: float) -> ChannelOutcome:
        remaining = max(deadline - time.monotonic(), 0.0)
        try:
            future.result(timeout=remaining)
        except FutureTimeout:
            logger.warning("notification_timeout", channel=channel, timeout=self._timeout_seconds)
            return ChannelOutcome.failed(
                f"{channel} delivery timed out after {self._timeout_seconds:g}s"
            )
        except Exception as exc:
            logger.error("notification_failed", channel=channel, error=str(exc))
            return ChannelOutcome.failed(str(exc) or type(exc).__name__)
        return ChannelOutcome.ok()


def _outcomes(result: NotificationResult) -> list[tuple[str, ChannelOutcome]]:
    pairs: list[tuple[str, ChannelOutcome]] = [("sms", result.sms)]
    if result.email is not None:
        pairs.append(("email", result.email))
    return pairs
