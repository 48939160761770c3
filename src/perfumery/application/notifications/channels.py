"""Notification channel ports and outcome values.

A channel delivers one message and raises on failure.  Concrete channels
(SMTP email, HTTP SMS gateway) live in the infrastructure layer; the
dispatcher only sees these abstractions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    html: str


@dataclass(frozen=True)
class SmsMessage:
    phone: str
    body: str


class EmailChannel(ABC):

    @abstractmethod
    def send(self, message: EmailMessage) -> None:
        """Deliver *message*; raise NotificationChannelFailure (or any error) on failure."""


class SmsChannel(ABC):

    @abstractmethod
    def send(self, message: SmsMessage) -> None:
        """Deliver *message*; raise NotificationChannelFailure (or any error) on failure."""


@dataclass(frozen=True)
class ChannelOutcome:
    success: bool
    error: str | None = None

    @staticmethod
    def ok() -> ChannelOutcome:
        return ChannelOutcome(success=True)

    @staticmethod
    def failed(error: str) -> ChannelOutcome:
        return ChannelOutcome(success=False, error=error)

    def to_dict(self) -> dict:
        if self.success:
            return {"success": True}
        return {"success": False, "error": self.error}


@dataclass(frozen=True)
class NotificationResult:
    """Per-channel outcomes of one dispatch.  ``email`` is None when not attempted."""

    email: ChannelOutcome | None
    sms: ChannelOutcome

    def to_dict(self) -> dict:
        return {
            "email": self.email.to_dict() if self.email is not None else None,
            "sms": self.sms.to_dict(),
        }


@dataclass(frozen=True)
class NotificationKind:
    """``confirmation`` or ``status-update`` carrying the new status."""

    name: str
    new_status: str | None = None

    @staticmethod
    def confirmation() -> NotificationKind:
        return NotificationKind(name="confirmation")

    @staticmethod
    def status_update(new_status: str) -> NotificationKind:
        return NotificationKind(name="status-update", new_status=new_status)

    @property
    def is_confirmation(self) -> bool:
        return self.name == "confirmation"
