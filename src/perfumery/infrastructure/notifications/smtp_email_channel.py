"""Email delivery over SMTP."""

from __future__ import annotations

import smtplib
from email.message import EmailMessage as MimeMessage
from email.utils import formataddr

import structlog

from perfumery.application.notifications.channels import EmailChannel, EmailMessage
from perfumery.domain.exceptions import NotificationChannelFailure

logger = structlog.get_logger(__name__)


class SmtpEmailChannel(EmailChannel):
    """Sends HTML mail through an authenticated SMTP server (Gmail by default).

    ``timeout`` bounds every socket operation so a hung server cannot
    hold a dispatcher worker forever.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str | None,
        password: str | None,
        sender_name: str,
        use_ssl: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender_name = sender_name
        self._use_ssl = use_ssl
        self._timeout = timeout

    def send(self, message: EmailMessage) -> None:
        if not self._username or not self._password:
            raise NotificationChannelFailure("Email credentials are not configured")

        mime = MimeMessage()
        mime["From"] = formataddr((self._sender_name, self._username))
        mime["To"] = message.to
        mime["Subject"] = message.subject
        mime.set_content("This message requires an HTML-capable mail client.")
        mime.add_alternative(message.html, subtype="html")

        try:
            if self._use_ssl:
                server = smtplib.SMTP_SSL(self._host, self._port, timeout=self._timeout)
            else:
                server = smtplib.SMTP(self._host, self._port, timeout=self._timeout)
            with server:
                if not self._use_ssl:
                    server.starttls()
                server.login(self._username, self._password)
                server.send_message(mime)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationChannelFailure(f"SMTP delivery failed: {exc}") from exc

        logger.info("email_sent", to=message.to, subject=message.subject)
