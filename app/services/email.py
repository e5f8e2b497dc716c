"""Outbound email senders."""

import logging
import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage

from app.config import Settings, get_settings

logger = logging.getLogger("happy_homes")


class EmailSender(ABC):
    """Delivers a single message to one recipient. Raises on failure."""

    @abstractmethod
    def send(self, to: str, subject: str, body: str, html: str | None = None) -> None:
        pass


class ConsoleEmailSender(EmailSender):
    """Writes messages to the application log instead of delivering them."""

    def send(self, to: str, subject: str, body: str, html: str | None = None) -> None:
        logger.info("EMAIL to=%s subject=%r\n%s", to, subject, body)


class SmtpEmailSender(EmailSender):
    """Sends through an SMTP relay with a bounded connection timeout."""

    def __init__(self, settings: Settings) -> None:
        self.host = settings.EMAIL_HOST
        self.port = settings.EMAIL_PORT
        self.use_tls = settings.EMAIL_USE_TLS
        self.username = settings.EMAIL_HOST_USER
        self.password = settings.EMAIL_HOST_PASSWORD
        self.from_address = settings.EMAIL_FROM
        self.timeout = settings.EMAIL_TIMEOUT_SECONDS

    def build_message(self, to: str, subject: str, body: str, html: str | None = None) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.from_address
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)
        if html:
            message.add_alternative(html, subtype="html")
        return message

    def send(self, to: str, subject: str, body: str, html: str | None = None) -> None:
        message = self.build_message(to, subject, body, html)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password)
            smtp.send_message(message)
        logger.info("Email sent to %s (%s)", to, subject)


_email_sender: EmailSender | None = None


def get_email_sender() -> EmailSender:
    """Get singleton email sender for the configured backend."""
    global _email_sender
    if _email_sender is None:
        settings = get_settings()
        if settings.EMAIL_BACKEND == "smtp":
            _email_sender = SmtpEmailSender(settings)
        else:
            _email_sender = ConsoleEmailSender()
    return _email_sender
