"""
Outbound email over SMTP.
"""

import logging
import smtplib
from email.message import EmailMessage

from fastapi import Request

from app.core.config import Settings

logger = logging.getLogger(__name__)


class MailDeliveryError(Exception):
    """Raised when the SMTP transport refuses or cannot deliver a message."""


class Mailer:
    """Plain-text mail sender configured from settings."""

    def __init__(self, settings: Settings):
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.user = settings.SMTP_USER
        self.password = settings.SMTP_PASSWORD
        self.use_tls = settings.SMTP_USE_TLS
        self.timeout = settings.SMTP_TIMEOUT
        self.sender = settings.MAIL_FROM
        self.otp_subject = settings.MAIL_SUBJECT

    def send(self, to: str, subject: str, body: str) -> None:
        """
        Send a single plain-text email.

        Raises:
            MailDeliveryError: If the SMTP server is unreachable or rejects the message
        """
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.user and self.password:
                    smtp.login(self.user, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to}: {str(e)}")
            raise MailDeliveryError(str(e)) from e

        logger.info(f"📧 Email sent to {to}")

    def send_otp(self, email: str, code: str, expiry_minutes: int) -> None:
        body = (
            f"Your OTP code is {code}.\n\n"
            f"It is valid for {expiry_minutes} minutes. "
            f"If you did not request this code, you can ignore this email."
        )
        self.send(email, self.otp_subject, body)


def get_mailer(request: Request) -> Mailer:
    """Return the mailer created for this application."""
    return request.app.state.mailer
