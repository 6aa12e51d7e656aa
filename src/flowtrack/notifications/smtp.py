"""SMTP mail transport."""

import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from flowtrack.notifications.base import Mailer, Message

logger = logging.getLogger(__name__)


class SMTPMailer(Mailer):
    """Deliver messages through an SMTP server."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        sender: str = "Flowtrack <noreply@localhost>",
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        """Initialize SMTP mailer.

        Args:
            host: SMTP server host
            port: SMTP server port
            sender: From address
            username: Optional login user
            password: Optional login password
            use_tls: Upgrade the connection with STARTTLS
            timeout: Socket timeout in seconds
        """
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def build_email(self, message: Message) -> EmailMessage:
        email = EmailMessage()
        email["From"] = self.sender
        email["To"] = message.to
        email["Subject"] = message.subject
        email.set_content(message.body)
        return email

    def send(self, message: Message) -> bool:
        """Deliver a message; failures are logged and reported as False."""
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(self.build_email(message))
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send mail to %s: %s", message.to, e)
            return False

        logger.info("Sent '%s' to %s", message.subject, message.to)
        return True
