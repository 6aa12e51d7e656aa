"""Outbound mail interface."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Message:
    """A rendered email ready for delivery."""

    to: str
    subject: str
    body: str


class Mailer(ABC):
    """Abstract mail transport.

    Implementations report delivery failure by returning False instead of
    raising; callers log it and do not retry.
    """

    @abstractmethod
    def send(self, message: Message) -> bool:
        """Deliver a message. Returns True on success."""
        pass


class LogMailer(Mailer):
    """Mailer that writes messages to the log instead of delivering them."""

    def send(self, message: Message) -> bool:
        logger.info("Mail to %s: %s\n%s", message.to, message.subject, message.body)
        return True
