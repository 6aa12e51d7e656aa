"""Outbound notifications for flowtrack."""

from flowtrack.notifications.base import LogMailer, Mailer, Message
from flowtrack.notifications.smtp import SMTPMailer

__all__ = ["LogMailer", "Mailer", "Message", "SMTPMailer"]
