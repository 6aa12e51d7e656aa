"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional

from flowtrack.insights.base import InsightGenerator
from flowtrack.insights.http import HTTPInsightGenerator
from flowtrack.notifications.base import LogMailer, Mailer
from flowtrack.notifications.smtp import SMTPMailer
from flowtrack.utils.amount_parser import parse_magnitude


@dataclass(frozen=True)
class Settings:
    """Settings for the collaborators a flowtrack process talks to."""

    database_url: Optional[str] = None
    database_path: Optional[str] = None
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_tls: bool = True
    mail_from: str = "Flowtrack <noreply@localhost>"
    insights_url: Optional[str] = None
    insights_api_key: Optional[str] = None
    insights_timeout: float = 10.0
    budget_alert_threshold: Decimal = Decimal("80")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Load settings from FLOWTRACK_* environment variables.

        Raises:
            ValueError: If a numeric variable is not a number
        """
        env = os.environ if environ is None else environ
        return cls(
            database_url=env.get("FLOWTRACK_DATABASE_URL") or None,
            database_path=env.get("FLOWTRACK_DB_PATH") or None,
            smtp_host=env.get("FLOWTRACK_SMTP_HOST") or None,
            smtp_port=int(env.get("FLOWTRACK_SMTP_PORT", "587")),
            smtp_user=env.get("FLOWTRACK_SMTP_USER") or None,
            smtp_password=env.get("FLOWTRACK_SMTP_PASSWORD") or None,
            smtp_tls=env.get("FLOWTRACK_SMTP_TLS", "1").lower() not in ("0", "false", "no"),
            mail_from=env.get("FLOWTRACK_MAIL_FROM", cls.mail_from),
            insights_url=env.get("FLOWTRACK_INSIGHTS_URL") or None,
            insights_api_key=env.get("FLOWTRACK_INSIGHTS_API_KEY") or None,
            insights_timeout=float(env.get("FLOWTRACK_INSIGHTS_TIMEOUT", "10")),
            budget_alert_threshold=parse_magnitude(env.get("FLOWTRACK_BUDGET_ALERT_THRESHOLD", "80")),
        )

    def create_mailer(self) -> Mailer:
        """Build the configured mailer; without an SMTP host mail goes to the log."""
        if not self.smtp_host:
            return LogMailer()
        return SMTPMailer(
            host=self.smtp_host,
            port=self.smtp_port,
            sender=self.mail_from,
            username=self.smtp_user,
            password=self.smtp_password,
            use_tls=self.smtp_tls,
        )

    def create_insight_generator(self) -> Optional[InsightGenerator]:
        """Build the configured insight generator, or None to use the fallback."""
        if not self.insights_url:
            return None
        return HTTPInsightGenerator(
            url=self.insights_url,
            api_key=self.insights_api_key,
            timeout=self.insights_timeout,
        )
