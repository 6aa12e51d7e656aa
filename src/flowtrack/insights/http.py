"""Insight generation over HTTP."""

import logging
from typing import Optional

import requests

from flowtrack.domain.entities import MonthlyStats
from flowtrack.insights.base import InsightGenerator, stats_to_payload

logger = logging.getLogger(__name__)


class HTTPInsightGenerator(InsightGenerator):
    """Ask an inference service for insights.

    The service receives the month's stats as JSON and answers with either a
    JSON list of strings or an object with an ``insights`` list.
    """

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def generate(self, stats: MonthlyStats, month_label: str) -> list[str]:
        """Request insights.

        Raises:
            requests.RequestException: On transport or HTTP errors
            ValueError: If the response is not the expected JSON shape
        """
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        response = self.session.post(
            self.url,
            json=stats_to_payload(stats, month_label),
            headers=headers,
            timeout=self.timeout,
        )
        response.raise_for_status()
        data = response.json()

        if isinstance(data, dict):
            data = data.get("insights")
        if not isinstance(data, list):
            raise ValueError("Insight response is not a list")

        logger.debug("Received %d insights for %s", len(data), month_label)
        return [str(item) for item in data]
