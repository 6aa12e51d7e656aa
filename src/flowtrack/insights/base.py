"""Insight generation interface and fallback."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from flowtrack.domain.entities import MonthlyStats

logger = logging.getLogger(__name__)

FALLBACK_INSIGHTS = [
    "Your highest expense category this month might need attention.",
    "Consider setting up a budget for better financial management.",
    "Track your recurring expenses to identify potential savings.",
]


class InsightGenerator(ABC):
    """Produces short narrative insights from a month's statistics."""

    @abstractmethod
    def generate(self, stats: MonthlyStats, month_label: str) -> list[str]:
        """Return an ordered list of short insights."""
        pass


def stats_to_payload(stats: MonthlyStats, month_label: str) -> dict:
    """Serialize stats into plain JSON types."""
    return {
        "month": month_label,
        "totalIncome": float(stats.total_income),
        "totalExpenses": float(stats.total_expenses),
        "byCategory": {category: float(amount) for category, amount in stats.by_category.items()},
        "transactionCount": stats.transaction_count,
    }


def generate_insights_or_fallback(
    generator: Optional[InsightGenerator], stats: MonthlyStats, month_label: str
) -> list[str]:
    """Generate insights, degrading to FALLBACK_INSIGHTS on any failure.

    A report must still go out when the insight service is down or returns
    garbage, so every error here is logged and replaced by the fallback.
    """
    if generator is None:
        return list(FALLBACK_INSIGHTS)

    try:
        insights = generator.generate(stats, month_label)
    except Exception:
        logger.warning("Insight generation failed for %s, using fallback", month_label, exc_info=True)
        return list(FALLBACK_INSIGHTS)

    cleaned = [str(insight).strip() for insight in insights if str(insight).strip()]
    if not cleaned:
        logger.warning("Insight generation returned nothing for %s, using fallback", month_label)
        return list(FALLBACK_INSIGHTS)
    return cleaned
