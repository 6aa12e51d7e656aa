"""Narrative insight generation for monthly reports."""

from flowtrack.insights.base import (
    FALLBACK_INSIGHTS,
    InsightGenerator,
    generate_insights_or_fallback,
)
from flowtrack.insights.http import HTTPInsightGenerator

__all__ = [
    "FALLBACK_INSIGHTS",
    "InsightGenerator",
    "generate_insights_or_fallback",
    "HTTPInsightGenerator",
]
