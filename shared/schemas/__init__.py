"""Shared schemas for Architecture Journey (records exchanged with stores and sinks)."""

from shared.schemas.contracts import (
    AnalyticsEvent,
    AnalyticsRecord,
    AnalyticsSummary,
    DailyCount,
    EventCount,
    RecommendationCount,
    SavedDecision,
    SharedResult,
    TreeStarts,
    TreeSummary,
)

__all__ = [
    "AnalyticsEvent",
    "AnalyticsRecord",
    "AnalyticsSummary",
    "DailyCount",
    "EventCount",
    "RecommendationCount",
    "SavedDecision",
    "SharedResult",
    "TreeStarts",
    "TreeSummary",
]
