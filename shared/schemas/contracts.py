"""
Records exchanged between the recommendation core and its collaborators.

Used by the tree repository (summaries), the decision store (saved, shareable
results) and the analytics sink (event records).
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from journey.models.decision_tree import Answer, RecommendationResult


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TreeSummary(BaseModel):
    """List entry for an available tree."""

    id: str = Field(..., description="Tree ID")
    title: str = Field(..., description="Tree title")
    description: str = Field("", description="Tree description")
    question_count: int = Field(..., alias="questionCount", description="Number of questions in the tree")
    estimated_time: str = Field(..., alias="estimatedTime", description="e.g. '5 minutes' or '10-15 minutes'")

    model_config = {"populate_by_name": True}


class SavedDecision(BaseModel):
    """A recommendation persisted under a shareable slug."""

    tree_id: str = Field(..., alias="treeId")
    answers: list[Answer] = Field(default_factory=list)
    result: RecommendationResult
    shareable_slug: str = Field(..., alias="shareableSlug")
    user_id: Optional[str] = Field(None, alias="userId")
    view_count: int = Field(0, alias="viewCount", ge=0)
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")

    model_config = {"populate_by_name": True}


class AnalyticsEvent(str, Enum):
    """Funnel events reported by clients and services."""

    TREE_STARTED = "tree_started"
    QUESTION_ANSWERED = "question_answered"
    TREE_COMPLETED = "tree_completed"
    TREE_ABANDONED = "tree_abandoned"
    RESULT_GENERATED = "result_generated"
    RESULT_VIEWED = "result_viewed"
    RESULT_SHARED = "result_shared"


class AnalyticsRecord(BaseModel):
    """A single fire-and-forget analytics event."""

    event: AnalyticsEvent
    tree_id: str = Field(..., alias="treeId")
    question_id: Optional[str] = Field(None, alias="questionId")
    option_id: Optional[str] = Field(None, alias="optionId")
    session_id: Optional[str] = Field(None, alias="sessionId")
    metadata: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=_utcnow)

    model_config = {"populate_by_name": True}


# -----------------------------------------------------------------------------
# Analytics summary
# -----------------------------------------------------------------------------


class EventCount(BaseModel):
    event: AnalyticsEvent
    count: int


class TreeStarts(BaseModel):
    tree_id: str = Field(..., alias="treeId")
    starts: int

    model_config = {"populate_by_name": True}


class SharedResult(BaseModel):
    """A saved decision ranked by how often its shareable link was opened."""

    tree_id: str = Field(..., alias="treeId")
    slug: str
    views: int
    recommendation: str
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}


class RecommendationCount(BaseModel):
    tree_id: str = Field(..., alias="treeId")
    recommendation: str
    count: int

    model_config = {"populate_by_name": True}


class DailyCount(BaseModel):
    date: str = Field(..., description="UTC day, YYYY-MM-DD")
    count: int


class AnalyticsSummary(BaseModel):
    """Aggregate usage report over analytics records and saved decisions."""

    total_results: int = Field(..., alias="totalResults", description="Saved decisions")
    total_events: int = Field(..., alias="totalEvents", description="Events in the reporting window")
    unique_sessions: int = Field(..., alias="uniqueSessions")
    tree_starts: int = Field(..., alias="treeStarts")
    results_generated: int = Field(..., alias="resultsGenerated")
    completion_rate: float = Field(..., alias="completionRate", description="results_generated / tree_starts, percent")
    events_by_type: list[EventCount] = Field(default_factory=list, alias="eventsByType")
    popular_trees: list[TreeStarts] = Field(default_factory=list, alias="popularTrees")
    top_shared_results: list[SharedResult] = Field(default_factory=list, alias="topSharedResults")
    popular_recommendations: list[RecommendationCount] = Field(default_factory=list, alias="popularRecommendations")
    daily_activity: list[DailyCount] = Field(default_factory=list, alias="dailyActivity")

    model_config = {"populate_by_name": True}
