"""
Collaborator contracts for saving shareable results and recording analytics.

The core hands a RecommendationResult to a DecisionStore and gets back a
unique shareable slug; analytics events go to an AnalyticsSink and are
fire-and-forget. In-memory implementations back tests and local runs.

Environment variables:
  JOURNEY_SLUG_LENGTH         characters in a shareable slug (default 10)
  JOURNEY_SLUG_MAX_ATTEMPTS   slug generation attempts before giving up (default 5)
  JOURNEY_ANALYTICS_WINDOW_DAYS  days of events covered by the usage summary (default 30)
"""

import logging
import os
import threading
import uuid
from collections import Counter
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Protocol

from journey.errors import ResultNotFound, SaveFailed
from journey.models.decision_tree import Answer, RecommendationResult
from shared.schemas import (
    AnalyticsEvent,
    AnalyticsRecord,
    AnalyticsSummary,
    DailyCount,
    EventCount,
    RecommendationCount,
    SavedDecision,
    SharedResult,
    TreeStarts,
)

logger = logging.getLogger(__name__)

SLUG_LENGTH = int(os.getenv("JOURNEY_SLUG_LENGTH", "10"))
SLUG_MAX_ATTEMPTS = int(os.getenv("JOURNEY_SLUG_MAX_ATTEMPTS", "5"))
ANALYTICS_WINDOW_DAYS = int(os.getenv("JOURNEY_ANALYTICS_WINDOW_DAYS", "30"))
DAILY_ACTIVITY_DAYS = 7


def new_slug(length: int = SLUG_LENGTH) -> str:
    return uuid.uuid4().hex[:length]


# -----------------------------------------------------------------------------
# Decision store
# -----------------------------------------------------------------------------


class DecisionStore(Protocol):
    def save(
        self,
        tree_id: str,
        answers: list[Answer],
        result: RecommendationResult,
        user_id: Optional[str] = None,
    ) -> SavedDecision: ...

    def get_by_slug(self, slug: str) -> SavedDecision: ...

    def list_decisions(self) -> list[SavedDecision]: ...


class InMemoryDecisionStore:
    """Saved decisions keyed by shareable slug."""

    def __init__(
        self,
        slug_factory: Callable[[], str] = new_slug,
        max_attempts: int = SLUG_MAX_ATTEMPTS,
    ):
        self._decisions: dict[str, SavedDecision] = {}
        self._lock = threading.Lock()
        self._slug_factory = slug_factory
        self._max_attempts = max_attempts

    def save(
        self,
        tree_id: str,
        answers: list[Answer],
        result: RecommendationResult,
        user_id: Optional[str] = None,
    ) -> SavedDecision:
        with self._lock:
            for _ in range(self._max_attempts):
                slug = self._slug_factory()
                if slug not in self._decisions:
                    break
                logger.debug("Slug collision on %s, retrying", slug)
            else:
                raise SaveFailed(f"Failed to generate a unique slug after {self._max_attempts} attempts")

            saved = SavedDecision(
                tree_id=tree_id,
                answers=list(answers),
                result=result,
                shareable_slug=slug,
                user_id=user_id,
            )
            self._decisions[slug] = saved
        logger.info("Saved decision for tree %s as %s", tree_id, slug)
        return saved

    def get_by_slug(self, slug: str) -> SavedDecision:
        """Return the saved decision and count the view."""
        with self._lock:
            saved = self._decisions.get(slug)
            if saved is None:
                raise ResultNotFound(f"Result with slug '{slug}' not found")
            saved = saved.model_copy(update={"view_count": saved.view_count + 1})
            self._decisions[slug] = saved
        return saved

    def list_decisions(self) -> list[SavedDecision]:
        with self._lock:
            return list(self._decisions.values())

    def __len__(self) -> int:
        return len(self._decisions)


# -----------------------------------------------------------------------------
# Analytics
# -----------------------------------------------------------------------------


class AnalyticsSink(Protocol):
    def track(self, record: AnalyticsRecord) -> None: ...


class InMemoryAnalyticsSink:
    """Keeps every tracked record in order."""

    def __init__(self) -> None:
        self.records: list[AnalyticsRecord] = []
        self._lock = threading.Lock()

    def track(self, record: AnalyticsRecord) -> None:
        with self._lock:
            self.records.append(record)

    def count(self, event: AnalyticsEvent) -> int:
        return sum(1 for r in self.records if r.event == event)

    def snapshot(self) -> list[AnalyticsRecord]:
        with self._lock:
            return list(self.records)


def track_event(
    sink: AnalyticsSink,
    event: AnalyticsEvent,
    tree_id: str,
    question_id: Optional[str] = None,
    option_id: Optional[str] = None,
    session_id: Optional[str] = None,
    metadata: Optional[dict[str, Any]] = None,
) -> bool:
    """Record an analytics event. Sink failures are logged, never raised. Returns whether it was tracked."""
    record = AnalyticsRecord(
        event=event,
        tree_id=tree_id,
        question_id=question_id,
        option_id=option_id,
        session_id=session_id,
        metadata=metadata or {},
    )
    try:
        sink.track(record)
    except Exception as e:
        logger.error("Failed to track analytics event %s for tree %s: %s", event.value, tree_id, e)
        return False
    return True


class AnalyticsSource(Protocol):
    def snapshot(self) -> list[AnalyticsRecord]: ...


def summarize_analytics(
    sink: AnalyticsSource,
    store: DecisionStore,
    window_days: Optional[int] = ANALYTICS_WINDOW_DAYS,
    limit: int = 10,
    now: Optional[datetime] = None,
) -> AnalyticsSummary:
    """
    Usage report: event totals and funnel over the last window_days (all events
    when None), daily activity for the last week, and rankings over every saved
    decision. Rankings are capped at limit entries, highest first.
    """
    now = now or datetime.now(timezone.utc)
    records = sink.snapshot()
    if window_days is not None:
        since = now - timedelta(days=window_days)
        records = [r for r in records if r.timestamp >= since]
    decisions = store.list_decisions()

    by_event = Counter(r.event for r in records)
    starts_by_tree = Counter(r.tree_id for r in records if r.event == AnalyticsEvent.TREE_STARTED)
    sessions = {r.session_id for r in records if r.session_id}
    starts = by_event[AnalyticsEvent.TREE_STARTED]
    generated = by_event[AnalyticsEvent.RESULT_GENERATED]
    completion = round(generated / starts * 100, 1) if starts else 0.0

    week_ago = now - timedelta(days=DAILY_ACTIVITY_DAYS)
    daily = Counter(r.timestamp.strftime("%Y-%m-%d") for r in records if r.timestamp >= week_ago)

    most_viewed = sorted(decisions, key=lambda d: d.view_count, reverse=True)[:limit]
    recommendations = Counter((d.tree_id, d.result.recommendation) for d in decisions)

    return AnalyticsSummary(
        total_results=len(decisions),
        total_events=len(records),
        unique_sessions=len(sessions),
        tree_starts=starts,
        results_generated=generated,
        completion_rate=completion,
        events_by_type=[EventCount(event=e, count=n) for e, n in by_event.most_common()],
        popular_trees=[TreeStarts(tree_id=t, starts=n) for t, n in starts_by_tree.most_common()],
        top_shared_results=[
            SharedResult(
                tree_id=d.tree_id,
                slug=d.shareable_slug,
                views=d.view_count,
                recommendation=d.result.recommendation,
                created_at=d.created_at,
            )
            for d in most_viewed
        ],
        popular_recommendations=[
            RecommendationCount(tree_id=t, recommendation=rec, count=n)
            for (t, rec), n in recommendations.most_common(limit)
        ],
        daily_activity=[DailyCount(date=day, count=n) for day, n in sorted(daily.items())],
    )
