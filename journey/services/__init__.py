"""Recommendation core services (calculator, validator, repository, stores)."""

from journey.services.recommendation_service import (
    break_tie,
    calculate,
    calculate_confidence,
    calculate_scores,
    determine_winner,
    validate_answer_path,
)
from journey.services.validator_service import (
    ValidationIssue,
    ValidationResult,
    validate_tree,
)
from journey.services.tree_repository import (
    TreeRepository,
    estimate_time,
)
from journey.services.store_service import (
    AnalyticsSink,
    DecisionStore,
    InMemoryAnalyticsSink,
    InMemoryDecisionStore,
    summarize_analytics,
    track_event,
)

__all__ = [
    "break_tie",
    "calculate",
    "calculate_confidence",
    "calculate_scores",
    "determine_winner",
    "validate_answer_path",
    "ValidationIssue",
    "ValidationResult",
    "validate_tree",
    "TreeRepository",
    "estimate_time",
    "AnalyticsSink",
    "DecisionStore",
    "InMemoryAnalyticsSink",
    "InMemoryDecisionStore",
    "summarize_analytics",
    "track_event",
]
