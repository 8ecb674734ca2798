"""
Architecture Journey core data models.

These models define the questionnaire tree consumed by the recommendation
calculator and the result it produces. For the records exchanged with stores
and analytics sinks, see shared.schemas.
"""

from journey.models.decision_tree import (
    Answer,
    Confidence,
    DecisionTree,
    Option,
    Question,
    RecommendationResult,
    Result,
    TreeMetadata,
    get_decision_tree_json_schema,
    write_decision_tree_schema_to_file,
)

__all__ = [
    "Answer",
    "Confidence",
    "DecisionTree",
    "Option",
    "Question",
    "RecommendationResult",
    "Result",
    "TreeMetadata",
    "get_decision_tree_json_schema",
    "write_decision_tree_schema_to_file",
]
