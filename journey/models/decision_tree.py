"""
Questionnaire decision tree data model for Architecture Journey.

A tree is an ordered list of questions (the first one is the entry point) and a
table of outcome descriptors keyed by outcome key. Each option either points at
the next question or ends the walk, and carries integer score contributions per
outcome key. All models are Pydantic v2; field aliases keep the camelCase JSON
shape used by existing tree files and clients.
"""

import json
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, Field


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------


class Confidence(str, Enum):
    """Qualitative confidence derived from the winner's score margin."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# -----------------------------------------------------------------------------
# Option, Question
# -----------------------------------------------------------------------------


class Option(BaseModel):
    """A selectable answer: where it leads and which outcomes it scores."""

    id: str = Field(..., description="Option ID, unique within its question")
    label: str = Field(..., description="Display label")
    next_question_id: Optional[str] = Field(
        None,
        alias="nextQuestionId",
        description="ID of the next question, or null when this option ends the walk",
    )
    scores: dict[str, int] = Field(
        default_factory=dict,
        description="Outcome key -> points added when this option is chosen",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def is_terminal(self) -> bool:
        return self.next_question_id is None


class Question(BaseModel):
    """A question and its ordered options."""

    id: str = Field(..., description="Question ID, unique within the tree")
    text: str = Field(..., description="Question text shown to the user")
    options: list[Option] = Field(..., min_length=1, description="Ordered options")

    model_config = {"frozen": True, "populate_by_name": True}

    def get_option(self, option_id: str) -> Optional[Option]:
        for option in self.options:
            if option.id == option_id:
                return option
        return None


# -----------------------------------------------------------------------------
# Result (outcome descriptor)
# -----------------------------------------------------------------------------


class Result(BaseModel):
    """Explanation shown for an outcome when it is recommended."""

    name: str = Field(..., description="Display name (e.g. 'PostgreSQL')")
    reasoning: str = Field("", description="Why this outcome fits")
    tradeoffs: list[str] = Field(default_factory=list, description="Known trade-offs")
    when_to_reconsider: str = Field(
        "",
        alias="whenToReconsider",
        description="Signals that the recommendation should be revisited",
    )
    best_for: str = Field("", alias="bestFor", description="Typical use cases")

    model_config = {"frozen": True, "populate_by_name": True}


# -----------------------------------------------------------------------------
# DecisionTree
# -----------------------------------------------------------------------------


class TreeMetadata(BaseModel):
    """Authoring metadata for a tree."""

    created: Optional[datetime] = Field(None, description="When the tree was created")
    last_updated: Optional[datetime] = Field(None, alias="lastUpdated", description="Last edit")
    author: Optional[str] = Field(None, description="Author or maintainer")

    model_config = {"extra": "allow", "populate_by_name": True}


class DecisionTree(BaseModel):
    """
    Complete questionnaire tree for one topic (e.g. database selection).

    questions[0] is the canonical entry point. results maps every outcome key
    that appears in an option's scores to its descriptor.
    """

    id: str = Field(..., description="Unique tree identifier")
    title: str = Field(..., description="Human-readable title")
    description: str = Field("", description="Short description of the topic")
    version: str = Field("1.0.0", description="Semantic version of the tree content")
    questions: list[Question] = Field(..., min_length=1, description="Ordered questions")
    results: dict[str, Result] = Field(..., min_length=1, description="Outcome key -> descriptor")
    metadata: Optional[TreeMetadata] = Field(None, description="Authoring metadata")

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def entry_question_id(self) -> str:
        return self.questions[0].id

    def get_question(self, question_id: str) -> Optional[Question]:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None


# -----------------------------------------------------------------------------
# Answers and recommendation output
# -----------------------------------------------------------------------------


class Answer(BaseModel):
    """One step of a client's walk: the option picked for a question."""

    question_id: str = Field(..., alias="questionId")
    option_id: str = Field(..., alias="optionId")

    model_config = {"frozen": True, "populate_by_name": True}


class RecommendationResult(BaseModel):
    """Outcome of a recommendation run. Built fresh per call; never stored by the core."""

    recommendation: str = Field(..., description="Winning outcome key")
    scores: dict[str, int] = Field(..., description="Outcome key -> accumulated points")
    result: Result = Field(..., description="Descriptor of the winning outcome")
    answers: list[Answer] = Field(..., description="Answers as supplied by the caller")
    tie_breaker: Optional[str] = Field(
        None,
        alias="tieBreaker",
        description="Explanation when several outcomes shared the top score",
    )
    confidence: Confidence = Field(..., description="high, medium or low")

    model_config = {"populate_by_name": True}


# -----------------------------------------------------------------------------
# JSON Schema
# -----------------------------------------------------------------------------

SCHEMA_VERSION = "1.0.0"


def get_decision_tree_json_schema() -> dict[str, Any]:
    """Return the JSON schema for a DecisionTree document (camelCase field names)."""
    tree_schema = DecisionTree.model_json_schema(by_alias=True)
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "title": "Architecture Journey Decision Tree",
        "version": SCHEMA_VERSION,
        **{k: v for k, v in tree_schema.items() if k not in ("$schema", "title")},
    }


def write_decision_tree_schema_to_file(path: Union[str, Path]) -> Path:
    """Write the decision tree JSON schema to path (for versioning and editor tooling)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(get_decision_tree_json_schema(), indent=2), encoding="utf-8")
    return path
