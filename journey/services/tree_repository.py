"""
In-memory repository of validated decision trees.

Construct one TreeRepository at process start, register the trees it should
serve and pass it to whatever handles requests. Registration runs the
validator: trees with errors are rejected, warnings are logged.
"""

import logging
import math
import threading
from collections.abc import Iterable, Mapping
from typing import Any, Union

from pydantic import ValidationError as PydanticValidationError

from journey.errors import InvalidRequest, TreeInvalid, TreeNotFound
from journey.models.decision_tree import Answer, DecisionTree, RecommendationResult
from journey.services.recommendation_service import calculate
from journey.services.validator_service import validate_tree
from journey.utils.logging import log_recommendation, log_validation_result
from shared.schemas import TreeSummary

logger = logging.getLogger(__name__)

MINUTES_PER_QUESTION = 1


def estimate_time(question_count: int) -> str:
    """Rough completion time shown in tree listings."""
    total = question_count * MINUTES_PER_QUESTION
    if total <= 10:
        return f"{total} minutes"
    return f"{math.floor(total / 5) * 5}-{math.ceil(total / 5) * 5} minutes"


def _as_answers(answers: Iterable[Union[Answer, Mapping[str, Any]]]) -> list[Answer]:
    try:
        return [a if isinstance(a, Answer) else Answer.model_validate(a) for a in answers]
    except PydanticValidationError as e:
        raise InvalidRequest("Answers must each have a questionId and an optionId", details=e.errors(include_url=False)) from e


class TreeRepository:
    """Validated trees keyed by id."""

    def __init__(self, trees: Iterable[Union[DecisionTree, Mapping[str, Any]]] = ()):
        self._trees: dict[str, DecisionTree] = {}
        self._lock = threading.Lock()
        for tree in trees:
            self.register(tree)

    def register(self, tree: Union[DecisionTree, Mapping[str, Any]]) -> DecisionTree:
        """Validate and store a tree. Raises TreeInvalid when validation reports errors."""
        validation = validate_tree(tree)
        if isinstance(tree, DecisionTree):
            tree_id = tree.id
        else:
            tree_id = tree.get("id") if isinstance(tree, Mapping) else None
        log_validation_result(logger, tree_id, len(validation.errors), len(validation.warnings))

        if not validation.is_valid:
            for issue in validation.errors:
                logger.error("Tree %s: [%s] %s (%s)", tree_id, issue.code, issue.message, issue.location or "-")
            raise TreeInvalid(
                f"Decision tree '{tree_id}' failed validation with {len(validation.errors)} error(s)",
                details=[issue.model_dump() for issue in validation.errors],
            )
        for issue in validation.warnings:
            logger.warning("Tree %s: [%s] %s", tree_id, issue.code, issue.message)

        if not isinstance(tree, DecisionTree):
            try:
                tree = DecisionTree.model_validate(tree)
            except PydanticValidationError as e:
                raise TreeInvalid(
                    f"Decision tree '{tree_id}' could not be parsed",
                    details=e.errors(include_url=False),
                ) from e

        with self._lock:
            self._trees[tree.id] = tree
        logger.info("Loaded tree: %s (%s)", tree.id, tree.title)
        return tree

    def get(self, tree_id: str) -> DecisionTree:
        tree = self._trees.get(tree_id)
        if tree is None:
            raise TreeNotFound(tree_id)
        return tree

    def __contains__(self, tree_id: object) -> bool:
        return tree_id in self._trees

    def __len__(self) -> int:
        return len(self._trees)

    def list_trees(self) -> list[DecisionTree]:
        return list(self._trees.values())

    def summaries(self) -> list[TreeSummary]:
        return [
            TreeSummary(
                id=tree.id,
                title=tree.title,
                description=tree.description,
                question_count=len(tree.questions),
                estimated_time=estimate_time(len(tree.questions)),
            )
            for tree in self.list_trees()
        ]

    def recommend(
        self,
        tree_id: str,
        answers: Iterable[Union[Answer, Mapping[str, Any]]],
    ) -> RecommendationResult:
        """Look up a tree and calculate the recommendation for the given answers."""
        tree = self.get(tree_id)
        answer_list = _as_answers(answers)
        result = calculate(tree, answer_list)
        log_recommendation(
            logger,
            tree_id=tree.id,
            recommendation=result.recommendation,
            confidence=result.confidence.value,
            answer_count=len(answer_list),
            tie_broken=result.tie_breaker is not None,
        )
        return result
