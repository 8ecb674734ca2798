"""
Static well-formedness checks for questionnaire trees.

Run when a tree is loaded, not per request. Works on the raw mapping so that a
single pass reports every structural problem (including ones that would stop
the tree from parsing into a DecisionTree). Errors block loading; warnings do
not.
"""

from collections.abc import Mapping
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field

from journey.models.decision_tree import DecisionTree

SCORE_IMBALANCE_RATIO = 0.5


# -----------------------------------------------------------------------------
# Issue models
# -----------------------------------------------------------------------------


class ValidationIssue(BaseModel):
    """A single validation error or warning."""

    type: Literal["error", "warning"] = Field(..., description="Severity")
    code: str = Field(..., description="Issue code (e.g. INVALID_REFERENCE, UNREACHABLE_QUESTION)")
    message: str = Field(..., description="Human-readable message")
    location: Optional[str] = Field(None, description="Path inside the tree, e.g. questions[2].options[0]")


class ValidationResult(BaseModel):
    """Accumulated outcome of validate_tree."""

    is_valid: bool
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)


class _Collector:
    def __init__(self) -> None:
        self.errors: list[ValidationIssue] = []
        self.warnings: list[ValidationIssue] = []

    def error(self, code: str, message: str, location: Optional[str] = None) -> None:
        self.errors.append(ValidationIssue(type="error", code=code, message=message, location=location))

    def warning(self, code: str, message: str, location: Optional[str] = None) -> None:
        self.warnings.append(ValidationIssue(type="warning", code=code, message=message, location=location))

    def result(self) -> ValidationResult:
        return ValidationResult(is_valid=not self.errors, errors=self.errors, warnings=self.warnings)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _id(obj: Any) -> Optional[str]:
    value = obj.get("id") if isinstance(obj, Mapping) else None
    return value if isinstance(value, str) and value else None


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _options(question: Any) -> list[Any]:
    if isinstance(question, Mapping) and isinstance(question.get("options"), list):
        return question["options"]
    return []


def _scores(option: Any) -> Mapping:
    if isinstance(option, Mapping) and isinstance(option.get("scores"), Mapping):
        return option["scores"]
    return {}


# -----------------------------------------------------------------------------
# Checks
# -----------------------------------------------------------------------------


def _check_basic_structure(tree: Any, out: _Collector) -> None:
    if not tree:
        out.error("TREE_NULL", "Tree is null or empty")
        return
    if not isinstance(tree, Mapping):
        out.error("TREE_NULL", "Tree must be an object")
        return
    if not tree.get("id") or not isinstance(tree.get("id"), str):
        out.error("MISSING_TREE_ID", "Tree must have a valid id")
    if not tree.get("title") or not isinstance(tree.get("title"), str):
        out.error("MISSING_TREE_TITLE", "Tree must have a title")
    questions = tree.get("questions")
    if not isinstance(questions, list):
        out.error("INVALID_QUESTIONS", "Tree must have a questions array")
        return
    if not questions:
        out.error("EMPTY_TREE", "Tree must have at least one question")
    if not isinstance(tree.get("results"), Mapping):
        out.error("INVALID_RESULTS", "Tree must have a results object")


def _check_options(options: list[Any], question_location: str, out: _Collector) -> None:
    seen: set[str] = set()
    for index, option in enumerate(options):
        location = f"{question_location}.options[{index}]"
        if not isinstance(option, Mapping):
            out.error("INVALID_OPTION", "Option must be an object", location)
            continue

        option_id = _id(option)
        if not option_id:
            out.error("MISSING_OPTION_ID", "Option missing id", location)
        elif option_id in seen:
            out.error("DUPLICATE_OPTION_ID", f"Duplicate option id: {option_id}", location)
        else:
            seen.add(option_id)

        if _is_blank(option.get("label")):
            out.error("MISSING_OPTION_LABEL", "Option missing label", location)

        scores = option.get("scores")
        if not isinstance(scores, Mapping):
            out.error("MISSING_SCORES", "Option missing scores object", location)
            continue
        if not scores:
            out.warning("EMPTY_SCORES", "Option has no scores defined", location)
        for outcome, points in scores.items():
            if not _is_number(points):
                out.error("INVALID_SCORE", f"Score for {outcome} must be a number", f"{location}.scores.{outcome}")


def _check_questions(tree: Mapping, out: _Collector) -> None:
    seen: set[str] = set()
    for index, question in enumerate(tree["questions"]):
        location = f"questions[{index}]"
        if not isinstance(question, Mapping):
            out.error("INVALID_QUESTION", "Question must be an object", location)
            continue

        question_id = _id(question)
        if not question_id:
            out.error("MISSING_QUESTION_ID", "Question missing id", location)
        elif question_id in seen:
            out.error("DUPLICATE_QUESTION_ID", f"Duplicate question id: {question_id}", location)
        else:
            seen.add(question_id)

        if _is_blank(question.get("text")):
            out.error("MISSING_QUESTION_TEXT", "Question missing text", location)

        options = question.get("options")
        if not isinstance(options, list) or not options:
            out.error("MISSING_OPTIONS", "Question must have at least one option", location)
        else:
            _check_options(options, location, out)


def _check_references(tree: Mapping, out: _Collector) -> None:
    questions = tree["questions"]
    results = tree.get("results") or {}
    question_ids = {_id(q) for q in questions} - {None}

    for q_index, question in enumerate(questions):
        if not isinstance(question, Mapping):
            continue
        for o_index, option in enumerate(_options(question)):
            if not isinstance(option, Mapping):
                continue
            location = f"questions[{q_index}].options[{o_index}]"
            next_id = option.get("nextQuestionId")
            if next_id is not None:
                if not isinstance(next_id, str) or next_id not in question_ids:
                    out.error("INVALID_REFERENCE", f'nextQuestionId "{next_id}" does not exist', location)
                if next_id == _id(question):
                    out.error("CIRCULAR_REFERENCE", "Option references its own question (infinite loop)", location)
            for outcome in _scores(option):
                if outcome not in results:
                    out.error(
                        "MISSING_RESULT",
                        f'Score references outcome "{outcome}" but no result exists',
                        f"{location}.scores.{outcome}",
                    )


def _check_reachability(tree: Mapping, out: _Collector) -> None:
    """Depth-first walk from the entry question with an explicit visited set and path."""
    questions = [q for q in tree["questions"] if isinstance(q, Mapping)]
    if not questions:
        return
    by_id: dict[str, Mapping] = {}
    for question in questions:
        if _id(question):
            by_id.setdefault(_id(question), question)

    # Each stack entry carries the path of ancestors that led to it
    visited: set[Optional[str]] = set()
    stack: list[tuple[Optional[str], list[Optional[str]]]] = [(_id(questions[0]), [])]

    while stack:
        question_id, path = stack.pop()
        if question_id in visited:
            if question_id in path:
                cycle = " -> ".join(str(q) for q in path + [question_id])
                out.error("CIRCULAR_REFERENCE", f"Circular reference detected: {cycle}")
            continue
        visited.add(question_id)
        question = by_id.get(question_id)
        if question is None:
            continue
        children = []
        for option in _options(question):
            next_id = option.get("nextQuestionId") if isinstance(option, Mapping) else None
            if isinstance(next_id, str) and next_id:
                children.append((next_id, path + [question_id]))
        stack.extend(reversed(children))

    for question in questions:
        question_id = _id(question)
        if question_id not in visited:
            out.warning("UNREACHABLE_QUESTION", f'Question "{question_id}" is not reachable from the starting question')


def _check_results(tree: Mapping, out: _Collector) -> None:
    results = tree["results"]
    if not results:
        out.error("NO_RESULTS", "Tree must have at least one result definition")
        return
    for key, result in results.items():
        location = f"results.{key}"
        if not isinstance(result, Mapping):
            result = {}
        if not result.get("name"):
            out.error("MISSING_RESULT_NAME", "Result missing name", location)
        if not result.get("reasoning"):
            out.warning("MISSING_REASONING", "Result missing reasoning", location)
        if not result.get("tradeoffs"):
            out.warning("MISSING_TRADEOFFS", "Result missing tradeoffs", location)
        if not result.get("whenToReconsider"):
            out.warning("MISSING_RECONSIDER", "Result missing whenToReconsider", location)


def _check_score_balance(tree: Mapping, out: _Collector) -> None:
    max_scores: dict[str, float] = {}
    for question in tree["questions"]:
        for option in _options(question):
            for outcome, points in _scores(option).items():
                if _is_number(points):
                    max_scores[outcome] = max(max_scores.get(outcome, 0), points)

    if not max_scores:
        return
    average = sum(max_scores.values()) / len(max_scores)
    if average == 0:
        return
    for outcome, top in max_scores.items():
        deviation = abs(top - average) / average
        if deviation > SCORE_IMBALANCE_RATIO:
            out.warning(
                "SCORE_IMBALANCE",
                f'Outcome "{outcome}" has significantly different max scores ({top}) '
                f"compared to average ({average:.1f})",
            )


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------


def validate_tree(tree: Union[DecisionTree, Mapping, None]) -> ValidationResult:
    """
    Validate a tree (raw mapping or DecisionTree) and return all errors and warnings.

    Basic shape errors stop the remaining checks; every other check runs and
    accumulates issues.
    """
    if isinstance(tree, DecisionTree):
        tree = tree.model_dump(mode="json", by_alias=True)

    out = _Collector()
    _check_basic_structure(tree, out)
    if out.errors:
        return out.result()

    _check_questions(tree, out)
    _check_references(tree, out)
    _check_reachability(tree, out)
    _check_results(tree, out)
    _check_score_balance(tree, out)
    return out.result()
