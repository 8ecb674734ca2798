"""
Recommendation calculator: answer path -> scores -> winner -> confidence.

calculate() is a pure function over a read-only DecisionTree and the answers a
client submitted. It validates that the answers form one linear walk from the
entry question to a terminal option, sums the chosen options' score
contributions, picks a winner (with deterministic tie-breaking) and classifies
confidence from the margin over the runner-up.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from journey.errors import (
    InvalidAnswerPath,
    MissingAnswers,
    NoRecommendation,
    OptionNotFound,
    QuestionNotFound,
    ResultNotFound,
)
from journey.models.decision_tree import (
    Answer,
    Confidence,
    DecisionTree,
    RecommendationResult,
)

logger = logging.getLogger(__name__)

HIGH_CONFIDENCE_MARGIN = 5
MEDIUM_CONFIDENCE_MARGIN = 2

DOCUMENTATION_TIE_BREAK = "Selected based on available documentation and guidance."


# -----------------------------------------------------------------------------
# Path validation
# -----------------------------------------------------------------------------


def validate_answer_path(tree: DecisionTree, answers: Sequence[Answer]) -> int:
    """
    Check that answers walk the tree from its entry question to a terminal option.

    Returns the number of answers consumed by the walk. Answers after the
    terminal step are not examined.
    """
    if not answers:
        raise MissingAnswers()

    expected: Optional[str] = tree.entry_question_id
    consumed = 0
    for position, answer in enumerate(answers):
        if answer.question_id != expected:
            raise InvalidAnswerPath(
                f"Expected question '{expected}' but got '{answer.question_id}' at position {position}"
            )
        question = tree.get_question(answer.question_id)
        if question is None:
            raise QuestionNotFound(answer.question_id)
        option = question.get_option(answer.option_id)
        if option is None:
            raise OptionNotFound(answer.option_id, answer.question_id)

        consumed += 1
        expected = option.next_question_id
        if expected is None:
            break

    if expected is not None:
        raise InvalidAnswerPath("Answer path did not reach a valid end node")
    return consumed


# -----------------------------------------------------------------------------
# Scoring
# -----------------------------------------------------------------------------


def calculate_scores(tree: DecisionTree, answers: Sequence[Answer]) -> dict[str, int]:
    """Sum the score contributions of each answered option. Unknown answers are skipped."""
    scores: dict[str, int] = {}
    for answer in answers:
        question = tree.get_question(answer.question_id)
        if question is None:
            continue
        option = question.get_option(answer.option_id)
        if option is None:
            continue
        for outcome, points in option.scores.items():
            scores[outcome] = scores.get(outcome, 0) + points
    return scores


# -----------------------------------------------------------------------------
# Winner and tie-breaking
# -----------------------------------------------------------------------------


def break_tie(tied: list[str], tree: DecisionTree) -> tuple[str, str]:
    """Resolve a tie at the top score. Returns (winner, explanation)."""
    documented = [outcome for outcome in tied if outcome in tree.results]
    if len(documented) == 1:
        return documented[0], DOCUMENTATION_TIE_BREAK

    winner = sorted(tied)[0]
    explanation = (
        f"Tied with {len(tied)} options ({', '.join(tied)}). "
        "Consider reviewing your requirements - these options may be equally suitable."
    )
    return winner, explanation


def determine_winner(scores: dict[str, int], tree: DecisionTree) -> tuple[str, Optional[str]]:
    """Pick the highest-scoring outcome. Returns (winner, tie-break explanation or None)."""
    if not scores:
        raise NoRecommendation()

    top = max(scores.values())
    leaders = [outcome for outcome, points in scores.items() if points == top]
    if len(leaders) == 1:
        return leaders[0], None

    winner, explanation = break_tie(leaders, tree)
    logger.debug("Tie between %s resolved to %s", leaders, winner)
    return winner, explanation


# -----------------------------------------------------------------------------
# Confidence
# -----------------------------------------------------------------------------


def calculate_confidence(scores: dict[str, int], winner: str) -> Confidence:
    """
    Classify the winner's margin over the next competing score.

    Competing scores are all values other than the winner's, plus the winner's
    own value when another outcome shares it. 0 always competes, so a lone or
    negative winner is compared against 0.
    """
    values = list(scores.values())
    winner_score = scores[winner]
    shared_top = values.count(winner_score) > 1
    competitors = [v for v in values if v != winner_score or shared_top]
    second_highest = max(competitors + [0])

    difference = winner_score - second_highest
    if difference >= HIGH_CONFIDENCE_MARGIN:
        return Confidence.HIGH
    if difference >= MEDIUM_CONFIDENCE_MARGIN:
        return Confidence.MEDIUM
    return Confidence.LOW


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------


def calculate(tree: DecisionTree, answers: Sequence[Answer]) -> RecommendationResult:
    """Validate the answer path and return the recommendation for it."""
    consumed = validate_answer_path(tree, answers)
    scores = calculate_scores(tree, answers[:consumed])
    winner, tie_breaker = determine_winner(scores, tree)
    confidence = calculate_confidence(scores, winner)

    result = tree.results.get(winner)
    if result is None:
        raise ResultNotFound(f"Result not found for outcome '{winner}'")

    return RecommendationResult(
        recommendation=winner,
        scores=scores,
        result=result,
        answers=list(answers),
        tie_breaker=tie_breaker,
        confidence=confidence,
    )
