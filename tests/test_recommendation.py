"""Unit tests for the recommendation calculator."""

import pytest

from journey.errors import (
    ErrorCode,
    InvalidAnswerPath,
    MissingAnswers,
    NoRecommendation,
    OptionNotFound,
    QuestionNotFound,
    ResultNotFound,
)
from journey.models import Answer, Confidence, DecisionTree
from journey.services.recommendation_service import (
    DOCUMENTATION_TIE_BREAK,
    calculate,
    calculate_confidence,
    calculate_scores,
    determine_winner,
    validate_answer_path,
)


def answers(*pairs):
    return [Answer(question_id=q, option_id=o) for q, o in pairs]


# -----------------------------------------------------------------------------
# calculate
# -----------------------------------------------------------------------------


def test_calculate_valid_path(tree):
    result = calculate(tree, answers(("q1", "opt1"), ("q2", "opt3")))
    assert result.recommendation == "tech1"
    assert result.scores == {"tech1": 5, "tech2": 2}
    assert result.confidence == Confidence.MEDIUM
    assert result.tie_breaker is None
    assert result.result.name == "Technology 1"
    assert result.answers == answers(("q1", "opt1"), ("q2", "opt3"))


def test_calculate_single_question_path(tree):
    result = calculate(tree, answers(("q1", "opt2")))
    assert result.recommendation == "tech2"
    assert result.scores == {"tech1": 1, "tech2": 3}
    assert result.confidence == Confidence.MEDIUM


def test_empty_answers_raise_missing_answers(tree):
    with pytest.raises(MissingAnswers) as exc:
        calculate(tree, [])
    assert exc.value.code == ErrorCode.MISSING_ANSWERS
    assert exc.value.status_code == 400


def test_first_answer_not_on_entry_question(tree):
    with pytest.raises(InvalidAnswerPath):
        calculate(tree, answers(("invalid", "opt1")))


def test_unknown_option(tree):
    with pytest.raises(OptionNotFound) as exc:
        calculate(tree, answers(("q1", "nope")))
    assert exc.value.option_id == "nope"
    assert exc.value.question_id == "q1"


def test_out_of_order_answers_rejected(tree):
    with pytest.raises(InvalidAnswerPath) as exc:
        calculate(tree, answers(("q2", "opt3"), ("q1", "opt1")))
    assert "position 0" in exc.value.message


def test_incomplete_path_rejected(tree):
    with pytest.raises(InvalidAnswerPath) as exc:
        calculate(tree, answers(("q1", "opt1")))
    assert "did not reach a valid end node" in exc.value.message


def test_dangling_next_question_raises_question_not_found(tree_data):
    tree_data["questions"][0]["options"][0]["nextQuestionId"] = "ghost"
    tree = DecisionTree.model_validate(tree_data)
    with pytest.raises(QuestionNotFound) as exc:
        calculate(tree, answers(("q1", "opt1"), ("ghost", "x")))
    assert exc.value.question_id == "ghost"


def test_answers_after_terminal_option_are_ignored(tree):
    supplied = answers(("q1", "opt2"), ("q2", "opt3"), ("nowhere", "nothing"))
    result = calculate(tree, supplied)
    assert result.scores == {"tech1": 1, "tech2": 3}
    assert result.recommendation == "tech2"
    assert result.answers == supplied


def test_no_scores_raise_no_recommendation(single_tree):
    tree = single_tree({})
    with pytest.raises(NoRecommendation) as exc:
        calculate(tree, answers(("only", "pick")))
    assert exc.value.status_code == 422


def test_winner_without_descriptor_raises_result_not_found(single_tree):
    tree = single_tree({"ghost": 3}, results={"other": {"name": "Other"}})
    with pytest.raises(ResultNotFound):
        calculate(tree, answers(("only", "pick")))


def test_tie_resolved_alphabetically_through_calculate(single_tree):
    tree = single_tree({"b": 2, "a": 2})
    result = calculate(tree, answers(("only", "pick")))
    assert result.recommendation == "a"
    assert result.confidence == Confidence.LOW
    assert "a" in result.tie_breaker and "b" in result.tie_breaker


def test_calculate_is_deterministic_and_leaves_tree_untouched(tree):
    before = tree.model_dump()
    walk = answers(("q1", "opt1"), ("q2", "opt3"))
    first = calculate(tree, walk)
    second = calculate(tree, walk)
    assert first.model_dump() == second.model_dump()
    assert tree.model_dump() == before


def test_result_serializes_with_camel_case_aliases(single_tree):
    result = calculate(single_tree({"b": 2, "a": 2}), answers(("only", "pick")))
    data = result.model_dump(mode="json", by_alias=True)
    assert data["tieBreaker"]
    assert data["answers"] == [{"questionId": "only", "optionId": "pick"}]
    assert data["confidence"] == "low"
    assert data["result"]["whenToReconsider"] == "Requirements change"


# -----------------------------------------------------------------------------
# Sub-steps
# -----------------------------------------------------------------------------


def test_validate_answer_path_returns_consumed_count(tree):
    assert validate_answer_path(tree, answers(("q1", "opt1"), ("q2", "opt3"), ("q1", "opt2"))) == 2


def test_calculate_scores_sums_and_skips_unknown(tree):
    scores = calculate_scores(
        tree,
        answers(("q1", "opt1"), ("q2", "opt3"), ("missing", "opt1"), ("q1", "missing")),
    )
    assert scores == {"tech1": 5, "tech2": 2}


def test_calculate_scores_is_order_independent(tree):
    forward = calculate_scores(tree, answers(("q1", "opt1"), ("q2", "opt3")))
    backward = calculate_scores(tree, answers(("q2", "opt3"), ("q1", "opt1")))
    assert forward == backward


def test_single_leader_has_no_tie_breaker(tree):
    assert determine_winner({"tech1": 4, "tech2": 3}, tree) == ("tech1", None)


def test_tie_break_is_alphabetical(tree):
    winner, explanation = determine_winner({"b": 5, "a": 5}, tree)
    assert winner == "a"
    assert explanation
    assert "Tied with 2 options (b, a)" in explanation


def test_tie_break_prefers_documented_outcome(tree):
    winner, explanation = determine_winner({"zeta": 5, "tech2": 5}, tree)
    assert winner == "tech2"
    assert explanation == DOCUMENTATION_TIE_BREAK


def test_tie_break_is_case_sensitive(single_tree):
    tree = single_tree({"b": 1, "B": 1})
    winner, _ = determine_winner({"b": 3, "B": 3}, tree)
    assert winner == "B"


def test_empty_scores_raise_no_recommendation(tree):
    with pytest.raises(NoRecommendation):
        determine_winner({}, tree)


# -----------------------------------------------------------------------------
# Confidence
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "scores, winner, expected",
    [
        ({"a": 10, "b": 2}, "a", Confidence.HIGH),
        ({"a": 7, "b": 5}, "a", Confidence.MEDIUM),
        ({"a": 5, "b": 4}, "a", Confidence.LOW),
        ({"a": 5, "b": 5}, "a", Confidence.LOW),
        ({"a": 6, "b": 6, "c": 1}, "a", Confidence.LOW),
        ({"a": 9, "b": 4, "c": 4}, "a", Confidence.HIGH),
    ],
)
def test_confidence_thresholds(scores, winner, expected):
    assert calculate_confidence(scores, winner) == expected


def test_confidence_lone_outcome_compares_against_zero():
    assert calculate_confidence({"a": 5}, "a") == Confidence.HIGH
    assert calculate_confidence({"a": 4}, "a") == Confidence.MEDIUM
    assert calculate_confidence({"a": 1}, "a") == Confidence.LOW


def test_confidence_negative_winner_is_low():
    assert calculate_confidence({"a": -1, "b": -3}, "a") == Confidence.LOW


def test_tie_at_top_yields_low_with_explanation(tree):
    scores = {"a": 5, "b": 5}
    winner, explanation = determine_winner(scores, tree)
    assert (winner, calculate_confidence(scores, winner)) == ("a", Confidence.LOW)
    assert explanation
