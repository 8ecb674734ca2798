"""
Pytest fixtures for Architecture Journey tests.

tree_data is the two-question tree used throughout the recommendation tests:
q1 (opt1 -> q2, opt2 -> end) and q2 (opt3 -> end), outcomes tech1 and tech2.
"""

import copy

import pytest

from journey.models import DecisionTree
from journey.sample_trees import DATABASE_SELECTION

TREE_DATA = {
    "id": "test-tree",
    "title": "Test Tree",
    "description": "Test description",
    "version": "1.0.0",
    "questions": [
        {
            "id": "q1",
            "text": "Question 1?",
            "options": [
                {"id": "opt1", "label": "Option 1", "nextQuestionId": "q2", "scores": {"tech1": 3, "tech2": 1}},
                {"id": "opt2", "label": "Option 2", "nextQuestionId": None, "scores": {"tech1": 1, "tech2": 3}},
            ],
        },
        {
            "id": "q2",
            "text": "Question 2?",
            "options": [
                {"id": "opt3", "label": "Option 3", "nextQuestionId": None, "scores": {"tech1": 2, "tech2": 1}},
            ],
        },
    ],
    "results": {
        "tech1": {
            "name": "Technology 1",
            "reasoning": "Tech 1 is best",
            "tradeoffs": ["Tradeoff 1"],
            "whenToReconsider": "When X happens",
            "bestFor": "Use case A",
        },
        "tech2": {
            "name": "Technology 2",
            "reasoning": "Tech 2 is best",
            "tradeoffs": ["Tradeoff 2"],
            "whenToReconsider": "When Y happens",
            "bestFor": "Use case B",
        },
    },
}


def make_result(name: str) -> dict:
    return {
        "name": name,
        "reasoning": f"{name} fits",
        "tradeoffs": [f"{name} tradeoff"],
        "whenToReconsider": "Requirements change",
        "bestFor": "Tests",
    }


def single_question_tree(scores: dict, results: dict = None) -> DecisionTree:
    """Tree with one terminal option carrying the given scores."""
    if results is None:
        results = {key: make_result(key.upper()) for key in scores} or {"placeholder": make_result("P")}
    return DecisionTree.model_validate(
        {
            "id": "single",
            "title": "Single question",
            "questions": [
                {
                    "id": "only",
                    "text": "Pick one",
                    "options": [{"id": "pick", "label": "Pick", "nextQuestionId": None, "scores": scores}],
                }
            ],
            "results": results,
        }
    )


@pytest.fixture
def tree_data() -> dict:
    """Raw (camelCase) tree mapping; a fresh copy per test so tests may mutate it."""
    return copy.deepcopy(TREE_DATA)


@pytest.fixture
def tree(tree_data) -> DecisionTree:
    return DecisionTree.model_validate(tree_data)


@pytest.fixture
def sample_tree_data() -> dict:
    return copy.deepcopy(DATABASE_SELECTION)


@pytest.fixture
def single_tree():
    """Factory: single_tree(scores, results=None) -> DecisionTree."""
    return single_question_tree
