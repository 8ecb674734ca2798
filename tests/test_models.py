"""Tests for tree models, error payloads, schema export and logging helpers."""

import json
import logging

import pytest
from pydantic import ValidationError

from journey.errors import InvalidAnswerPath, MissingAnswers, OptionNotFound, TreeInvalid
from journey.models import (
    Answer,
    DecisionTree,
    get_decision_tree_json_schema,
    write_decision_tree_schema_to_file,
)
from journey.utils.logging import configure_logging, log_validation_result


def test_tree_accepts_camel_and_snake_case(tree_data):
    tree = DecisionTree.model_validate(tree_data)
    assert tree.entry_question_id == "q1"
    assert tree.get_question("q1").get_option("opt1").next_question_id == "q2"
    assert tree.get_question("q2").get_option("opt3").is_terminal
    assert tree.get_question("missing") is None
    assert Answer(questionId="q1", optionId="opt1") == Answer(question_id="q1", option_id="opt1")


def test_tree_is_immutable(tree):
    with pytest.raises(ValidationError):
        tree.title = "changed"


def test_tree_requires_questions_and_results(tree_data):
    with pytest.raises(ValidationError):
        DecisionTree.model_validate({**tree_data, "questions": []})
    with pytest.raises(ValidationError):
        DecisionTree.model_validate({**tree_data, "results": {}})


def test_error_payloads():
    assert MissingAnswers().to_dict() == {"code": "MISSING_ANSWERS", "message": "No answers provided"}
    assert OptionNotFound("x", "q1").status_code == 404
    assert InvalidAnswerPath("bad").status_code == 400
    assert TreeInvalid("bad", details=[{"code": "EMPTY_TREE"}]).to_dict()["details"] == [{"code": "EMPTY_TREE"}]


def test_json_schema_export(tmp_path):
    schema = get_decision_tree_json_schema()
    assert schema["title"] == "Architecture Journey Decision Tree"
    assert "questions" in schema["properties"]
    path = write_decision_tree_schema_to_file(tmp_path / "schemas" / "tree.json")
    assert json.loads(path.read_text(encoding="utf-8"))["version"] == schema["version"]


def test_log_validation_result_level(caplog):
    logger = logging.getLogger("journey.test")
    with caplog.at_level(logging.INFO, logger="journey.test"):
        log_validation_result(logger, "t1", errors=0, warnings=2)
        log_validation_result(logger, "t1", errors=1, warnings=0)
    levels = [r.levelno for r in caplog.records]
    assert levels == [logging.INFO, logging.WARNING]
    assert '"warnings": 2' in caplog.records[0].getMessage()


def test_configure_logging_writes_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging(level="DEBUG", log_dir=tmp_path, log_to_console=False)
        logging.getLogger("journey.test").info("hello file")
        for handler in root.handlers:
            handler.flush()
        assert "hello file" in (tmp_path / "journey.log").read_text(encoding="utf-8")
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
        logging.getLogger("journey").setLevel(logging.NOTSET)
