"""Tests for questionnaire loading."""

from pathlib import Path

import pytest

from question_pipeline.core.exceptions import ConfigurationError
from question_pipeline.core.question_loader import load_question_file, load_questions

EXAMPLE_DIR = Path(__file__).resolve().parents[2] / "config" / "questions"

VALID = """
id: survey
questions:
  - name: colour
    message: "Favourite colour?"
    default: blue
    modify: [trim, downcase]
  - name: score
    message: "Score?"
    range: "1-5"
    read: int
"""


@pytest.fixture
def questions_dir(tmp_path):
    (tmp_path / "survey.yaml").write_text(VALID)
    return tmp_path


class TestLoadQuestionFile:
    """Tests for load_question_file."""

    def test_by_name(self, questions_dir):
        question_file = load_question_file("survey", questions_dir=questions_dir)

        assert question_file.id == "survey"
        assert [q.name for q in question_file.questions] == ["colour", "score"]

    def test_by_path(self, questions_dir):
        question_file = load_question_file(questions_dir / "survey.yaml")

        assert question_file.questions[1].range == "1-5"

    def test_cached(self, questions_dir):
        first = load_question_file("survey", questions_dir=questions_dir)
        second = load_question_file("survey", questions_dir=questions_dir)

        assert first is second

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_question_file("nothing", questions_dir=tmp_path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("questions: [unclosed")

        with pytest.raises(ConfigurationError):
            load_question_file(path)

    def test_invalid_options(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("questions:\n  - message: Hi\n    colour: red\n")

        with pytest.raises(ConfigurationError):
            load_question_file(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            load_question_file(path)


def test_load_questions(questions_dir):
    questions = load_questions("survey", questions_dir=questions_dir)

    assert questions[0].has_default
    assert questions[0].modify == ["trim", "downcase"]
    assert not questions[1].has_default


def test_example_questionnaire_loads():
    """The shipped example file is valid."""
    questions = load_questions(EXAMPLE_DIR / "signup.yaml")

    assert [q.name for q in questions] == ["username", "age", "newsletter"]
    assert questions[2].has_default and questions[2].default is False
