"""
Shared test fixtures.

Minimal fixture set for question pipeline tests.
"""

import io
import logging

import pytest
import structlog

from question_pipeline.converters.builtin import DEFAULT_REGISTRY
from question_pipeline.core import question_loader
from question_pipeline.core.config import Settings
from question_pipeline.question.question import Question
from question_pipeline.services.prompt_service import PromptService


@pytest.fixture
def registry():
    """Shared default converter registry."""
    return DEFAULT_REGISTRY


@pytest.fixture
def make_question():
    """Factory for configured questions."""

    def _make(message="What is your answer?", **options):
        return Question(**options).call(message)

    return _make


@pytest.fixture
def test_settings():
    """Settings isolated from the environment defaults."""
    return Settings(
        prompt_prefix="",
        max_retries=3,
        blank_input_is_absent=True,
        debug=False,
        log_dir=None,
    )


@pytest.fixture
def make_prompt(test_settings):
    """Factory for a PromptService reading canned input.

    Returns (service, output) so tests can inspect what was printed.
    """

    def _make(text="", settings=None):
        output = io.StringIO()
        service = PromptService(
            input=io.StringIO(text),
            output=output,
            settings=settings or test_settings,
        )
        return service, output

    return _make


@pytest.fixture(autouse=True, scope="session")
def route_logs_to_stdlib():
    """Send structlog output through stdlib logging so stdout only carries answers."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.KeyValueRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def clear_question_cache():
    """Questionnaire cache must not leak between tests."""
    question_loader.clear_cache()
    yield
    question_loader.clear_cache()
