"""Line-oriented ask loop.

PromptService hosts Question evaluation on top of any text stream: it prints
the question, reads a line (or a single character in character mode), hands
the answer to Question.evaluate, converts accepted answers to the question's
read type, and decides from the question's error action whether to ask
again after a rejected answer.

Terminal control (echo suppression, raw mode, masking) is not performed
here; the question's echo/raw/mask flags are left for terminal-aware
front ends.
"""

import sys
from typing import Any, Callable, Dict, Iterable, Optional, TextIO, Tuple, Union

import structlog

from question_pipeline.converters.builtin import DEFAULT_REGISTRY
from question_pipeline.converters.registry import ConverterRegistry
from question_pipeline.core.config import Settings, settings as default_settings
from question_pipeline.core.exceptions import (
    ConversionError,
    InputClosedError,
    QuestionPipelineError,
    RetryLimitExceededError,
)
from question_pipeline.core.logging import bind_context, clear_context
from question_pipeline.domain.models.question_options import QuestionOptions
from question_pipeline.question.question import Question

log = structlog.get_logger(__name__)


class PromptService:
    """Ask questions over a pair of text streams.

    Reads from ``input`` and writes prompts and error messages to
    ``output``. Blank lines and end of input count as "no answer", so a
    question's default applies.
    """

    def __init__(
        self,
        input: Optional[TextIO] = None,
        output: Optional[TextIO] = None,
        registry: Optional[ConverterRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize prompt service.

        Args:
            input: Stream answers are read from (default: stdin)
            output: Stream prompts are written to (default: stdout)
            registry: Converter registry shared by all questions asked
            settings: Settings for prefix, retries and blank-line handling
        """
        self.input = input or sys.stdin
        self.output = output or sys.stdout
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.settings = settings or default_settings

    def ask(
        self,
        message: str,
        configure: Optional[Callable[[Question], Any]] = None,
        **options: Any,
    ) -> Any:
        """Ask a question and return the accepted, converted answer.

        Args:
            message: Prompt text
            configure: Optional callable that configures the question
            **options: Question options (see Question.configure)

        Returns:
            Final answer

        Raises:
            EvaluationError / ConversionError: Answer rejected and the
                question has no error action that asks again
            RetryLimitExceededError: Still no valid answer after
                settings.max_retries attempts
            InputClosedError: Input ended with no acceptable answer
        """
        question = Question(registry=self.registry, **options).call(message, configure)
        return self.ask_question(question)

    def ask_many(
        self, questions: Iterable[Union[QuestionOptions, Dict[str, Any]]]
    ) -> Dict[str, Any]:
        """Ask several declarative questions in order.

        Returns:
            Answers keyed by question name (or message for unnamed questions)
        """
        answers: Dict[str, Any] = {}
        for options in questions:
            if not isinstance(options, QuestionOptions):
                options = QuestionOptions(**options)
            question = Question.from_options(options, registry=self.registry)
            answers[options.name or options.message] = self.ask_question(question)
        return answers

    def ask_question(self, question: Question) -> Any:
        """Run the ask loop for an already configured question."""
        bind_context(question=question.message)
        try:
            return self._ask_loop(question)
        finally:
            clear_context()

    def _ask_loop(self, question: Question) -> Any:
        attempt = 0
        while True:
            attempt += 1
            self._render(question)
            raw, closed = self._read(question)

            result = question.evaluate(raw)
            error: Optional[QuestionPipelineError] = result.error
            if result.ok:
                try:
                    answer = question.convert(result.value)
                    log.info("answer_accepted", attempt=attempt)
                    return answer
                except ConversionError as e:
                    question.reopen()
                    error = e

            log.info(
                "answer_rejected",
                attempt=attempt,
                error_type=type(error).__name__,
                error=error.message,
            )
            self._write(f">> {error.message}\n")

            if closed:
                raise InputClosedError("Input ended without a valid answer") from error
            if not self._should_retry(question, error):
                raise error
            if attempt >= self.settings.max_retries:
                raise RetryLimitExceededError(attempt, error)

    def _should_retry(self, question: Question, error: QuestionPipelineError) -> bool:
        action = question.on_error
        if action is None or action == "raise":
            return False
        if action == "retry":
            return True
        return bool(action(error))

    def _render(self, question: Question) -> None:
        text = f"{self.settings.prompt_prefix}{question.message} "
        if question.has_default:
            text += f"({question.default}) "
        self._write(text)

    def _read(self, question: Question) -> Tuple[Optional[str], bool]:
        """Read one answer.

        Returns:
            Tuple of (answer or None when absent, whether input is exhausted)
        """
        if question.character:
            char = self.input.read(1)
            if char == "":
                return None, True
            return (None if char in ("\n", "\r") else char), False

        line = self.input.readline()
        if line == "":
            return None, True
        line = line.rstrip("\r\n")
        if self.settings.blank_input_is_absent and line.strip() == "":
            return None, False
        return line, False

    def _write(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()
