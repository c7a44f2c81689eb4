"""
Command line entry point.

Usage:
    question-pipeline ask "What is your name?" --default Anonymous
    question-pipeline ask "Pick a number" --range 1-10 --read int --retry
    question-pipeline file config/questions/signup.yaml
"""

import argparse
import json
import sys
from typing import List, Optional

from question_pipeline.core.config import settings
from question_pipeline.core.exceptions import QuestionPipelineError
from question_pipeline.core.logging import configure_logging, get_logger
from question_pipeline.core.question_loader import load_questions
from question_pipeline.question.modifier import BUILTIN_RULES
from question_pipeline.services.prompt_service import PromptService

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="question-pipeline",
        description="Ask validated questions on the command line",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ask = subparsers.add_parser("ask", help="Ask a single question")
    ask.add_argument("message", help="Question text")
    ask.add_argument("--default", help="Answer used when nothing is entered")
    ask.add_argument("--required", action="store_true", help="Reject empty answers")
    ask.add_argument("--range", help="Accepted range, e.g. 1-10 or a-z")
    ask.add_argument("--validate", help="Regular expression the answer must match")
    ask.add_argument(
        "--search",
        action="store_true",
        help="Accept a pattern match anywhere in the answer",
    )
    ask.add_argument(
        "--modify",
        nargs="+",
        default=[],
        choices=sorted(BUILTIN_RULES),
        metavar="RULE",
        help="Modifier rules applied in order",
    )
    ask.add_argument("--read", help="Converter for the final answer (int, float, bool, ...)")
    ask.add_argument("--retry", action="store_true", help="Ask again after a rejected answer")

    questionnaire = subparsers.add_parser("file", help="Ask every question in a YAML file")
    questionnaire.add_argument("path", help="Questionnaire file or name")

    return parser


def _ask_options(args: argparse.Namespace) -> dict:
    options = {
        "required": args.required,
        "range": args.range,
        "modify": args.modify,
        "read": args.read,
        "on_error": "retry" if args.retry else None,
    }
    if args.default is not None:
        options["default"] = args.default
    if args.validate is not None:
        options["validation"] = args.validate
        options["validation_mode"] = "search" if args.search else "full"
    return options


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings)

    # Prompts go to stderr so stdout carries only the answers
    service = PromptService(output=sys.stderr)

    try:
        if args.command == "ask":
            answer = service.ask(args.message, **_ask_options(args))
            print(json.dumps(answer, default=str))
        else:
            answers = service.ask_many(load_questions(args.path))
            print(json.dumps(answers, default=str, indent=2))
    except (QuestionPipelineError, FileNotFoundError) as e:
        log.error("prompt_failed", error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
