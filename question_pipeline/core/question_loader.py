"""Question loader for questionnaire YAML files.

Loads question definitions from YAML. A questionnaire file holds a list of
questions, each validated as QuestionOptions. Files are cached after first
load.

Example file:

    id: signup
    questions:
      - name: username
        message: "Username?"
        required: true
        validation: "[a-z_]+"
        modify: [trim, downcase]
      - name: age
        message: "Age?"
        range: "18-120"
        read: int
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

import structlog
import yaml
from pydantic import ValidationError as PydanticValidationError

from question_pipeline.core.config import settings
from question_pipeline.core.exceptions import ConfigurationError
from question_pipeline.domain.models.question_options import QuestionFile, QuestionOptions

log = structlog.get_logger(__name__)

# Module-level cache (questionnaires don't change at runtime)
_cache: Dict[Path, QuestionFile] = {}


def _resolve_path(name_or_path: Union[str, Path], questions_dir: Optional[Path]) -> Path:
    path = Path(name_or_path)
    if path.suffix in (".yaml", ".yml"):
        return path
    questions_dir = questions_dir or settings.questions_dir
    return Path(questions_dir) / f"{path.name}.yaml"


def load_question_file(
    name_or_path: Union[str, Path], questions_dir: Optional[Path] = None
) -> QuestionFile:
    """Load and validate a questionnaire file.

    Args:
        name_or_path: Path to a .yaml/.yml file, or a questionnaire name looked
            up as {questions_dir}/{name}.yaml
        questions_dir: Override settings.questions_dir (for testing)

    Returns:
        Validated QuestionFile

    Raises:
        FileNotFoundError: File does not exist
        ConfigurationError: Invalid YAML or invalid question options
    """
    path = _resolve_path(name_or_path, questions_dir).resolve()
    if path in _cache:
        return _cache[path]

    if not path.exists():
        raise FileNotFoundError(f"Question file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Question file {path} must contain a mapping")

    try:
        question_file = QuestionFile(**data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid question file {path}: {e}") from e

    _cache[path] = question_file
    log.info(
        "question_file_loaded",
        path=str(path),
        question_count=len(question_file.questions),
    )
    return question_file


def load_questions(
    name_or_path: Union[str, Path], questions_dir: Optional[Path] = None
) -> List[QuestionOptions]:
    """Load the question list from a questionnaire file."""
    return list(load_question_file(name_or_path, questions_dir).questions)


def clear_cache() -> None:
    """Clear the questionnaire cache (for tests and reloads)."""
    _cache.clear()
