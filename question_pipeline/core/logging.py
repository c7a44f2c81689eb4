"""
Structured logging configuration using structlog.

Provides consistent, structured logging across the package with:
- JSON output in production
- Pretty console output in development
- Context binding for per-question tracing
- Optional file output (session-based rotation) when log_dir is configured
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import structlog
from structlog.typing import Processor

from question_pipeline.core.config import Settings, settings as default_settings


def _cull_old_logs(logs_dir: Path, keep: int) -> None:
    """Delete old log files, keeping only the N most recent.

    Args:
        logs_dir: Directory containing log files
        keep: Number of recent log files to retain
    """
    log_files = sorted(
        logs_dir.glob("prompt_*.log"),
        key=lambda p: p.stat().st_mtime,
        reverse=True,
    )

    for old_file in log_files[keep:]:
        try:
            os.remove(old_file)
        except OSError:
            pass  # Ignore permission errors, etc.


def configure_logging(settings: Optional[Settings] = None) -> Optional[Path]:
    """Configure structlog for the application.

    Call this once at startup, before any logging. Library code never calls
    it; the CLI does.

    When ``settings.log_dir`` is set, a new timestamped log file is created
    per session and old logs are culled, keeping only the most recent
    ``settings.log_sessions_to_keep`` files.

    Args:
        settings: Settings to read from (defaults to the global instance)

    Returns:
        Path of the session log file, or None when file logging is off
    """
    settings = settings or default_settings
    level = getattr(logging, settings.log_level)

    shared_processors: List[Processor] = [
        # Add context from contextvars (question-scoped context)
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ExtraAdder(),
    ]

    if settings.debug:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    # Clear any existing handlers first (needed for reconfiguration in tests)
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)

    # Answers are written to stdout, so logs go to stderr
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    log_file = None
    if settings.log_dir is not None:
        logs_dir = Path(settings.log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)

        # keep-1 to make room for the new file
        _cull_old_logs(logs_dir, keep=settings.log_sessions_to_keep - 1)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = logs_dir / f"prompt_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(file_handler)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return log_file


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Bound structlog logger

    Usage:
        from question_pipeline.core.logging import get_logger

        log = get_logger(__name__)
        log.info("something_happened", key="value")
    """
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """
    Bind context variables that will be included in all subsequent logs.

    Useful for question-scoped context:

        bind_context(question=question.message)
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables from the logging context."""
    structlog.contextvars.clear_contextvars()
