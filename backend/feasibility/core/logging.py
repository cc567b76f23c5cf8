import logging
import sys
from functools import lru_cache
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Literal, Optional

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Symbols used to draw the pipeline flow
FLOW_SYMBOLS = {
    "start": "╔",
    "node": "║",
    "arrow": "→",
    "end": "╚",
    "route": "◆",
}


def _configure_root_logger(level: LogLevel, log_file: Optional[Path] = None) -> None:
    """Configure the root logger with a console handler and an optional file handler."""
    root = logging.getLogger()
    if root.handlers:
        return

    formatter = logging.Formatter(_LOG_FORMAT, _DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    # Daily rotation, keeps 7 days
    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = TimedRotatingFileHandler(
                log_file,
                when="midnight",
                interval=1,
                backupCount=7,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as e:
            root.warning(f"Could not open log file {log_file}, console only: {e}")

    root.setLevel(level)


@lru_cache(maxsize=128)
def get_logger(name: str) -> logging.Logger:
    """
    Return a configured logger for the given module.

    Usage:
        from feasibility.core.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Message")
    """
    from feasibility.core.config import get_settings

    settings = get_settings()
    _configure_root_logger(settings.log_level, settings.log_file)
    return logging.getLogger(name)


class EngineLogger:
    """Tracing logger for feasibility and recommendation pipeline runs."""

    def __init__(self, pipeline_name: str):
        self._logger = get_logger(f"pipeline.{pipeline_name}")
        self.pipeline_name = pipeline_name

    def pipeline_start(self, problem_statement: str, flow: str) -> None:
        """Log the start of a pipeline run."""
        preview = problem_statement[:100].replace("\n", " ")
        self._logger.info("=" * 70)
        self._logger.info(f"{FLOW_SYMBOLS['start']}══ {self.pipeline_name.upper()} START ══════════════════════════════")
        self._logger.info(f"{FLOW_SYMBOLS['node']} Problem: {preview}{'...' if len(problem_statement) > 100 else ''}")
        self._logger.info(f"{FLOW_SYMBOLS['node']} Flow: {flow}")
        self._logger.info("=" * 70)

    def pipeline_end(self, **summary) -> None:
        """Log the end of a pipeline run with a key/value summary."""
        self._logger.info("=" * 70)
        self._logger.info(f"{FLOW_SYMBOLS['end']}══ {self.pipeline_name.upper()} COMPLETE ═══════════════════════════")
        for key, value in summary.items():
            label = key.replace("_", " ").title()
            self._logger.info(f"   {FLOW_SYMBOLS['route']} {label}: {value}")
        self._logger.info("=" * 70)

    def step_enter(self, step: str, detail: str | None = None) -> None:
        self._logger.debug(f"{FLOW_SYMBOLS['node']} [{step.upper()}] {FLOW_SYMBOLS['arrow']} Entering | {detail or ''}")

    def step_exit(self, step: str, result: str | None = None) -> None:
        self._logger.debug(f"{FLOW_SYMBOLS['node']} [{step.upper()}] {FLOW_SYMBOLS['arrow']} Exiting | {result or 'OK'}")

    def error(self, step: str, error: Exception) -> None:
        self._logger.error(f"{FLOW_SYMBOLS['node']} [{step.upper()}] ERROR: {type(error).__name__}: {error}", exc_info=True)

    def debug(self, step: str, message: str) -> None:
        self._logger.debug(f"{FLOW_SYMBOLS['node']} [{step}] {message}")
