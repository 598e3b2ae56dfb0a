import logging
import os
import sys
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator, Optional

from rich.logging import RichHandler

from gitsdk.constants import (
    DEBUG_LOG_FORMAT,
    INFO_LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_MAX_BYTES,
    LOG_FILE_NAME,
    LOG_LEVEL_ENV_VAR,
    LOGGER_NAME,
)

logger = logging.getLogger(LOGGER_NAME)

# Kept so add_file_logging() can be called again to reconfigure
_file_handler: Optional[RotatingFileHandler] = None


def _resolve_level(level_name: str) -> Optional[int]:
    level = getattr(logging, level_name.upper(), None)
    return level if isinstance(level, int) else None


def _file_formatter(level: int) -> logging.Formatter:
    if level >= logging.INFO:
        return logging.Formatter(INFO_LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    return logging.Formatter(DEBUG_LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def set_log_level(level_name: str) -> None:
    """
    Set the log level for the gitsdk logger and all attached handlers.

    If `level_name` is not a valid logging level name the function logs a
    warning and leaves the current configuration unchanged. Rich console
    handlers always use a message-only formatter; file handlers switch between
    the informational and the debug format depending on the new level.

    Parameters:
        level_name (str): Case-insensitive level name (e.g. "debug", "INFO").
    """
    level = _resolve_level(level_name)
    if level is None:
        logger.warning(f"Invalid log level name: {level_name}. Using current level.")
        return

    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
        if isinstance(handler, RichHandler):
            handler.setFormatter(logging.Formatter("%(message)s"))
        else:
            handler.setFormatter(_file_formatter(level))

    logger.log(level, f"Log level set to {logging.getLevelName(level)}")


def add_file_logging(log_dir_path: Path, level_name: str = "INFO") -> None:
    """
    Enable rotating file logging into `log_dir_path/git-sdk-fetch.log`.

    The directory is created if necessary. An invalid `level_name` falls back
    to INFO. File logging previously configured by this function is removed
    and closed first.
    """
    global _file_handler
    if _file_handler and _file_handler in logger.handlers:
        logger.removeHandler(_file_handler)
        _file_handler.close()

    log_dir_path.mkdir(parents=True, exist_ok=True)
    log_file = log_dir_path / LOG_FILE_NAME

    file_log_level = _resolve_level(level_name)
    if file_log_level is None:
        logger.warning(
            f"Invalid file log level name: {level_name}. Defaulting to INFO."
        )
        file_log_level = logging.INFO

    _file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    _file_handler.setFormatter(_file_formatter(file_log_level))
    _file_handler.setLevel(file_log_level)

    logger.addHandler(_file_handler)
    logger.info(
        f"File logging enabled at {log_file} with level {logging.getLevelName(file_log_level)}"
    )


def in_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


@contextmanager
def log_group(title: str) -> Iterator[None]:
    """
    Bracket the output of one pipeline stage.

    Inside GitHub Actions the workflow-command markers `::group::` and
    `::endgroup::` are written straight to stdout, so that the output of the
    child processes spawned inside the block folds into one group. Elsewhere
    the title is logged at INFO. The group is closed whether or not the block
    raises.
    """
    if in_github_actions():
        sys.stdout.write(f"::group::{title}\n")
        sys.stdout.flush()
    else:
        logger.info(title)
    try:
        yield
    finally:
        if in_github_actions():
            sys.stdout.write("::endgroup::\n")
            sys.stdout.flush()


def _initialize_logger() -> None:
    """
    Initialize the gitsdk logger with a console RichHandler.

    Existing handlers are removed and propagation to the root logger is
    disabled. The initial level comes from the environment variable named by
    LOG_LEVEL_ENV_VAR and defaults to INFO.
    """
    logger.propagate = False

    # Interactive sessions may import this module more than once
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
        log_time_format=LOG_DATE_FORMAT,
    )

    default_log_level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
    initial_level = _resolve_level(default_log_level)
    if initial_level is None:
        logger.warning(
            f"Invalid {LOG_LEVEL_ENV_VAR}={default_log_level}; defaulting to INFO."
        )
        initial_level = logging.INFO

    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    logger.setLevel(initial_level)
    console_handler.setLevel(initial_level)


_initialize_logger()
