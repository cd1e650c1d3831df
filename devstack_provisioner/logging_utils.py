from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "devstack-provisioner.log"

FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CONSOLE_FORMAT = "%(levelname)s %(message)s"


class ConsoleFormatter(logging.Formatter):
    """One line per record; tracebacks only go to the log file."""

    def format(self, record: logging.LogRecord) -> str:
        record = _without_traceback(record)
        record.message = record.getMessage()
        return self.formatMessage(record)


def _without_traceback(record: logging.LogRecord) -> logging.LogRecord:
    if not (record.exc_info or record.exc_text or record.stack_info):
        return record
    clone = logging.makeLogRecord(record.__dict__)
    clone.exc_info = None
    clone.exc_text = None
    clone.stack_info = None
    return clone


def _own_file_handler(root: logging.Logger) -> Optional[logging.FileHandler]:
    for h in root.handlers:
        if isinstance(h, logging.FileHandler) and getattr(h, "devstack_provisioner", False):
            return h
    return None


def _open_log_file(log_path: str) -> logging.FileHandler:
    """Open ``log_path``, or a file in the working directory when that is not writable."""

    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path)
    except OSError:
        return logging.FileHandler(str(Path.cwd() / FALLBACK_LOG_NAME))


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    console_level: int = logging.INFO,
) -> str:
    """Log everything (DEBUG, with tracebacks) to a file and progress to stderr.

    Calling it again keeps the handlers from the first call. Returns the
    path of the log file actually in use. Raises OSError if neither the
    requested path nor the fallback can be opened.
    """

    root = logging.getLogger()
    existing = _own_file_handler(root)
    if existing is not None:
        return existing.baseFilename

    file_handler = _open_log_file(log_path)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    setattr(file_handler, "devstack_provisioner", True)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(ConsoleFormatter(CONSOLE_FORMAT))

    root.setLevel(logging.DEBUG)
    root.addHandler(file_handler)
    root.addHandler(console)

    if file_handler.baseFilename != os.path.abspath(log_path):
        logging.getLogger(__name__).warning(
            "Cannot write %s; logging to %s instead", log_path, file_handler.baseFilename
        )
    return file_handler.baseFilename
