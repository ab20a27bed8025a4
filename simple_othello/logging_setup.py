from __future__ import annotations

import logging
import pathlib
import sys
import threading
import traceback


LOG_FILE_NAME = "simple-othello.log"


def get_log_path() -> pathlib.Path:
    return pathlib.Path.cwd() / LOG_FILE_NAME


def setup_logging(overwrite: bool = True, level: int = logging.DEBUG, console: bool = True) -> None:
    """Configure root logging to a single file in the current working directory.

    - Overwrites the log file on first setup (per process) if overwrite is True
    - Adds a STDERR handler for immediate visibility unless console is False
    - Installs sys.excepthook and threading excepthook
    - Captures warnings via logging
    """
    log_path = get_log_path()

    # Prevent duplicate handlers on re-entry
    root_logger = logging.getLogger()
    if getattr(root_logger, "_so_logging_configured", False):
        return

    fmt = "%(asctime)s.%(msecs)03d %(levelname)s [%(process)d:%(threadName)s] %(name)s - %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    handlers: list[logging.Handler] = []
    file_mode = "w" if overwrite else "a"
    file_handler = logging.FileHandler(log_path, mode=file_mode, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    handlers.append(file_handler)

    if console:
        stderr_handler = logging.StreamHandler(stream=sys.stderr)
        stderr_handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
        handlers.append(stderr_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    root_logger._so_logging_configured = True  # type: ignore[attr-defined]

    # Capture warnings through logging
    logging.captureWarnings(True)

    # Install exception hooks; search workers run on daemon threads
    sys.excepthook = _log_unhandled_exception  # type: ignore[assignment]
    threading.excepthook = _log_thread_exception


def _log_unhandled_exception(exc_type, exc_value, exc_tb) -> None:  # type: ignore[no-untyped-def]
    logger = logging.getLogger("unhandled")
    tb_str = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
    logger.critical("Unhandled exception:\n%s", tb_str)


def _log_thread_exception(args) -> None:  # type: ignore[no-untyped-def]
    logger = logging.getLogger("thread")
    tb_str = "".join(traceback.format_exception(args.exc_type, args.exc_value, args.exc_traceback))
    logger.critical("Unhandled thread exception in %s:\n%s", getattr(args, "thread", None), tb_str)
