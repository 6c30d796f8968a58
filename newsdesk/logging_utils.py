"""Shared logging utilities.

SafeStreamHandler survives broken pipes and closed stdout (detached
terminals, uvicorn reloads); configure_api_logging() adds a rotating
file handler next to it so stack traces are kept either way.
"""
import logging
import logging.handlers
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LOG_FILE = "/tmp/newsdesk-api.log"


class SafeStreamHandler(logging.StreamHandler):
    """StreamHandler that ignores broken pipe and closed file errors.

    When running detached, stdout can be closed. Standard StreamHandler
    raises BrokenPipeError or ValueError in this case. This handler
    silently ignores these errors while still logging to file handlers.
    """

    def emit(self, record):
        try:
            super().emit(record)
        except BrokenPipeError:
            pass  # stdout closed, ignore silently
        except ValueError:
            pass  # I/O operation on closed file


def configure_safe_logging(level=logging.INFO):
    """Configure root logger with SafeStreamHandler.

    Call this in CLI entry points that might run with closed stdout.
    Safe to call multiple times (guards against duplicate handlers).

    Args:
        level: Logging level to set (default: INFO)
    """
    logger = logging.getLogger()
    if not any(isinstance(h, SafeStreamHandler) for h in logger.handlers):
        handler = SafeStreamHandler()  # Defaults to sys.stderr
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.setLevel(level)
        logger.addHandler(handler)
        if logger.level == logging.NOTSET or logger.level > level:
            logger.setLevel(level)


def configure_api_logging(log_file=None, level=logging.INFO):
    """Configure root logger for the API process: rotating file + safe stream.

    The log file defaults to NEWSDESK_LOG_FILE (or /tmp/newsdesk-api.log).
    Safe to call multiple times.

    Returns:
        Path of the log file in use
    """
    log_file = log_file or os.getenv("NEWSDESK_LOG_FILE", DEFAULT_LOG_FILE)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    has_file_handler = any(
        isinstance(h, logging.handlers.RotatingFileHandler)
        and getattr(h, "baseFilename", None) == os.path.abspath(log_file)
        for h in root_logger.handlers
    )
    if not has_file_handler:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=3,
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    configure_safe_logging(level)

    # Suppress noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return log_file
