"""
Logging for notice runs.

Records logged while a check runs carry the check's name in the `check`
attribute, so probe failures and faults in the host's log can be traced
back to the check that caused them. Outside a check the name is "-".

Usage:
    from config_notices.logging_config import setup_logging
    setup_logging(level=logging.DEBUG, log_file="var/log/config-notices.log")

Only the `config_notices` logger is configured; the root logger belongs
to the host.
"""

import logging
import logging.handlers
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

PACKAGE_LOGGER = 'config_notices'
NO_CHECK = '-'

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s [%(check)s] | %(message)s"

# Loggers of the reachability probe's HTTP stack
HTTP_LOGGERS = ('urllib3', 'requests', 'charset_normalizer')

_state = threading.local()


def current_check() -> str:
    """Name of the check running on this thread, or NO_CHECK."""
    return getattr(_state, 'check', NO_CHECK)


@contextmanager
def check_scope(name: str) -> Iterator[None]:
    """Tag records logged inside the block with the check name."""
    previous = current_check()
    _state.check = name
    try:
        yield
    finally:
        _state.check = previous


class CheckNameFilter(logging.Filter):
    """Adds the running check's name to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, 'check'):
            record.check = current_check()
        return True


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 3,
    propagate: bool = False,
    quiet_http: bool = True,
) -> logging.Logger:
    """
    Attach console and optional rotating file handlers to the package logger.

    Calling it again replaces the handlers of the previous call, so a host
    can change the level or the log file at runtime.

    Args:
        level: Level for the package logger and its handlers
        log_file: Optional file, rotated at max_bytes
        max_bytes: Log file size before rotation
        backup_count: Rotated files to keep
        propagate: Also pass records on to the host's root handlers
        quiet_http: Raise the HTTP client loggers to WARNING

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in [h for h in logger.handlers if getattr(h, 'notices_handler', False)]:
        logger.removeHandler(handler)
        handler.close()

    handlers: list = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
        ))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.notices_handler = True
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(CheckNameFilter())
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = propagate

    if quiet_http:
        for name in HTTP_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return logger
