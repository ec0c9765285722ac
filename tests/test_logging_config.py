"""
Tests for the logging setup.

Run: python3 -m pytest tests/test_logging_config.py -v
"""

import logging
import tempfile
import threading
from pathlib import Path

import pytest

import notices_fixtures  # noqa: F401

from config_notices import logging_config
from config_notices.logging_config import (
    NO_CHECK,
    PACKAGE_LOGGER,
    CheckNameFilter,
    check_scope,
    current_check,
    setup_logging,
)


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level, propagate = logger.level, logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def flush(logger):
    for handler in logger.handlers:
        handler.flush()


class TestCheckScope:
    """Tests for check_scope and current_check."""

    def test_outside_a_check(self):
        assert current_check() == NO_CHECK

    def test_nested_scopes_restore(self):
        with check_scope('canonical'):
            assert current_check() == 'canonical'
            with check_scope('services'):
                assert current_check() == 'services'
            assert current_check() == 'canonical'
        assert current_check() == NO_CHECK

    def test_restored_after_exception(self):
        with pytest.raises(RuntimeError):
            with check_scope('services'):
                raise RuntimeError("boom")
        assert current_check() == NO_CHECK

    def test_scope_is_per_thread(self):
        seen = []
        with check_scope('live'):
            thread = threading.Thread(target=lambda: seen.append(current_check()))
            thread.start()
            thread.join()
        assert seen == [NO_CHECK]

    def test_filter_tags_record(self):
        record = logging.LogRecord('config_notices.probes', logging.DEBUG, __file__, 1, 'x', None, None)
        with check_scope('writable_folders'):
            assert CheckNameFilter().filter(record) is True
        assert record.check == 'writable_folders'


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_configures_package_logger_only(self, package_logger):
        root_handlers = list(logging.getLogger().handlers)
        logger = setup_logging(level=logging.DEBUG)

        assert logger is package_logger
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert len([h for h in logger.handlers if getattr(h, 'notices_handler', False)]) == 1
        assert logging.getLogger().handlers == root_handlers
        assert logging.getLogger('urllib3').level == logging.WARNING

    def test_repeat_call_replaces_handlers(self, package_logger):
        setup_logging()
        setup_logging(level=logging.WARNING)

        ours = [h for h in package_logger.handlers if getattr(h, 'notices_handler', False)]
        assert len(ours) == 1
        assert ours[0].level == logging.WARNING

    def test_file_has_check_name(self, package_logger):
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / 'logs' / 'notices.log'
            setup_logging(log_file=log_file)

            log = logging.getLogger('config_notices.checks.runtime')
            log.info("outside")
            with check_scope('services'):
                log.info("inside")
            flush(package_logger)
            lines = log_file.read_text().splitlines()
            for handler in package_logger.handlers:
                handler.close()

        assert lines[0].endswith("config_notices.checks.runtime [-] | outside")
        assert lines[1].endswith("config_notices.checks.runtime [services] | inside")

    def test_propagate_to_host(self, package_logger):
        setup_logging(propagate=True)
        assert package_logger.propagate is True

    def test_http_loggers_left_alone(self, package_logger):
        http = logging.getLogger(logging_config.HTTP_LOGGERS[-1])
        level = http.level
        http.setLevel(logging.DEBUG)
        try:
            setup_logging(quiet_http=False)
            assert http.level == logging.DEBUG
        finally:
            http.setLevel(level)
