"""
Configuration Notices Engine

Runs the registered checks against a CheckContext and reduces their
notices to a single Report.

Design Principles:
1. Stateless - every run gets a fresh collector, nothing is kept between runs
2. Gated - nothing runs until the host can resolve a basic field type
3. Isolated - a check that blows up is reported, the others still run
4. Callback-driven - notices and progress can be streamed to a UI

Usage:
    engine = NoticeEngine(context)
    engine.register_notice_callback(my_handler)
    report = engine.run()
"""

import logging
import threading
import time
from html import escape
from typing import List, Optional, Sequence

from .checks import CHECKS, Check
from .collector import NoticeCollector
from .context import CheckContext
from .logging_config import check_scope
from .models import (
    Notice,
    NoticeCallback,
    ProgressCallback,
    Report,
    ResultPayload,
    Severity,
)

logger = logging.getLogger(__name__)


class NoticeEngine:
    """
    Runs configuration checks and assembles the report.

    The engine holds no results of its own; run() can be called as often
    as needed, each call evaluating every check from scratch.
    """

    def __init__(self, context: CheckContext, checks: Optional[Sequence[Check]] = None):
        self.context = context
        self.checks = tuple(CHECKS if checks is None else checks)

        # Callbacks
        self._notice_callbacks: List[NoticeCallback] = []
        self._progress_callbacks: List[ProgressCallback] = []
        self._callbacks_lock = threading.Lock()

    # === Callback Registration ===

    def register_notice_callback(self, callback: NoticeCallback):
        """Register callback for every recorded notice."""
        with self._callbacks_lock:
            self._notice_callbacks.append(callback)

    def register_progress_callback(self, callback: ProgressCallback):
        """Register callback for progress updates."""
        with self._callbacks_lock:
            self._progress_callbacks.append(callback)

    def _notify_notice(self, notice: Notice):
        """Notify all notice callbacks."""
        with self._callbacks_lock:
            callbacks = list(self._notice_callbacks)
        for cb in callbacks:
            try:
                cb(notice)
            except Exception as e:
                logger.error(f"Notice callback error: {e}")

    def _notify_progress(self, check: str, current: int, total: int):
        """Notify all progress callbacks."""
        with self._callbacks_lock:
            callbacks = list(self._progress_callbacks)
        for cb in callbacks:
            try:
                cb(check, current, total)
            except Exception as e:
                logger.error(f"Progress callback error: {e}")

    # === Execution ===

    def is_ready(self) -> bool:
        """Whether the host is initialized far enough to run the checks."""
        try:
            return self.context.is_ready()
        except Exception:
            logger.exception("Readiness lookup failed, treating host as not ready")
            return False

    def run(self) -> Report:
        """
        Run every enabled check, in registration order.

        Returns:
            The Report; Report.not_ready() if the host isn't ready yet
        """
        if not self.is_ready():
            logger.warning("Host not ready, skipping configuration checks")
            return Report.not_ready()

        start = time.time()
        notices = NoticeCollector(on_notice=self._notify_notice)
        checks = [c for c in self.checks if self.context.settings.is_enabled(c.name)]
        logger.info(f"Running {len(checks)} configuration checks")

        try:
            for i, check in enumerate(checks):
                self._notify_progress(check.name, i + 1, len(checks))
                self._run_check(check, notices)
        finally:
            self.context.release()

        report = Report(severity=notices.severity, notices=notices.notices)
        logger.info(
            f"Configuration checks done in {(time.time() - start) * 1000:.0f}ms: "
            f"{len(report.notices)} notice(s), severity {report.severity}"
        )
        return report

    def _run_check(self, check: Check, notices: NoticeCollector):
        """Run a single check, turning an unexpected fault into a notice."""
        start = time.time()
        notices.current_check = check.name
        with check_scope(check.name):
            try:
                check.run(self.context, notices)
            except Exception as e:
                logger.exception(f"Configuration check '{check.name}' failed")
                notices.record(
                    Severity.INFO,
                    f"The <code>{check.name}</code> check could not be completed: {escape(str(e))}",
                    'Review the application log for details. The other checks were not affected.',
                )
            finally:
                notices.current_check = None
                logger.debug(f"Check '{check.name}' took {(time.time() - start) * 1000:.1f}ms")

    def get_results(self) -> Optional[ResultPayload]:
        """
        Run the checks and return the widget payload.

        Returns:
            None if the host isn't ready yet, otherwise Report.to_dict()
        """
        report = self.run()
        if not report.ready:
            return None
        return report.to_dict()
