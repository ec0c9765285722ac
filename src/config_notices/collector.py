"""
Notice collection and severity reduction for a single run.

Each engine run owns its own collector. The collector only ever grows:
notices are appended in the order they're recorded and the overall
severity can only go up.
"""

import threading
from typing import List, Optional

from .models import NO_SEVERITY, Notice, NoticeCallback, Severity


class NoticeCollector:
    """Accumulates notices and tracks the highest severity seen."""

    def __init__(self, on_notice: Optional[NoticeCallback] = None):
        self._notices: List[Notice] = []
        self._severity = NO_SEVERITY
        self._lock = threading.Lock()
        self._on_notice = on_notice
        self.current_check: Optional[str] = None

    def record(self, severity: Severity, message: str, detail: Optional[str] = None) -> Notice:
        """Record a notice and raise the running severity if needed."""
        notice = Notice(
            severity=severity,
            message=message,
            detail=detail,
            check=self.current_check,
        )

        with self._lock:
            self._notices.append(notice)
            self._severity = max(self._severity, int(notice.severity))

        if self._on_notice:
            self._on_notice(notice)

        return notice

    def info(self, message: str, detail: Optional[str] = None) -> Notice:
        return self.record(Severity.INFO, message, detail)

    def warning(self, message: str, detail: Optional[str] = None) -> Notice:
        return self.record(Severity.WARNING, message, detail)

    def danger(self, message: str, detail: Optional[str] = None) -> Notice:
        return self.record(Severity.DANGER, message, detail)

    @property
    def severity(self) -> int:
        with self._lock:
            return self._severity

    @property
    def notices(self) -> List[Notice]:
        """Snapshot of the recorded notices, in recording order."""
        with self._lock:
            return list(self._notices)

    def __len__(self) -> int:
        with self._lock:
            return len(self._notices)
