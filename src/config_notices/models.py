"""
Configuration Notices Data Models

These data structures are shared by the engine, the checks and the
renderers:
- Notices are immutable once recorded
- Reports are built fresh for every run
- JSON-friendly serialization built-in for the dashboard widget
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional


class Severity(IntEnum):
    """Severity of a notice. Ordered, so max() gives the worst one."""
    INFO = 1
    WARNING = 2
    DANGER = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> 'Severity':
        return cls[label.upper()]


# Overall severity of a report that has nothing to say
NO_SEVERITY = 0


@dataclass(frozen=True)
class Notice:
    """
    A single finding.

    Attributes:
        severity: INFO, WARNING or DANGER
        message: Rendered notice text (may contain inline markup)
        detail: Remediation / explanation text, if any
        check: Name of the check that recorded the notice
        timestamp: When the notice was recorded
    """
    severity: Severity
    message: str
    detail: Optional[str] = None
    check: Optional[str] = field(default=None, compare=False)
    timestamp: datetime = field(default_factory=datetime.now, compare=False)

    def __post_init__(self):
        # Coerce plain ints, rejecting anything outside the three levels
        object.__setattr__(self, 'severity', Severity(self.severity))

    def to_dict(self) -> dict:
        """Serialize for the widget/API output."""
        return {
            "severity": self.severity.label,
            "notice": self.message,
            "info": self.detail,
            "check": self.check,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Notice':
        """Deserialize from dict."""
        return cls(
            severity=Severity.from_label(data['severity']),
            message=data['notice'],
            detail=data.get('info'),
            check=data.get('check'),
        )


@dataclass(frozen=True)
class Report:
    """
    Aggregate result of one engine run.

    A report with ready=False means the host wasn't initialized far enough
    for the checks to run; callers should try again later. A ready report
    with severity 0 means everything checked out.
    """
    severity: int
    notices: List[Notice] = field(default_factory=list)
    ready: bool = True
    generated_at: datetime = field(default_factory=datetime.now, compare=False)

    @classmethod
    def not_ready(cls) -> 'Report':
        """The 'try again later' report."""
        return cls(severity=NO_SEVERITY, notices=[], ready=False)

    @property
    def has_notices(self) -> bool:
        return bool(self.notices)

    @property
    def severity_label(self) -> Optional[str]:
        """Label of the overall severity, None when there is none."""
        if self.severity == NO_SEVERITY:
            return None
        return Severity(self.severity).label

    def count(self, severity: Severity) -> int:
        """Number of notices at the given severity."""
        return sum(1 for n in self.notices if n.severity == severity)

    def to_dict(self) -> dict:
        """Serialize for the widget/API output."""
        return {
            "ready": self.ready,
            "severity": int(self.severity),
            "notices": [n.to_dict() for n in self.notices],
            "generated_at": self.generated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Report':
        """Deserialize from dict."""
        return cls(
            severity=data['severity'],
            notices=[Notice.from_dict(n) for n in data.get('notices', [])],
            ready=data.get('ready', True),
            generated_at=datetime.fromisoformat(data['generated_at']) if data.get('generated_at') else datetime.now(),
        )


# === Callback Types ===

NoticeCallback = Callable[[Notice], None]
ProgressCallback = Callable[[str, int, int], None]  # (check, current, total)
CheckFunction = Callable[[Any, Any], None]  # (context, collector)
ResultPayload = Dict[str, Any]
