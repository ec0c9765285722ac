"""
Tests for the notice and report models.

Run: python3 -m pytest tests/test_models.py -v
"""

import dataclasses

import pytest

import notices_fixtures  # noqa: F401

from config_notices.models import NO_SEVERITY, Notice, Report, Severity


class TestSeverity:
    """Tests for the Severity enum."""

    def test_levels_are_ordered(self):
        assert Severity.INFO < Severity.WARNING < Severity.DANGER
        assert [int(s) for s in Severity] == [1, 2, 3]

    def test_labels(self):
        assert Severity.INFO.label == 'info'
        assert Severity.DANGER.label == 'danger'
        assert Severity.from_label('warning') is Severity.WARNING


class TestNotice:
    """Tests for the Notice dataclass."""

    def test_plain_int_is_coerced(self):
        notice = Notice(severity=2, message="x")
        assert notice.severity is Severity.WARNING

    def test_unknown_severity_rejected(self):
        with pytest.raises(ValueError):
            Notice(severity=4, message="x")

    def test_immutable(self):
        notice = Notice(severity=Severity.INFO, message="x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            notice.message = "y"

    def test_equality_ignores_timestamp_and_check(self):
        first = Notice(Severity.INFO, "x", "y", check='one')
        second = Notice(Severity.INFO, "x", "y", check='two')
        assert first == second

    def test_to_dict(self):
        notice = Notice(Severity.DANGER, "Broken", None, check='services')
        assert notice.to_dict() == {
            "severity": "danger",
            "notice": "Broken",
            "info": None,
            "check": "services",
        }

    def test_from_dict(self):
        notice = Notice.from_dict({"severity": "warning", "notice": "n", "info": "i"})
        assert notice == Notice(Severity.WARNING, "n", "i")


class TestReport:
    """Tests for the Report dataclass."""

    def test_not_ready(self):
        report = Report.not_ready()
        assert report.ready is False
        assert report.severity == NO_SEVERITY
        assert report.notices == []

    def test_not_ready_differs_from_empty(self):
        empty = Report(severity=NO_SEVERITY, notices=[])
        assert empty.ready is True
        assert empty != Report.not_ready()

    def test_severity_label(self):
        assert Report(severity=0).severity_label is None
        assert Report(severity=3).severity_label == 'danger'

    def test_count(self):
        report = Report(severity=2, notices=[
            Notice(Severity.INFO, "a"),
            Notice(Severity.WARNING, "b"),
            Notice(Severity.INFO, "c"),
        ])
        assert report.count(Severity.INFO) == 2
        assert report.count(Severity.DANGER) == 0

    def test_to_dict(self):
        report = Report(severity=1, notices=[Notice(Severity.INFO, "a", "b")])
        data = report.to_dict()

        assert data['ready'] is True
        assert data['severity'] == 1
        assert data['notices'][0]['notice'] == "a"
        assert 'generated_at' in data

    def test_from_dict(self):
        report = Report(severity=2, notices=[Notice(Severity.WARNING, "a")])
        assert Report.from_dict(report.to_dict()) == report
