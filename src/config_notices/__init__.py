"""
Configuration Notices

Inspects a running site's configuration and environment and reports
what an operator should fix, as a list of severity-ranked notices.

Usage:
    from config_notices import (
        CheckContext, HostConfig, NoticeEngine, RequestInfo, field_type_registry,
    )

    context = CheckContext(
        config=HostConfig(config_tree),
        request=RequestInfo.from_url('https://example.org/bolt'),
        field_types=field_type_registry(['text', 'slug', 'html']),
    )
    report = NoticeEngine(context).run()
"""

from .checks import CHECKS, Check
from .collector import NoticeCollector
from .context import (
    CheckContext,
    HostConfig,
    RequestInfo,
    field_type_registry,
    service_registry,
)
from .engine import NoticeEngine
from .errors import ConfigurationError, ManifestError, NoticesError
from .models import NO_SEVERITY, Notice, Report, Severity
from .probes import Parameters, ReachabilityProbe, WritabilityProbe
from .settings import ExtensionSettings, load_services_manifest

__version__ = '1.0.0'

__all__ = [
    'NoticeEngine',
    'CheckContext',
    'HostConfig',
    'RequestInfo',
    'field_type_registry',
    'service_registry',
    'Check',
    'CHECKS',
    'NoticeCollector',
    'Notice',
    'Report',
    'Severity',
    'NO_SEVERITY',
    'Parameters',
    'ReachabilityProbe',
    'WritabilityProbe',
    'ExtensionSettings',
    'load_services_manifest',
    'NoticesError',
    'ConfigurationError',
    'ManifestError',
]
