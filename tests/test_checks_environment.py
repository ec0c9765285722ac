"""
Tests for the environment checks.

Run: python3 -m pytest tests/test_checks_environment.py -v
"""

import pytest

from notices_fixtures import make_context

from config_notices.checks.environment import (
    canonical_check,
    environment_check,
    ip_address_check,
    live_check,
    maintenance_check,
    single_hostname_check,
    top_level_check,
)
from config_notices.collector import NoticeCollector
from config_notices.context import RequestInfo
from config_notices.models import Severity
from config_notices.settings import ExtensionSettings


def run(check, ctx):
    notices = NoticeCollector()
    check(ctx, notices)
    return notices.notices


class TestLocalDomainDetection:
    """Tests for CheckContext.on_local_url."""

    def test_ip_literal_is_local(self):
        ctx = make_context(request=RequestInfo(host='127.0.0.1'))
        assert ctx.on_local_url() is True

    def test_default_partial_is_local(self):
        ctx = make_context(request=RequestInfo(host='staging.test.example.com'))
        assert ctx.on_local_url() is True

    def test_public_host_is_not_local(self):
        ctx = make_context(request=RequestInfo(host='www.example.com'))
        assert ctx.on_local_url() is False

    def test_configured_partial(self):
        ctx = make_context(
            request=RequestInfo(host='www.example.foo'),
            settings=ExtensionSettings(local_domains=['.foo']),
        )
        assert ctx.on_local_url() is True

    def test_match_is_case_sensitive(self):
        ctx = make_context(request=RequestInfo(host='www.EXAMPLE.LOCAL'))
        assert ctx.on_local_url() is False

    def test_empty_host(self):
        ctx = make_context(request=RequestInfo(host=''))
        assert ctx.on_local_url() is False


class TestLiveCheck:
    """Tests for live_check."""

    def test_production_without_debug(self):
        ctx = make_context(parameters={'app.environment': 'prod', 'app.debug': False})
        assert run(live_check, ctx) == []

    def test_debug_on_public_host(self):
        ctx = make_context(parameters={'app.environment': 'prod', 'app.debug': True})
        (notice,) = run(live_check, ctx)
        assert notice.severity == Severity.WARNING
        assert 'local_domains' in notice.detail

    def test_dev_on_public_host(self):
        ctx = make_context(parameters={'app.environment': 'dev', 'app.debug': False})
        assert len(run(live_check, ctx)) == 1

    def test_dev_on_local_host(self):
        ctx = make_context(
            parameters={'app.environment': 'dev', 'app.debug': True},
            request=RequestInfo(host='mysite.local'),
        )
        assert run(live_check, ctx) == []


class TestEnvironmentCheck:
    """Tests for environment_check."""

    @pytest.mark.parametrize('env', ['prod', 'dev', 'test'])
    def test_valid(self, env):
        ctx = make_context(parameters={'app.environment': env})
        assert run(environment_check, ctx) == []

    def test_invalid_echoes_value(self):
        ctx = make_context(parameters={'app.environment': 'PROD'})
        (notice,) = run(environment_check, ctx)
        assert notice.severity == Severity.WARNING
        assert '<code>PROD</code>' in notice.detail


class TestHostnameChecks:
    """Tests for single_hostname_check and ip_address_check."""

    def test_hostname_without_dot(self):
        ctx = make_context(request=RequestInfo(host='localhost'))
        (notice,) = run(single_hostname_check, ctx)
        assert notice.severity == Severity.INFO
        assert 'localhost' in notice.message

    def test_hostname_with_port_without_dot(self):
        ctx = make_context(request=RequestInfo(host='intranet', port=8080))
        (notice,) = run(single_hostname_check, ctx)
        assert 'intranet:8080' in notice.message

    def test_hostname_with_dot(self):
        ctx = make_context(request=RequestInfo(host='www.example.com'))
        assert run(single_hostname_check, ctx) == []

    def test_ip_address(self):
        ctx = make_context(request=RequestInfo(host='10.0.0.5'))
        (notice,) = run(ip_address_check, ctx)
        assert notice.severity == Severity.INFO
        assert '10.0.0.5' in notice.message

    def test_not_ip_address(self):
        ctx = make_context(request=RequestInfo(host='www.example.com'))
        assert run(ip_address_check, ctx) == []


class TestTopLevelCheck:
    """Tests for top_level_check."""

    def test_webroot(self):
        ctx = make_context(request=RequestInfo(host='www.example.com', base_path=''))
        assert run(top_level_check, ctx) == []

    def test_subfolder(self):
        ctx = make_context(request=RequestInfo(host='www.example.com', base_path='/site'))
        (notice,) = run(top_level_check, ctx)
        assert notice.severity == Severity.INFO


class TestCanonicalCheck:
    """Tests for canonical_check."""

    def _ctx(self, uri, scheme='https', host='www.example.com'):
        parameters = {'app.backend_url': '/bolt'}
        if scheme:
            parameters['canonical.scheme'] = scheme
        if host:
            parameters['canonical.host'] = host
        return make_context(request=RequestInfo.from_url(uri), parameters=parameters)

    def test_matching(self):
        assert run(canonical_check, self._ctx('https://www.example.com/bolt?x=1')) == []

    def test_other_host(self):
        (notice,) = run(canonical_check, self._ctx('https://example.com/bolt'))
        assert notice.severity == Severity.INFO
        assert 'https://www.example.com' in notice.message
        assert 'https://www.example.com/bolt' in notice.detail

    def test_other_scheme(self):
        assert len(run(canonical_check, self._ctx('http://www.example.com/bolt'))) == 1

    def test_no_canonical_configured(self):
        assert run(canonical_check, self._ctx('https://example.com/bolt', host=None)) == []

    def test_unparseable_uri(self):
        ctx = make_context(request=RequestInfo(uri='/relative/only'))
        assert run(canonical_check, ctx) == []


class TestMaintenanceCheck:
    """Tests for maintenance_check."""

    def test_off(self):
        assert run(maintenance_check, make_context()) == []

    def test_on(self):
        ctx = make_context(config={'general': {'maintenance_mode': True}})
        (notice,) = run(maintenance_check, ctx)
        assert notice.severity == Severity.INFO
