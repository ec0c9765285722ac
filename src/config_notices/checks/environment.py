"""
Checks on the environment the site is running in: app environment,
host name, deployment path and maintenance mode.
"""

from urllib.parse import urlsplit

from ..collector import NoticeCollector
from ..context import (
    BACKEND_URL,
    CANONICAL_HOST,
    CANONICAL_SCHEME,
    DEBUG,
    ENVIRONMENT,
    CheckContext,
)
from ..models import Severity
from ..probes import is_ip_address

VALID_ENVIRONMENTS = ('prod', 'dev', 'test')


def live_check(ctx: CheckContext, notices: NoticeCollector):
    """Warn when debug mode is on while the site doesn't look local."""
    if ctx.parameter(ENVIRONMENT) == 'prod' and ctx.parameter(DEBUG) is not True:
        return

    if ctx.on_local_url():
        return

    notices.record(
        Severity.WARNING,
        'It seems like this website is running on a <strong>non-development environment</strong>, '
        'while development mode is enabled (<code>APP_ENV=dev</code> and/or <code>APP_DEBUG=1</code>). '
        'Ensure debug is disabled in production environments, otherwise it will result in an extremely '
        'large <code>var/cache</code> folder and a measurable reduced performance.',
        "If you wish to hide this message, add a key to your <abbr title='config/extensions/"
        "configuration-notices.yaml'>config <code>yaml</code></abbr> file with a (partial) domain name "
        "in it, that should be seen as a development environment: <code>local_domains: [ '.foo' ]</code>.",
    )


def environment_check(ctx: CheckContext, notices: NoticeCollector):
    """Warn about an APP_ENV outside of prod, dev and test."""
    environment = ctx.parameter(ENVIRONMENT)
    if environment in VALID_ENVIRONMENTS:
        return

    notices.record(
        Severity.WARNING,
        'Bolt supports three different modes for <code>APP_ENV</code>: <code>dev</code>, '
        '<code>prod</code> and <code>test</code>. You should only use one of these three.',
        f"The current configured <code>APP_ENV</code> is <code>{environment}</code>. "
        "Make sure you've used lowercase in your configured environment.",
    )


def single_hostname_check(ctx: CheckContext, notices: NoticeCollector):
    """Hostnames without a TLD, like 'localhost', upset some browsers' sessions."""
    hostname = ctx.request.http_host

    if '.' not in hostname:
        notices.record(
            Severity.INFO,
            f"You are using <code>{hostname}</code> as host name. Some browsers have problems with "
            "sessions on hostnames that do not have a <code>.tld</code> in them.",
            'If you experience difficulties logging on, either configure your webserver to use a '
            'hostname with a dot in it, or use another browser.',
        )


def ip_address_check(ctx: CheckContext, notices: NoticeCollector):
    """Same as above, for bare IP addresses."""
    hostname = ctx.request.http_host

    if is_ip_address(hostname):
        notices.record(
            Severity.INFO,
            f"You are using the <strong>IP address</strong> <code>{hostname}</code> as host name. "
            "This is known to cause problems with sessions on certain browsers.",
            'If you experience difficulties logging on, either configure your webserver to use a '
            'proper hostname, or use another browser.',
        )


def top_level_check(ctx: CheckContext, notices: NoticeCollector):
    """The site should be served from the web root, not a subfolder."""
    if ctx.request.base_path:
        notices.record(
            Severity.INFO,
            'You are using Bolt in a subfolder, <strong>instead of the webroot</strong>.',
            "It is recommended to use Bolt from the 'web root', so that it is in the top level. If you "
            "wish to use Bolt for only part of a website, we recommend setting up a subdomain like "
            "<code>news.example.org</code>.",
        )


def canonical_check(ctx: CheckContext, notices: NoticeCollector):
    """Compare the current scheme and host with the configured canonical ones."""
    uri = ctx.request.uri.split('?', 1)[0]
    if not uri:
        return

    parts = urlsplit(uri)
    if not parts.scheme or not parts.hostname:
        return

    canonical_scheme = ctx.parameter(CANONICAL_SCHEME)
    canonical_host = ctx.parameter(CANONICAL_HOST)
    if not canonical_scheme or not canonical_host:
        return

    if parts.scheme == canonical_scheme and parts.hostname == canonical_host:
        return

    canonical = f"{canonical_scheme}://{canonical_host}"
    login = f"{canonical}{ctx.parameter(BACKEND_URL, '')}"

    notices.record(
        Severity.INFO,
        f"The <strong>canonical hostname</strong> is set to <code>{canonical}</code> in "
        "<code>config.yaml</code>, but you are currently logged in using another hostname. This might "
        "cause issues with uploaded files, or links inserted in the content.",
        f"Log in on Bolt using the proper URL: <code><a href='{login}'>{login}</a></code>.",
    )


def maintenance_check(ctx: CheckContext, notices: NoticeCollector):
    if ctx.config.get('general/maintenance_mode', False):
        notices.record(
            Severity.INFO,
            "Bolt's <strong>maintenance mode</strong> is enabled. This means that non-authenticated "
            "users will not be able to see the website.",
            'To make the site available to the general public again, set '
            '<code>maintenance_mode: false</code> in your <code>config.yaml</code> file.',
        )
