"""
Checks that probe the site from the outside.
"""

from ..collector import NoticeCollector
from ..context import CheckContext
from ..models import Severity

THEME_PROBE_FILE = 'configtester_access.twig'


def theme_folder_access_check(ctx: CheckContext, notices: NoticeCollector):
    """
    Twig files in the theme folder must not be served publicly.

    Writes a probe template into the theme folder and tries to fetch it
    over HTTP. Opt-in through the `theme_folder_access` setting, and never
    run on a development host. The probe file is removed afterwards,
    whatever happens.
    """
    if not ctx.settings.is_enabled('theme_folder_access') or ctx.on_local_url():
        return

    theme = ctx.config.get('general/theme', '')
    url = f"{ctx.request.base_url}theme/{theme}/{THEME_PROBE_FILE}"

    with ctx.writability.probe_artifact(ctx.get_path('theme'), THEME_PROBE_FILE) as created:
        if not created or not ctx.reachability.is_reachable(url):
            return

    notices.record(
        Severity.DANGER,
        'Twig files in the theme folder are accessible publicly, but best practice is to forbid direct '
        'access to such files in your theme.',
        'Check the <a target="_blank" href="https://docs.bolt.cm/4.0/installation/webserver/apache'
        '#htaccess-update-for-bolt-versions-lower-than-4-1-13">webserver configuration documentation for '
        'Apache</a> or <a href="https://docs.bolt.cm/4.0/installation/webserver/nginx" target="_blank">'
        'Nginx</a> to fix this vulnerability.',
    )
