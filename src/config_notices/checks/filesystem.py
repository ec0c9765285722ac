"""
Checks that look at files on disk: writable folders and the host's own
source and config files.
"""

from datetime import datetime
from pathlib import Path

import yaml

from ..collector import NoticeCollector
from ..context import DATABASE_DRIVER, CheckContext
from ..errors import ConfigurationError
from ..models import Severity

WRITABLE_FOLDERS = ('files', 'config', 'cache')
SQLITE_DRIVER = 'pdo_sqlite'

# Split so the old name doesn't get "fixed" by tooling
DEPRECATED_DEBUG = 'Symfony\\Compo' + 'nent\\Debug\\Debug'
CURRENT_DEBUG = 'Symfony\\Component\\ErrorHandler\\Debug'

JSON_GET_TEXT = 'JSON_GET_TEXT'


def probe_filename() -> str:
    return f"configtester_{datetime.now().strftime('%Y-%m-%d-%I-%M-%S')}.txt"


def writable_folders_check(ctx: CheckContext, notices: NoticeCollector):
    """Files, config and cache (and an SQLite database folder) must be writable."""
    filename = probe_filename()
    folders = list(WRITABLE_FOLDERS)

    if ctx.parameter(DATABASE_DRIVER) == SQLITE_DRIVER:
        folders.append('database')

    for folder in folders:
        if ctx.writability.is_writable(ctx.get_path(folder), filename):
            continue

        notices.record(
            Severity.WARNING,
            f'Bolt needs to be able to <strong>write files to</strong> the "{folder}" folder, but it '
            "doesn't seem to be writable.",
            f"Make sure the folder <code>{_display_path(ctx, folder)}</code> exists, and is writable to "
            "the webserver.",
        )


def _display_path(ctx: CheckContext, name: str) -> str:
    path = ctx.get_path(name)
    if path is None:
        return name

    root = ctx.get_path('root')
    if root is not None:
        return str(path).replace(str(root), '…', 1)
    return str(path)


def thumbs_folder_check(ctx: CheckContext, notices: NoticeCollector):
    """Only relevant when thumbnails are saved to disk."""
    if not ctx.config.get('general/thumbnails/save_files'):
        return

    if not ctx.writability.is_writable(ctx.get_path('thumbs'), probe_filename()):
        notices.record(
            Severity.WARNING,
            'Bolt is configured to save thumbnails to disk for performance, but the '
            "<code>thumbs/</code> folder doesn't seem to be writable.",
            'Make sure the folder exists, and is writable to the webserver.',
        )


def deprecated_debug_check(ctx: CheckContext, notices: NoticeCollector):
    """The public index.php still imports the old Symfony error handler."""
    web = ctx.get_path('web')
    if web is None:
        return

    index = web / 'index.php'
    try:
        source = index.read_text(errors='replace')
    except FileNotFoundError:
        return

    if DEPRECATED_DEBUG not in source:
        return

    notices.record(
        Severity.WARNING,
        'This site is using a deprecated Symfony error handler. To remedy this, edit '
        f"<code>…/{web.name}/index.php</code> and replace:",
        f"<pre>use {DEPRECATED_DEBUG};</pre>With: <pre>use {CURRENT_DEBUG};</pre>",
    )


def json_get_text_check(ctx: CheckContext, notices: NoticeCollector):
    """doctrine.yaml must register the JSON_GET_TEXT DQL function."""
    if ctx.project_dir is None:
        return

    doctrine_path = Path(ctx.project_dir) / 'config' / 'packages' / 'doctrine.yaml'
    with open(doctrine_path, 'r') as f:
        doctrine = yaml.safe_load(f) or {}

    functions = _string_functions(doctrine)
    if JSON_GET_TEXT in functions:
        return

    notices.record(
        Severity.DANGER,
        'The <code>JSON_TEXT_FUNCTION</code> is missing from your '
        '<code>config/packages/doctrine.yaml</code> definition.',
        'To resolve this, modify your <code>doctrine.yaml</code> file according to the changes on the '
        "<a href='https://github.com/bolt/project/pull/35/files'>bolt/project</a> repository.",
    )


def _string_functions(doctrine: dict) -> dict:
    """DQL string functions, for both the single and the multiple entity manager layout."""
    orm = (doctrine.get('doctrine') or {}).get('orm')
    if not isinstance(orm, dict):
        raise ConfigurationError("doctrine.yaml has no doctrine.orm section", 'doctrine.orm')

    if 'dql' in orm:
        dql = orm['dql'] or {}
    else:
        managers = orm.get('entity_managers') or {}
        dql = (managers.get('default') or {}).get('dql') or {}

    return dql.get('string_functions') or {}
