"""
Checks on what the runtime provides: native image capabilities and the
services registered with the host.
"""

from ..collector import NoticeCollector
from ..context import CheckContext
from ..models import Severity
from ..settings import load_services_manifest

IMAGE_CAPABILITIES = (
    (
        'exif',
        'The <code>exif</code> support does not exist, which means that Bolt can not create '
        'thumbnail images.',
        'Make sure <code>Pillow</code> is installed, including its EXIF support.',
    ),
    (
        'fileinfo',
        'The <code>fileinfo</code> support does not exist, which means that Bolt can not create '
        'thumbnail images.',
        'Make sure <code>python-magic</code> and the <code>libmagic</code> library are installed.',
    ),
    (
        'gd',
        'The image manipulation library does not exist, which means that Bolt can not create '
        'thumbnail images.',
        'Make sure <code>Pillow</code> is installed.',
    ),
)


def image_functions_check(ctx: CheckContext, notices: NoticeCollector):
    for capability, notice, info in IMAGE_CAPABILITIES:
        if not ctx.capabilities(capability):
            notices.record(Severity.INFO, notice, info)


def services_check(ctx: CheckContext, notices: NoticeCollector):
    """Every service in the manifest must be registered with the host."""
    for service in load_services_manifest(ctx.manifest_path):
        if ctx.services(service.name):
            continue

        notices.record(
            Severity.INFO,
            f"Bolt's <code>services.yaml</code> is missing the <code>{service.key}</code>. This needs to "
            "be added in order to function correctly.",
            'To remedy this, edit <code>services.yaml</code> in the <code>config</code> folder and add '
            f"the following:<pre>{service.code}</pre>",
        )
