"""Console rendering of a notices report"""

import re
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Report, Severity

SEVERITY_STYLES = {
    Severity.INFO: 'cyan',
    Severity.WARNING: 'yellow',
    Severity.DANGER: 'bold red',
}

_TAG = re.compile(r'<[^>]+>')
_SPACE = re.compile(r'\s+')


def strip_markup(text: Optional[str]) -> str:
    """Drop the inline HTML notices carry and collapse whitespace"""
    if not text:
        return ''
    return _SPACE.sub(' ', _TAG.sub('', text)).strip()


def build_table(report: Report) -> Table:
    """Table of notices, one row each, in report order"""
    table = Table(show_header=True, header_style="bold", expand=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Notice")
    table.add_column("Info", style="dim")

    for notice in report.notices:
        style = SEVERITY_STYLES[notice.severity]
        table.add_row(
            Text(notice.severity.label, style=style),
            strip_markup(notice.message),
            strip_markup(notice.detail),
        )

    return table


def render_report(report: Report, console: Optional[Console] = None) -> None:
    """Print a report for an operator"""
    console = console or Console()

    if not report.ready:
        console.print("[dim]Configuration checks not ready yet, try again later.[/dim]")
        return

    if not report.has_notices:
        console.print(Panel("[green]No configuration notices.[/green]", title="Configuration Notices"))
        return

    style = SEVERITY_STYLES[Severity(report.severity)]
    title = f"Configuration Notices ([{style}]{report.severity_label}[/{style}])"
    console.print(Panel(build_table(report), title=title))
