"""Simple terminal summaries for import runs."""

from __future__ import annotations

import json

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from imazingtosbr.api_objects.types import ConversionSummary


def _status(summary: ConversionSummary) -> tuple[str, str]:
    if summary.ok:
        return "imported", "bold green"
    return "error", "bold red"


def print_run_summary(summary: ConversionSummary, console: Console | None = None) -> None:
    console = console or Console()
    status, style = _status(summary)
    header = (
        f"file_type={summary.kind.value} | "
        f"converted={summary.records_converted} | "
        f"appended={summary.records_appended} | "
        f"duration={summary.duration_seconds:.2f}s"
    )
    console.print(Panel(header, title="Import Complete" if summary.ok else "Import Failed", border_style=style))

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Import File", style="bold", overflow="fold")
    table.add_column("Collection", overflow="fold")
    table.add_column("Status")
    table.add_column("Tag")
    table.add_column("Calls", justify="right")
    table.add_column("SMS", justify="right")
    table.add_column("MMS", justify="right")
    table.add_column("Error", overflow="fold")
    table.add_row(
        escape(summary.import_file),
        escape(summary.collection_file),
        f"[{style}]{status}[/{style}]",
        escape(summary.tag),
        str(summary.calls_total),
        str(summary.sms_total),
        str(summary.mms_total),
        escape(summary.error_message or ""),
    )
    console.print(table)


def print_run_summary_json(summary: ConversionSummary) -> None:
    print(json.dumps(summary.to_dict(), ensure_ascii=False))
