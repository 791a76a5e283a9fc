"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `parse` y `check`.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import AdsTxtRecord, AdsTxtVariable, Entry
from core.services.report import ReportMessage, ValidationReport


def print_banner(console: Console) -> None:
    """Imprime el banner; se omite en modos no interactivos (JSON/pipelines)."""

    title = Text("adstxt-validator", style="bold cyan")
    subtitle = Text("ads.txt • sellers.json • canonicalización", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _line(entry: Entry) -> str:
    return "gen" if isinstance(entry, AdsTxtVariable) and entry.is_generated else str(entry.line_number)


def build_entries_table(entries: Sequence[Entry]) -> Table:
    table = Table(title="ads.txt entries")
    table.add_column("Line", style="dim", no_wrap=True, justify="right")
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Domain / Type", style="white")
    table.add_column("Account / Value", style="magenta")
    table.add_column("Relationship", style="white", no_wrap=True)
    table.add_column("Status", no_wrap=True)

    for entry in entries:
        if isinstance(entry, AdsTxtRecord):
            if not entry.is_valid:
                status = f"[red]{entry.error_code.value if entry.error_code else 'INVALID'}[/red]"
            elif entry.has_warning and entry.warning_code is not None:
                status = f"[yellow]{entry.warning_code.value}[/yellow]"
            else:
                status = "[green]OK[/green]"
            table.add_row(
                _line(entry),
                "record",
                escape(entry.domain),
                escape(entry.account_id),
                entry.relationship.value if entry.is_valid else escape(entry.account_type),
                status,
            )
        else:
            table.add_row(
                _line(entry),
                "variable",
                entry.variable_type.value,
                escape(entry.value),
                "",
                "[green]OK[/green]",
            )
    return table


def build_messages_table(messages: Sequence[ReportMessage], *, title: str, style: str) -> Table:
    table = Table(title=title, header_style=f"bold {style}")
    table.add_column("Line", style="dim", no_wrap=True, justify="right")
    table.add_column("Code", style=style, no_wrap=True)
    table.add_column("Message", style="white")
    for message in messages:
        line = "" if message.line_number is None else str(message.line_number)
        table.add_row(line, message.code.value, escape(message.message))
    return table


def build_summary_panel(report: ValidationReport) -> Panel:
    color = "green" if report.is_valid else "red"
    summary = report.summary
    body = Text()
    body.append("VALID" if report.is_valid else "INVALID", style=f"bold {color}")
    body.append(
        f"\nRecords: {summary.total_records} (valid {summary.valid_records})"
        f"\nErrors: {summary.error_count} | Warnings: {summary.warning_count}"
    )
    return Panel(body, title="Validation Result", border_style=color)
