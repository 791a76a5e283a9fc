"""CLI `adstxt-validator` (Typer + Rich).

Comandos:
- `parse`: tabla de entradas y códigos de error.
- `check`: reporte completo (duplicados + sellers.json, offline u online).
- `optimize`: versión canónica del ads.txt.

`check` termina con código 1 si el reporte tiene errores.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.file_providers import LocalAdsTxtProvider, LocalSellersDirectoryProvider
from adapters.http_providers import HttpAdsTxtProvider, HttpSellersDirectoryProvider
from adapters.json_exporter import export_report_json, report_to_json
from cli.ui_components import (
    build_entries_table,
    build_messages_table,
    build_summary_panel,
    print_banner,
)
from core.config import AppSettings
from core.domain.language import Language
from core.interfaces.providers import AdsTxtCacheProvider, SellersDirectoryProvider
from core.services.directory_cache import DirectoryLookupCache
from core.services.optimizer import optimize_ads_txt
from core.services.parser import parse_content
from core.services.report import ValidationReport, validate_ads_txt

app = typer.Typer(no_args_is_help=True, help="Validate and optimize ads.txt files.")

_console = Console()
_err_console = Console(stderr=True)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=_err_console)],
        force=True,
    )


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise typer.BadParameter(f"cannot read {path}: {exc}") from exc


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to ADSTXT_LOG_LEVEL or WARNING).",
    ),
) -> None:
    settings = AppSettings()
    setup_logging((log_level or settings.log_level).upper())


@app.command()
def parse(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="ads.txt file."),
    as_json: bool = typer.Option(False, "--json", help="Print entries as JSON instead of a table."),
    publisher_domain: str | None = typer.Option(
        None,
        "--publisher-domain",
        help="Append OWNERDOMAIN for this publisher when the file declares none.",
    ),
) -> None:
    """Parse an ads.txt file and show every entry."""

    entries = parse_content(_read_text(file), publisher_domain)
    if as_json:
        payload = [entry.model_dump(mode="json") for entry in entries]
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    _console.print(build_entries_table(entries))
    invalid = sum(1 for entry in entries if not entry.is_valid)
    _console.print(f"\n{len(entries)} entries, [red]{invalid}[/red] invalid")


def _sellers_provider(
    sellers_dir: Path | None,
    online: bool,
    settings: AppSettings,
) -> SellersDirectoryProvider | None:
    if sellers_dir is not None:
        return LocalSellersDirectoryProvider(sellers_dir)
    if online:
        return HttpSellersDirectoryProvider(settings)
    return None


def _ads_txt_cache(previous: Path | None, online: bool, settings: AppSettings) -> AdsTxtCacheProvider | None:
    if previous is not None:
        return LocalAdsTxtProvider(previous)
    if online:
        return HttpAdsTxtProvider(settings)
    return None


def _print_report(report: ValidationReport) -> None:
    _console.print(build_summary_panel(report))
    if report.errors:
        _console.print(build_messages_table(report.errors, title="Errors", style="red"))
    if report.warnings:
        _console.print(build_messages_table(report.warnings, title="Warnings", style="yellow"))


@app.command()
def check(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="ads.txt file."),
    publisher_domain: str = typer.Option(..., "--publisher-domain", "-d", help="Publisher domain."),
    sellers_dir: Path | None = typer.Option(
        None,
        "--sellers-dir",
        exists=True,
        file_okay=False,
        help="Directory with <ad-system-domain>.json sellers files (offline mode).",
    ),
    online: bool = typer.Option(
        False,
        "--online",
        help="Fetch sellers.json (and the current ads.txt) over HTTPS.",
    ),
    previous: Path | None = typer.Option(
        None,
        "--previous",
        exists=True,
        dir_okay=False,
        help="Previously published ads.txt used for duplicate detection.",
    ),
    lang: Language | None = typer.Option(None, "--lang", help="Message language."),
    json_out: Path | None = typer.Option(None, "--json-out", help="Write the full report as JSON."),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON instead of tables."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print the banner."),
) -> None:
    """Validate an ads.txt file and cross-check it against sellers.json."""

    settings = AppSettings()
    language = lang or settings.default_language

    if not (quiet or as_json):
        print_banner(_console)

    report = asyncio.run(
        validate_ads_txt(
            _read_text(file),
            publisher_domain,
            ads_txt_cache=_ads_txt_cache(previous, online, settings),
            sellers_provider=_sellers_provider(sellers_dir, online, settings),
            lookup_cache=DirectoryLookupCache(settings.directory_cache_ttl_seconds),
            language=language,
        )
    )

    if as_json:
        typer.echo(report_to_json(report), nl=False)
    else:
        _print_report(report)

    if json_out is not None:
        path = export_report_json(report=report, output_path=json_out)
        if not as_json:
            _console.print(f"[green]Report saved to:[/green] {path}")

    if not report.is_valid:
        raise typer.Exit(code=1)


@app.command()
def optimize(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="ads.txt file."),
    publisher_domain: str | None = typer.Option(None, "--publisher-domain", "-d", help="Publisher domain."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write here instead of stdout."),
) -> None:
    """Print (or write) the canonical form of an ads.txt file."""

    optimized = optimize_ads_txt(_read_text(file), publisher_domain)
    if output is None:
        typer.echo(optimized, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(optimized, encoding="utf-8")
    _err_console.print(f"[green]Optimized ads.txt saved to:[/green] {output}")


def run() -> None:
    app()
