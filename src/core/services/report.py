"""Reporte de validación de un ads.txt.

Por qué un servicio aparte:
- `parse_content` y `cross_check_records` devuelven entradas anotadas; la CLI y
  el exportador JSON necesitan una vista agregada (errores, advertencias,
  contadores) con mensajes ya traducidos.
"""

from __future__ import annotations

import logging
from typing import Sequence

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.codes import ErrorCode, WarningCode
from core.domain.language import Language
from core.domain.messages import format_message
from core.domain.models import AdsTxtRecord, Entry
from core.interfaces.providers import AdsTxtCacheProvider, SellersDirectoryProvider
from core.services.cross_check import cross_check_records
from core.services.directory_cache import DirectoryLookupCache
from core.services.parser import parse_content

logger = logging.getLogger(__name__)


class ReportMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: ErrorCode | WarningCode
    message: str
    line_number: int | None = None


class ValidationSummary(BaseModel):
    total_records: int = 0
    valid_records: int = 0
    error_count: int = 0
    warning_count: int = 0


class ValidationReport(BaseModel):
    """Vista agregada: `is_valid` es falso en cuanto hay un error sintáctico."""

    is_valid: bool
    entries: list[Entry] = Field(default_factory=list)
    errors: list[ReportMessage] = Field(default_factory=list)
    warnings: list[ReportMessage] = Field(default_factory=list)
    summary: ValidationSummary = Field(default_factory=ValidationSummary)


def summarize(entries: Sequence[Entry], language: Language = Language.ENGLISH) -> ValidationReport:
    """Construye el reporte a partir de entradas ya parseadas (y opcionalmente cruzadas)."""

    errors: list[ReportMessage] = []
    warnings: list[ReportMessage] = []
    total = 0
    valid = 0

    for entry in entries:
        if not isinstance(entry, AdsTxtRecord):
            continue
        total += 1
        if not entry.is_valid:
            code = entry.error_code or ErrorCode.INVALID_FORMAT
            params = {"line_number": entry.line_number, "domain": entry.domain, "account_id": entry.account_id}
            errors.append(
                ReportMessage(
                    code=code,
                    message=format_message(code, params, language),
                    line_number=entry.line_number,
                )
            )
            continue
        valid += 1
        for warning in entry.all_warnings:
            warnings.append(
                ReportMessage(
                    code=warning.code,
                    message=format_message(warning.code, warning.params, language),
                    line_number=entry.line_number,
                )
            )

    summary = ValidationSummary(
        total_records=total,
        valid_records=valid,
        error_count=len(errors),
        warning_count=len(warnings),
    )
    return ValidationReport(
        is_valid=not errors,
        entries=list(entries),
        errors=errors,
        warnings=warnings,
        summary=summary,
    )


async def validate_ads_txt(
    content: str,
    publisher_domain: str | None = None,
    *,
    ads_txt_cache: AdsTxtCacheProvider | None = None,
    sellers_provider: SellersDirectoryProvider | None = None,
    lookup_cache: DirectoryLookupCache | None = None,
    language: Language = Language.ENGLISH,
) -> ValidationReport:
    """Parsea, cruza (si hay proveedores y dominio) y resume un ads.txt."""

    if not content or not content.strip():
        error = ReportMessage(
            code=ErrorCode.EMPTY_FILE,
            message=format_message(ErrorCode.EMPTY_FILE, {}, language),
        )
        return ValidationReport(
            is_valid=False,
            errors=[error],
            summary=ValidationSummary(error_count=1),
        )

    entries = parse_content(content, publisher_domain)
    if publisher_domain and (ads_txt_cache is not None or sellers_provider is not None):
        entries = await cross_check_records(
            publisher_domain,
            entries,
            ads_txt_cache=ads_txt_cache,
            sellers_provider=sellers_provider,
            lookup_cache=lookup_cache,
        )

    report = summarize(entries, language)
    logger.info(
        "Validated ads.txt: %d records, %d errors, %d warnings",
        report.summary.total_records,
        report.summary.error_count,
        report.summary.warning_count,
    )
    return report
