"""Servicios del Core: parseo, cruce con sellers.json y canonicalización."""

from core.services.cross_check import cross_check_records
from core.services.optimizer import optimize_ads_txt
from core.services.parser import parse_content, parse_line
from core.services.report import ValidationReport, summarize, validate_ads_txt

__all__ = [
    "ValidationReport",
    "cross_check_records",
    "optimize_ads_txt",
    "parse_content",
    "parse_line",
    "summarize",
    "validate_ads_txt",
]
