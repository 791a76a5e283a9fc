"""Warning aggregation for annotated records.

A record can collect findings from several passes. Warnings from earlier
passes (the duplicate check) are kept ahead of the sellers.json findings; the
sellers.json findings and `validation_results` of a previous cross-check are
fully replaced by the latest one. The first warning becomes the primary
`warning_code`.
"""

from __future__ import annotations

from typing import Any, Sequence

from core.domain.codes import CROSS_CHECK_WARNINGS, WarningCode
from core.domain.models import AdsTxtRecord, CrossCheckValidationResult, ValidationWarning


def make_warning(code: WarningCode, **params: Any) -> ValidationWarning:
    return ValidationWarning(code=code, params=params)


def apply_warnings(
    record: AdsTxtRecord,
    warnings: Sequence[ValidationWarning],
    validation_results: CrossCheckValidationResult | None,
    *,
    validation_error: str | None = None,
) -> AdsTxtRecord:
    """Return a copy of `record` carrying `warnings` and `validation_results`."""

    earlier = [w for w in record.all_warnings if w.code not in CROSS_CHECK_WARNINGS]
    merged = [*earlier, *warnings]

    update: dict[str, Any] = {
        "all_warnings": merged,
        "validation_results": validation_results,
        "validation_error": validation_error,
        "has_warning": bool(merged),
        "warning_code": merged[0].code if merged else None,
        "warning_params": dict(merged[0].params) if merged else None,
    }
    return record.model_copy(update=update)
