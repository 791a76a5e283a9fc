"""Duplicate detection against a previously known version of an ads.txt.

A record is a duplicate when its `(domain.lower(), account_id, relationship)`
key already exists among the valid records of the publisher's previous
document. Duplication is a warning: `is_valid` never changes.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from core.domain.codes import Relationship, WarningCode
from core.domain.models import AdsTxtRecord, Entry, ValidationWarning

logger = logging.getLogger(__name__)


def build_record_index(existing: Iterable[Entry]) -> set[tuple[str, str, Relationship]]:
    return {
        entry.lookup_key
        for entry in existing
        if isinstance(entry, AdsTxtRecord) and entry.is_valid
    }


def mark_duplicate(record: AdsTxtRecord, publisher_domain: str) -> AdsTxtRecord:
    warning = ValidationWarning(code=WarningCode.DUPLICATE, params={"domain": publisher_domain})
    kept = [w for w in record.all_warnings if w.code is not WarningCode.DUPLICATE]
    all_warnings = [warning, *kept]
    return record.model_copy(
        update={
            "has_warning": True,
            "warning_code": warning.code,
            "warning_params": dict(warning.params),
            "all_warnings": all_warnings,
            "duplicate_domain": publisher_domain,
        }
    )


def clear_duplicate(record: AdsTxtRecord) -> AdsTxtRecord:
    """Drop a DUPLICATE left by an earlier pass; other warnings keep their order."""

    if record.duplicate_domain is None and not any(w.code is WarningCode.DUPLICATE for w in record.all_warnings):
        return record
    kept = [w for w in record.all_warnings if w.code is not WarningCode.DUPLICATE]
    return record.model_copy(
        update={
            "has_warning": bool(kept),
            "warning_code": kept[0].code if kept else None,
            "warning_params": dict(kept[0].params) if kept else None,
            "all_warnings": kept,
            "duplicate_domain": None,
        }
    )


def check_for_duplicates(
    publisher_domain: str,
    entries: Sequence[Entry],
    existing_entries: Iterable[Entry],
) -> list[Entry]:
    """Return `entries` with valid records already in `existing_entries` flagged."""

    index = build_record_index(existing_entries)
    logger.debug("Duplicate lookup for %s built with %d keys", publisher_domain, len(index))
    result: list[Entry] = []
    duplicates = 0
    for entry in entries:
        if not isinstance(entry, AdsTxtRecord) or not entry.is_valid:
            result.append(entry)
        elif entry.lookup_key in index:
            result.append(mark_duplicate(entry, publisher_domain))
            duplicates += 1
        else:
            result.append(clear_duplicate(entry))

    logger.info("%d of %d entries already present in the ads.txt of %s", duplicates, len(result), publisher_domain)
    return result
