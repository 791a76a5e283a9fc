"""Canonical re-serialization of an ads.txt document.

`optimize_ads_txt` drops invalid lines, removes duplicates, groups and sorts
what is left and writes it back in a fixed layout::

    # <file comment>

    # CONTACT Variables
    CONTACT=...

    # OWNERDOMAIN Variables
    OWNERDOMAIN=...

    # Advertising System Records
    google.com, pub-1, DIRECT
    google.com, pub-2, RESELLER, f08c47fec0942fa0

The output parses back to the same entries, so optimizing twice yields the
same text.
"""

from __future__ import annotations

import logging
from itertools import groupby
from typing import Iterable

from core.domain.codes import Relationship, VariableType
from core.domain.models import AdsTxtRecord, AdsTxtVariable, Entry
from core.services.parser import build_owner_domain, parse_content

logger = logging.getLogger(__name__)

DEFAULT_FILE_COMMENT = "# ads.txt"
RECORDS_HEADER = "# Advertising System Records"

_RELATIONSHIP_ORDER = {Relationship.DIRECT: 0, Relationship.RESELLER: 1}


def _first_comment(content: str) -> str | None:
    for line in content.splitlines():
        stripped = line.strip().lstrip("\ufeff")
        if stripped.startswith("#"):
            return stripped
    return None


def _dedupe_variables(entries: Iterable[Entry]) -> list[AdsTxtVariable]:
    seen: set[tuple[VariableType, str]] = set()
    variables: list[AdsTxtVariable] = []
    for entry in entries:
        if not isinstance(entry, AdsTxtVariable):
            continue
        key = (entry.variable_type, entry.value.lower())
        if key in seen:
            continue
        seen.add(key)
        variables.append(entry)
    return variables


def _dedupe_records(entries: Iterable[Entry]) -> list[AdsTxtRecord]:
    seen: set[tuple[str, str, Relationship]] = set()
    records: list[AdsTxtRecord] = []
    for entry in entries:
        if not isinstance(entry, AdsTxtRecord) or not entry.is_valid:
            continue
        if entry.lookup_key in seen:
            continue
        seen.add(entry.lookup_key)
        records.append(entry)
    return records


def format_record(record: AdsTxtRecord) -> str:
    parts = [record.domain.lower(), record.account_id, record.relationship.value]
    if record.certification_authority_id:
        parts.append(record.certification_authority_id)
    return ", ".join(parts)


def format_variable(variable: AdsTxtVariable) -> str:
    return f"{variable.variable_type.value}={variable.value}"


def render(
    variables: list[AdsTxtVariable],
    records: list[AdsTxtRecord],
    file_comment: str = DEFAULT_FILE_COMMENT,
) -> str:
    """Serialize already deduplicated entries in canonical order."""

    lines: list[str] = [file_comment, ""]

    ordered_variables = sorted(variables, key=lambda v: v.variable_type.value)
    for variable_type, group in groupby(ordered_variables, key=lambda v: v.variable_type):
        lines.append(f"# {variable_type.value} Variables")
        lines.extend(format_variable(variable) for variable in group)
        lines.append("")

    lines.append(RECORDS_HEADER)
    ordered_records = sorted(
        records,
        key=lambda r: (r.domain.lower(), _RELATIONSHIP_ORDER[r.relationship], r.account_id),
    )
    lines.extend(format_record(record) for record in ordered_records)
    return "\n".join(lines) + "\n"


def optimize_ads_txt(content: str, publisher_domain: str | None = None) -> str:
    """Return the canonical form of `content`; never raises on malformed input."""

    text = content if isinstance(content, str) else ""
    entries = parse_content(text)
    variables = _dedupe_variables(entries)
    records = _dedupe_records(entries)
    dropped = len(entries) - len(variables) - len(records)

    has_owner = any(v.variable_type is VariableType.OWNERDOMAIN for v in variables)
    if not has_owner and publisher_domain and publisher_domain.strip():
        variables.append(build_owner_domain(publisher_domain))

    logger.debug("Optimized ads.txt: %d variables, %d records, %d lines dropped", len(variables), len(records), dropped)
    return render(variables, records, _first_comment(text) or DEFAULT_FILE_COMMENT)
