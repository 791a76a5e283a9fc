"""Tokenizer, line classifier and content parser for ads.txt documents.

`parse_line` turns a raw line into a typed entry (record or variable) or an
invalid record carrying an `ErrorCode`. It never raises: every non-blank,
non-comment line yields exactly one entry.
"""

from __future__ import annotations

import re

from core.domain.codes import ErrorCode, Relationship, VariableType
from core.domain.models import (
    GENERATED_LINE_NUMBER,
    AdsTxtRecord,
    AdsTxtVariable,
    Entry,
)
from core.services.domains import is_similar_to_relationship, is_valid_root_domain, root_domain

_VARIABLE_RE = re.compile(
    r"^\s*(?P<type>" + "|".join(v.value for v in VariableType) + r")\s*=\s*(?P<value>.*?)\s*$",
    re.IGNORECASE,
)
# Inline comments on variable lines need leading whitespace (CONTACT URLs may carry '#').
_VARIABLE_COMMENT_RE = re.compile(r"\s+#.*$")


def _invalid(
    *,
    error: ErrorCode,
    line_number: int,
    raw_line: str,
    domain: str = "",
    account_id: str = "",
    account_type: str = "",
    relationship: Relationship = Relationship.DIRECT,
    certification_authority_id: str | None = None,
) -> AdsTxtRecord:
    return AdsTxtRecord(
        domain=domain,
        account_id=account_id,
        account_type=account_type,
        relationship=relationship,
        certification_authority_id=certification_authority_id,
        line_number=line_number,
        raw_line=raw_line,
        is_valid=False,
        error_code=error,
    )


def _parse_variable(trimmed: str, line: str, line_number: int) -> AdsTxtVariable | AdsTxtRecord | None:
    match = _VARIABLE_RE.match(trimmed)
    if not match:
        return None
    value = _VARIABLE_COMMENT_RE.sub("", match.group("value")).strip()
    if not value:
        return _invalid(error=ErrorCode.INVALID_FORMAT, line_number=line_number, raw_line=line)
    return AdsTxtVariable(
        variable_type=VariableType(match.group("type").upper()),
        value=value,
        line_number=line_number,
        raw_line=line,
    )


def _resolve_relationship(
    account_type: str, rest: list[str]
) -> tuple[Relationship | None, str | None, ErrorCode | None]:
    """Return (relationship, certification_authority_id, error)."""

    relationship = Relationship.from_token(account_type)
    if relationship is not None:
        return relationship, (rest[0] or None) if rest else None, None

    next_token = rest[0] if rest else None
    relationship = Relationship.from_token(next_token)
    if relationship is not None:
        return relationship, (rest[1] or None) if len(rest) > 1 else None, None

    # With a 4th field only that field is checked for typos: "DIRECR, <cert>" is INVALID_RELATIONSHIP.
    suspect = next_token if next_token else account_type
    if is_similar_to_relationship(suspect):
        return None, None, ErrorCode.MISSPELLED_RELATIONSHIP
    return None, None, ErrorCode.INVALID_RELATIONSHIP


def parse_line(line: str, line_number: int) -> Entry | None:
    """Parse a single ads.txt line.

    Returns None for blank and comment lines, an `AdsTxtVariable` for
    `TYPE=value` lines and an `AdsTxtRecord` (valid or not) otherwise.
    """

    trimmed = line.strip()
    if not trimmed or trimmed.startswith("#"):
        return None

    variable = _parse_variable(trimmed, line, line_number)
    if variable is not None:
        return variable

    body = trimmed.split("#", 1)[0]
    parts = [part.strip() for part in body.split(",")]
    # "a, b, DIRECT," leaves an empty trailing field that is not a cert id.
    while len(parts) > 3 and not parts[-1]:
        parts.pop()

    if len(parts) < 3:
        return _invalid(
            error=ErrorCode.MISSING_FIELDS,
            line_number=line_number,
            raw_line=line,
            domain=parts[0] if parts else "",
            account_id=parts[1] if len(parts) > 1 else "",
        )

    domain, account_id, account_type, *rest = parts
    relationship, cert_id, error = _resolve_relationship(account_type, rest)
    common = {
        "line_number": line_number,
        "raw_line": line,
        "domain": domain,
        "account_id": account_id,
        "account_type": account_type,
        "certification_authority_id": cert_id,
    }

    if error is not None or relationship is None:
        return _invalid(error=error or ErrorCode.INVALID_RELATIONSHIP, **common)
    if not is_valid_root_domain(domain):
        return _invalid(error=ErrorCode.INVALID_ROOT_DOMAIN, relationship=relationship, **common)
    if not account_id:
        return _invalid(error=ErrorCode.EMPTY_ACCOUNT_ID, relationship=relationship, **common)

    return AdsTxtRecord(relationship=relationship, **common)


def _split_lines(content: str) -> list[str]:
    if content.startswith("\ufeff"):
        content = content[1:]
    return content.splitlines()


def build_owner_domain(publisher_domain: str) -> AdsTxtVariable:
    """Synthesized OWNERDOMAIN entry for a publisher domain."""

    value = root_domain(publisher_domain)
    return AdsTxtVariable(
        variable_type=VariableType.OWNERDOMAIN,
        value=value,
        line_number=GENERATED_LINE_NUMBER,
        raw_line=f"{VariableType.OWNERDOMAIN.value}={value}",
    )


def has_owner_domain(entries: list[Entry]) -> bool:
    return any(
        isinstance(entry, AdsTxtVariable) and entry.variable_type is VariableType.OWNERDOMAIN
        for entry in entries
    )


def parse_content(content: str, publisher_domain: str | None = None) -> list[Entry]:
    """Parse a whole ads.txt document into entries (line numbers are 1-based).

    When `publisher_domain` is given and the document declares no OWNERDOMAIN,
    one is appended with the publisher's root domain and line number -1.
    """

    entries: list[Entry] = []
    for index, line in enumerate(_split_lines(content or ""), start=1):
        entry = parse_line(line, index)
        if entry is not None:
            entries.append(entry)

    if publisher_domain and publisher_domain.strip() and not has_owner_domain(entries):
        entries.append(build_owner_domain(publisher_domain))
    return entries
