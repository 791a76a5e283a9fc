"""Human readable messages for error and warning codes.

Templates use ``str.format`` placeholders named after the warning params
(``domain``, ``account_id``, ``seller_domain``...). Missing params render as
``?`` so a half-populated warning never breaks report generation.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.domain.codes import ErrorCode, WarningCode
from core.domain.language import Language

_EN: dict[str, str] = {
    ErrorCode.MISSING_FIELDS: "Line {line_number}: a record needs domain, account ID and relationship.",
    ErrorCode.INVALID_FORMAT: "Line {line_number}: the line is not a valid record or variable.",
    ErrorCode.INVALID_RELATIONSHIP: "Line {line_number}: relationship must be DIRECT or RESELLER.",
    ErrorCode.MISSPELLED_RELATIONSHIP: (
        "Line {line_number}: relationship looks misspelled, expected DIRECT or RESELLER."
    ),
    ErrorCode.INVALID_ROOT_DOMAIN: "Line {line_number}: '{domain}' is not a root domain.",
    ErrorCode.EMPTY_ACCOUNT_ID: "Line {line_number}: account ID is empty.",
    ErrorCode.EMPTY_FILE: "The ads.txt content is empty.",
    WarningCode.DUPLICATE: "This record already exists in the ads.txt of {domain}.",
    WarningCode.NO_SELLERS_JSON: "No sellers.json was found for {domain}.",
    WarningCode.DIRECT_ACCOUNT_ID_NOT_IN_DIRECTORY: (
        "DIRECT account ID {account_id} is not listed in the sellers.json of {domain}."
    ),
    WarningCode.RESELLER_ACCOUNT_ID_NOT_IN_DIRECTORY: (
        "RESELLER account ID {account_id} is not listed in the sellers.json of {domain}."
    ),
    WarningCode.DOMAIN_MISMATCH: (
        "The sellers.json of {domain} lists seller domain {seller_domain}, "
        "which does not match {publisher_domain}."
    ),
    WarningCode.DIRECT_NOT_PUBLISHER: (
        "DIRECT account ID {account_id} has seller_type {seller_type} in the sellers.json of {domain}; "
        "expected PUBLISHER or BOTH."
    ),
    WarningCode.RESELLER_NOT_INTERMEDIARY: (
        "RESELLER account ID {account_id} has seller_type {seller_type} in the sellers.json of {domain}; "
        "expected INTERMEDIARY or BOTH."
    ),
    WarningCode.SELLER_ID_NOT_UNIQUE: "Seller ID {account_id} appears more than once in the sellers.json of {domain}.",
    WarningCode.DIRECTORY_VALIDATION_ERROR: "Could not validate against the sellers.json of {domain}: {message}",
}

_JA: dict[str, str] = {
    ErrorCode.MISSING_FIELDS: "{line_number}行目: ドメイン、アカウントID、関係の3項目が必要です。",
    ErrorCode.INVALID_FORMAT: "{line_number}行目: レコードまたは変数として解釈できません。",
    ErrorCode.INVALID_RELATIONSHIP: "{line_number}行目: 関係は DIRECT または RESELLER である必要があります。",
    ErrorCode.MISSPELLED_RELATIONSHIP: "{line_number}行目: 関係の綴りが誤っている可能性があります (DIRECT / RESELLER)。",
    ErrorCode.INVALID_ROOT_DOMAIN: "{line_number}行目: '{domain}' はルートドメインではありません。",
    ErrorCode.EMPTY_ACCOUNT_ID: "{line_number}行目: アカウントIDが空です。",
    ErrorCode.EMPTY_FILE: "ads.txt の内容が空です。",
    WarningCode.DUPLICATE: "このレコードは {domain} の ads.txt に既に存在します。",
    WarningCode.NO_SELLERS_JSON: "{domain} の sellers.json が見つかりません。",
    WarningCode.DIRECT_ACCOUNT_ID_NOT_IN_DIRECTORY: (
        "DIRECT のアカウントID {account_id} が {domain} の sellers.json に記載されていません。"
    ),
    WarningCode.RESELLER_ACCOUNT_ID_NOT_IN_DIRECTORY: (
        "RESELLER のアカウントID {account_id} が {domain} の sellers.json に記載されていません。"
    ),
    WarningCode.DOMAIN_MISMATCH: (
        "{domain} の sellers.json の販売者ドメイン {seller_domain} が {publisher_domain} と一致しません。"
    ),
    WarningCode.DIRECT_NOT_PUBLISHER: (
        "DIRECT のアカウントID {account_id} の seller_type が {seller_type} です (PUBLISHER または BOTH が必要)。"
    ),
    WarningCode.RESELLER_NOT_INTERMEDIARY: (
        "RESELLER のアカウントID {account_id} の seller_type が {seller_type} です (INTERMEDIARY または BOTH が必要)。"
    ),
    WarningCode.SELLER_ID_NOT_UNIQUE: "販売者ID {account_id} が {domain} の sellers.json で重複しています。",
    WarningCode.DIRECTORY_VALIDATION_ERROR: "{domain} の sellers.json を検証できませんでした: {message}",
}

_TEMPLATES: dict[Language, dict[str, str]] = {
    Language.ENGLISH: _EN,
    Language.JAPANESE: _JA,
}


class _Defaulting(dict):
    def __missing__(self, key: str) -> str:
        return "?"


def format_message(
    code: ErrorCode | WarningCode | str,
    params: Mapping[str, Any] | None = None,
    language: Language = Language.ENGLISH,
) -> str:
    """Render the message for `code`; unknown codes fall back to the code itself."""

    key = code.value if isinstance(code, (ErrorCode, WarningCode)) else str(code)
    templates = _TEMPLATES.get(language, _EN)
    template = templates.get(key) or _EN.get(key)
    if template is None:
        return key
    return template.format_map(_Defaulting(params or {}))
