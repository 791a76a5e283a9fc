"""Cross-check of ads.txt records against the previous ads.txt and sellers.json.

`cross_check_records` is the top-level entry point. It runs two passes:

1. duplicate detection against the publisher's previously known ads.txt
   (`AdsTxtCacheProvider`);
2. the sellers.json rule matrix for every valid record
   (`SellersDirectoryProvider`), evaluated concurrently with per-domain
   memoization through a `DirectoryLookupCache`.

Provider failures never abort sibling records: a failure for one ad-system
domain becomes a `DIRECTORY_VALIDATION_ERROR` warning on the records of that
domain only.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Sequence

from pydantic import ValidationError

from core.domain.codes import Relationship, SellerType, VariableType, WarningCode
from core.domain.models import (
    AdsTxtRecord,
    AdsTxtVariable,
    CachedDocument,
    CrossCheckValidationResult,
    Entry,
    SellerRecord,
    SellersDirectory,
    ValidationWarning,
)
from core.interfaces.providers import AdsTxtCacheProvider, SellersDirectoryProvider
from core.services.directory_cache import DirectoryLookup, DirectoryLookupCache
from core.services.duplicates import check_for_duplicates
from core.services.parser import parse_content
from core.services.warnings import apply_warnings, make_warning

logger = logging.getLogger(__name__)

_PUBLISHER_TYPES = frozenset({SellerType.PUBLISHER.value, SellerType.BOTH.value})
_INTERMEDIARY_TYPES = frozenset({SellerType.INTERMEDIARY.value, SellerType.BOTH.value})


def as_cached_document(value: Any) -> CachedDocument | None:
    """Normalize what a provider returned (model, dict or attribute object)."""

    if value is None or isinstance(value, CachedDocument):
        return value
    return CachedDocument.model_validate(value)


def describe_error(exc: BaseException) -> str:
    if isinstance(exc, ValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        detail = first.get("msg", "invalid content")
        return f"malformed sellers.json ({location}: {detail})" if location else f"malformed sellers.json ({detail})"
    return str(exc) or exc.__class__.__name__


def harvest_declared_domains(entries: Iterable[Entry]) -> set[str]:
    """OWNERDOMAIN / MANAGERDOMAIN values, lowercased (MANAGERDOMAIN without its country)."""

    domains: set[str] = set()
    for entry in entries:
        if not isinstance(entry, AdsTxtVariable):
            continue
        if entry.variable_type is VariableType.OWNERDOMAIN:
            value = entry.value
        elif entry.variable_type is VariableType.MANAGERDOMAIN:
            value = entry.value.split(",", 1)[0]
        else:
            continue
        tokens = value.split()
        if tokens:
            domains.add(tokens[0].lower())
    return domains


# ---------------------------------------------------------------------------
# Duplicate pass
# ---------------------------------------------------------------------------


async def load_previous_entries(publisher_domain: str, provider: AdsTxtCacheProvider) -> list[Entry]:
    cached = as_cached_document(await provider.get_by_domain(publisher_domain))
    if cached is None or not cached.is_usable:
        logger.info("No usable cached ads.txt for %s", publisher_domain)
        return []
    return parse_content(cached.content or "")


async def check_duplicates_with_provider(
    publisher_domain: str,
    entries: Sequence[Entry],
    provider: AdsTxtCacheProvider | None,
) -> list[Entry]:
    if provider is None:
        return list(entries)
    try:
        existing = await load_previous_entries(publisher_domain, provider)
    except Exception:
        logger.exception("Could not load the previous ads.txt of %s; skipping duplicate check", publisher_domain)
        return list(entries)
    return check_for_duplicates(publisher_domain, entries, existing)


# ---------------------------------------------------------------------------
# sellers.json rule matrix
# ---------------------------------------------------------------------------


async def load_directory(domain: str, provider: SellersDirectoryProvider) -> DirectoryLookup:
    """Fetch and parse the sellers.json of `domain`; raises on provider or content failures."""

    logger.info("Fetching sellers.json for %s", domain)
    cached = as_cached_document(await provider.get_by_domain(domain))
    if cached is None or not cached.is_usable:
        return DirectoryLookup.build(domain, None)

    parsed = provider.parse_content(cached.content or "")
    if isinstance(parsed, SellersDirectory):
        directory = parsed
    else:
        directory = SellersDirectory.model_validate(parsed)
    return DirectoryLookup.build(domain, directory)


def _match_domain(
    record: AdsTxtRecord,
    seller: SellerRecord,
    publisher_domain: str,
    declared_domains: set[str],
) -> bool | None:
    if seller.is_confidential or not (seller.domain or "").strip():
        return None
    if record.relationship is Relationship.RESELLER and seller.normalized_seller_type in _INTERMEDIARY_TYPES:
        return None
    seller_domain = seller.domain.strip().lower()
    candidates = declared_domains or {publisher_domain.strip().lower()}
    return seller_domain in candidates


def evaluate_record(
    record: AdsTxtRecord,
    lookup: DirectoryLookup,
    publisher_domain: str,
    declared_domains: set[str],
) -> tuple[list[ValidationWarning], CrossCheckValidationResult]:
    """Apply the rule matrix to one record; returns (warnings, validation results)."""

    is_direct = record.relationship is Relationship.DIRECT

    if not lookup.available:
        results = CrossCheckValidationResult(has_sellers_json=False)
        return [make_warning(WarningCode.NO_SELLERS_JSON, domain=record.domain)], results

    seller = lookup.find_seller(record.account_id)
    if seller is None:
        code = (
            WarningCode.DIRECT_ACCOUNT_ID_NOT_IN_DIRECTORY
            if is_direct
            else WarningCode.RESELLER_ACCOUNT_ID_NOT_IN_DIRECTORY
        )
        results = CrossCheckValidationResult(
            has_sellers_json=True,
            account_id_in_sellers_json=False,
            reseller_account_id_in_sellers_json=None if is_direct else False,
        )
        return [make_warning(code, domain=record.domain, account_id=record.account_id)], results

    # Counts come from this ad-system domain's sellers.json only.
    occurrences = lookup.count(record.account_id)
    is_unique = occurrences == 1
    seller_type = seller.normalized_seller_type
    seller_type_label = seller.seller_type or "unknown"
    warnings: list[ValidationWarning] = []

    domain_matches = _match_domain(record, seller, publisher_domain, declared_domains)
    if domain_matches is False:
        warnings.append(
            make_warning(
                WarningCode.DOMAIN_MISMATCH,
                domain=record.domain,
                publisher_domain=publisher_domain,
                seller_domain=seller.domain,
            )
        )

    if is_direct:
        type_ok = seller_type in _PUBLISHER_TYPES
        if not type_ok:
            warnings.append(
                make_warning(
                    WarningCode.DIRECT_NOT_PUBLISHER,
                    domain=record.domain,
                    account_id=record.account_id,
                    seller_type=seller_type_label,
                )
            )
    else:
        type_ok = seller_type in _INTERMEDIARY_TYPES
        if not type_ok:
            warnings.append(
                make_warning(
                    WarningCode.RESELLER_NOT_INTERMEDIARY,
                    domain=record.domain,
                    account_id=record.account_id,
                    seller_type=seller_type_label,
                )
            )

    if occurrences > 1:
        warnings.append(
            make_warning(WarningCode.SELLER_ID_NOT_UNIQUE, domain=record.domain, account_id=record.account_id)
        )

    results = CrossCheckValidationResult(
        has_sellers_json=True,
        account_id_in_sellers_json=True,
        domain_matches_seller_entry=domain_matches,
        direct_entry_has_publisher_type=type_ok if is_direct else None,
        seller_id_is_unique=is_unique if is_direct else None,
        reseller_account_id_in_sellers_json=None if is_direct else True,
        reseller_entry_has_intermediary_type=None if is_direct else type_ok,
        reseller_seller_id_is_unique=None if is_direct else is_unique,
        seller_data=seller,
    )
    return warnings, results


async def validate_against_sellers_directory(
    publisher_domain: str,
    entries: Sequence[Entry],
    provider: SellersDirectoryProvider,
    *,
    lookup_cache: DirectoryLookupCache | None = None,
) -> list[Entry]:
    """Annotate every valid record with the sellers.json rule matrix."""

    cache = lookup_cache if lookup_cache is not None else DirectoryLookupCache()
    declared_domains = harvest_declared_domains(entries)

    async def loader(domain: str) -> DirectoryLookup:
        return await load_directory(domain, provider)

    async def validate(entry: Entry) -> Entry:
        if not isinstance(entry, AdsTxtRecord) or not entry.is_valid:
            return entry
        try:
            lookup = await cache.get(entry.domain, loader)
            warnings, results = evaluate_record(entry, lookup, publisher_domain, declared_domains)
        except Exception as exc:
            message = describe_error(exc)
            logger.error(
                "sellers.json validation failed for %s (account_id=%s): %s",
                entry.domain,
                entry.account_id,
                message,
            )
            warning = make_warning(WarningCode.DIRECTORY_VALIDATION_ERROR, message=message, domain=entry.domain)
            return apply_warnings(
                entry,
                [warning],
                CrossCheckValidationResult(error=message),
                validation_error=message,
            )
        return apply_warnings(entry, warnings, results)

    validated = list(await asyncio.gather(*(validate(entry) for entry in entries)))
    logger.info(
        "After sellers.json validation: %d entries, %d with warnings",
        len(validated),
        sum(1 for entry in validated if isinstance(entry, AdsTxtRecord) and entry.has_warning),
    )
    return validated


async def cross_check_records(
    publisher_domain: str | None,
    entries: list[Entry],
    *,
    ads_txt_cache: AdsTxtCacheProvider | None = None,
    sellers_provider: SellersDirectoryProvider | None = None,
    lookup_cache: DirectoryLookupCache | None = None,
) -> list[Entry]:
    """Run the duplicate pass and the sellers.json pass over parsed entries.

    Without a publisher domain the input list is returned untouched and no
    provider is called. Any unexpected failure is logged and the input is
    returned unchanged.
    """

    if not publisher_domain:
        logger.info("No publisher domain provided, skipping cross-check")
        return entries

    logger.info("Cross-checking %d entries for %s", len(entries), publisher_domain)
    try:
        result = await check_duplicates_with_provider(publisher_domain, entries, ads_txt_cache)
        if sellers_provider is None:
            return result
        return await validate_against_sellers_directory(
            publisher_domain,
            result,
            sellers_provider,
            lookup_cache=lookup_cache,
        )
    except Exception:
        logger.exception("Error during ads.txt cross-check for %s", publisher_domain)
        return entries
