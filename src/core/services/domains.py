"""Domain and relationship-token validators used by the line classifier.

Root-domain checks follow the Public Suffix List through `tldextract`, using
the snapshot bundled with the package so parsing never touches the network.
Relationship typos are detected with the Levenshtein distance from
`rapidfuzz`.
"""

from __future__ import annotations

import re
from functools import lru_cache

import tldextract
from rapidfuzz.distance import Levenshtein

from core.domain.codes import Relationship

MAX_RELATIONSHIP_TYPO_DISTANCE = 2

# Letters, digits and hyphen; no leading or trailing hyphen; 1-63 characters.
_LABEL_RE = re.compile(r"[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?")


@lru_cache(maxsize=1)
def _extractor() -> tldextract.TLDExtract:
    return tldextract.TLDExtract(suffix_list_urls=(), cache_dir=None)


def has_valid_labels(domain: str) -> bool:
    """True when every dot-separated label follows the LDH hostname rule."""

    return all(_LABEL_RE.fullmatch(label) for label in domain.split("."))


def registrable_domain(domain: str) -> str | None:
    """Return the public-suffix-plus-one form of `domain`, or None when it has none."""

    candidate = (domain or "").strip().lower().rstrip(".")
    if not candidate or not has_valid_labels(candidate):
        return None
    parts = _extractor()(candidate)
    if not parts.domain or not parts.suffix:
        return None
    return f"{parts.domain}.{parts.suffix}"


def is_valid_root_domain(domain: str) -> bool:
    """True when `domain` is itself registrable (no subdomain, no whitespace, LDH labels)."""

    if not domain or any(char.isspace() for char in domain):
        return False
    root = registrable_domain(domain)
    return root is not None and root == domain.strip().lower()


def root_domain(domain: str) -> str:
    """Root domain used for a synthesized OWNERDOMAIN; unknown suffixes keep the input."""

    return registrable_domain(domain) or domain.strip().lower()


def is_similar_to_relationship(token: str) -> bool:
    """True when `token` is a likely typo of DIRECT or RESELLER."""

    value = (token or "").strip().upper()
    if not value:
        return False
    return any(
        Levenshtein.distance(value, relationship.value) <= MAX_RELATIONSHIP_TYPO_DISTANCE
        for relationship in Relationship
    )
