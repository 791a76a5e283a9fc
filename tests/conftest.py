from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.domain.models import CachedDocument  # noqa: E402


class FakeAdsTxtCache:
    """In-memory previous ads.txt per publisher domain."""

    def __init__(self, documents: dict[str, str] | None = None, *, error: Exception | None = None) -> None:
        self.documents = documents or {}
        self.error = error
        self.calls: list[str] = []

    async def get_by_domain(self, domain: str) -> CachedDocument | None:
        self.calls.append(domain)
        if self.error is not None:
            raise self.error
        content = self.documents.get(domain)
        if content is None:
            return None
        return CachedDocument(status="success", content=content)


class FakeSellersProvider:
    """In-memory sellers.json per ad-system domain.

    Values may be a dict (serialized to JSON), a raw string, or an exception
    instance raised on fetch.
    """

    def __init__(self, directories: dict[str, Any] | None = None) -> None:
        self.directories = directories or {}
        self.calls: list[str] = []

    async def get_by_domain(self, domain: str) -> CachedDocument | None:
        self.calls.append(domain)
        value = self.directories.get(domain)
        if isinstance(value, Exception):
            raise value
        if value is None:
            return None
        content = value if isinstance(value, str) else json.dumps(value)
        return CachedDocument(status="success", content=content)

    def parse_content(self, raw: str) -> dict[str, Any]:
        return json.loads(raw)


def seller(seller_id: str, seller_type: str = "PUBLISHER", domain: str | None = "example.com", **extra: Any) -> dict:
    data: dict[str, Any] = {"seller_id": seller_id, "seller_type": seller_type, **extra}
    if domain is not None:
        data["domain"] = domain
    return data


@pytest.fixture
def make_sellers_provider():
    return FakeSellersProvider


@pytest.fixture
def make_ads_txt_cache():
    return FakeAdsTxtCache
