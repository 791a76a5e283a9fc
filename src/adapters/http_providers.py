"""Proveedores HTTP de ads.txt y sellers.json.

Descargan `https://<domain>/ads.txt` y `https://<domain>/sellers.json` (una
sola URL, sin reintentos). Un status distinto de 200 no es una excepción: se
devuelve un `CachedDocument` con `status="error"` y el Core lo trata como
"documento no disponible". Los fallos de transporte sí se propagan como
`DirectoryFetchError` y el validador los convierte en advertencias.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import CachedDocument
from core.errors import DirectoryFetchError

logger = logging.getLogger(__name__)


class _HttpDocumentProvider:
    path: str = ""
    accept: str = "*/*"

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport
        self._sem = asyncio.Semaphore(max(1, self._settings.max_concurrency))

    def url_for(self, domain: str) -> str:
        return f"https://{domain.strip().lower()}/{self.path}"

    async def get_by_domain(self, domain: str) -> CachedDocument | None:
        url = self.url_for(domain)
        async with self._sem:
            try:
                async with build_async_client(
                    self._settings,
                    extra_headers={"Accept": self.accept},
                    transport=self._transport,
                ) as client:
                    resp = await client.get(url)
            except httpx.HTTPError as exc:
                raise DirectoryFetchError(domain, f"{exc.__class__.__name__}: {exc}") from exc

        if resp.status_code != 200:
            logger.info("GET %s -> HTTP %d", url, resp.status_code)
            return CachedDocument(status="error", content=None)

        logger.debug("GET %s -> %d bytes", url, len(resp.content))
        return CachedDocument(status="success", content=resp.text)


class HttpAdsTxtProvider(_HttpDocumentProvider):
    """ads.txt publicado por el editor (usado para detectar duplicados)."""

    path = "ads.txt"
    accept = "text/plain,*/*;q=0.8"


class HttpSellersDirectoryProvider(_HttpDocumentProvider):
    """sellers.json publicado por cada sistema publicitario."""

    path = "sellers.json"
    accept = "application/json,*/*;q=0.8"

    def parse_content(self, raw: str) -> dict[str, Any]:
        # JSON inválido propaga `ValueError`; el validador lo reporta por registro.
        return json.loads(raw)
