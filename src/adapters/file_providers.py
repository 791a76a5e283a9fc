"""Proveedores basados en ficheros locales (modo offline).

- `LocalAdsTxtProvider`: un único ads.txt previo, servido para cualquier
  dominio de editor.
- `LocalSellersDirectoryProvider`: un directorio con `<domain>.json` por
  sistema publicitario.

Un fichero ausente equivale a "documento no disponible" (`None`); un fichero
ilegible se propaga como `DirectoryFetchError`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from core.domain.models import CachedDocument
from core.errors import DirectoryFetchError

logger = logging.getLogger(__name__)


def _read_document(path: Path, domain: str) -> CachedDocument | None:
    if not path.is_file():
        logger.debug("No local document at %s", path)
        return None
    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise DirectoryFetchError(domain, f"cannot read {path}: {exc}") from exc
    return CachedDocument(status="success", content=content)


class LocalAdsTxtProvider:
    def __init__(self, path: Path | str | None) -> None:
        self._path = Path(path) if path is not None else None

    async def get_by_domain(self, domain: str) -> CachedDocument | None:
        if self._path is None:
            return None
        return _read_document(self._path, domain)


class LocalSellersDirectoryProvider:
    """Busca `<directory>/<domain>.json` (dominio en minúsculas)."""

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    def path_for(self, domain: str) -> Path:
        return self._directory / f"{domain.strip().lower()}.json"

    async def get_by_domain(self, domain: str) -> CachedDocument | None:
        return _read_document(self.path_for(domain), domain)

    def parse_content(self, raw: str) -> dict[str, Any]:
        return json.loads(raw)
