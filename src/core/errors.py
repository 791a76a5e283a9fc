"""Errores del Core.

Por qué una jerarquía propia:
- Los adaptadores (HTTP, ficheros) traducen sus fallos a `ProviderError` y el
  validador los convierte en advertencias por registro sin conocer httpx.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Fallo de un proveedor externo (ads.txt previo o sellers.json)."""


class DirectoryFetchError(ProviderError):
    def __init__(self, domain: str, reason: str) -> None:
        super().__init__(f"{domain}: {reason}")
        self.domain = domain
        self.reason = reason
