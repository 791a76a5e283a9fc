"""Contratos de los proveedores de documentos.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que adaptadores (HTTP, ficheros locales, una caché en base de datos)
  sean intercambiables y testeables con fakes en memoria.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.domain.models import CachedDocument, SellersDirectory


@runtime_checkable
class AdsTxtCacheProvider(Protocol):
    """Fuente de la versión previamente conocida del ads.txt de un editor."""

    async def get_by_domain(self, domain: str) -> CachedDocument | None:
        """Devuelve el documento previo o `None` si no hay ninguno."""

        ...


@runtime_checkable
class SellersDirectoryProvider(Protocol):
    """Fuente de sellers.json por dominio de sistema publicitario.

    Reglas de diseño:
    - `get_by_domain` es asíncrono porque típicamente hará I/O.
    - `parse_content` es puro; puede devolver un `SellersDirectory` o el dict
      crudo, que el Core valida.
    """

    async def get_by_domain(self, domain: str) -> CachedDocument | None:
        ...

    def parse_content(self, raw: str) -> SellersDirectory | dict[str, Any]:
        ...
