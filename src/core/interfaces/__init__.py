"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones y nunca
  importa un módulo de persistencia.
"""

from core.interfaces.providers import AdsTxtCacheProvider, SellersDirectoryProvider

__all__ = ["AdsTxtCacheProvider", "SellersDirectoryProvider"]
