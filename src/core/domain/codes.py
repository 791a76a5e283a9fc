"""Códigos y vocabularios cerrados del dominio.

Por qué enums `str`:
- Se serializan tal cual en JSON (reportes, CLI) sin mapeos adicionales.
- Los tokens del formato (DIRECT/RESELLER, tipos de variable) quedan en un
  único lugar y el parser no compara strings sueltos.
"""

from __future__ import annotations

from enum import Enum


class Relationship(str, Enum):
    """Relación declarada por una línea de ads.txt."""

    DIRECT = "DIRECT"
    RESELLER = "RESELLER"

    @classmethod
    def from_token(cls, token: str | None) -> "Relationship | None":
        if token is None:
            return None
        try:
            return cls(token.strip().upper())
        except ValueError:
            return None


class VariableType(str, Enum):
    """Tipos de variable `TYPE=value` reconocidos."""

    CONTACT = "CONTACT"
    SUBDOMAIN = "SUBDOMAIN"
    INVENTORYPARTNERDOMAIN = "INVENTORYPARTNERDOMAIN"
    OWNERDOMAIN = "OWNERDOMAIN"
    MANAGERDOMAIN = "MANAGERDOMAIN"


class SellerType(str, Enum):
    """Valores de `seller_type` en un sellers.json."""

    PUBLISHER = "PUBLISHER"
    INTERMEDIARY = "INTERMEDIARY"
    BOTH = "BOTH"


class ErrorCode(str, Enum):
    """Errores sintácticos: la línea no es un registro válido."""

    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_RELATIONSHIP = "INVALID_RELATIONSHIP"
    MISSPELLED_RELATIONSHIP = "MISSPELLED_RELATIONSHIP"
    INVALID_ROOT_DOMAIN = "INVALID_ROOT_DOMAIN"
    EMPTY_ACCOUNT_ID = "EMPTY_ACCOUNT_ID"
    # Solo a nivel de documento (reporte), nunca en un registro.
    EMPTY_FILE = "EMPTY_FILE"


class WarningCode(str, Enum):
    """Advertencias semánticas: el registro sigue siendo válido."""

    DUPLICATE = "DUPLICATE"
    NO_SELLERS_JSON = "NO_SELLERS_JSON"
    DIRECT_ACCOUNT_ID_NOT_IN_DIRECTORY = "DIRECT_ACCOUNT_ID_NOT_IN_DIRECTORY"
    RESELLER_ACCOUNT_ID_NOT_IN_DIRECTORY = "RESELLER_ACCOUNT_ID_NOT_IN_DIRECTORY"
    DOMAIN_MISMATCH = "DOMAIN_MISMATCH"
    DIRECT_NOT_PUBLISHER = "DIRECT_NOT_PUBLISHER"
    RESELLER_NOT_INTERMEDIARY = "RESELLER_NOT_INTERMEDIARY"
    SELLER_ID_NOT_UNIQUE = "SELLER_ID_NOT_UNIQUE"
    DIRECTORY_VALIDATION_ERROR = "DIRECTORY_VALIDATION_ERROR"


# Códigos producidos por el cruce con sellers.json (se reemplazan en cada pasada).
CROSS_CHECK_WARNINGS: frozenset[WarningCode] = frozenset(
    {
        WarningCode.NO_SELLERS_JSON,
        WarningCode.DIRECT_ACCOUNT_ID_NOT_IN_DIRECTORY,
        WarningCode.RESELLER_ACCOUNT_ID_NOT_IN_DIRECTORY,
        WarningCode.DOMAIN_MISMATCH,
        WarningCode.DIRECT_NOT_PUBLISHER,
        WarningCode.RESELLER_NOT_INTERMEDIARY,
        WarningCode.SELLER_ID_NOT_UNIQUE,
        WarningCode.DIRECTORY_VALIDATION_ERROR,
    }
)
