"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Un sellers.json llega de terceros: validarlo en el borde convierte un
  documento malformado en un error explícito en vez de un `KeyError` tardío.

Nota:
- Las entradas son inmutables (`frozen`). Las pasadas de anotación
  (duplicados, sellers.json) devuelven copias con `model_copy(update=...)`.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.codes import ErrorCode, Relationship, VariableType, WarningCode

# Marca de línea para entradas sintetizadas (no presentes en el texto original).
GENERATED_LINE_NUMBER = -1


class ValidationWarning(BaseModel):
    """Una advertencia concreta con sus parámetros de mensaje."""

    model_config = ConfigDict(frozen=True)

    code: WarningCode
    params: dict[str, Any] = Field(default_factory=dict)


class SellerRecord(BaseModel):
    """Entrada `sellers[]` de un sellers.json (solo lectura)."""

    model_config = ConfigDict(extra="allow", frozen=True)

    seller_id: str | None = Field(
        default=None,
        description="Identificador del vendedor; se normaliza a str (hay ficheros con enteros).",
    )
    domain: str | None = None
    seller_type: str | None = None
    is_confidential: bool | None = None
    name: str | None = None

    @field_validator("seller_id", "domain", "seller_type", "name", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("is_confidential", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes")
        return bool(value)

    @property
    def normalized_seller_id(self) -> str | None:
        if self.seller_id is None:
            return None
        return self.seller_id.strip()

    @property
    def normalized_seller_type(self) -> str:
        return (self.seller_type or "").strip().upper()


class SellersDirectory(BaseModel):
    """Contenido parseado de un sellers.json."""

    model_config = ConfigDict(extra="ignore")

    sellers: list[SellerRecord]
    identifiers: list[dict[str, Any]] = Field(default_factory=list)
    contact_email: str | None = None
    version: str | None = None

    @field_validator("version", "contact_email", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("identifiers", mode="before")
    @classmethod
    def _coerce_identifiers(cls, value: Any) -> Any:
        if value is None:
            return []
        return value


class CachedDocument(BaseModel):
    """Documento devuelto por un proveedor (ads.txt previo o sellers.json)."""

    model_config = ConfigDict(from_attributes=True)

    status: str = Field(..., description="`success` cuando el contenido es utilizable.")
    content: str | None = None

    @property
    def is_usable(self) -> bool:
        return self.status == "success" and bool(self.content)


class CrossCheckValidationResult(BaseModel):
    """Resultado de los 8 casos del cruce con sellers.json.

    `None` significa "no aplica" (p.ej. campos RESELLER en un registro DIRECT)
    o "no evaluado" (la validación se detuvo antes).
    """

    model_config = ConfigDict(frozen=True)

    # Caso 1: el sistema publicitario publica sellers.json.
    has_sellers_json: bool | None = None
    # Caso 2: el account_id aparece como seller_id.
    account_id_in_sellers_json: bool | None = None
    # Caso 3: el dominio del vendedor coincide con el editor.
    domain_matches_seller_entry: bool | None = None
    # Caso 4: DIRECT con seller_type PUBLISHER/BOTH.
    direct_entry_has_publisher_type: bool | None = None
    # Caso 5: seller_id único (DIRECT).
    seller_id_is_unique: bool | None = None
    # Caso 6: RESELLER con account_id presente.
    reseller_account_id_in_sellers_json: bool | None = None
    # Caso 7: RESELLER con seller_type INTERMEDIARY/BOTH.
    reseller_entry_has_intermediary_type: bool | None = None
    # Caso 8: seller_id único (RESELLER).
    reseller_seller_id_is_unique: bool | None = None

    seller_data: SellerRecord | None = None
    error: str | None = None


class AdsTxtRecord(BaseModel):
    """Línea de registro `domain, account_id, relationship[, cert_id]`."""

    model_config = ConfigDict(frozen=True)

    entry_type: Literal["record"] = "record"

    domain: str
    account_id: str
    account_type: str = Field(default="", description="Tercer token tal cual aparece en la línea.")
    relationship: Relationship = Relationship.DIRECT
    certification_authority_id: str | None = None
    line_number: int
    raw_line: str

    is_valid: bool = True
    error_code: ErrorCode | None = None

    has_warning: bool = False
    warning_code: WarningCode | None = None
    warning_params: dict[str, Any] | None = None
    all_warnings: list[ValidationWarning] = Field(default_factory=list)
    validation_results: CrossCheckValidationResult | None = None
    duplicate_domain: str | None = None
    validation_error: str | None = None

    @property
    def lookup_key(self) -> tuple[str, str, Relationship]:
        """Clave de identidad: dominio sin mayúsculas, account_id exacto, relación."""

        return (self.domain.lower(), self.account_id, self.relationship)


class AdsTxtVariable(BaseModel):
    """Línea de variable `TYPE=value`."""

    model_config = ConfigDict(frozen=True)

    entry_type: Literal["variable"] = "variable"

    variable_type: VariableType
    value: str
    line_number: int
    raw_line: str
    is_valid: Literal[True] = True

    @property
    def is_generated(self) -> bool:
        return self.line_number == GENERATED_LINE_NUMBER


Entry = Annotated[Union[AdsTxtRecord, AdsTxtVariable], Field(discriminator="entry_type")]


def is_record(entry: object) -> bool:
    return isinstance(entry, AdsTxtRecord)


def is_variable(entry: object) -> bool:
    return isinstance(entry, AdsTxtVariable)
