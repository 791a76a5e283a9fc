"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP) y servicios (TTL de la caché de sellers.json)
  lean config de forma consistente.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "adstxt-validator"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "adstxt-validator"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "adstxt-validator"
    return Path.home() / ".config" / "adstxt-validator"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters/servicios.
    """

    model_config = SettingsConfigDict(
        env_prefix="ADSTXT_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request al descargar ads.txt/sellers.json (segundos).",
    )
    user_agent: str = Field(
        default="adstxt-validator/0.1",
        min_length=1,
        description="User-Agent para las descargas.",
    )
    max_concurrency: int = Field(
        default=20,
        ge=1,
        le=500,
        description="Descargas simultáneas máximas en los adaptadores HTTP.",
    )
    directory_cache_ttl_seconds: float = Field(
        default=300.0,
        ge=0,
        description="Vida de un sellers.json memoizado por dominio (0 = solo dentro de una llamada).",
    )
    default_language: Language = Field(
        default=Language.ENGLISH,
        description="Idioma por defecto para los mensajes de validación (en/ja).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la CLI.",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level
