"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/manifests/checksums) lean config de forma
  consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from go2port import __version__

# Registro falso histórico presente en algunos go.sum publicados.
BOGUS_GOSUM_HASH = "h1:47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU="


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "go2port"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "go2port"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "go2port"
    return Path.home() / ".config" / "go2port"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="GO2PORT_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request (segundos). Los tarballs grandes tardan.",
    )
    user_agent: str = Field(
        default=f"go2port/{__version__}",
        min_length=1,
        description="User-Agent para todas las peticiones.",
    )
    debug: bool = Field(
        default=False,
        description="Logging detallado (equivale a --debug).",
    )
    gosum_skip_hashes: list[str] = Field(
        default_factory=lambda: [BOGUS_GOSUM_HASH],
        description="Hashes de go.sum cuyas líneas se descartan.",
    )
    manifest_subdirectory: str = Field(
        default="",
        description="Subdirectorio del repo donde viven los lockfiles.",
    )
