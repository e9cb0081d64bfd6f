"""Roles de descarga de un archivo fuente.

Algunos hosts usan URLs distintas para el tarball del paquete principal y
para el de una dependencia vendorizada; el rol viaja explícito en cada
llamada al localizador de archivos.
"""

from __future__ import annotations

from enum import Enum


class FetchRole(str, Enum):
    """Why an archive is being fetched."""

    PRIMARY = "primary"
    VENDORED = "vendored"

    def label(self) -> str:
        """Human readable label for logging."""

        return "vendored dependency" if self is FetchRole.VENDORED else "main package"
