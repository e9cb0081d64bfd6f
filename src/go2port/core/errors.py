"""Modelo de errores tipado con códigos estables.

Por qué aquí:
- Los adaptadores (HTTP, manifests, checksums) y los servicios del Core
  comparten la misma taxonomía, así la CLI decide qué es fatal y qué no sin
  inspeccionar mensajes.
- `context` guarda coordenada/URL para diagnosticar sin re-ejecutar.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum


class ErrorCode(str, Enum):
    """Stable error identifiers used across API surfaces."""

    COORDINATE = "E_COORDINATE"
    IDENTITY = "E_IDENTITY"
    MANIFEST_NOT_FOUND = "E_MANIFEST_NOT_FOUND"
    MANIFESTS_EXHAUSTED = "E_MANIFESTS_EXHAUSTED"
    ARCHIVE_FETCH = "E_ARCHIVE_FETCH"
    UNSUPPORTED_HOST = "E_UNSUPPORTED_HOST"
    PORTFILE = "E_PORTFILE"


class Go2PortError(Exception):
    """Base error class that carries code, optional hint, and context."""

    code: str
    hint: str | None
    context: Mapping[str, str]

    _code: ErrorCode

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = self._code.value
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        for key, value in self.context.items():
            if value:
                parts.append(f"  {key}: {value}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class CoordinateFormatError(Go2PortError):
    """Too few path segments or a structurally invalid coordinate."""

    _code = ErrorCode.COORDINATE


class IdentityResolutionError(Go2PortError):
    """No matching go-import meta tag, or an unusable redirect target."""

    _code = ErrorCode.IDENTITY


class ManifestNotFoundError(Go2PortError):
    _code = ErrorCode.MANIFEST_NOT_FOUND


class AllManifestsExhaustedError(Go2PortError):
    _code = ErrorCode.MANIFESTS_EXHAUSTED


class ArchiveFetchError(Go2PortError):
    _code = ErrorCode.ARCHIVE_FETCH


class UnsupportedHostError(Go2PortError):
    _code = ErrorCode.UNSUPPORTED_HOST


class PortfileFormatError(Go2PortError):
    _code = ErrorCode.PORTFILE


__all__ = [
    "AllManifestsExhaustedError",
    "ArchiveFetchError",
    "CoordinateFormatError",
    "ErrorCode",
    "Go2PortError",
    "IdentityResolutionError",
    "ManifestNotFoundError",
    "PortfileFormatError",
    "UnsupportedHostError",
]
