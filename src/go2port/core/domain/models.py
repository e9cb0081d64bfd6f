"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El bundle final se serializa tal cual (JSON) o se pasa al renderer del
  Portfile.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
- Ninguno persiste entre invocaciones: se construyen en cada ejecución.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class ResolvedIdentity(BaseModel):
    """Identidad de red real de un paquete Go.

    Por qué existe:
    - Un mismo paquete puede pedirse por su coordenada "vanity"
      (p.ej. `go.uber.org/zap`) y descargarse desde otro host.
    - Los consumidores necesitan reconstruir ambas: la coordenada resuelta y
      el alias original.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(
        ...,
        min_length=1,
        description="Host del VCS (github.com, bitbucket.org, ... o dominio verificado).",
    )
    author: str | None = Field(
        default=None,
        description="Owner/organización; ausente si el repo-root solo tiene un segmento.",
    )
    project: str = Field(
        ...,
        min_length=1,
        description="Nombre del repositorio.",
    )
    resolved_coordinate: str = Field(
        ...,
        min_length=1,
        description="Coordenada canónica host/author/project.",
    )
    alias_coordinate: str | None = Field(
        default=None,
        description="Coordenada pedida por el usuario cuando difiere de la resuelta.",
    )

    @property
    def package_id(self) -> str:
        return self.resolved_coordinate


class DependencyRecord(BaseModel):
    """Dependencia normalizada extraída de un lockfile."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Coordenada de la dependencia (sin sufijo /vN en go.sum).",
    )
    version: str = Field(
        ...,
        min_length=1,
        description="Tag, branch o commit; puede venir de una pseudo-versión.",
    )


class ChecksumRecord(BaseModel):
    """Checksums de un archivo tal y como los consume un Portfile.

    El valor centinela `{"0", "0", "0"}` indica "checksum no disponible".
    """

    model_config = ConfigDict(frozen=True)

    rmd160: str = Field(default="0", description="RIPEMD-160 en hex (minúsculas).")
    sha256: str = Field(default="0", description="SHA-256 en hex (minúsculas).")
    size: str = Field(default="0", description="Tamaño en bytes, como texto.")

    @classmethod
    def sentinel(cls) -> "ChecksumRecord":
        return cls(rmd160="0", sha256="0", size="0")

    @property
    def is_sentinel(self) -> bool:
        return self.rmd160 == "0" and self.sha256 == "0" and self.size == "0"


class PortBundle(BaseModel):
    """Agregado principal: todo lo que el renderer del Portfile necesita.

    Por qué un agregado:
    - Centraliza el resultado de la resolución (identidad + deps + checksums)
      para exportarlo a JSON o renderizarlo con Jinja2.
    """

    package_id: str = Field(
        ...,
        min_length=1,
        description="Coordenada resuelta del paquete principal.",
    )
    alias: str = Field(
        default="",
        description="Coordenada vanity original o cadena vacía.",
    )
    version: str = Field(
        ...,
        min_length=1,
        description="Versión pedida (tag, branch o SHA).",
    )
    checksums: dict[str, ChecksumRecord] = Field(
        default_factory=dict,
        description="Checksums por coordenada (principal primero, luego deps).",
    )
    dependencies: list[DependencyRecord] = Field(
        default_factory=list,
        description="Dependencias en el orden que exige el Portfile.",
    )

    @property
    def main_checksums(self) -> ChecksumRecord:
        return self.checksums.get(self.package_id, ChecksumRecord.sentinel())
