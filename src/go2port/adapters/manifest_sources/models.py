"""Modelos de lockfiles estructurados (YAML/TOML).

Idea:
- Validamos con Pydantic en vez de recorrer dicts a mano; un documento que no
  encaja en el esquema equivale a "formato ausente".
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LockedDependency(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1)


class GopkgProject(BaseModel):
    # dep guarda la versión fijada bajo la clave `revision`.
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1, alias="revision")


class GlideLock(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Obligatorio: un YAML cualquiera servido como glide.lock no es un lock.
    imports: list[LockedDependency]


class GopkgLock(BaseModel):
    model_config = ConfigDict(extra="ignore")

    projects: list[GopkgProject] = Field(default_factory=list)
