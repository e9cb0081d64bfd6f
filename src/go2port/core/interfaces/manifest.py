"""Contratos de probes de manifests (lockfiles).

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Cada formato de lockfile (go.sum, glide.lock, ...) es intercambiable: el
  extractor solo recorre una tupla ordenada de probes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from go2port.core.domain.models import DependencyRecord


@runtime_checkable
class ManifestProbe(Protocol):
    """Contrato mínimo para un formato de lockfile.

    Reglas de diseño:
    - `filename` es el nombre bien conocido que se busca en el repo.
    - `parse` recibe los bytes crudos y devuelve dependencias normalizadas,
      o lanza `ManifestNotFoundError` si el contenido no es del formato.
    """

    filename: str

    def parse(self, payload: bytes) -> list[DependencyRecord]:
        """Parsea el contenido del lockfile y devuelve el resultado normalizado."""

        ...
