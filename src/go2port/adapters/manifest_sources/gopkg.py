"""Probe: Gopkg.lock (dep, TOML).

Formato:
- Tabla de arrays `[[projects]]` con `name` y `revision`.
- `revision` es la misma noción que `version` en el resto de formatos.
"""

from __future__ import annotations

import tomllib

from pydantic import ValidationError

from go2port.adapters.manifest_sources.models import GopkgLock
from go2port.core.domain.models import DependencyRecord
from go2port.core.errors import ManifestNotFoundError
from go2port.core.interfaces.manifest import ManifestProbe


class GopkgLockProbe(ManifestProbe):
    filename = "Gopkg.lock"

    def parse(self, payload: bytes) -> list[DependencyRecord]:
        try:
            data = tomllib.loads(payload.decode("utf-8"))
            lock = GopkgLock.model_validate(data)
        except (UnicodeDecodeError, tomllib.TOMLDecodeError, ValidationError) as exc:
            raise ManifestNotFoundError(
                "Gopkg.lock could not be parsed",
                context={"error": str(exc)},
            ) from exc

        return [DependencyRecord(name=p.name, version=p.version) for p in lock.projects]
