"""Probe: glide.lock (YAML).

Formato:
- Documento con una lista top-level `imports` de `{name, version}`.
- Se conserva el orden del archivo.
"""

from __future__ import annotations

import yaml
from pydantic import ValidationError

from go2port.adapters.manifest_sources.models import GlideLock
from go2port.core.domain.models import DependencyRecord
from go2port.core.errors import ManifestNotFoundError
from go2port.core.interfaces.manifest import ManifestProbe


class GlideLockProbe(ManifestProbe):
    filename = "glide.lock"

    def parse(self, payload: bytes) -> list[DependencyRecord]:
        try:
            data = yaml.safe_load(payload) or {}
            lock = GlideLock.model_validate(data)
        except (yaml.YAMLError, ValidationError) as exc:
            raise ManifestNotFoundError(
                "glide.lock could not be parsed",
                context={"error": str(exc)},
            ) from exc

        return [DependencyRecord(name=dep.name, version=dep.version) for dep in lock.imports]
