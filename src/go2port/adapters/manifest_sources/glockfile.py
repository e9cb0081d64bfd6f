"""Probe: GLOCKFILE (glock).

Formato plano: `<import-path> <revision>` por línea. Las líneas que no tienen
exactamente dos campos se ignoran sin error.
"""

from __future__ import annotations

from go2port.core.domain.models import DependencyRecord
from go2port.core.errors import ManifestNotFoundError
from go2port.core.interfaces.manifest import ManifestProbe


class GlockfileProbe(ManifestProbe):
    filename = "GLOCKFILE"

    def parse(self, payload: bytes) -> list[DependencyRecord]:
        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ManifestNotFoundError(
                "GLOCKFILE is not valid UTF-8",
                context={"error": str(exc)},
            ) from exc

        deps: list[DependencyRecord] = []
        for line in text.splitlines():
            fields = line.split()
            if len(fields) != 2:
                continue
            deps.append(DependencyRecord(name=fields[0], version=fields[1]))
        return deps
