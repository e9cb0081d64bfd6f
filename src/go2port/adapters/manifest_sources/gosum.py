"""Probe: go.sum (Go modules).

Formato:
- Una entrada por línea: `<module> <version>[/go.mod] <hash>`.
- Las líneas `/go.mod` solo fijan el go.mod de la dependencia, no su código:
  se descartan.

Normalización:
- El sufijo de major version (`/v2`, `/v3`, ...) se quita del nombre.
- Las pseudo-versiones se reducen al hash de commit que contienen.
"""

from __future__ import annotations

import re
from typing import Iterable

from go2port.core.config import BOGUS_GOSUM_HASH
from go2port.core.domain.models import DependencyRecord
from go2port.core.errors import ManifestNotFoundError
from go2port.core.interfaces.manifest import ManifestProbe

_MAJOR_SUFFIX_RE = re.compile(r"/v\d+$")
_VERSION_SPLIT_RE = re.compile(r"[-+]")


def normalize_module_name(name: str) -> str:
    return _MAJOR_SUFFIX_RE.sub("", name)


def normalize_module_version(raw: str) -> str:
    """Reduce una versión de go.sum a algo que el VCS entienda.

    - `v0.0.0-20200101000000-abcdef123456` -> `abcdef123456`
    - `v2.0.0-20200101000000-abcdef123456+incompatible` -> `abcdef123456`
    - `v1.2.3+incompatible` -> `v1.2.3`
    - cualquier otra cosa se deja tal cual.
    """

    tokens = _VERSION_SPLIT_RE.split(raw)
    if len(tokens) == 3 or (len(tokens) == 4 and tokens[3] == "incompatible"):
        return tokens[2]
    if len(tokens) == 2 and tokens[1] == "incompatible":
        return tokens[0]
    return raw


class GoSumProbe(ManifestProbe):
    filename = "go.sum"

    def __init__(self, skip_hashes: Iterable[str] | None = None) -> None:
        self._skip_hashes = frozenset(skip_hashes if skip_hashes is not None else [BOGUS_GOSUM_HASH])

    def parse(self, payload: bytes) -> list[DependencyRecord]:
        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ManifestNotFoundError(
                "go.sum is not valid UTF-8",
                context={"error": str(exc)},
            ) from exc

        by_name: dict[str, DependencyRecord] = {}
        for line in text.splitlines():
            fields = line.split()
            if len(fields) != 3:
                continue
            module, version, digest = fields
            if version.endswith("/go.mod"):
                continue
            if digest in self._skip_hashes:
                continue
            name = normalize_module_name(module)
            normalized = normalize_module_version(version)
            if not name or not normalized:
                raise ManifestNotFoundError(
                    f"go.sum entry cannot be parsed: {line.strip()}",
                    context={"module": module, "version": version},
                )
            # Última entrada gana.
            by_name[name] = DependencyRecord(name=name, version=normalized)

        # Descendente: "a/bb" antes que "a/b" al extraer los tarballs por nombre.
        return sorted(by_name.values(), key=lambda dep: dep.name, reverse=True)
