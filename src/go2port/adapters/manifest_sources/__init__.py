"""Fuentes de dependencias (probes de lockfiles).

Por qué un paquete:
- Agrupa un módulo por formato (go.sum, glide.lock, Gopkg.lock, GLOCKFILE).
- Cada módulo implementa `go2port.core.interfaces.manifest.ManifestProbe`.
"""

from go2port.adapters.manifest_sources.glide import GlideLockProbe
from go2port.adapters.manifest_sources.glockfile import GlockfileProbe
from go2port.adapters.manifest_sources.gopkg import GopkgLockProbe
from go2port.adapters.manifest_sources.gosum import GoSumProbe
from go2port.adapters.manifest_sources.remote import fetch_manifest

__all__ = [
	"GlideLockProbe",
	"GlockfileProbe",
	"GoSumProbe",
	"GopkgLockProbe",
	"fetch_manifest",
]
