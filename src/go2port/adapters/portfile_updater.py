"""Actualización de Portfiles existentes.

Idea:
- En vez de regenerar desde cero, convertimos el Portfile actual en una
  plantilla: se reemplazan la versión de `go.setup` y los bloques
  `checksums`/`go.vendors`; el resto (descripción, licencia, fases) se
  conserva tal cual.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

from go2port.core.errors import PortfileFormatError

_SETUP_PKG_RE = re.compile(r"go\.setup\s+(\S+)")
_CHECKSUMS_RE = re.compile(r"checksums(?:.*\\\n)*.*")
_GO_VENDORS_RE = re.compile(r"go\.vendors(?:.*\\\n)*.*")


def package_from_portfile(text: str) -> str:
    """Coordenada declarada en `go.setup`."""

    match = _SETUP_PKG_RE.search(text)
    if match is None:
        raise PortfileFormatError("Could not detect package name in portfile")
    return match.group(1)


def template_from_portfile(package_id: str, text: str) -> str:
    """Convierte un Portfile en plantilla Jinja2 para `render_portfile`."""

    setup_re = re.compile(
        rf"(?P<before>go\.setup\s+{re.escape(package_id)}\s+)\S+(?P<after>.*)"
    )
    text = setup_re.sub(lambda m: f"{m['before']}{{{{ version }}}}{m['after']}", text)
    text = _GO_VENDORS_RE.sub("{{ go_vendors }}", text)
    text = _CHECKSUMS_RE.sub("{{ checksums }}", text)
    return text


def locate_portfile(portname: str) -> Path:
    """Pregunta a MacPorts (`port file <name>`) dónde vive el Portfile."""

    try:
        proc = subprocess.run(
            ["port", "file", portname],
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise PortfileFormatError(
            "The `port` command is not available",
            hint="Install MacPorts or pass the Portfile path explicitly.",
            context={"port": portname},
        ) from exc
    if proc.returncode != 0:
        raise PortfileFormatError(
            f"Could not locate portfile for {portname}",
            context={"port": portname, "stderr": proc.stderr.strip()},
        )
    return Path(proc.stdout.strip())
