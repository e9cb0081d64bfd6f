"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y redirects para vanity imports, lockfiles y
  tarballs.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from bs4 import BeautifulSoup

from go2port.core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las fuentes se comporten igual.
    - Un solo cliente por ejecución: las peticiones son secuenciales.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


@dataclass(frozen=True)
class GoImport:
    """Una entrada `<meta name="go-import">`."""

    prefix: str
    vcs: str
    repo_root: str


def extract_go_imports(*, html: str) -> list[GoImport]:
    """Extrae todas las entradas go-import de un documento HTML.

    El atributo `content` tiene la forma `<import-prefix> <vcs> <repo-root>`;
    las entradas que no tienen exactamente tres campos se ignoran.
    """

    if not html:
        return []

    soup = BeautifulSoup(html, "html.parser")
    out: list[GoImport] = []
    for tag in soup.find_all("meta", attrs={"name": "go-import"}):
        content = tag.get("content")
        if not content:
            continue
        fields = str(content).split()
        if len(fields) != 3:
            continue
        out.append(GoImport(prefix=fields[0], vcs=fields[1], repo_root=fields[2]))
    return out


def find_go_import(*, html: str, coordinate: str) -> GoImport | None:
    """Primera entrada go-import cuyo prefijo es prefijo de `coordinate`."""

    for entry in extract_go_imports(html=html):
        if coordinate.startswith(entry.prefix):
            return entry
    return None
