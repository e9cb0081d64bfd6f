"""Checksums de tarballs (RIPEMD-160, SHA-256, tamaño).

Un Portfile de MacPorts fija los tres valores para cada archivo que se
descarga en build; aquí se descargan y se calculan sobre los bytes completos.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Callable

import httpx
from Crypto.Hash import RIPEMD160

from go2port.adapters.archive_locator import archive_url
from go2port.core.domain.models import ChecksumRecord, ResolvedIdentity
from go2port.core.domain.roles import FetchRole
from go2port.core.errors import ArchiveFetchError

logger = logging.getLogger(__name__)

# Tamaño del cuerpo "Not Found" que algunos hosts sirven con status 200.
SUSPICIOUS_BODY_SIZE = 14


def compute_checksums(payload: bytes) -> ChecksumRecord:
    """Calcula tamaño + digests sobre `payload`."""

    rmd = RIPEMD160.new()
    rmd.update(payload)
    return ChecksumRecord(
        rmd160=rmd.hexdigest(),
        sha256=hashlib.sha256(payload).hexdigest(),
        size=str(len(payload)),
    )


async def fetch_checksums(
    identity: ResolvedIdentity,
    version: str,
    role: FetchRole,
    *,
    client: httpx.AsyncClient,
    coordinate: str | None = None,
    warn: Callable[[str], None] | None = None,
) -> ChecksumRecord:
    """Descarga el tarball de `identity` y devuelve sus checksums.

    Lanza `ArchiveFetchError` ante status distinto de 200 o error de red, y
    `UnsupportedHostError` si el host no tiene URL de archivo estable.
    """

    coordinate = coordinate or identity.resolved_coordinate
    url = archive_url(identity, version, role)
    logger.debug("Fetching %s archive for %s: %s", role.label(), coordinate, url)

    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        raise ArchiveFetchError(
            f"Could not download archive for {coordinate}",
            context={"coordinate": coordinate, "url": url, "error": str(exc)},
        ) from exc

    if response.status_code != 200:
        raise ArchiveFetchError(
            f"Archive not available for {coordinate}; HTTP status={response.status_code}",
            hint="Check that the version exists as a tag or commit upstream.",
            context={"coordinate": coordinate, "url": url},
        )

    csums = compute_checksums(response.content)
    if len(response.content) == SUSPICIOUS_BODY_SIZE:
        message = (
            f"Archive for {coordinate} is only {SUSPICIOUS_BODY_SIZE} bytes; "
            f"the 200 response from {url} is probably a 'Not Found' page"
        )
        if warn:
            warn(message)
        else:
            logger.warning(message)
    return csums
