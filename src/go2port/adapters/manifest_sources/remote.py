"""Descarga de lockfiles crudos desde el host del repo."""

from __future__ import annotations

import logging

import httpx

from go2port.adapters.archive_locator import raw_file_url
from go2port.core.domain.models import ResolvedIdentity
from go2port.core.errors import ManifestNotFoundError

logger = logging.getLogger(__name__)


async def fetch_manifest(
    identity: ResolvedIdentity,
    version: str,
    filename: str,
    *,
    client: httpx.AsyncClient,
    subdirectory: str = "",
) -> bytes:
    """Devuelve los bytes de `filename` o lanza `ManifestNotFoundError`."""

    url = raw_file_url(identity, version, filename, subdirectory=subdirectory)
    if url is None:
        raise ManifestNotFoundError(
            f"{filename} not available; no raw file URL for host {identity.host}",
            context={"host": identity.host, "coordinate": identity.resolved_coordinate},
        )

    logger.debug("Probing %s", url)
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        raise ManifestNotFoundError(
            f"{filename} not available",
            context={"url": url, "error": str(exc)},
        ) from exc

    if response.status_code != 200:
        raise ManifestNotFoundError(
            f"{filename} not available; HTTP status={response.status_code}",
            context={"url": url},
        )
    return response.content
