"""Dependency extraction from upstream lock files.

The probes are tried in a fixed priority order and the first one that finds
and parses its file wins. Adding a format means appending a probe to
`default_probes`; the orchestration below never changes.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import httpx

from go2port.adapters.manifest_sources import (
    GlideLockProbe,
    GlockfileProbe,
    GopkgLockProbe,
    GoSumProbe,
    fetch_manifest,
)
from go2port.core.config import AppSettings
from go2port.core.domain.models import DependencyRecord, ResolvedIdentity
from go2port.core.errors import AllManifestsExhaustedError, ManifestNotFoundError
from go2port.core.interfaces.manifest import ManifestProbe

logger = logging.getLogger(__name__)


def default_probes(settings: AppSettings | None = None) -> tuple[ManifestProbe, ...]:
    settings = settings or AppSettings()
    return (
        GoSumProbe(skip_hashes=settings.gosum_skip_hashes),
        GlideLockProbe(),
        GopkgLockProbe(),
        GlockfileProbe(),
    )


async def probe_manifests(
    identity: ResolvedIdentity,
    version: str,
    *,
    client: httpx.AsyncClient,
    probes: Sequence[ManifestProbe],
    subdirectory: str = "",
) -> list[DependencyRecord]:
    """Return the first probe's result; raise AllManifestsExhaustedError otherwise."""

    failures: dict[str, str] = {}
    for probe in probes:
        try:
            payload = await fetch_manifest(
                identity,
                version,
                probe.filename,
                client=client,
                subdirectory=subdirectory,
            )
            deps = probe.parse(payload)
        except ManifestNotFoundError as exc:
            logger.debug("%s", exc)
            failures[probe.filename] = exc.args[0]
            continue
        logger.debug("Found %d dependencies in %s", len(deps), probe.filename)
        return deps

    raise AllManifestsExhaustedError(
        f"No supported lock file found for {identity.resolved_coordinate}@{version}",
        context=failures,
    )


async def extract_dependencies(
    identity: ResolvedIdentity,
    version: str,
    *,
    client: httpx.AsyncClient,
    settings: AppSettings | None = None,
    subdirectory: str | None = None,
    probes: Sequence[ManifestProbe] | None = None,
    warn: Callable[[str], None] | None = None,
) -> list[DependencyRecord]:
    """Dependencies of `identity` at `version`, or [] when no lock file exists."""

    settings = settings or AppSettings()
    if subdirectory is None:
        subdirectory = settings.manifest_subdirectory
    try:
        return await probe_manifests(
            identity,
            version,
            client=client,
            probes=probes if probes is not None else default_probes(settings),
            subdirectory=subdirectory,
        )
    except AllManifestsExhaustedError as exc:
        message = f"Could not retrieve dependencies for package: {identity.resolved_coordinate}"
        logger.debug("%s", exc)
        if warn:
            warn(message)
        else:
            logger.warning(message)
        return []
