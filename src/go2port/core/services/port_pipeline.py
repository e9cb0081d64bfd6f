"""Portfile resolution orchestration.

This module ties the identity resolver, the dependency extractor and the
checksum engine together. The CLI delegates all aggregation concerns to these
helpers, which keeps side-effects (printing, writing files) out of the core
logic and makes the pipeline reusable from tests and other entry-points.

Everything runs sequentially over a single HTTP client: one request at a time,
no caching, so resolving the same coordinate twice repeats the network work.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

import httpx

from go2port.adapters.checksums import fetch_checksums
from go2port.adapters.http_client import build_async_client
from go2port.core.config import AppSettings
from go2port.core.domain.models import (
    ChecksumRecord,
    DependencyRecord,
    PortBundle,
    ResolvedIdentity,
)
from go2port.core.domain.roles import FetchRole
from go2port.core.errors import (
    ArchiveFetchError,
    CoordinateFormatError,
    IdentityResolutionError,
    UnsupportedHostError,
)
from go2port.core.interfaces.manifest import ManifestProbe
from go2port.core.services.dependencies import extract_dependencies
from go2port.core.services.identity import resolve_identity

logger = logging.getLogger(__name__)


@dataclass
class PortRequest:
    """One (package, version) pair to resolve."""

    package: str
    version: str
    subdirectory: str | None = None


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (warnings, per-package results)."""

    warning: Callable[[str], None] | None = None
    package_done: Callable[["PipelineResult"], None] | None = None


@dataclass
class PipelineResult:
    """Output of a pipeline invocation."""

    bundle: PortBundle
    identity: ResolvedIdentity
    warnings: list[str] = field(default_factory=list)


class _Warnings:
    def __init__(self, hooks: PipelineHooks) -> None:
        self._hooks = hooks
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        logger.debug("warning: %s", message)
        self.messages.append(message)
        if self._hooks.warning:
            self._hooks.warning(message)


async def _best_effort_checksums(
    identity: ResolvedIdentity,
    version: str,
    role: FetchRole,
    *,
    client: httpx.AsyncClient,
    coordinate: str,
    warn: Callable[[str], None],
) -> ChecksumRecord:
    try:
        return await fetch_checksums(
            identity,
            version,
            role,
            client=client,
            coordinate=coordinate,
            warn=warn,
        )
    except (ArchiveFetchError, UnsupportedHostError) as exc:
        url = exc.context.get("url", "")
        detail = f" ({url})" if url else ""
        warn(f"Could not calculate checksums for package: {coordinate}{detail}: {exc.args[0]}")
        return ChecksumRecord.sentinel()


async def dependency_checksums(
    dep: DependencyRecord,
    *,
    client: httpx.AsyncClient,
    warn: Callable[[str], None],
) -> ChecksumRecord:
    """Checksums of a vendored dependency; never raises for per-dependency failures."""

    try:
        identity = await resolve_identity(dep.name, dep.version, client=client)
    except (CoordinateFormatError, IdentityResolutionError) as exc:
        warn(f"Could not parse package ID: {dep.name}: {exc.args[0]}")
        return ChecksumRecord.sentinel()
    return await _best_effort_checksums(
        identity,
        dep.version,
        FetchRole.VENDORED,
        client=client,
        coordinate=dep.name,
        warn=warn,
    )


async def resolve_port(
    request: PortRequest,
    *,
    settings: AppSettings,
    client: httpx.AsyncClient,
    hooks: PipelineHooks | None = None,
    probes: Sequence[ManifestProbe] | None = None,
) -> PipelineResult:
    """Resolve one package into a PortBundle.

    Raises CoordinateFormatError / IdentityResolutionError when the main
    package itself cannot be resolved; every other failure degrades to a
    warning plus a sentinel checksum or an empty dependency list.
    """

    hooks = hooks or PipelineHooks()
    warn = _Warnings(hooks)

    logger.debug("Generating portfile for %s (%s)", request.package, request.version)
    identity = await resolve_identity(request.package, request.version, client=client)

    deps = await extract_dependencies(
        identity,
        request.version,
        client=client,
        settings=settings,
        subdirectory=request.subdirectory,
        probes=probes,
        warn=warn,
    )

    checksums: dict[str, ChecksumRecord] = {
        identity.package_id: await _best_effort_checksums(
            identity,
            request.version,
            FetchRole.PRIMARY,
            client=client,
            coordinate=identity.package_id,
            warn=warn,
        )
    }
    for dep in deps:
        checksums[dep.name] = await dependency_checksums(dep, client=client, warn=warn)

    bundle = PortBundle(
        package_id=identity.package_id,
        alias=identity.alias_coordinate or "",
        version=request.version,
        checksums=checksums,
        dependencies=deps,
    )
    result = PipelineResult(bundle=bundle, identity=identity, warnings=warn.messages)
    if hooks.package_done:
        hooks.package_done(result)
    return result


async def resolve_batch(
    requests: Sequence[PortRequest],
    *,
    settings: AppSettings,
    hooks: PipelineHooks | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    probes: Sequence[ManifestProbe] | None = None,
) -> list[PipelineResult]:
    """Resolve several packages strictly in order.

    The first fatal error propagates and the remaining requests are skipped;
    results already delivered through `hooks.package_done` stay delivered.
    """

    results: list[PipelineResult] = []
    async with build_async_client(settings, transport=transport) as client:
        for request in requests:
            results.append(
                await resolve_port(
                    request,
                    settings=settings,
                    client=client,
                    hooks=hooks,
                    probes=probes,
                )
            )
    return results


def pair_requests(args: Sequence[str], *, subdirectory: str | None = None) -> list[PortRequest]:
    """Group `<package> <version> ...` positional arguments into requests."""

    if len(args) % 2 != 0:
        raise ValueError("Please specify a package and version (tag or SHA1)")
    return [
        PortRequest(package=args[i], version=args[i + 1], subdirectory=subdirectory)
        for i in range(0, len(args), 2)
    ]
