"""Identity resolution for Go package coordinates.

Known hosts are mapped with static rules; every other host goes through
vanity-import discovery (`?go-get=1` plus the `go-import` meta tag), behind
the same `resolve_identity` entry point so callers stay host-agnostic.
"""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

import httpx

from go2port.adapters.http_client import find_go_import
from go2port.core.domain.models import ResolvedIdentity
from go2port.core.errors import CoordinateFormatError, IdentityResolutionError

logger = logging.getLogger(__name__)

# Fijado históricamente: el vanity server de google.golang.org no resolvía
# a un repo descargable para este módulo.
PINNED_IDENTITIES: dict[str, tuple[str, str, str]] = {
    "google.golang.org/protobuf": ("github.com", "protocolbuffers", "protobuf-go"),
}


def _invalid(coordinate: str) -> CoordinateFormatError:
    return CoordinateFormatError(
        f"Invalid package ID: {coordinate}",
        hint="Expected <host>/<author>/<project>[/...].",
        context={"coordinate": coordinate},
    )


def _strip_gopkg_version(name: str) -> str:
    # yaml.v2 -> yaml
    return name.split(".", 1)[0]


def resolve_static(coordinate: str) -> ResolvedIdentity | None:
    """Resolve `coordinate` without network access.

    Returns None when the host has no static rule and needs vanity discovery.
    Raises CoordinateFormatError when a known host has too few segments.
    """

    pinned = PINNED_IDENTITIES.get(coordinate)
    if pinned is not None:
        host, author, project = pinned
        return ResolvedIdentity(
            host=host,
            author=author,
            project=project,
            resolved_coordinate=f"{host}/{author}/{project}",
            alias_coordinate=coordinate,
        )

    parts = coordinate.split("/")
    host = parts[0]
    if not host:
        raise _invalid(coordinate)

    if host in ("github.com", "bitbucket.org"):
        if len(parts) < 3:
            raise _invalid(coordinate)
        author, project = parts[1], parts[2]
    elif host == "golang.org":
        # golang.org/x/<name> se descarga del mirror de GitHub.
        if len(parts) < 3:
            raise _invalid(coordinate)
        host, author, project = "github.com", "golang", parts[2]
    elif host == "gopkg.in":
        if len(parts) == 2:
            # gopkg.in/yaml.v2 -> github.com/go-yaml/yaml
            project = _strip_gopkg_version(parts[1])
            author = "go-" + project
        elif len(parts) == 3:
            # gopkg.in/inconshreveable/log15.v2 -> github.com/inconshreveable/log15
            project = _strip_gopkg_version(parts[2])
            author = parts[1]
        else:
            raise _invalid(coordinate)
        host = "github.com"
    else:
        return None

    if not author or not project:
        raise _invalid(coordinate)

    # The golang PortGroup understands these coordinates natively.
    return ResolvedIdentity(
        host=host,
        author=author,
        project=project,
        resolved_coordinate=coordinate,
    )


def identity_from_repo_root(coordinate: str, repo_root: str) -> ResolvedIdentity:
    """Map a go-import repo-root URL onto a ResolvedIdentity."""

    parsed = urlsplit(repo_root)
    host = parsed.hostname
    if not host:
        raise IdentityResolutionError(
            f"Could not parse repository root for {coordinate}",
            context={"coordinate": coordinate, "repo_root": repo_root},
        )

    segments = [segment for segment in parsed.path.split("/") if segment]
    if not segments:
        raise IdentityResolutionError(
            f"Repository root for {coordinate} has no path",
            context={"coordinate": coordinate, "repo_root": repo_root},
        )
    segments[-1] = segments[-1].removesuffix(".git")

    if len(segments) == 1:
        author = None
        project = segments[0]
        resolved = f"{host}/{project}"
    else:
        author, project = segments[0], segments[1]
        resolved = f"{host}/{author}/{project}"

    return ResolvedIdentity(
        host=host,
        author=author,
        project=project,
        resolved_coordinate=resolved,
        alias_coordinate=coordinate if coordinate != resolved else None,
    )


async def discover_vanity_identity(
    coordinate: str,
    *,
    client: httpx.AsyncClient,
) -> ResolvedIdentity:
    """Follow the go-import meta tag served at `https://<coordinate>?go-get=1`."""

    url = f"https://{coordinate}"
    logger.debug("Looking up go-import meta tag at %s?go-get=1", url)
    try:
        response = await client.get(url, params={"go-get": "1"})
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise IdentityResolutionError(
            f"Could not look up package {coordinate}",
            context={"coordinate": coordinate, "error": str(exc)},
        ) from exc

    entry = find_go_import(html=response.text, coordinate=coordinate)
    if entry is None:
        raise IdentityResolutionError(
            f"No go-import meta tag found for {coordinate}",
            hint="Is this a valid Go package path?",
            context={"coordinate": coordinate, "url": str(response.url)},
        )

    logger.debug("Resolved %s via %s %s", coordinate, entry.vcs, entry.repo_root)
    return identity_from_repo_root(coordinate, entry.repo_root)


async def resolve_identity(
    coordinate: str,
    version: str,
    *,
    client: httpx.AsyncClient,
) -> ResolvedIdentity:
    """Turn a raw coordinate into a resolved host/author/project.

    `version` does not influence the mapping; it is accepted so callers can
    resolve a (coordinate, version) pair uniformly.
    """

    identity = resolve_static(coordinate)
    if identity is None:
        identity = await discover_vanity_identity(coordinate, client=client)
    logger.debug("Resolved %s@%s -> %s", coordinate, version, identity.resolved_coordinate)
    return identity
