"""Tablas de URLs por host.

Dos tablas, ambas indexadas por host:
- archivos crudos (lockfiles) dentro del repo, para los probes de manifests;
- tarballs de código fuente, parametrizados por `FetchRole`.

Todo el conocimiento específico de cada host vive aquí.
"""

from __future__ import annotations

from typing import Callable

from go2port.core.domain.models import ResolvedIdentity
from go2port.core.domain.roles import FetchRole
from go2port.core.errors import UnsupportedHostError

GITLAB_UNSUPPORTED_MESSAGE = (
    "gitlab.com is not supported: its archive endpoint regenerates tarballs on "
    "demand, so the checksums are not stable between downloads."
)


def _repo_path(identity: ResolvedIdentity) -> str:
    if identity.author:
        return f"{identity.author}/{identity.project}"
    return identity.project


def _file_path(subdirectory: str, filename: str) -> str:
    subdirectory = subdirectory.strip("/")
    if subdirectory:
        return f"{subdirectory}/{filename}"
    return filename


RawUrlBuilder = Callable[[ResolvedIdentity, str, str], str]

_RAW_FILE_URLS: dict[str, RawUrlBuilder] = {
    "github.com": lambda ident, version, path: (
        f"https://raw.githubusercontent.com/{_repo_path(ident)}/{version}/{path}"
    ),
    "bitbucket.org": lambda ident, version, path: (
        f"https://bitbucket.org/{_repo_path(ident)}/raw/{version}/{path}"
    ),
    "git.sr.ht": lambda ident, version, path: (
        f"https://git.sr.ht/{_repo_path(ident)}/blob/{version}/{path}"
    ),
    "gitlab.com": lambda ident, version, path: (
        f"https://gitlab.com/{_repo_path(ident)}/-/raw/{version}/{path}"
    ),
}


def raw_file_url(
    identity: ResolvedIdentity,
    version: str,
    filename: str,
    *,
    subdirectory: str = "",
) -> str | None:
    """URL del contenido crudo de `filename` o `None` si el host no tiene plantilla."""

    builder = _RAW_FILE_URLS.get(identity.host)
    if builder is None:
        return None
    return builder(identity, version, _file_path(subdirectory, filename))


def _github_archive(identity: ResolvedIdentity, version: str, role: FetchRole) -> str:
    # El PortGroup golang descarga las dependencias con la URL legacy "tarball".
    if role is FetchRole.VENDORED:
        return f"https://github.com/{_repo_path(identity)}/tarball/{version}"
    return f"https://github.com/{_repo_path(identity)}/archive/{version}.tar.gz"


def _bitbucket_archive(identity: ResolvedIdentity, version: str, role: FetchRole) -> str:
    return f"https://bitbucket.org/{_repo_path(identity)}/get/{version}.tar.gz"


def _sourcehut_archive(identity: ResolvedIdentity, version: str, role: FetchRole) -> str:
    return f"https://git.sr.ht/{_repo_path(identity)}/archive/{version}.tar.gz"


def _gitlab_archive(identity: ResolvedIdentity, version: str, role: FetchRole) -> str:
    raise UnsupportedHostError(
        GITLAB_UNSUPPORTED_MESSAGE,
        hint="Vendor the dependency from a mirror on another host.",
        context={"host": identity.host, "coordinate": identity.resolved_coordinate},
    )


def _generic_archive(identity: ResolvedIdentity, version: str, role: FetchRole) -> str:
    # Layout de GitLab self-hosted (gitea y similares lo imitan).
    return (
        f"https://{identity.host}/{_repo_path(identity)}/-/archive/"
        f"{version}/{identity.project}-{version}.tar.gz"
    )


ArchiveUrlBuilder = Callable[[ResolvedIdentity, str, FetchRole], str]

_ARCHIVE_URLS: dict[str, ArchiveUrlBuilder] = {
    "github.com": _github_archive,
    "bitbucket.org": _bitbucket_archive,
    "git.sr.ht": _sourcehut_archive,
    "gitlab.com": _gitlab_archive,
}


def archive_url(identity: ResolvedIdentity, version: str, role: FetchRole) -> str:
    """URL canónica del tarball para `identity` en `version`.

    Lanza `UnsupportedHostError` para hosts cuyos tarballs no son estables.
    """

    builder = _ARCHIVE_URLS.get(identity.host, _generic_archive)
    return builder(identity, version, role)
