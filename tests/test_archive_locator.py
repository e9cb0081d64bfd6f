from __future__ import annotations

import pytest

from go2port.adapters.archive_locator import GITLAB_UNSUPPORTED_MESSAGE, archive_url, raw_file_url
from go2port.core.domain.models import ResolvedIdentity
from go2port.core.domain.roles import FetchRole
from go2port.core.errors import UnsupportedHostError


def _identity(host: str, author: str | None = "acme") -> ResolvedIdentity:
    path = f"{author}/widget" if author else "widget"
    return ResolvedIdentity(host=host, author=author, project="widget", resolved_coordinate=f"{host}/{path}")


def test_github_uses_different_urls_per_role() -> None:
    identity = _identity("github.com")

    assert archive_url(identity, "v1.2.0", FetchRole.PRIMARY) == (
        "https://github.com/acme/widget/archive/v1.2.0.tar.gz"
    )
    assert archive_url(identity, "v1.2.0", FetchRole.VENDORED) == (
        "https://github.com/acme/widget/tarball/v1.2.0"
    )


@pytest.mark.parametrize("role", list(FetchRole))
def test_bitbucket_uses_get_form_for_both_roles(role: FetchRole) -> None:
    assert archive_url(_identity("bitbucket.org"), "abc123", role) == (
        "https://bitbucket.org/acme/widget/get/abc123.tar.gz"
    )


def test_sourcehut_archive() -> None:
    identity = _identity("git.sr.ht", author="~acme")

    assert archive_url(identity, "v0.3.0", FetchRole.VENDORED) == (
        "https://git.sr.ht/~acme/widget/archive/v0.3.0.tar.gz"
    )


@pytest.mark.parametrize("role", list(FetchRole))
def test_gitlab_is_rejected(role: FetchRole) -> None:
    with pytest.raises(UnsupportedHostError) as excinfo:
        archive_url(_identity("gitlab.com"), "v1.0.0", role)

    assert excinfo.value.args[0] == GITLAB_UNSUPPORTED_MESSAGE
    assert excinfo.value.code == "E_UNSUPPORTED_HOST"


def test_custom_host_uses_generic_archive_template() -> None:
    assert archive_url(_identity("git.example.com"), "v2.0.0", FetchRole.PRIMARY) == (
        "https://git.example.com/acme/widget/-/archive/v2.0.0/widget-v2.0.0.tar.gz"
    )


def test_custom_host_without_author() -> None:
    assert archive_url(_identity("code.example.com", author=None), "v1", FetchRole.VENDORED) == (
        "https://code.example.com/widget/-/archive/v1/widget-v1.tar.gz"
    )


@pytest.mark.parametrize(
    ("host", "author", "expected"),
    [
        ("github.com", "acme", "https://raw.githubusercontent.com/acme/widget/v1/go.sum"),
        ("bitbucket.org", "acme", "https://bitbucket.org/acme/widget/raw/v1/go.sum"),
        ("git.sr.ht", "~acme", "https://git.sr.ht/~acme/widget/blob/v1/go.sum"),
        ("gitlab.com", "acme", "https://gitlab.com/acme/widget/-/raw/v1/go.sum"),
    ],
)
def test_raw_file_urls(host: str, author: str, expected: str) -> None:
    assert raw_file_url(_identity(host, author=author), "v1", "go.sum") == expected


def test_raw_file_url_unknown_host() -> None:
    assert raw_file_url(_identity("git.example.com"), "v1", "go.sum") is None
