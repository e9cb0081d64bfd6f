from __future__ import annotations

import textwrap

import pytest

from go2port.adapters.manifest_sources import (
    GlideLockProbe,
    GlockfileProbe,
    GopkgLockProbe,
    GoSumProbe,
)
from go2port.adapters.manifest_sources.gosum import normalize_module_name, normalize_module_version
from go2port.core.config import BOGUS_GOSUM_HASH
from go2port.core.domain.models import DependencyRecord
from go2port.core.errors import ManifestNotFoundError
from go2port.core.interfaces.manifest import ManifestProbe


def _payload(text: str) -> bytes:
    return textwrap.dedent(text).lstrip().encode("utf-8")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("v0.0.0-20200101000000-abcdef123456", "abcdef123456"),
        ("v1.2.4-0.20200101000000-abcdef123456", "abcdef123456"),
        ("v2.0.0-20190101000000-0123456789ab+incompatible", "0123456789ab"),
        ("v1.2.3+incompatible", "v1.2.3"),
        ("v1.2.3", "v1.2.3"),
        ("v1.0.0-rc1", "v1.0.0-rc1"),
    ],
)
def test_gosum_version_normalization(raw: str, expected: str) -> None:
    assert normalize_module_version(raw) == expected


def test_gosum_name_strips_major_suffix() -> None:
    assert normalize_module_name("github.com/go-chi/chi/v5") == "github.com/go-chi/chi"
    assert normalize_module_name("gopkg.in/yaml.v3") == "gopkg.in/yaml.v3"


def test_gosum_skips_go_mod_lines_and_bogus_hash() -> None:
    payload = _payload(
        f"""
        github.com/pkg/errors v0.9.1 h1:FEBLx1zS214owpjy7qsBeixbURkuhQAwrK5UwLGTwt4=
        github.com/pkg/errors v0.9.1/go.mod h1:bwawxfHBFNV+L2hUp1rHADufV3IMtnDRdf1r5NINEl0=
        github.com/bogus/module v1.0.0 {BOGUS_GOSUM_HASH}
        """
    )

    deps = GoSumProbe().parse(payload)

    assert deps == [DependencyRecord(name="github.com/pkg/errors", version="v0.9.1")]


def test_gosum_custom_skip_hashes_replace_default() -> None:
    payload = _payload(
        f"""
        github.com/bogus/module v1.0.0 {BOGUS_GOSUM_HASH}
        github.com/other/module v1.0.0 h1:skipme=
        """
    )

    deps = GoSumProbe(skip_hashes=["h1:skipme="]).parse(payload)

    assert [dep.name for dep in deps] == ["github.com/bogus/module"]


def test_gosum_last_entry_wins() -> None:
    payload = _payload(
        """
        example.com/x 1.0 h1:aaa=
        example.com/x 2.0 h1:bbb=
        """
    )

    deps = GoSumProbe().parse(payload)

    assert deps == [DependencyRecord(name="example.com/x", version="2.0")]


def test_gosum_major_versions_collapse_onto_one_name() -> None:
    payload = _payload(
        """
        github.com/go-chi/chi v1.5.4 h1:aaa=
        github.com/go-chi/chi/v5 v5.0.12 h1:bbb=
        """
    )

    deps = GoSumProbe().parse(payload)

    assert deps == [DependencyRecord(name="github.com/go-chi/chi", version="v5.0.12")]


def test_gosum_sorts_descending_so_longer_prefixes_come_first() -> None:
    payload = _payload(
        """
        a/b v1.0.0 h1:aaa=
        a/bb v1.0.0 h1:bbb=
        c/d v1.0.0 h1:ccc=
        """
    )

    deps = GoSumProbe().parse(payload)

    assert [dep.name for dep in deps] == ["c/d", "a/bb", "a/b"]


def test_gosum_ignores_malformed_lines() -> None:
    payload = _payload(
        """
        not a go.sum line at all
        github.com/pkg/errors v0.9.1 h1:aaa=

        """
    )

    assert [dep.name for dep in GoSumProbe().parse(payload)] == ["github.com/pkg/errors"]


@pytest.mark.parametrize(
    "line",
    [
        b"example.com/a v1.0.0-pre+ h1:x=\n",
        b"/v2 v2.0.0 h1:x=\n",
    ],
)
def test_gosum_entry_without_name_or_version_is_unparseable(line: bytes) -> None:
    with pytest.raises(ManifestNotFoundError):
        GoSumProbe().parse(b"github.com/pkg/errors v0.9.1 h1:aaa=\n" + line)


def test_glide_lock_preserves_source_order() -> None:
    payload = _payload(
        """
        hash: 0c8a8f9b1e
        updated: 2017-06-01T10:00:00Z
        imports:
        - name: github.com/spf13/pflag
          version: e57e3eeb33f795204c1ca35f56c44f83227c6e66
        - name: github.com/BurntSushi/toml
          version: b26d9c308763d68093482582cea63d69be07a0f0
          subpackages:
          - .
        testImports: []
        """
    )

    deps = GlideLockProbe().parse(payload)

    assert deps == [
        DependencyRecord(name="github.com/spf13/pflag", version="e57e3eeb33f795204c1ca35f56c44f83227c6e66"),
        DependencyRecord(name="github.com/BurntSushi/toml", version="b26d9c308763d68093482582cea63d69be07a0f0"),
    ]


def test_glide_lock_numeric_version_is_text() -> None:
    payload = _payload(
        """
        imports:
        - name: example.com/numeric
          version: 1234567
        """
    )

    assert GlideLockProbe().parse(payload)[0].version == "1234567"


@pytest.mark.parametrize("payload", [b"imports: [unclosed", b"404: Not Found", b"imports:\n- name: x\n"])
def test_glide_lock_rejects_unparseable_documents(payload: bytes) -> None:
    with pytest.raises(ManifestNotFoundError):
        GlideLockProbe().parse(payload)


def test_gopkg_lock_maps_revision_to_version() -> None:
    payload = _payload(
        """
        [[projects]]
          name = "github.com/pkg/errors"
          packages = ["."]
          revision = "645ef00459ed84a119197bfb8d8205042c6df63d"
          version = "v0.8.0"

        [[projects]]
          branch = "master"
          name = "golang.org/x/sys"
          packages = ["unix"]
          revision = "e24f485414aeafb646f6fca458b0bf869c0880a1"

        [solve-meta]
          analyzer-name = "dep"
          analyzer-version = 1
        """
    )

    deps = GopkgLockProbe().parse(payload)

    assert deps == [
        DependencyRecord(name="github.com/pkg/errors", version="645ef00459ed84a119197bfb8d8205042c6df63d"),
        DependencyRecord(name="golang.org/x/sys", version="e24f485414aeafb646f6fca458b0bf869c0880a1"),
    ]


def test_gopkg_lock_rejects_invalid_toml() -> None:
    with pytest.raises(ManifestNotFoundError):
        GopkgLockProbe().parse(b"[[projects]\nname = ")


def test_glockfile_skips_malformed_lines() -> None:
    payload = _payload(
        """
        github.com/codegangsta/cli 2bcd11f863d540a5c4d4fc8fd5cfdc1d4bf2d8ee

        cmd github.com/tools/godep
        this line has way too many fields
        golang.org/x/net 0c607074acd38c5f23d1344dfe74c977464d1257
        """
    )

    deps = GlockfileProbe().parse(payload)

    assert deps == [
        DependencyRecord(name="github.com/codegangsta/cli", version="2bcd11f863d540a5c4d4fc8fd5cfdc1d4bf2d8ee"),
        DependencyRecord(name="cmd", version="github.com/tools/godep"),
        DependencyRecord(name="golang.org/x/net", version="0c607074acd38c5f23d1344dfe74c977464d1257"),
    ]


@pytest.mark.parametrize("probe", [GoSumProbe(), GlideLockProbe(), GopkgLockProbe(), GlockfileProbe()])
def test_probes_satisfy_protocol(probe: ManifestProbe) -> None:
    assert isinstance(probe, ManifestProbe)
    assert probe.filename
