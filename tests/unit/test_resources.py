"""Tests for resource content lookup."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

import pytest

from uwutils.errors import ResourceContentError, ResourceError
from uwutils.loader import Resource, SearchPathLoader
from uwutils.option import NOTHING, Some
from uwutils.resources import (
    find_content,
    find_spi_content,
    read,
    service_path,
    split_lines,
)

type TreeFactory = Callable[[str, Mapping[str, str]], Path]
type ArchiveFactory = Callable[[str, Mapping[str, str]], Path]


class Codec:
    """Service type used for descriptor paths."""


@dataclass(frozen=True)
class _BrokenResource:
    location: str = "broken://resource"

    def open(self) -> BinaryIO:
        msg = "disk on fire"
        raise OSError(msg)


@dataclass(frozen=True)
class _BytesResource:
    payload: bytes
    location: str = "memory://resource"

    def open(self) -> BinaryIO:
        return io.BytesIO(self.payload)


@dataclass(frozen=True)
class _StubLoader:
    resources: tuple[Resource, ...]

    def get_resources(self, path: str) -> Iterator[Resource]:
        yield from self.resources

    def load_class(self, name: str) -> type:
        raise NotImplementedError(name)


@dataclass(frozen=True)
class _FailingLoader:
    def get_resources(self, path: str) -> Iterator[Resource]:
        msg = f"cannot enumerate {path}"
        raise OSError(msg)

    def load_class(self, name: str) -> type:
        raise NotImplementedError(name)


def test_service_path_uses_qualified_name() -> None:
    """Ensure descriptor paths follow META-INF/services/<module>.<qualname>."""
    assert service_path(Codec) == f"META-INF/services/{__name__}.Codec"


def test_split_lines_drops_blank_lines() -> None:
    """Ensure split lines are stripped and non-empty."""
    assert list(split_lines(" a \r\n\n b\rc\n  \n")) == ["a", "b", "c"]


def test_read_trims_content() -> None:
    """Ensure read returns trimmed text or NOTHING when blank."""
    assert read(_BytesResource(b"  hello \n")) == Some("hello")
    assert read(_BytesResource(b"\xef\xbb\xbfbom")) == Some("bom")
    assert read(_BytesResource(b"   \n")) is NOTHING
    assert read(None) is NOTHING


def test_read_failure_policy() -> None:
    """Ensure read failures raise or collapse according to throw_on_fail."""
    with pytest.raises(ResourceError) as excinfo:
        read(_BrokenResource())
    assert isinstance(excinfo.value.__cause__, OSError)
    assert read(_BrokenResource(), throw_on_fail=False) is NOTHING


def test_find_content_no_match_is_absent(make_tree: TreeFactory) -> None:
    """Ensure a path matching nothing yields NOTHING."""
    loader = SearchPathLoader.from_paths([make_tree("root", {"x.txt": "x"})])
    assert find_content("does/not/exist.txt", loader=loader) is NOTHING
    assert find_content(None, loader=loader) is NOTHING


def test_find_content_aggregates_in_order(
    make_tree: TreeFactory,
    make_archive: ArchiveFactory,
) -> None:
    """Ensure content from every match is collected in discovery order."""
    first = make_archive("a.zip", {"conf/app.txt": "alpha\nbeta\n"})
    second = make_tree("b", {"conf/app.txt": "  gamma  "})
    loader = SearchPathLoader.from_paths([first, second])
    assert find_content("conf/app.txt", loader=loader) == Some(["alpha\nbeta", "gamma"])
    assert find_content("conf/app.txt", loader=loader, split_content=True) == Some(
        ["alpha", "beta", "gamma"]
    )


def test_find_content_empty_resource_is_a_violation(make_tree: TreeFactory) -> None:
    """Ensure an empty matched resource is a hard failure for the lookup."""
    loader = SearchPathLoader.from_paths(
        [make_tree("one", {"r.txt": "kept"}), make_tree("two", {"r.txt": "  \n"})]
    )
    with pytest.raises(ResourceContentError):
        find_content("r.txt", loader=loader)
    assert find_content("r.txt", loader=loader, throw_on_fail=False) == Some(["kept"])


def test_find_content_stops_on_failure_when_lenient() -> None:
    """Ensure a lenient lookup stops at the failing resource."""
    loader = _StubLoader(
        (_BytesResource(b"first"), _BrokenResource(), _BytesResource(b"never"))
    )
    assert find_content("any", loader=loader, throw_on_fail=False) == Some(["first"])
    with pytest.raises(ResourceError):
        find_content("any", loader=loader)


def test_find_content_wraps_enumeration_errors() -> None:
    """Ensure enumeration errors are wrapped or collapse to NOTHING."""
    with pytest.raises(ResourceError) as excinfo:
        find_content("any", loader=_FailingLoader())
    assert isinstance(excinfo.value.__cause__, OSError)
    assert find_content("any", loader=_FailingLoader(), throw_on_fail=False) is NOTHING


def test_find_spi_content_strips_comments(make_tree: TreeFactory) -> None:
    """Ensure descriptor lines drop comments and blank entries."""
    descriptor = "# providers\npkg.First  # primary\n\n   pkg.Second\n#pkg.Disabled\n"
    loader = SearchPathLoader.from_paths([make_tree("svc", {service_path(Codec): descriptor})])
    assert find_spi_content(Codec, loader=loader) == Some(["pkg.First", "pkg.Second"])
    assert find_spi_content(None, loader=loader) is NOTHING


def test_find_spi_content_only_comments_is_absent(make_tree: TreeFactory) -> None:
    """Ensure a descriptor holding only comments yields NOTHING."""
    loader = SearchPathLoader.from_paths([make_tree("svc", {service_path(Codec): "# none\n"})])
    assert find_spi_content(Codec, loader=loader) is NOTHING


def test_read_replaces_undecodable_bytes() -> None:
    """Ensure invalid byte sequences decode with replacement characters."""
    assert read(_BytesResource(b"ok\xff")) == Some("ok\ufffd")
    assert read(_BytesResource(b"# -*- coding: latin-1 -*-\ncaf\xe9")) == Some(
        "# -*- coding: latin-1 -*-\ncaf\u00e9"
    )
