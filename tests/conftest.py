"""Shared pytest fixtures for uwutils tests."""

from __future__ import annotations

import zipfile
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path

import pytest

from uwutils.defaults import reset_defaults

type ArchiveFactory = Callable[[str, Mapping[str, str]], Path]
type TreeFactory = Callable[[str, Mapping[str, str]], Path]

_ENV_VARS = ("UWUTILS_THROW_ON_FAIL", "UWUTILS_SPLIT_CONTENT", "UWUTILS_SEARCH_PATH")


@pytest.fixture(autouse=True)
def _isolated_defaults(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test against freshly resolved, environment-free defaults."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture
def make_archive(tmp_path: Path) -> ArchiveFactory:
    """Return a factory writing zip archives of text members under ``tmp_path``."""

    def _make(name: str, members: Mapping[str, str]) -> Path:
        archive_path = tmp_path / name
        with zipfile.ZipFile(archive_path, "w") as archive:
            for member, text in members.items():
                archive.writestr(member, text)
        return archive_path

    return _make


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeFactory:
    """Return a factory writing a directory of text files under ``tmp_path``."""

    def _make(name: str, files: Mapping[str, str]) -> Path:
        root = tmp_path / name
        for relative, text in files.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        root.mkdir(parents=True, exist_ok=True)
        return root

    return _make
