"""Tests for process-wide defaults and their environment overrides."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import msgspec
import pytest

import uwutils
from uwutils import defaults
from uwutils.env_utils import env_bool, env_paths, env_value
from uwutils.loader import SearchPathLoader
from uwutils.serde_msgspec import convert


def test_builtin_defaults() -> None:
    """Ensure defaults raise on failure and keep content unsplit."""
    spec = defaults.defaults()
    assert spec.throw_on_fail is True
    assert spec.split_content is False
    assert spec.extra_search_path == ()
    assert defaults.resolve_throw_on_fail(None) is True
    assert defaults.resolve_throw_on_fail(False) is False
    assert defaults.resolve_split_content(None) is False


def test_defaults_are_resolved_once(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure later environment changes do not affect resolved defaults."""
    first = defaults.defaults()
    monkeypatch.setenv("UWUTILS_THROW_ON_FAIL", "false")
    assert defaults.defaults() is first
    assert defaults.context_loader() is defaults.context_loader()


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Ensure environment variables override the built-in defaults."""
    monkeypatch.setenv("UWUTILS_THROW_ON_FAIL", "no")
    monkeypatch.setenv("UWUTILS_SPLIT_CONTENT", "1")
    monkeypatch.setenv("UWUTILS_SEARCH_PATH", f"{tmp_path}{os.pathsep} {os.pathsep}")
    spec = defaults.defaults()
    assert spec.throw_on_fail is False
    assert spec.split_content is True
    assert spec.extra_search_path == (str(tmp_path),)
    loader = defaults.context_loader()
    assert isinstance(loader, SearchPathLoader)
    assert loader.search_path is None
    assert loader.parent == SearchPathLoader(search_path=(str(tmp_path),))


def test_resolve_loader_prefers_explicit() -> None:
    """Ensure an explicit loader wins over the process default."""
    explicit = SearchPathLoader(search_path=())
    assert defaults.resolve_loader(explicit) is explicit
    assert defaults.resolve_loader(None) is defaults.context_loader()


def test_env_bool_invalid_logs(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Ensure invalid booleans fall back to the default with a warning."""
    monkeypatch.setenv("UWUTILS_FLAG", "maybe")
    with caplog.at_level(logging.WARNING, logger="uwutils.env_utils"):
        assert env_bool("UWUTILS_FLAG", default=True) is True
    assert "Invalid boolean for UWUTILS_FLAG" in caplog.text


def test_env_value_helpers(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure blank values read as unset."""
    monkeypatch.setenv("UWUTILS_BLANK", "   ")
    monkeypatch.delenv("UWUTILS_UNSET", raising=False)
    assert env_value("UWUTILS_BLANK") is None
    assert env_value("UWUTILS_UNSET") is None
    assert env_bool("UWUTILS_BLANK", default=False) is False
    assert env_paths("UWUTILS_UNSET") == ()


def test_load_defaults_validates_payload(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure environment payloads are validated into the strict defaults struct."""
    monkeypatch.setenv("UWUTILS_SPLIT_CONTENT", "on")
    assert defaults.load_defaults() == defaults.DefaultsSpec(split_content=True)
    spec = convert({"throw_on_fail": False}, defaults.DefaultsSpec)
    assert spec == defaults.DefaultsSpec(throw_on_fail=False)
    with pytest.raises(msgspec.ValidationError):
        convert({"unknown": 1}, defaults.DefaultsSpec)
    with pytest.raises(msgspec.ValidationError):
        convert({"throw_on_fail": "yes"}, defaults.DefaultsSpec)


def test_package_exports_are_lazy() -> None:
    """Ensure package-level names resolve to their defining modules."""
    from uwutils.arrays import get
    from uwutils.strings import trim

    assert uwutils.trim is trim
    assert uwutils.array_get is get
    assert "find_spi_types" in dir(uwutils)
    with pytest.raises(AttributeError):
        _ = uwutils.not_exported
