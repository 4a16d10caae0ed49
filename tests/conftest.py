"""Shared pytest fixtures for featflags test suite."""

from __future__ import annotations

import pytest

from featflags.compiler import define

DEMO_YAML = """\
description: test schema
features:
  a: false
  b: false
  d: true
targeted_features:
  c: true
"""


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at a tmp dir and clear FEATFLAGS_* overrides."""
    monkeypatch.setenv("FEATFLAGS_HOME", str(tmp_path / "home"))
    for var in ("FEATFLAGS_LOG_FORMAT", "FEATFLAGS_LOG_LEVEL", "FEATFLAGS_SCHEMA"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def basic_factory():
    """Features a=off, b=off, d=on; targeted c=on."""
    return define({"a": False, "b": False, "d": True}, {"c": True})


@pytest.fixture
def toggle_factory():
    return define({"a": True, "b": False})


@pytest.fixture
def dump_factory():
    return define({"a": True}, {"b": True})


@pytest.fixture
def schema_file(tmp_path):
    """YAML schema file equivalent to basic_factory."""
    path = tmp_path / "schema.yaml"
    path.write_text(DEMO_YAML)
    return path
