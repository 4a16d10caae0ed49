"""Tests for flag bits and the Configuration container."""

from __future__ import annotations

import pytest

from featflags.errors import ConfigurationFrozenError, FlagKind, UnknownFeatureError
from featflags.flags import DIAGNOSTIC_BITS, FeatureFlag, default_flags, describe_flags
from featflags.parser import parse


# --- Flag bits ---

def test_flag_values():
    assert FeatureFlag.ENABLED == 0b0001
    assert FeatureFlag.TRACE == 0b0010
    assert FeatureFlag.TEST_TRACE == 0b0100
    assert FeatureFlag.DUMP == 0b1000
    assert DIAGNOSTIC_BITS == 0b1110


def test_default_flags():
    assert default_flags(True) == FeatureFlag.ENABLED
    assert default_flags(False) == 0


def test_describe_flags():
    assert describe_flags(0b1011) == "ENABLED|TRACE|DUMP"
    assert describe_flags(0) == "-"


# --- Configuration ---

def test_mapping_protocol(basic_factory):
    config = basic_factory.new()
    assert len(config) == 4
    assert "a" in config
    assert "zz" not in config
    assert config["d"].name == "d"


def test_record_lookup_reports_kind(basic_factory):
    config = basic_factory.new()
    with pytest.raises(UnknownFeatureError) as exc_info:
        config.record("zz", FlagKind.DUMP)
    assert exc_info.value.kind is FlagKind.DUMP
    assert config.flags("d") == FeatureFlag.ENABLED


def test_set_and_clear_before_freeze(basic_factory):
    config = basic_factory.new()
    config.set_flag("a", FeatureFlag.ENABLED | FeatureFlag.DUMP)
    config.clear_flag("a", FeatureFlag.DUMP)
    assert config.flags("a") == FeatureFlag.ENABLED


def test_set_targets_on_plain_feature_fails(basic_factory):
    config = basic_factory.new()
    with pytest.raises(UnknownFeatureError):
        config.set_targets("a", ["x"])


def test_frozen_rejects_every_write(basic_factory):
    config, _ = parse(basic_factory, [])
    with pytest.raises(ConfigurationFrozenError):
        config.clear_flag("d", FeatureFlag.ENABLED)
    with pytest.raises(ConfigurationFrozenError):
        config.set_targets("c", ["x"])
    assert config.flags("d") == FeatureFlag.ENABLED


def test_frozen_records_reject_direct_writes(basic_factory):
    config, _ = parse(basic_factory, ["-trace=d"])
    with pytest.raises(ConfigurationFrozenError):
        config["a"].flags = FeatureFlag.TRACE
    with pytest.raises(ConfigurationFrozenError):
        config["c"].targets = frozenset({"x"})
    assert config["a"].flags == 0
    assert config["c"].targets is None
    assert config["d"].flags == FeatureFlag.ENABLED | FeatureFlag.TRACE


def test_new_configuration_records_writable(basic_factory):
    config = basic_factory.new()
    config["a"].flags = FeatureFlag.ENABLED
    assert config.flags("a") == FeatureFlag.ENABLED


def test_set_targets_single_string(basic_factory):
    config = basic_factory.new()
    config.set_targets("c", "xy")
    assert config["c"].targets == frozenset({"xy"})


def test_to_dict(basic_factory):
    config, _ = parse(basic_factory, ["-trace=d", "-dump=d"], targets={"c": ["y", "x"]})
    data = config.to_dict()
    assert data["d"] == {
        "targeted": False,
        "flags": 0b1011,
        "enabled": True,
        "trace": True,
        "testtrace": False,
        "dump": True,
    }
    assert data["c"]["targeted"] is True
    assert data["c"]["targets"] == ["x", "y"]
    assert data["a"]["enabled"] is False


def test_repr(basic_factory):
    config, _ = parse(basic_factory, ["-trace=d"])
    r = repr(config)
    assert "Configuration(" in r
    assert "d=ENABLED|TRACE" in r
    assert "a=-" in r
