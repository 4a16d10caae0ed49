"""Tests for schema compilation and default configurations."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from featflags.compiler import ConfigFactory, compile_schema, define
from featflags.errors import FlagKind, SchemaError, UnknownFeatureError
from featflags.flags import FeatureFlag
from featflags.models import ConfigSchema, FeatureDecl, TargetedFeatureRecord
from featflags.query import enabled


@pytest.mark.parametrize(
    "features, targeted",
    [
        ({"a": False, "b": False, "d": True}, {"c": True}),
        ({"a": True, "b": False}, {}),
        ({}, {"x": False, "y": True}),
        ({}, {}),
    ],
)
def test_new_matches_declared_defaults(features, targeted):
    """Every declared name starts enabled exactly when its default says so."""
    factory = define(features, targeted)
    config = factory.new()
    for name, default in {**features, **targeted}.items():
        assert enabled(config, name) is default
        assert config[name].flags == (FeatureFlag.ENABLED if default else 0)
        assert config[name].default == config[name].flags


def test_targeted_records_start_without_targets(basic_factory):
    config = basic_factory.new()
    rec = config["c"]
    assert isinstance(rec, TargetedFeatureRecord)
    assert rec.targets is None
    assert not isinstance(config["a"], TargetedFeatureRecord)


def test_names_keep_declaration_order(basic_factory):
    assert basic_factory.feature_names == ("a", "b", "d")
    assert basic_factory.targeted_names == ("c",)
    assert basic_factory.names == ("a", "b", "d", "c")
    assert list(basic_factory.new()) == ["a", "b", "d", "c"]


def test_kind_of(basic_factory):
    assert basic_factory.kind_of("a") == "feature"
    assert basic_factory.kind_of("c") == "targeted"
    with pytest.raises(UnknownFeatureError):
        basic_factory.kind_of("zz")


def test_new_instances_are_independent(basic_factory):
    first = basic_factory.new()
    second = basic_factory.new()
    first.set_flag("a", FeatureFlag.ENABLED)
    assert enabled(first, "a") is True
    assert enabled(second, "a") is False


def test_new_with_targets(basic_factory):
    config = basic_factory.new(targets={"c": ["t1"]})
    assert config["c"].targets == frozenset({"t1"})


def test_new_with_unknown_target_feature(basic_factory):
    with pytest.raises(UnknownFeatureError) as exc_info:
        basic_factory.new(targets={"nope": ["t1"]})
    assert exc_info.value.kind is FlagKind.TARGETS


# --- compile_schema inputs ---

def test_compile_factory_is_identity(basic_factory):
    assert compile_schema(basic_factory) is basic_factory


def test_compile_schema_model():
    schema = ConfigSchema(
        features=[FeatureDecl(name="a", default=True)],
        targeted_features=[FeatureDecl(name="t")],
    )
    factory = compile_schema(schema)
    assert isinstance(factory, ConfigFactory)
    assert factory.schema is schema
    assert enabled(factory.new(), "a") is True
    assert enabled(factory.new(), "t") is False


def test_compile_list_form():
    factory = compile_schema(
        {
            "features": [{"name": "a", "default": True}, {"name": "b"}],
            "targeted_features": None,
        }
    )
    assert factory.feature_names == ("a", "b")
    assert factory.targeted_names == ()


# --- Invalid schemas ---

def test_duplicate_across_lists_rejected():
    with pytest.raises(SchemaError) as exc_info:
        define({"a": True}, {"a": False})
    assert "Duplicate feature name: a" in exc_info.value.details["errors"][0]


def test_duplicate_in_list_form_rejected():
    with pytest.raises(SchemaError):
        compile_schema({"features": [{"name": "a"}, {"name": "a", "default": True}]})


@pytest.mark.parametrize("name", ["", "has-dash", "1abc", "with space"])
def test_non_identifier_rejected(name):
    with pytest.raises(SchemaError):
        define({name: True})


def test_schema_model_validates_directly():
    with pytest.raises(ValidationError):
        ConfigSchema(features=[{"name": "a"}], targeted_features=[{"name": "a"}])
