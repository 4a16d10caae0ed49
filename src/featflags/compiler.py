"""Compile feature declarations into a Configuration factory."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Union

from pydantic import ValidationError

from featflags.configuration import Configuration
from featflags.errors import FlagKind, SchemaError, UnknownFeatureError
from featflags.models import ConfigSchema, FeatureRecord, TargetedFeatureRecord

if TYPE_CHECKING:
    from featflags.parser import ParseResult

logger = logging.getLogger(__name__)

SchemaLike = Union["ConfigFactory", ConfigSchema, Mapping[str, Any]]
TargetMap = Mapping[str, Iterable[str] | None]


class ConfigFactory:
    """Builds fresh, independent Configuration instances for one schema."""

    def __init__(self, schema: ConfigSchema) -> None:
        self.schema = schema
        self.feature_names: tuple[str, ...] = tuple(d.name for d in schema.features)
        self.targeted_names: tuple[str, ...] = tuple(d.name for d in schema.targeted_features)

    @property
    def names(self) -> tuple[str, ...]:
        """All declared names, plain features first, in declaration order."""
        return self.feature_names + self.targeted_names

    def kind_of(self, name: str) -> str:
        if name in self.feature_names:
            return "feature"
        if name in self.targeted_names:
            return "targeted"
        raise UnknownFeatureError(FlagKind.QUERY, name)

    def new(self, targets: TargetMap | None = None) -> Configuration:
        """Default configuration: ENABLED per declaration, no targets.

        ``targets`` optionally scopes targeted features to host-supplied
        target names; naming a plain or unknown feature is an error.
        """
        records: list[FeatureRecord] = [FeatureRecord.from_decl(d) for d in self.schema.features]
        records.extend(TargetedFeatureRecord.from_decl(d) for d in self.schema.targeted_features)
        config = Configuration(records)
        for name, names in (targets or {}).items():
            config.set_targets(name, names)
        return config

    def parse(self, args: Sequence[str], targets: TargetMap | None = None) -> "ParseResult":
        from featflags.parser import parse

        return parse(self, args, targets=targets)

    def __repr__(self) -> str:
        return f"ConfigFactory(features={list(self.feature_names)}, targeted={list(self.targeted_names)})"


def compile_schema(schema: SchemaLike) -> ConfigFactory:
    """Validate ``schema`` and return a factory for it.

    Accepts an existing factory (returned unchanged), a ConfigSchema, or a raw
    mapping in the YAML layout. Duplicate or non-identifier names raise
    SchemaError.
    """
    if isinstance(schema, ConfigFactory):
        return schema
    if not isinstance(schema, ConfigSchema):
        try:
            schema = ConfigSchema.model_validate(schema)
        except ValidationError as exc:
            raise SchemaError(
                f"Invalid feature schema: {exc.error_count()} error(s)",
                {"errors": [e["msg"] for e in exc.errors()]},
            ) from exc
    factory = ConfigFactory(schema)
    logger.debug(
        "Compiled schema with %d feature(s) and %d targeted feature(s)",
        len(factory.feature_names),
        len(factory.targeted_names),
    )
    return factory


def define(
    features: Mapping[str, bool] | None = None,
    targeted_features: Mapping[str, bool] | None = None,
    description: str = "",
) -> ConfigFactory:
    """Shorthand: ``define({"a": False, "d": True}, {"c": True})``."""
    return compile_schema(
        {
            "description": description,
            "features": dict(features or {}),
            "targeted_features": dict(targeted_features or {}),
        }
    )
