"""featflags - schema-driven feature flags parsed from argument lists."""

from featflags.compiler import ConfigFactory, compile_schema, define
from featflags.configuration import Configuration
from featflags.errors import (
    ConfigurationFrozenError,
    DisabledButTracedError,
    FeatflagsError,
    FlagKind,
    SchemaError,
    UnknownFeatureError,
)
from featflags.flags import FeatureFlag
from featflags.models import ConfigSchema, FeatureDecl, FeatureRecord, TargetedFeatureRecord
from featflags.parser import ParseResult, parse
from featflags.query import dump, dumping, enabled, test_trace, test_tracing, trace, tracing

__all__ = [
    "ConfigFactory",
    "ConfigSchema",
    "Configuration",
    "ConfigurationFrozenError",
    "DisabledButTracedError",
    "FeatflagsError",
    "FeatureDecl",
    "FeatureFlag",
    "FeatureRecord",
    "FlagKind",
    "ParseResult",
    "SchemaError",
    "TargetedFeatureRecord",
    "UnknownFeatureError",
    "compile_schema",
    "define",
    "dump",
    "dumping",
    "enabled",
    "parse",
    "test_trace",
    "test_tracing",
    "trace",
    "tracing",
]
