"""Structured error codes and exception classes for featflags."""

from __future__ import annotations

__all__ = [
    "ErrorCode",
    "FlagKind",
    "FeatflagsError",
    "SchemaError",
    "UnknownFeatureError",
    "DisabledButTracedError",
    "ConfigurationFrozenError",
    "ErrorResponse",
]

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    SCHEMA_INVALID = "SCHEMA_INVALID"
    UNKNOWN_FEATURE = "UNKNOWN_FEATURE"
    DISABLED_BUT_TRACED = "DISABLED_BUT_TRACED"
    CONFIG_FROZEN = "CONFIG_FROZEN"


class FlagKind(str, Enum):
    """Which argument syntax (or API surface) referenced a feature."""

    TRACE = "trace"
    TEST_TRACE = "testtrace"
    DUMP = "dump"
    FEATURE = "feature"
    QUERY = "query"
    TARGETS = "targets"


class FeatflagsError(Exception):
    """Base error carrying a stable code and a details dict."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict = details or {}


class SchemaError(FeatflagsError):
    """Feature declarations are malformed, duplicated or unreadable."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(ErrorCode.SCHEMA_INVALID, message, details)


class UnknownFeatureError(FeatflagsError):
    """An argument or query named a feature the schema does not declare."""

    def __init__(self, kind: FlagKind, name: str, argument: str | None = None) -> None:
        self.kind = kind
        self.name = name
        self.argument = argument
        if kind is FlagKind.FEATURE:
            message = f"Invalid feature: {name}"
        elif kind in (FlagKind.QUERY, FlagKind.TARGETS):
            message = f"Unknown feature in {kind.value}: {name}"
        else:
            message = f"Invalid {kind.value} argument: {name}"
        super().__init__(
            ErrorCode.UNKNOWN_FEATURE,
            message,
            {"kind": kind.value, "name": name, "argument": argument},
        )


class DisabledButTracedError(FeatflagsError):
    """A feature ended parsing with trace/testtrace/dump bits but not ENABLED."""

    def __init__(self, name: str, flags: int) -> None:
        self.name = name
        self.flags = flags
        super().__init__(
            ErrorCode.DISABLED_BUT_TRACED,
            f"Can't trace, testtrace, or dump disabled feature {name}",
            {"kind": "invariant", "name": name, "flags": int(flags)},
        )


class ConfigurationFrozenError(FeatflagsError):
    """Raised on an attempt to mutate a Configuration after parsing."""

    def __init__(self, name: str) -> None:
        super().__init__(
            ErrorCode.CONFIG_FROZEN,
            f"Configuration is read-only; cannot modify feature {name}",
            {"name": name},
        )


class ErrorResponse(BaseModel):
    """Serialisable envelope for errors reported in machine-readable output."""

    error: dict  # {code: str, message: str, details: dict}

    @classmethod
    def from_featflags_error(cls, exc: FeatflagsError) -> "ErrorResponse":
        return cls(error={"code": exc.code.value, "message": exc.message, "details": exc.details})
