"""Argument parser and validator.

Arguments are consumed strictly left to right. Each one is matched against
the flag syntaxes below in order, first match wins:

    -trace=<name>       set TRACE
    -testtrace=<name>   set TEST_TRACE
    -dump=<name>        set DUMP
    -<name> / -<name>-  enable / disable
    anything else       passed through in ``remaining``

Every syntax resolves against plain and targeted features alike. Once all
arguments are applied, every declared feature is checked: diagnostic bits
without ENABLED is an error, no matter which order the arguments came in.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import NamedTuple

from featflags.compiler import SchemaLike, TargetMap, compile_schema
from featflags.configuration import Configuration
from featflags.errors import DisabledButTracedError, FlagKind, UnknownFeatureError
from featflags.flags import DIAGNOSTIC_BITS, FeatureFlag

logger = logging.getLogger(__name__)

# (prefix, bit, kind) checked in order before the generic toggle
_VALUE_FLAGS: tuple[tuple[str, FeatureFlag, FlagKind], ...] = (
    ("-trace=", FeatureFlag.TRACE, FlagKind.TRACE),
    ("-testtrace=", FeatureFlag.TEST_TRACE, FlagKind.TEST_TRACE),
    ("-dump=", FeatureFlag.DUMP, FlagKind.DUMP),
)


class ParseResult(NamedTuple):
    config: Configuration
    remaining: list[str]


def _resolve(config: Configuration, name: str, kind: FlagKind, arg: str) -> str:
    if name not in config:
        raise UnknownFeatureError(kind, name, arg)
    return name


def _apply(config: Configuration, arg: str) -> bool:
    """Apply one argument; return False when it is not flag syntax."""
    for prefix, bit, kind in _VALUE_FLAGS:
        if arg.startswith(prefix):
            name = _resolve(config, arg[len(prefix):], kind, arg)
            config.set_flag(name, bit, kind)
            logger.debug("%s: set %s on %s", arg, bit.name, name)
            return True

    if not arg.startswith("-"):
        return False

    if len(arg) > 1 and arg.endswith("-"):
        name = _resolve(config, arg[1:-1], FlagKind.FEATURE, arg)
        config.clear_flag(name, FeatureFlag.ENABLED, FlagKind.FEATURE)
        logger.debug("%s: disabled %s", arg, name)
    else:
        name = _resolve(config, arg[1:], FlagKind.FEATURE, arg)
        config.set_flag(name, FeatureFlag.ENABLED, FlagKind.FEATURE)
        logger.debug("%s: enabled %s", arg, name)
    return True


def validate(config: Configuration) -> None:
    """Raise DisabledButTracedError for the first feature traced while disabled."""
    for name, rec in config.items():
        if rec.flags & DIAGNOSTIC_BITS and not rec.flags & FeatureFlag.ENABLED:
            raise DisabledButTracedError(name, rec.flags)


def parse(
    schema: SchemaLike,
    args: Sequence[str],
    *,
    targets: TargetMap | None = None,
) -> ParseResult:
    """Parse ``args`` against ``schema`` into a frozen Configuration.

    Returns ``ParseResult(config, remaining)``. Raises UnknownFeatureError on
    the first argument naming an undeclared feature, DisabledButTracedError
    when the final state violates the enabled invariant. Nothing partial is
    returned on error.
    """
    factory = compile_schema(schema)
    config = factory.new(targets)
    remaining: list[str] = []

    for arg in args:
        if not _apply(config, arg):
            remaining.append(arg)

    validate(config)
    config.freeze()
    logger.info(
        "Parsed %d argument(s): %d consumed, %d remaining",
        len(args),
        len(args) - len(remaining),
        len(remaining),
    )
    return ParseResult(config, remaining)
