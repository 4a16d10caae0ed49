"""Predicates over a parsed Configuration, plus gated emission helpers.

The predicates are pure. ``trace``/``test_trace``/``dump`` run the same gate
and hand the value to an ``emit`` callable only when it passes, so rendering
stays with the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from featflags.configuration import Configuration
from featflags.flags import FeatureFlag
from featflags.logging_setup import EMIT_LOGGER
from featflags.models import TargetedFeatureRecord

emit_logger = logging.getLogger(EMIT_LOGGER)

Emitter = Callable[[Any], None]


def _gate(config: Configuration, feature: str, bit: FeatureFlag, target: Optional[str]) -> bool:
    rec = config.record(feature)
    if not rec.flags & bit:
        return False
    if target is not None and isinstance(rec, TargetedFeatureRecord):
        return rec.applies_to(target)
    return True


def enabled(config: Configuration, feature: str, target: Optional[str] = None) -> bool:
    """ENABLED is set and, when ``target`` is given, the feature covers it."""
    return _gate(config, feature, FeatureFlag.ENABLED, target)


def tracing(config: Configuration, feature: str, target: Optional[str] = None) -> bool:
    return _gate(config, feature, FeatureFlag.TRACE, target)


def test_tracing(config: Configuration, feature: str, target: Optional[str] = None) -> bool:
    return _gate(config, feature, FeatureFlag.TEST_TRACE, target)


# Not a pytest test
test_tracing.__test__ = False  # type: ignore[attr-defined]


def dumping(config: Configuration, feature: str, target: Optional[str] = None) -> bool:
    return _gate(config, feature, FeatureFlag.DUMP, target)


# --- Emission ---


def _log_emitter(mode: str, feature: str, fmt: str = "%s") -> Emitter:
    def _emit(value: Any) -> None:
        emit_logger.info(fmt, value, extra={"mode": mode, "feature": feature})

    return _emit


def trace(
    config: Configuration,
    feature: str,
    message: Any,
    target: Optional[str] = None,
    emit: Optional[Emitter] = None,
) -> bool:
    """Emit ``message`` if tracing is on for ``feature`` (and ``target``)."""
    if not tracing(config, feature, target):
        return False
    (emit or _log_emitter("trace", feature))(message)
    return True


def test_trace(
    config: Configuration,
    feature: str,
    message: Any,
    target: Optional[str] = None,
    emit: Optional[Emitter] = None,
) -> bool:
    if not test_tracing(config, feature, target):
        return False
    (emit or _log_emitter("testtrace", feature))(message)
    return True


test_trace.__test__ = False  # type: ignore[attr-defined]


def dump(
    config: Configuration,
    feature: str,
    obj: Any,
    target: Optional[str] = None,
    emit: Optional[Emitter] = None,
) -> bool:
    """Hand ``obj`` to ``emit`` if dumping is on; the default logs its repr.

    Returns whether emission occurred.
    """
    if not dumping(config, feature, target):
        return False
    (emit or _log_emitter("dump", feature, "%r"))(obj)
    return True
