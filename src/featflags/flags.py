"""Capability bits carried by every feature record."""

from __future__ import annotations

from enum import IntFlag


class FeatureFlag(IntFlag):
    ENABLED = 0b0001
    TRACE = 0b0010
    TEST_TRACE = 0b0100
    DUMP = 0b1000


# Bits that are only legal while ENABLED is also set
DIAGNOSTIC_BITS = FeatureFlag.TRACE | FeatureFlag.TEST_TRACE | FeatureFlag.DUMP

NO_FLAGS = FeatureFlag(0)


def default_flags(enabled: bool) -> FeatureFlag:
    return FeatureFlag.ENABLED if enabled else NO_FLAGS


def describe_flags(flags: int) -> str:
    """Render a bitset as ``ENABLED|TRACE|DUMP`` (or ``-`` when empty)."""
    names = [f.name for f in FeatureFlag if flags & f]
    return "|".join(n for n in names if n) or "-"
