"""Configuration: the per-parse mapping from feature name to flag record."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from featflags.errors import ConfigurationFrozenError, FlagKind, UnknownFeatureError
from featflags.flags import FeatureFlag, describe_flags
from featflags.models import FeatureRecord, TargetedFeatureRecord


class Configuration(Mapping[str, FeatureRecord]):
    """Feature records for one parse.

    Mutable only while the parser populates it; :meth:`freeze` is called
    once parsing succeeds and every later write raises
    :class:`ConfigurationFrozenError`. Frozen instances are safe to share
    between readers.
    """

    def __init__(self, records: Iterable[FeatureRecord]) -> None:
        self._records: dict[str, FeatureRecord] = {r.name: r for r in records}
        self._frozen = False

    # Mapping protocol

    def __getitem__(self, name: str) -> FeatureRecord:
        return self._records[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    # Lookup

    def record(self, name: str, kind: FlagKind = FlagKind.QUERY) -> FeatureRecord:
        """Return the record for ``name`` or raise UnknownFeatureError tagged with ``kind``."""
        try:
            return self._records[name]
        except KeyError:
            raise UnknownFeatureError(kind, name) from None

    def flags(self, name: str) -> FeatureFlag:
        return self.record(name).flags

    @property
    def frozen(self) -> bool:
        return self._frozen

    # Mutation (parse phase only)

    def _writable(self, name: str, kind: FlagKind) -> FeatureRecord:
        rec = self.record(name, kind)
        if self._frozen:
            raise ConfigurationFrozenError(name)
        return rec

    def set_flag(self, name: str, flag: FeatureFlag, kind: FlagKind = FlagKind.FEATURE) -> None:
        rec = self._writable(name, kind)
        rec.flags |= flag

    def clear_flag(self, name: str, flag: FeatureFlag, kind: FlagKind = FlagKind.FEATURE) -> None:
        rec = self._writable(name, kind)
        rec.flags &= ~flag

    def set_targets(self, name: str, targets: Iterable[str] | None) -> None:
        rec = self._writable(name, FlagKind.TARGETS)
        if not isinstance(rec, TargetedFeatureRecord):
            raise UnknownFeatureError(FlagKind.TARGETS, name)
        if isinstance(targets, str):
            targets = [targets]
        rec.targets = frozenset(targets) if targets is not None else None

    def freeze(self) -> "Configuration":
        for rec in self._records.values():
            rec.freeze()
        self._frozen = True
        return self

    # Views

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Plain-data snapshot, suitable for JSON output."""
        out: dict[str, dict[str, Any]] = {}
        for name, rec in self._records.items():
            entry: dict[str, Any] = {
                "targeted": rec.targeted,
                "flags": int(rec.flags),
                "enabled": bool(rec.flags & FeatureFlag.ENABLED),
                "trace": bool(rec.flags & FeatureFlag.TRACE),
                "testtrace": bool(rec.flags & FeatureFlag.TEST_TRACE),
                "dump": bool(rec.flags & FeatureFlag.DUMP),
            }
            if isinstance(rec, TargetedFeatureRecord):
                entry["targets"] = sorted(rec.targets) if rec.targets is not None else None
            out[name] = entry
        return out

    def __repr__(self) -> str:
        parts = [f"{n}={describe_flags(r.flags)}" for n, r in self._records.items()]
        return f"Configuration({', '.join(parts)})"
