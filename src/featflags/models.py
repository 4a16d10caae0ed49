"""Pydantic models for feature declarations and runtime records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator

from featflags.errors import ConfigurationFrozenError
from featflags.flags import FeatureFlag, NO_FLAGS, default_flags


# --- Declarations (schema side) ---


class FeatureDecl(BaseModel):
    """A declared feature name and whether it starts enabled."""

    model_config = ConfigDict(extra="forbid")

    name: str
    default: StrictBool = False

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"Feature name must be an identifier, got {v!r}")
        return v


def _coerce_decls(raw: Any) -> Any:
    """Accept ``{name: default}`` mappings as well as lists of declarations."""
    if isinstance(raw, dict):
        return [{"name": k, "default": v} for k, v in raw.items()]
    if raw is None:
        return []
    return raw


class ConfigSchema(BaseModel):
    """Plain and targeted feature declarations; names unique across both."""

    model_config = ConfigDict(extra="forbid")

    description: str = ""
    features: list[FeatureDecl] = Field(default_factory=list)
    targeted_features: list[FeatureDecl] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _normalise(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            for key in ("features", "targeted_features"):
                if key in data:
                    data[key] = _coerce_decls(data[key])
        return data

    @model_validator(mode="after")
    def _check_unique(self) -> "ConfigSchema":
        seen: set[str] = set()
        for decl in [*self.features, *self.targeted_features]:
            if decl.name in seen:
                raise ValueError(f"Duplicate feature name: {decl.name}")
            seen.add(decl.name)
        return self


# --- Records (configuration side) ---


@dataclass
class FeatureRecord:
    name: str
    default: FeatureFlag
    flags: FeatureFlag = NO_FLAGS
    _frozen: bool = field(default=False, init=False, repr=False, compare=False)

    def __setattr__(self, key: str, value: Any) -> None:
        if self._frozen:
            raise ConfigurationFrozenError(self.name)
        object.__setattr__(self, key, value)

    def freeze(self) -> None:
        object.__setattr__(self, "_frozen", True)

    @classmethod
    def from_decl(cls, decl: FeatureDecl) -> "FeatureRecord":
        initial = default_flags(decl.default)
        return cls(name=decl.name, default=initial, flags=initial)

    @property
    def targeted(self) -> bool:
        return False


@dataclass
class TargetedFeatureRecord(FeatureRecord):
    # None or empty means the feature applies to every target
    targets: frozenset[str] | None = field(default=None)

    @classmethod
    def from_decl(cls, decl: FeatureDecl) -> "TargetedFeatureRecord":
        initial = default_flags(decl.default)
        return cls(name=decl.name, default=initial, flags=initial, targets=None)

    @property
    def targeted(self) -> bool:
        return True

    def applies_to(self, target: str) -> bool:
        return not self.targets or target in self.targets
