from __future__ import annotations
from typing import Any, List, Annotated
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .autorange import AutoRangePolicy
from .properties import BaseProperty
from .units import Unit
from . import settings as CFG


# Common helpers
def _coerce_unit(v: Any) -> Any:
    if isinstance(v, Unit) or v is None:
        return v
    if isinstance(v, str):
        # raises InvalidArgumentError (a ValueError), reported by pydantic as a validation error
        return Unit.from_symbol(v)
    return v


def _coerce_policy(v: Any) -> Any:
    if isinstance(v, str):
        key = v.strip().upper().replace("0P", "0p")
        if key not in AutoRangePolicy.__members__:
            raise ValueError(f"unknown auto-range policy {v!r}")
        return AutoRangePolicy[key]
    return v


def _coerce_property(v: Any) -> Any:
    if isinstance(v, str):
        key = v.strip().upper()
        if key not in BaseProperty.__members__:
            raise ValueError(f"unknown base property {v!r}")
        return BaseProperty[key]
    return v


UnitField = Annotated[Unit, BeforeValidator(_coerce_unit)]
PolicyField = Annotated[AutoRangePolicy, BeforeValidator(_coerce_policy)]
PropertyField = Annotated[BaseProperty, BeforeValidator(_coerce_property)]


class ConvertRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    magnitude: float
    from_unit: UnitField
    to_unit: UnitField


class AutoRangeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    magnitude: float
    from_unit: UnitField
    # None means "every prefix (multiplicative) unit of from_unit's base property"
    candidates: List[UnitField] | None = None
    policy: PolicyField = Field(default_factory=lambda: AutoRangePolicy[CFG.DEFAULT_POLICY])
    strict_property: bool = Field(default_factory=lambda: CFG.STRICT_PROPERTY)
    round_magnitude: bool = Field(default_factory=lambda: CFG.ROUND_MAGNITUDE)
    include_scores: bool = False


class UnitListRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    base_property: PropertyField | None = None
