"""
Thin, stable API for the CLI and UI layers.

Contracts (keep signatures stable for the front ends):
  - convert_quantity(inputs) -> dict
  - auto_range_quantity(inputs) -> dict
  - list_units(base_property=None) -> dict
  - list_properties() -> dict

Inputs are plain dicts validated via Pydantic schemas; units may be given as
Unit members or symbols ("mV", "uV", "kOhm"). Outputs carry symbols as
strings so they serialize to JSON unchanged (keep ensure_ascii=False).
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional
import logging

from . import autorange as AR
from . import properties as P
from .schemas import AutoRangeRequest, ConvertRequest, UnitListRequest
from .units import Unit, convert_to_unit, prefix_units_of, units_of

logger = logging.getLogger(__name__)


def _unit_entry(u: Unit) -> Dict[str, Any]:
    return {
        "name": u.name,
        "symbol": u.symbol,
        "base_property": u.base_property.name,
        "si_unit": u.is_si_unit,
        "multiplicative": u.is_multiplicative,
    }


def convert_quantity(inputs: Dict[str, Any]) -> Dict[str, Any]:
    """Convert {magnitude, from_unit, to_unit}; returns both sides plus the SI pivot."""
    req = ConvertRequest.model_validate(inputs)
    try:
        value = convert_to_unit(req.magnitude, req.from_unit, req.to_unit)
    except Exception:
        logger.exception("convert_quantity failed")
        raise
    return {
        "magnitude": req.magnitude,
        "from_unit": req.from_unit.symbol,
        "value": value,
        "unit": req.to_unit.symbol,
        "si_value": req.from_unit.to_si(req.magnitude),
        "si_unit": req.from_unit.base_property.si_unit.symbol,
    }


def auto_range_quantity(inputs: Dict[str, Any]) -> Dict[str, Any]:
    """Pick the best display unit for {magnitude, from_unit, [candidates], [policy], ...}.

    Adds:
      - scores: list of {unit, value, score, kept} in evaluation order (include_scores=True)
    """
    req = AutoRangeRequest.model_validate(inputs)
    candidates: List[Unit] = list(req.candidates) if req.candidates is not None else list(prefix_units_of(req.from_unit.base_property))
    try:
        best = AR.auto_range(req.policy, req.magnitude, req.from_unit, candidates,
                             req.strict_property, req.round_magnitude)
        value = convert_to_unit(req.magnitude, req.from_unit, best)
    except Exception:
        logger.exception("auto_range_quantity failed")
        raise
    out: Dict[str, Any] = {
        "magnitude": req.magnitude,
        "from_unit": req.from_unit.symbol,
        "policy": req.policy.name,
        "unit": best.symbol,
        "value": value,
        "in_window": req.policy.in_window(value),
    }
    if req.include_scores:
        scored = AR.score_candidates(req.policy, req.magnitude, req.from_unit, candidates,
                                     req.strict_property, req.round_magnitude)
        out["scores"] = [
            {"unit": c.unit.symbol, "value": c.magnitude, "score": c.score, "kept": c.kept}
            for c in scored
        ]
    return out


def list_units(base_property: Optional[Any] = None) -> Dict[str, Any]:
    """Catalog listing, optionally restricted to one base property (enum or name)."""
    req = UnitListRequest(base_property=base_property)
    props = [req.base_property] if req.base_property is not None else list(P.BaseProperty)
    return {p.name: [_unit_entry(u) for u in units_of(p)] for p in props}


def list_properties() -> Dict[str, Any]:
    return {
        p.name: {
            "si_unit": p.symbol,
            "converts_to": [q.name for q in P.convertible_properties(p) if q is not p],
        }
        for p in P.BaseProperty
    }
