from __future__ import annotations

from dataclasses import dataclass, field

from .. import settings as CFG


@dataclass
class UIState:
    policy: str = field(default_factory=lambda: CFG.DEFAULT_POLICY)
    strict_property: bool = field(default_factory=lambda: CFG.STRICT_PROPERTY)
    round_magnitude: bool = field(default_factory=lambda: CFG.ROUND_MAGNITUDE)
    base_property: str = "VOLTAGE"
