"""
Physical and mathematical constants as PhysicalValues.

Values are sourced from anchors.ANCHORS; update anchors.py deliberately.
"""
from typing import Dict

from .anchors import ANCHORS
from .units import Unit
from .values import PhysicalValue

# Speed of light in vacuum
C_MPS = PhysicalValue(float(ANCHORS["C_MPS"]), Unit.mps)

# 0 C expressed in kelvin
ZERO_CELSIUS_K = PhysicalValue(float(ANCHORS["ZERO_CELSIUS_K"]), Unit.K)

CONSTANTS: Dict[str, PhysicalValue] = {
    "C_MPS": C_MPS,
    "ZERO_CELSIUS_K": ZERO_CELSIUS_K,
}
