"""
Exception taxonomy for the unit engine.

Two kinds, kept distinguishable:
  - InvalidArgumentError: caller misuse (absent or wrong-typed arguments,
    conversions between incompatible properties, unknown symbols).
  - InternalInconsistencyError: a catalog table is incomplete (a member was
    added without updating a lookup table).

Numeric edge cases (division by zero, overflow) are not errors; they propagate
as IEEE-754 infinities and NaNs.
"""
from __future__ import annotations


class UnitsError(Exception):
    """Base class for all errors raised by PhysicalUnitsTool."""
    pass


class InvalidArgumentError(UnitsError, ValueError):
    """Raised when a precondition on the arguments is violated."""
    pass


class InternalInconsistencyError(UnitsError, RuntimeError):
    """Raised when a catalog or lookup table does not cover a member."""
    pass
