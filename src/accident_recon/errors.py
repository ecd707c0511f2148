"""Error taxonomy for the calculation core.

Two failure kinds leave the engine:

  InvalidInput      — a supplied quantity is outside its physical domain
                      (negative weight, restitution > 1, radius ≤ 0, NaN ...)
  UndefinedPhysics  — the inputs are individually valid but the formula has
                      no real answer for their combination (e.g. a downhill
                      grade steeper than the available friction)

Percentage-like observation fields (extent, depth) are clamped by the
damage models and never raise.
"""

from __future__ import annotations


class ReconstructionError(Exception):
    """Base class for every error raised by ``accident_recon``."""


class InvalidInput(ReconstructionError, ValueError):
    """A physical quantity is outside its valid domain."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}={value!r}: {reason}")


class UndefinedPhysics(ReconstructionError, ArithmeticError):
    """The formula is mathematically undefined for the given inputs."""
