"""Skid-mark speed sensitivity — one-at-a-time sweeps for tornado charts.

Reconstruction reports state a speed range, not a point value.  Each sweep
varies one ``SkidEvidence`` input while holding the others at their base
values and records the resulting speed at the low and high end.

Default sweep set:
  - length_ft          ± 10 %   (tape / photogrammetry error)
  - friction           ± 15 %   (tabulated vs. test-skid drag factor)
  - grade_percent      ± 2 points
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from accident_recon.config.constants import DEFAULT_CONSTANTS, PhysicalConstants
from accident_recon.config.evidence import SkidEvidence
from accident_recon.engine.physics import friction_coefficient, speed_from_skid_marks
from accident_recon.errors import ReconstructionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkidSweep:
    """One parameter to vary."""

    name: str
    """Human-readable parameter name."""

    parameter: Literal["length_ft", "friction", "grade_percent"]

    low: float
    high: float

    relative: bool = True
    """True: low/high are fractions of the base value (−0.10 = −10 %).
    False: low/high are added to the base value."""


@dataclass(frozen=True)
class TornadoBar:
    """One bar in the tornado chart."""

    param_name: str
    base_value: float
    low_value: float
    high_value: float
    speed_at_low_mph: float
    speed_at_high_mph: float
    delta_speed_mph: float
    """abs(speed_at_high − speed_at_low) — total swing width."""


@dataclass
class SkidSensitivityResult:
    """Complete sensitivity analysis output."""

    base_speed_mph: float
    bars: list[TornadoBar] = field(default_factory=list)
    """Tornado bars sorted by delta_speed_mph (descending)."""
    skipped: list[str] = field(default_factory=list)
    """Sweeps dropped because an end point was physically undefined."""


DEFAULT_SWEEPS: list[SkidSweep] = [
    SkidSweep("Skid length", "length_ft", -0.10, 0.10),
    SkidSweep("Drag factor", "friction", -0.15, 0.15),
    SkidSweep("Road grade", "grade_percent", -2.0, 2.0, relative=False),
]


def _base_value(evidence: SkidEvidence, parameter: str, constants: PhysicalConstants) -> float:
    if parameter == "friction":
        if evidence.friction_override is not None:
            return evidence.friction_override
        return friction_coefficient(evidence.condition, constants)
    return float(getattr(evidence, parameter))


def _speed(evidence: SkidEvidence, constants: PhysicalConstants) -> float:
    return speed_from_skid_marks(
        evidence.length_ft,
        evidence.condition,
        evidence.grade_percent,
        drag_factor=evidence.friction_override,
        constants=constants,
    )


def _speed_with(
    evidence: SkidEvidence,
    parameter: str,
    value: float,
    constants: PhysicalConstants,
) -> float:
    key = "friction_override" if parameter == "friction" else parameter
    return _speed(evidence.model_copy(update={key: value}), constants)


def run_skid_sensitivity(
    evidence: SkidEvidence,
    sweeps: list[SkidSweep] | None = None,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> SkidSensitivityResult:
    """Run a one-at-a-time sensitivity sweep around ``evidence``.

    Parameters
    ----------
    evidence : SkidEvidence
        Base case.
    sweeps : list[SkidSweep] | None
        Parameter sweeps. None = use DEFAULT_SWEEPS.

    Returns
    -------
    SkidSensitivityResult
        Tornado bars sorted by speed swing.

    Raises
    ------
    UndefinedPhysics
        When the base case itself is undefined.
    """
    if sweeps is None:
        sweeps = DEFAULT_SWEEPS

    result = SkidSensitivityResult(base_speed_mph=_speed(evidence, constants))

    for sweep in sweeps:
        base_val = _base_value(evidence, sweep.parameter, constants)
        if sweep.relative:
            low_val = base_val * (1 + sweep.low)
            high_val = base_val * (1 + sweep.high)
        else:
            low_val = base_val + sweep.low
            high_val = base_val + sweep.high

        if sweep.parameter == "friction":
            # Drag factors live in (0, 1].
            low_val = min(low_val, 1.0)
            high_val = min(high_val, 1.0)

        try:
            speed_low = _speed_with(evidence, sweep.parameter, low_val, constants)
            speed_high = _speed_with(evidence, sweep.parameter, high_val, constants)
        except ReconstructionError as exc:
            logger.warning("Skipping sweep %r: %s", sweep.name, exc)
            result.skipped.append(sweep.name)
            continue

        result.bars.append(TornadoBar(
            param_name=sweep.name,
            base_value=base_val,
            low_value=low_val,
            high_value=high_val,
            speed_at_low_mph=speed_low,
            speed_at_high_mph=speed_high,
            delta_speed_mph=abs(speed_high - speed_low),
        ))

    # Largest swing first
    result.bars.sort(key=lambda b: b.delta_speed_mph, reverse=True)
    return result
