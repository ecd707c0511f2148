"""Speed estimates with method, confidence and uncertainty band.

Each evidence path wraps one physics formula and attaches a fixed
confidence and a symmetric ± uncertainty:

  Skid Mark Analysis     ±10 %   confidence 1.0 (reduced for short skids
                                 and unusual drag factors)
  Yaw Mark Analysis      ±15 %   0.70
  Crush Analysis         ±20 %   0.65
  Damage Level Analysis  ±25 %   0.60

``combine_estimates`` folds several estimates into a confidence-weighted
mean whose band spans every input band.
"""

from __future__ import annotations

from accident_recon.config.constants import DEFAULT_CONSTANTS, PhysicalConstants, RoadCondition
from accident_recon.engine.physics import (
    critical_curve_speed,
    friction_coefficient,
    impact_speed_from_damage,
    speed_from_skid_marks,
)
from accident_recon.engine.units import kph_to_mph, mph_to_fps, mph_to_kph
from accident_recon.errors import InvalidInput
from accident_recon.models.damage import DamageSeverity
from accident_recon.models.results import SpeedEstimate

# Barrier-equivalent speed (kph) typically needed to produce each severity.
SEVERITY_THRESHOLD_KPH: dict[DamageSeverity, float] = {
    DamageSeverity.NONE: 0.0,
    DamageSeverity.MINOR: 15.0,
    DamageSeverity.MODERATE: 30.0,
    DamageSeverity.SEVERE: 50.0,
    DamageSeverity.MAJOR: 60.0,
    DamageSeverity.CATASTROPHIC: 70.0,
}


def _estimate(method: str, speed_mph: float, confidence: float, uncertainty: float) -> SpeedEstimate:
    return SpeedEstimate(
        method=method,
        speed_mph=speed_mph,
        speed_fps=mph_to_fps(speed_mph),
        speed_kph=mph_to_kph(speed_mph),
        confidence=confidence,
        range_low_mph=speed_mph * (1 - uncertainty),
        range_high_mph=speed_mph * (1 + uncertainty),
    )


def _skid_confidence(length_ft: float, effective_friction: float) -> float:
    confidence = 1.0
    if length_ft < 10:
        confidence *= 0.6
    elif length_ft < 33:
        confidence *= 0.8
    if effective_friction < 0.2 or effective_friction > 0.9:
        confidence *= 0.7
    return confidence


def estimate_from_skid_marks(
    length_ft: float,
    condition: RoadCondition = RoadCondition.DRY_ASPHALT,
    grade_percent: float = 0.0,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> SpeedEstimate:
    speed = speed_from_skid_marks(length_ft, condition, grade_percent, constants=constants)
    effective = friction_coefficient(condition, constants) + grade_percent / 100
    return _estimate(
        "Skid Mark Analysis", speed, _skid_confidence(length_ft, effective), 0.10,
    )


def estimate_from_yaw_marks(
    radius_ft: float,
    condition: RoadCondition = RoadCondition.DRY_ASPHALT,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> SpeedEstimate:
    """Speed from the chord-and-middle-ordinate radius of a yaw mark."""
    speed = critical_curve_speed(radius_ft, condition, constants=constants)
    return _estimate("Yaw Mark Analysis", speed, 0.70, 0.15)


def estimate_from_damage(
    crush_depth_in: float,
    weight_lb: float,
    stiffness_lb_per_in: float = 150.0,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> SpeedEstimate:
    speed = impact_speed_from_damage(crush_depth_in, weight_lb, stiffness_lb_per_in, constants)
    return _estimate("Crush Analysis", speed, 0.65, 0.20)


def minimum_speed_for_severity(severity: DamageSeverity) -> SpeedEstimate:
    """Typical minimum barrier-equivalent speed to cause ``severity``."""
    speed = kph_to_mph(SEVERITY_THRESHOLD_KPH[DamageSeverity(severity)])
    return _estimate("Damage Level Analysis", speed, 0.60, 0.25)


def combine_estimates(estimates: list[SpeedEstimate]) -> SpeedEstimate:
    """Confidence-weighted mean of several estimates.

    The combined band runs from the lowest low to the highest high; the
    combined confidence is the mean input confidence.  A single estimate
    is returned unchanged.
    """
    if not estimates:
        raise InvalidInput("estimates", estimates, "at least one estimate is required")
    if len(estimates) == 1:
        return estimates[0]

    total_weight = sum(e.confidence for e in estimates)
    weighted_sum = sum(e.speed_mph * e.confidence for e in estimates)
    speed = weighted_sum / total_weight if total_weight > 0 else 0.0

    return SpeedEstimate(
        method="Combined Analysis",
        speed_mph=speed,
        speed_fps=mph_to_fps(speed),
        speed_kph=mph_to_kph(speed),
        confidence=total_weight / len(estimates),
        range_low_mph=min(e.range_low_mph for e in estimates),
        range_high_mph=max(e.range_high_mph for e in estimates),
    )


def format_estimate(estimate: SpeedEstimate) -> str:
    """One-line report text, e.g. 'Crush Analysis: 24.1 mph (38.8 kph) [Confidence: 65%]'."""
    return (
        f"{estimate.method}: {estimate.speed_mph:.1f} mph "
        f"({estimate.speed_kph:.1f} kph) "
        f"[Confidence: {estimate.confidence * 100:.0f}%]"
    )
