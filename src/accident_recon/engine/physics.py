"""Kinematic and dynamic formulas for accident reconstruction.

Working units are feet, pounds-force (weight), slugs (mass) and seconds;
public speeds are in mph.  Every function is pure: identical inputs give
bit-identical outputs, and values are returned unrounded.

Core relations (g = 32.174 ft/s², μ_eff = μ + grade/100):

  mass              m = W / g
  braking distance  d = v² / (2 × g × μ_eff)
  skid-mark speed   v = √(2 × g × μ_eff × d)
  crush energy      E = ½ × k × x²,   v = √(2E / m)
  rollover          v = √(g × R × T / (2h))

Domain violations raise ``InvalidInput``; combinations for which a formula
has no real answer (μ_eff ≤ 0) raise ``UndefinedPhysics``.  Nothing here
returns NaN, infinity, or a negative distance or time.
"""

from __future__ import annotations

import logging
import math

from accident_recon.config.constants import (
    DEFAULT_CONSTANTS,
    PhysicalConstants,
    RoadCondition,
    VehicleClass,
)
from accident_recon.config.evidence import CollisionPair
from accident_recon.engine.units import fps_to_mph, mph_to_fps
from accident_recon.errors import InvalidInput, UndefinedPhysics
from accident_recon.models.results import (
    AxleWeights,
    BrakingDistance,
    CollisionOutcome,
    DeltaV,
    NoCollision,
    TimeToCollision,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Input validation
# ═══════════════════════════════════════════════════════════════════════════

def _finite(name: str, value: float) -> float:
    if not math.isfinite(value):
        raise InvalidInput(name, value, "must be a finite number")
    return float(value)


def _positive(name: str, value: float) -> float:
    value = _finite(name, value)
    if value <= 0:
        raise InvalidInput(name, value, "must be greater than zero")
    return value


def _non_negative(name: str, value: float) -> float:
    value = _finite(name, value)
    if value < 0:
        raise InvalidInput(name, value, "must not be negative")
    return value


def _percentage(name: str, value: float) -> float:
    value = _finite(name, value)
    if not 0 <= value <= 100:
        raise InvalidInput(name, value, "must be between 0 and 100")
    return value


def _finite_result(context: str, value: float) -> float:
    """Reject a result that overflowed to infinity or NaN for finite inputs."""
    if not math.isfinite(value):
        logger.warning("%s undefined: result overflowed the float range", context)
        raise UndefinedPhysics(f"{context}: result {value} is not a finite number")
    return value


def _effective_friction(friction: float, grade_percent: float, context: str) -> float:
    """μ + grade/100; uphill grades add to the drag factor, downhill subtract."""
    effective = friction + _finite("grade_percent", grade_percent) / 100
    if effective <= 0:
        logger.warning(
            "%s undefined: friction %.3f with grade %.1f%% leaves effective friction %.3f",
            context, friction, grade_percent, effective,
        )
        raise UndefinedPhysics(
            f"{context}: effective friction {effective:.4f} ≤ 0 "
            f"(friction {friction}, grade {grade_percent}%); the vehicle cannot stop"
        )
    return effective


# ═══════════════════════════════════════════════════════════════════════════
# Basic quantities
# ═══════════════════════════════════════════════════════════════════════════

def friction_coefficient(
    condition: RoadCondition,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> float:
    """Tabulated friction coefficient (drag factor) for a road condition."""
    return constants.friction_for(condition)


def mass(weight_lb: float, constants: PhysicalConstants = DEFAULT_CONSTANTS) -> float:
    """Mass in slugs from weight in pounds-force."""
    return _positive("weight_lb", weight_lb) / constants.gravity_fps2


def momentum(
    weight_lb: float,
    velocity_mph: float,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> float:
    """Linear momentum (slug·ft/s). Sign follows ``velocity_mph``."""
    return _finite_result(
        "momentum", mass(weight_lb, constants) * mph_to_fps(_finite("velocity_mph", velocity_mph)),
    )


def kinetic_energy(
    weight_lb: float,
    velocity_mph: float,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> float:
    """Kinetic energy ½mv² (ft·lbf)."""
    velocity_fps = mph_to_fps(_finite("velocity_mph", velocity_mph))
    return _finite_result(
        "kinetic energy", 0.5 * mass(weight_lb, constants) * velocity_fps * velocity_fps,
    )


# ═══════════════════════════════════════════════════════════════════════════
# Braking & skid marks
# ═══════════════════════════════════════════════════════════════════════════

def braking_distance(
    velocity_mph: float,
    condition: RoadCondition = RoadCondition.DRY_ASPHALT,
    grade_percent: float = 0.0,
    reaction_time_s: float = 1.5,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> BrakingDistance:
    """Stopping distance split into reaction and braking phases.

    Parameters
    ----------
    velocity_mph : float
        Initial speed (mph), ≥ 0.
    condition : RoadCondition
        Road surface; selects the friction coefficient.
    grade_percent : float
        Road grade; positive = uphill (helps braking), negative = downhill.
    reaction_time_s : float
        Perception-reaction time before the brakes apply (s), ≥ 0.

    Raises
    ------
    UndefinedPhysics
        When the downhill grade cancels all available friction.
    """
    velocity_fps = mph_to_fps(_non_negative("velocity_mph", velocity_mph))
    reaction_time_s = _non_negative("reaction_time_s", reaction_time_s)
    effective = _effective_friction(
        friction_coefficient(condition, constants), grade_percent, "braking distance",
    )

    reaction = velocity_fps * reaction_time_s
    braking = (velocity_fps * velocity_fps) / (2 * constants.gravity_fps2 * effective)

    return BrakingDistance(
        reaction_distance_ft=reaction,
        braking_distance_ft=braking,
        total_distance_ft=_finite_result("braking distance", reaction + braking),
    )


def speed_from_skid_marks(
    length_ft: float,
    condition: RoadCondition = RoadCondition.DRY_ASPHALT,
    grade_percent: float = 0.0,
    drag_factor: float | None = None,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> float:
    """Minimum speed (mph) at the start of a skid that ends at rest.

    ``drag_factor`` replaces the tabulated friction for ``condition`` when a
    measured value (test skid, drag sled) is available.
    """
    length_ft = _non_negative("length_ft", length_ft)
    friction = (
        friction_coefficient(condition, constants)
        if drag_factor is None
        else _positive("drag_factor", drag_factor)
    )
    effective = _effective_friction(friction, grade_percent, "skid-mark speed")

    velocity_fps = math.sqrt(2 * constants.gravity_fps2 * effective * length_ft)
    return _finite_result("skid-mark speed", fps_to_mph(velocity_fps))


def stopping_distance_on_grade(
    velocity_mph: float,
    grade_percent: float,
    condition: RoadCondition = RoadCondition.DRY_ASPHALT,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> float:
    """Total stopping distance (ft) with the default 1.5 s reaction time."""
    return braking_distance(
        velocity_mph, condition, grade_percent, constants=constants,
    ).total_distance_ft


def following_distance(velocity_mph: float, reaction_time_s: float = 2.0) -> float:
    """Distance (ft) covered during ``reaction_time_s`` — the 2-second rule."""
    velocity_fps = mph_to_fps(_non_negative("velocity_mph", velocity_mph))
    return _finite_result(
        "following distance", velocity_fps * _non_negative("reaction_time_s", reaction_time_s),
    )


# ═══════════════════════════════════════════════════════════════════════════
# Damage energy
# ═══════════════════════════════════════════════════════════════════════════

def impact_speed_from_damage(
    crush_depth_in: float,
    weight_lb: float,
    stiffness_lb_per_in: float = 150.0,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> float:
    """Impact speed (mph) whose kinetic energy equals the crush energy.

    Crush is modelled as a linear spring: E = ½ × k × x².  All of the
    vehicle's kinetic energy is assumed absorbed by the deformation.
    """
    depth = _positive("crush_depth_in", crush_depth_in)
    stiffness = _positive("stiffness_lb_per_in", stiffness_lb_per_in)
    energy_absorbed = 0.5 * stiffness * depth * depth

    velocity_fps = math.sqrt((2 * energy_absorbed) / mass(weight_lb, constants))
    return _finite_result("crush impact speed", fps_to_mph(velocity_fps))


# ═══════════════════════════════════════════════════════════════════════════
# Collision
# ═══════════════════════════════════════════════════════════════════════════

def delta_v(
    weight1_lb: float,
    velocity1_mph: float,
    weight2_lb: float,
    velocity2_mph: float,
    restitution: float = 0.0,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> DeltaV:
    """Velocity change of each vehicle in a collinear two-body impact.

    Post-impact velocities follow from conservation of momentum plus the
    restitution relation  v2' − v1' = e × (v1 − v2):

      v1' = ((m1 − e·m2) × v1 + (1 + e) × m2 × v2) / (m1 + m2)
      v2' = ((1 + e) × m1 × v1 + (m2 − e·m1) × v2) / (m1 + m2)

    Only magnitudes are returned; the sign of each change is dropped.
    """
    restitution = _finite("restitution", restitution)
    if not 0 <= restitution <= 1:
        raise InvalidInput("restitution", restitution, "must be between 0 and 1")

    m1 = mass(weight1_lb, constants)
    m2 = mass(weight2_lb, constants)
    v1 = mph_to_fps(_finite("velocity1_mph", velocity1_mph))
    v2 = mph_to_fps(_finite("velocity2_mph", velocity2_mph))
    e = restitution
    total_mass = m1 + m2

    v1_final = ((m1 - e * m2) / total_mass) * v1 + ((m2 + e * m2) / total_mass) * v2
    v2_final = ((m1 + e * m1) / total_mass) * v1 + ((m2 - e * m1) / total_mass) * v2

    return DeltaV(
        vehicle1_delta_v_mph=_finite_result("delta-V", fps_to_mph(abs(v1_final - v1))),
        vehicle2_delta_v_mph=_finite_result("delta-V", fps_to_mph(abs(v2_final - v2))),
    )


def delta_v_for_pair(
    pair: CollisionPair,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> DeltaV:
    return delta_v(
        pair.weight1_lb, pair.velocity1_mph,
        pair.weight2_lb, pair.velocity2_mph,
        pair.restitution,
        constants=constants,
    )


def time_to_collision(
    distance_ft: float,
    velocity1_mph: float,
    velocity2_mph: float = 0.0,
) -> CollisionOutcome:
    """Seconds until vehicle 1 reaches vehicle 2 ahead of it.

    Velocities are signed along the same axis.  When vehicle 1 is not
    closing on vehicle 2 (v1 ≤ v2) the result is ``NoCollision``.
    """
    distance_ft = _non_negative("distance_ft", distance_ft)
    closing_fps = _finite_result("closing speed", mph_to_fps(
        _finite("velocity1_mph", velocity1_mph) - _finite("velocity2_mph", velocity2_mph)
    ))
    if closing_fps <= 0:
        return NoCollision()
    return TimeToCollision(seconds=_finite_result("time to collision", distance_ft / closing_fps))


# ═══════════════════════════════════════════════════════════════════════════
# Cornering
# ═══════════════════════════════════════════════════════════════════════════

def lateral_acceleration(
    velocity_mph: float,
    turn_radius_ft: float,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> float:
    """Centripetal acceleration in g's."""
    velocity_fps = mph_to_fps(_non_negative("velocity_mph", velocity_mph))
    radius = _positive("turn_radius_ft", turn_radius_ft)
    return _finite_result(
        "lateral acceleration", (velocity_fps * velocity_fps) / radius / constants.gravity_fps2,
    )


def rollover_speed(
    track_width_ft: float,
    cg_height_ft: float,
    turn_radius_ft: float,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> float:
    """Critical cornering speed (mph) at the static stability limit.

    Lateral acceleration reaches the static stability factor T / 2h.
    """
    track = _positive("track_width_ft", track_width_ft)
    height = _positive("cg_height_ft", cg_height_ft)
    radius = _positive("turn_radius_ft", turn_radius_ft)

    velocity_fps = math.sqrt((constants.gravity_fps2 * radius * track) / (2 * height))
    return _finite_result("rollover speed", fps_to_mph(velocity_fps))


def critical_curve_speed(
    radius_ft: float,
    condition: RoadCondition = RoadCondition.DRY_ASPHALT,
    superelevation_percent: float = 0.0,
    drag_factor: float | None = None,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> float:
    """Maximum speed (mph) through a curve before the tyres slide.

    v = √(g × R × (μ + e) / (1 − μ × e)), e = superelevation / 100.
    Also the yaw-mark speed formula when ``radius_ft`` is the yaw radius.
    """
    radius = _positive("radius_ft", radius_ft)
    friction = (
        friction_coefficient(condition, constants)
        if drag_factor is None
        else _positive("drag_factor", drag_factor)
    )
    e = _finite("superelevation_percent", superelevation_percent) / 100

    numerator = constants.gravity_fps2 * radius * (friction + e)
    denominator = 1 - friction * e
    if numerator <= 0 or denominator <= 0:
        logger.warning(
            "critical curve speed undefined: friction %.3f, superelevation %.1f%%",
            friction, superelevation_percent,
        )
        raise UndefinedPhysics(
            f"critical curve speed: friction {friction} with superelevation "
            f"{superelevation_percent}% has no finite sliding limit"
        )
    return _finite_result("critical curve speed", fps_to_mph(math.sqrt(numerator / denominator)))


# ═══════════════════════════════════════════════════════════════════════════
# Vehicle characteristics
# ═══════════════════════════════════════════════════════════════════════════

def acceleration_from_zero_to_sixty(seconds: float) -> float:
    """Average acceleration (ft/s²) implied by a 0–60 mph time."""
    return _finite_result("0-60 acceleration", mph_to_fps(60) / _positive("seconds", seconds))


def axle_weights(
    total_weight_lb: float,
    front_percent: float,
    rear_percent: float,
) -> AxleWeights:
    total = _positive("total_weight_lb", total_weight_lb)
    front = _percentage("front_percent", front_percent)
    rear = _percentage("rear_percent", rear_percent)
    return AxleWeights(front_lb=total * front / 100, rear_lb=total * rear / 100)


def aerodynamic_drag(
    velocity_mph: float,
    frontal_area_sqft: float,
    vehicle_class: VehicleClass = VehicleClass.SEDAN,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> float:
    """Aerodynamic drag force ½ρC_dAv² (lbf)."""
    velocity_fps = mph_to_fps(_non_negative("velocity_mph", velocity_mph))
    area = _positive("frontal_area_sqft", frontal_area_sqft)
    cd = constants.drag_coefficient_for(vehicle_class)
    return _finite_result(
        "aerodynamic drag",
        0.5 * constants.air_density_slugs_ft3 * cd * area * velocity_fps * velocity_fps,
    )
