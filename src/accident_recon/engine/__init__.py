"""Engine — pure reconstruction physics and damage aggregation."""

from accident_recon.engine.units import (
    fps_to_kph,
    fps_to_mph,
    kph_to_fps,
    kph_to_mph,
    mph_to_fps,
    mph_to_kph,
)
from accident_recon.engine.physics import (
    acceleration_from_zero_to_sixty,
    aerodynamic_drag,
    axle_weights,
    braking_distance,
    critical_curve_speed,
    delta_v,
    delta_v_for_pair,
    following_distance,
    friction_coefficient,
    impact_speed_from_damage,
    kinetic_energy,
    lateral_acceleration,
    mass,
    momentum,
    rollover_speed,
    speed_from_skid_marks,
    stopping_distance_on_grade,
    time_to_collision,
)
from accident_recon.engine.speed_estimates import (
    combine_estimates,
    estimate_from_damage,
    estimate_from_skid_marks,
    estimate_from_yaw_marks,
    format_estimate,
    minimum_speed_for_severity,
)
from accident_recon.engine.damage import (
    ZONE_COMPONENTS,
    add_fluid_leak,
    add_photo,
    add_zone,
    create_damage_record,
    create_zone_observation,
    damage_summary,
    estimated_repair_cost,
    impact_speed_estimate,
    is_total_loss,
    overall_severity,
    remove_photo,
    remove_zone,
    set_airbag_deployed,
    set_drivability,
    set_total_estimated_cost,
)
from accident_recon.engine.sensitivity import (
    SkidSensitivityResult,
    SkidSweep,
    TornadoBar,
    run_skid_sensitivity,
)

__all__ = [
    # Units
    "fps_to_kph",
    "fps_to_mph",
    "kph_to_fps",
    "kph_to_mph",
    "mph_to_fps",
    "mph_to_kph",
    # Physics
    "acceleration_from_zero_to_sixty",
    "aerodynamic_drag",
    "axle_weights",
    "braking_distance",
    "critical_curve_speed",
    "delta_v",
    "delta_v_for_pair",
    "following_distance",
    "friction_coefficient",
    "impact_speed_from_damage",
    "kinetic_energy",
    "lateral_acceleration",
    "mass",
    "momentum",
    "rollover_speed",
    "speed_from_skid_marks",
    "stopping_distance_on_grade",
    "time_to_collision",
    # Speed estimates
    "combine_estimates",
    "estimate_from_damage",
    "estimate_from_skid_marks",
    "estimate_from_yaw_marks",
    "format_estimate",
    "minimum_speed_for_severity",
    # Damage aggregation
    "ZONE_COMPONENTS",
    "add_fluid_leak",
    "add_photo",
    "add_zone",
    "create_damage_record",
    "create_zone_observation",
    "damage_summary",
    "estimated_repair_cost",
    "impact_speed_estimate",
    "is_total_loss",
    "overall_severity",
    "remove_photo",
    "remove_zone",
    "set_airbag_deployed",
    "set_drivability",
    "set_total_estimated_cost",
    # Sensitivity
    "SkidSensitivityResult",
    "SkidSweep",
    "TornadoBar",
    "run_skid_sensitivity",
]
