"""Tests for engine/physics.py — hand-calculated expected values.

Worksheet values use g = 32.174 ft/s² and 1 mph = 1.46667 ft/s.
"""

from __future__ import annotations

import math

import pytest

from accident_recon.config import CollisionPair, PhysicalConstants, RoadCondition, VehicleClass
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
from accident_recon.engine.units import mph_to_fps
from accident_recon.errors import InvalidInput, ReconstructionError, UndefinedPhysics
from accident_recon.models import NoCollision, TimeToCollision


# ═══════════════════════════════════════════════════════════════════════════
# Friction, mass, momentum, energy
# ═══════════════════════════════════════════════════════════════════════════

class TestBasicQuantities:

    @pytest.mark.parametrize("condition, expected", [
        (RoadCondition.DRY_ASPHALT, 0.7),
        (RoadCondition.WET_ASPHALT, 0.5),
        (RoadCondition.SNOW, 0.3),
        (RoadCondition.ICE, 0.15),
        (RoadCondition.GRAVEL, 0.6),
    ])
    def test_friction_table(self, condition: RoadCondition, expected: float):
        assert friction_coefficient(condition) == expected

    def test_every_condition_in_unit_interval(self):
        for condition in RoadCondition:
            assert 0 < friction_coefficient(condition) <= 1

    def test_friction_uses_passed_constants(self):
        custom = PhysicalConstants(friction_dry_asphalt=0.8)
        assert friction_coefficient(RoadCondition.DRY_ASPHALT, custom) == 0.8

    def test_mass_in_slugs(self):
        # 3500 / 32.174 = 108.783
        assert mass(3_500) == pytest.approx(108.783, abs=0.001)

    @pytest.mark.parametrize("weight", [1.0, 2_000.0, 3_500.0, 80_000.0])
    def test_mass_round_trip(self, weight: float):
        assert mass(weight) * 32.174 == pytest.approx(weight)

    @pytest.mark.parametrize("weight", [0.0, -1.0, -3_500.0])
    def test_mass_rejects_non_positive_weight(self, weight: float):
        with pytest.raises(InvalidInput) as exc:
            mass(weight)
        assert exc.value.field == "weight_lb"

    def test_momentum(self):
        # 108.783 slugs × 88.0002 ft/s = 9572.9
        assert momentum(3_500, 60) == pytest.approx(3_500 / 32.174 * 60 * 1.46667)

    def test_momentum_sign_follows_velocity(self):
        assert momentum(3_500, -30) == pytest.approx(-momentum(3_500, 30))

    def test_kinetic_energy(self):
        # ½ × 108.783 × 88.0002² = 421,215 ft·lbf
        expected = 0.5 * (3_500 / 32.174) * (60 * 1.46667) ** 2
        assert kinetic_energy(3_500, 60) == pytest.approx(expected)

    def test_kinetic_energy_quadruples_when_speed_doubles(self):
        assert kinetic_energy(3_000, 40) == pytest.approx(4 * kinetic_energy(3_000, 20))

    def test_negative_weight_rejected(self):
        with pytest.raises(InvalidInput):
            momentum(-10, 30)
        with pytest.raises(InvalidInput):
            kinetic_energy(-10, 30)

    def test_non_finite_velocity_rejected(self):
        with pytest.raises(InvalidInput):
            kinetic_energy(3_000, float("nan"))
        with pytest.raises(InvalidInput):
            momentum(3_000, float("inf"))


# ═══════════════════════════════════════════════════════════════════════════
# Braking distance & skid marks
# ═══════════════════════════════════════════════════════════════════════════

class TestBrakingDistance:

    def test_closed_form_on_dry_level_road(self):
        v_fps = mph_to_fps(60)
        result = braking_distance(60, RoadCondition.DRY_ASPHALT, 0)
        assert result.braking_distance_ft == v_fps * v_fps / (2 * 32.174 * 0.7)

    def test_sixty_mph_worksheet(self):
        """3500 lb at 60 mph, dry asphalt, level, 1.5 s reaction."""
        result = braking_distance(60, RoadCondition.DRY_ASPHALT, 0, reaction_time_s=1.5)
        # 60 × 1.46667 × 1.5 = 132.0
        assert result.reaction_distance_ft == pytest.approx(132.0, abs=0.01)
        # 88.0002² / (2 × 32.174 × 0.7) = 7744.04 / 45.0436 = 171.9
        assert result.braking_distance_ft == pytest.approx(171.92, abs=0.01)
        assert result.total_distance_ft == pytest.approx(
            result.reaction_distance_ft + result.braking_distance_ft,
        )

    def test_uphill_shortens_downhill_lengthens(self):
        level = braking_distance(50, RoadCondition.WET_ASPHALT, 0).braking_distance_ft
        uphill = braking_distance(50, RoadCondition.WET_ASPHALT, 5).braking_distance_ft
        downhill = braking_distance(50, RoadCondition.WET_ASPHALT, -5).braking_distance_ft
        assert uphill < level < downhill

    def test_grade_adds_to_friction(self):
        # μ_eff = 0.5 + 0.05 = 0.55
        v_fps = mph_to_fps(50)
        result = braking_distance(50, RoadCondition.WET_ASPHALT, 5)
        assert result.braking_distance_ft == pytest.approx(v_fps ** 2 / (2 * 32.174 * 0.55))

    def test_zero_speed_stops_immediately(self):
        result = braking_distance(0)
        assert result.total_distance_ft == 0.0

    def test_zero_reaction_time(self):
        result = braking_distance(30, reaction_time_s=0)
        assert result.reaction_distance_ft == 0.0
        assert result.total_distance_ft == result.braking_distance_ft

    def test_downhill_steeper_than_friction_is_undefined(self):
        # Ice μ = 0.15; a −20 % grade leaves μ_eff = −0.05
        with pytest.raises(UndefinedPhysics):
            braking_distance(30, RoadCondition.ICE, -20)

    def test_grade_exactly_cancelling_friction_is_undefined(self):
        with pytest.raises(UndefinedPhysics):
            braking_distance(30, RoadCondition.SNOW, -30)

    def test_undefined_physics_is_a_reconstruction_error(self):
        with pytest.raises(ReconstructionError):
            braking_distance(30, RoadCondition.ICE, -50)

    def test_negative_speed_rejected(self):
        with pytest.raises(InvalidInput):
            braking_distance(-10)

    def test_negative_reaction_time_rejected(self):
        with pytest.raises(InvalidInput):
            braking_distance(30, reaction_time_s=-0.5)

    def test_stopping_distance_on_grade_is_total(self):
        expected = braking_distance(45, RoadCondition.GRAVEL, 3).total_distance_ft
        assert stopping_distance_on_grade(45, 3, RoadCondition.GRAVEL) == expected

    def test_deterministic(self):
        a = braking_distance(57.3, RoadCondition.SNOW, 2.5, 1.2)
        b = braking_distance(57.3, RoadCondition.SNOW, 2.5, 1.2)
        assert a == b


class TestSkidMarks:

    def test_hundred_fifty_feet_dry(self):
        # √(2 × 32.174 × 0.7 × 150) = 82.197 ft/s → / 1.46667 = 56.04 mph
        assert speed_from_skid_marks(150, RoadCondition.DRY_ASPHALT, 0) == pytest.approx(56.04, abs=0.01)

    @pytest.mark.parametrize("speed", [5.0, 30.0, 60.0, 85.0])
    def test_inverts_braking_distance(self, speed: float):
        d = braking_distance(speed, RoadCondition.DRY_ASPHALT, 0).braking_distance_ft
        assert speed_from_skid_marks(d, RoadCondition.DRY_ASPHALT, 0) == pytest.approx(speed)

    def test_inverts_braking_distance_on_grade(self):
        d = braking_distance(40, RoadCondition.GRAVEL, -4).braking_distance_ft
        assert speed_from_skid_marks(d, RoadCondition.GRAVEL, -4) == pytest.approx(40)

    def test_zero_length_zero_speed(self):
        assert speed_from_skid_marks(0) == 0.0

    def test_measured_drag_factor_overrides_table(self):
        tabulated = speed_from_skid_marks(100, RoadCondition.DRY_ASPHALT)
        measured = speed_from_skid_marks(100, RoadCondition.DRY_ASPHALT, drag_factor=0.8)
        assert measured > tabulated
        assert measured == pytest.approx(math.sqrt(2 * 32.174 * 0.8 * 100) / 1.46667)

    def test_negative_length_rejected(self):
        with pytest.raises(InvalidInput):
            speed_from_skid_marks(-5)

    def test_undefined_on_steep_downhill(self):
        with pytest.raises(UndefinedPhysics):
            speed_from_skid_marks(80, RoadCondition.ICE, -16)

    def test_following_distance_two_second_rule(self):
        # 60 mph × 1.46667 × 2 = 176.0 ft
        assert following_distance(60) == pytest.approx(176.0, abs=0.01)

    def test_following_distance_rejects_negatives(self):
        with pytest.raises(InvalidInput):
            following_distance(-1)
        with pytest.raises(InvalidInput):
            following_distance(30, reaction_time_s=-2)


# ═══════════════════════════════════════════════════════════════════════════
# Crush damage
# ═══════════════════════════════════════════════════════════════════════════

class TestImpactSpeedFromDamage:

    def test_closed_form(self):
        # E = ½ × 150 × 12² = 10,800; v = √(2 × 10,800 / 108.783) = 14.091 ft/s
        expected = math.sqrt(2 * 10_800 / (3_500 / 32.174)) / 1.46667
        assert impact_speed_from_damage(12, 3_500) == pytest.approx(expected)

    def test_speed_scales_linearly_with_depth(self):
        assert impact_speed_from_damage(20, 3_000) == pytest.approx(2 * impact_speed_from_damage(10, 3_000))

    def test_stiffer_vehicle_implies_higher_speed(self):
        assert impact_speed_from_damage(10, 3_000, 300) > impact_speed_from_damage(10, 3_000, 150)

    @pytest.mark.parametrize("depth, weight", [(0, 3_000), (-2, 3_000), (10, 0), (10, -3_000)])
    def test_non_positive_inputs_rejected(self, depth: float, weight: float):
        with pytest.raises(InvalidInput):
            impact_speed_from_damage(depth, weight)

    def test_non_positive_stiffness_rejected(self):
        with pytest.raises(InvalidInput):
            impact_speed_from_damage(10, 3_000, 0)


# ═══════════════════════════════════════════════════════════════════════════
# Delta-V
# ═══════════════════════════════════════════════════════════════════════════

class TestDeltaV:

    def test_elastic_equal_masses_swap_velocities(self):
        result = delta_v(3_000, 30, 3_000, -30, restitution=1.0)
        assert result.vehicle1_delta_v_mph == pytest.approx(60.0)
        assert result.vehicle2_delta_v_mph == pytest.approx(60.0)

    def test_inelastic_common_velocity(self, sedan_into_parked_car: CollisionPair):
        result = delta_v_for_pair(sedan_into_parked_car)
        # Common velocity = 3500 × 40 / 6500 = 21.538 mph
        common = 3_500 * 40 / 6_500
        assert result.vehicle1_delta_v_mph == pytest.approx(40 - common)
        assert result.vehicle2_delta_v_mph == pytest.approx(common)

    def test_inelastic_delta_v_in_inverse_mass_ratio(self, sedan_into_parked_car: CollisionPair):
        result = delta_v_for_pair(sedan_into_parked_car)
        # Δv1 / Δv2 = m2 / m1
        ratio = result.vehicle1_delta_v_mph / result.vehicle2_delta_v_mph
        assert ratio == pytest.approx(3_000 / 3_500)

    def test_pair_matches_positional_call(self, sedan_into_parked_car: CollisionPair):
        assert delta_v_for_pair(sedan_into_parked_car) == delta_v(3_500, 40, 3_000, 0, 0)

    def test_magnitudes_are_non_negative(self):
        result = delta_v(2_000, -25, 4_500, 35, restitution=0.3)
        assert result.vehicle1_delta_v_mph >= 0
        assert result.vehicle2_delta_v_mph >= 0

    def test_restitution_increases_delta_v(self):
        plastic = delta_v(3_500, 40, 3_000, 0, restitution=0.0)
        bouncy = delta_v(3_500, 40, 3_000, 0, restitution=0.5)
        assert bouncy.vehicle1_delta_v_mph > plastic.vehicle1_delta_v_mph

    @pytest.mark.parametrize("e", [-0.01, 1.01, 2.0])
    def test_restitution_out_of_range_rejected(self, e: float):
        with pytest.raises(InvalidInput) as exc:
            delta_v(3_000, 30, 3_000, 0, restitution=e)
        assert exc.value.field == "restitution"

    def test_zero_weight_rejected(self):
        with pytest.raises(InvalidInput):
            delta_v(0, 30, 3_000, 0)


# ═══════════════════════════════════════════════════════════════════════════
# Time to collision
# ═══════════════════════════════════════════════════════════════════════════

class TestTimeToCollision:

    def test_closing_vehicles(self):
        # closing 10 mph = 14.6667 ft/s → 100 / 14.6667 = 6.818 s
        result = time_to_collision(100, 30, 20)
        assert isinstance(result, TimeToCollision)
        assert result.seconds == pytest.approx(6.818, abs=0.001)

    def test_stationary_target(self):
        result = time_to_collision(88.0002, 60)
        assert isinstance(result, TimeToCollision)
        assert result.seconds == pytest.approx(1.0)

    @pytest.mark.parametrize("v1, v2", [(20, 20), (20, 30), (0, 0), (-10, 0)])
    def test_not_closing_is_no_collision(self, v1: float, v2: float):
        result = time_to_collision(100, v1, v2)
        assert isinstance(result, NoCollision)
        assert result.kind == "no_collision"

    def test_zero_distance_closing(self):
        result = time_to_collision(0, 30)
        assert isinstance(result, TimeToCollision)
        assert result.seconds == 0.0

    def test_negative_distance_rejected(self):
        with pytest.raises(InvalidInput):
            time_to_collision(-1, 30)


# ═══════════════════════════════════════════════════════════════════════════
# Cornering
# ═══════════════════════════════════════════════════════════════════════════

class TestCornering:

    def test_lateral_acceleration(self):
        # 88.0002² / 500 / 32.174 = 0.4814 g
        assert lateral_acceleration(60, 500) == pytest.approx(0.4814, abs=0.0001)

    @pytest.mark.parametrize("radius", [0, -10])
    def test_lateral_acceleration_rejects_bad_radius(self, radius: float):
        with pytest.raises(InvalidInput):
            lateral_acceleration(60, radius)

    def test_rollover_speed(self):
        # √(32.174 × 100 × 5 / (2 × 2)) = 63.417 ft/s → 43.24 mph
        assert rollover_speed(5, 2, 100) == pytest.approx(43.24, abs=0.01)

    def test_rollover_matches_lateral_limit(self):
        """At the rollover speed, lateral acceleration equals T / 2h."""
        v = rollover_speed(5.2, 2.3, 250)
        assert lateral_acceleration(v, 250) == pytest.approx(5.2 / (2 * 2.3))

    @pytest.mark.parametrize("track, cg, radius", [(0, 2, 100), (5, 0, 100), (5, 2, 0), (-5, 2, 100)])
    def test_rollover_rejects_non_positive(self, track: float, cg: float, radius: float):
        with pytest.raises(InvalidInput):
            rollover_speed(track, cg, radius)

    def test_critical_curve_speed_flat(self):
        # √(32.174 × 300 × 0.7) = 82.197 ft/s → 56.04 mph
        assert critical_curve_speed(300) == pytest.approx(56.04, abs=0.01)

    def test_banked_curve_is_faster(self):
        assert critical_curve_speed(300, superelevation_percent=6) > critical_curve_speed(300)

    def test_curve_speed_undefined_for_extreme_bank(self):
        # 1 − 0.7 × 1.5 < 0
        with pytest.raises(UndefinedPhysics):
            critical_curve_speed(300, superelevation_percent=150)

    def test_curve_speed_undefined_for_adverse_camber(self):
        with pytest.raises(UndefinedPhysics):
            critical_curve_speed(300, RoadCondition.ICE, superelevation_percent=-20)


# ═══════════════════════════════════════════════════════════════════════════
# Vehicle characteristics
# ═══════════════════════════════════════════════════════════════════════════

class TestVehicleCharacteristics:

    def test_zero_to_sixty(self):
        # 88.0002 / 8 = 11.0 ft/s²
        assert acceleration_from_zero_to_sixty(8) == pytest.approx(11.0, abs=0.001)

    def test_zero_to_sixty_rejects_zero(self):
        with pytest.raises(InvalidInput):
            acceleration_from_zero_to_sixty(0)

    def test_axle_weights(self):
        result = axle_weights(3_500, 60, 40)
        assert result.front_lb == pytest.approx(2_100)
        assert result.rear_lb == pytest.approx(1_400)

    @pytest.mark.parametrize("front, rear", [(-1, 50), (50, 101), (120, 40)])
    def test_axle_weights_rejects_bad_percentages(self, front: float, rear: float):
        with pytest.raises(InvalidInput):
            axle_weights(3_500, front, rear)

    def test_axle_weights_rejects_zero_weight(self):
        with pytest.raises(InvalidInput):
            axle_weights(0, 50, 50)

    def test_aerodynamic_drag(self):
        # ½ × 0.002378 × 0.32 × 22 × 88.0002² = 64.8 lbf
        expected = 0.5 * 0.002378 * 0.32 * 22 * mph_to_fps(60) ** 2
        assert aerodynamic_drag(60, 22) == pytest.approx(expected)

    def test_truck_drag_exceeds_sedan(self):
        assert aerodynamic_drag(60, 30, VehicleClass.TRUCK) > aerodynamic_drag(60, 30, VehicleClass.SEDAN)

    def test_aerodynamic_drag_rejects_zero_area(self):
        with pytest.raises(InvalidInput):
            aerodynamic_drag(60, 0)


# ═══════════════════════════════════════════════════════════════════════════
# Float overflow
# ═══════════════════════════════════════════════════════════════════════════

class TestOverflow:
    """Finite inputs whose results leave the float range are rejected."""

    def test_kinetic_energy_overflow(self):
        with pytest.raises(UndefinedPhysics):
            kinetic_energy(3_500, 1e200)

    def test_momentum_overflow(self):
        with pytest.raises(UndefinedPhysics):
            momentum(1e300, 1e300)

    def test_braking_distance_overflow(self):
        with pytest.raises(UndefinedPhysics):
            braking_distance(1e200)

    def test_stopping_distance_overflow(self):
        with pytest.raises(UndefinedPhysics):
            stopping_distance_on_grade(1e200, 0)

    def test_following_distance_overflow(self):
        with pytest.raises(UndefinedPhysics):
            following_distance(1e300, 1e300)

    def test_aerodynamic_drag_overflow(self):
        with pytest.raises(UndefinedPhysics):
            aerodynamic_drag(1e200, 22)

    def test_lateral_acceleration_overflow(self):
        with pytest.raises(UndefinedPhysics):
            lateral_acceleration(1e200, 100)

    def test_zero_to_sixty_overflow(self):
        with pytest.raises(UndefinedPhysics):
            acceleration_from_zero_to_sixty(1e-320)

    def test_tiny_closing_speed_gives_no_infinite_time(self):
        with pytest.raises(UndefinedPhysics):
            time_to_collision(1e308, 1e-300, 0)

    def test_closing_speed_overflow(self):
        with pytest.raises(UndefinedPhysics):
            time_to_collision(100, 1e308, -1e308)

    def test_overflow_is_a_reconstruction_error(self):
        with pytest.raises(ReconstructionError):
            kinetic_energy(3_500, 1e200)

    def test_large_but_representable_values_still_computed(self):
        result = braking_distance(1e100)
        assert math.isfinite(result.total_distance_ft)
        assert time_to_collision(1e10, 1e-10, 0).seconds > 0
