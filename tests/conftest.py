"""Shared test fixtures — constants, collision pairs and damage records."""

from __future__ import annotations

import pytest

from accident_recon.config import CollisionPair, PhysicalConstants, RoadCondition, SkidEvidence
from accident_recon.engine.damage import add_zone, create_damage_record, create_zone_observation
from accident_recon.models import DamageSeverity, DamageZone, VehicleDamageRecord


@pytest.fixture
def constants() -> PhysicalConstants:
    return PhysicalConstants()


@pytest.fixture
def sedan_into_parked_car() -> CollisionPair:
    """3,500 lb at 40 mph into a stationary 3,000 lb car, perfectly plastic."""
    return CollisionPair(
        weight1_lb=3_500,
        velocity1_mph=40.0,
        weight2_lb=3_000,
        velocity2_mph=0.0,
        restitution=0.0,
    )


@pytest.fixture
def skid_evidence() -> SkidEvidence:
    return SkidEvidence(length_ft=150.0, condition=RoadCondition.DRY_ASPHALT, grade_percent=0.0)


@pytest.fixture
def empty_record() -> VehicleDamageRecord:
    return create_damage_record("VEH-001")


@pytest.fixture
def three_moderate_record(empty_record: VehicleDamageRecord) -> VehicleDamageRecord:
    """Front, left and right all MODERATE — escalates to SEVERE."""
    record = empty_record
    for zone in (DamageZone.FRONT, DamageZone.LEFT, DamageZone.RIGHT):
        record = add_zone(record, create_zone_observation(zone, DamageSeverity.MODERATE))
    return record
