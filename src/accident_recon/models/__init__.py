"""Result and damage models — engine output contracts."""

from accident_recon.models.damage import (
    DamageSeverity,
    DamageZone,
    DamageZoneObservation,
    VehicleDamageRecord,
    overall_severity,
)
from accident_recon.models.results import (
    AxleWeights,
    BrakingDistance,
    CollisionOutcome,
    DeltaV,
    NoCollision,
    SpeedEstimate,
    TimeToCollision,
)

__all__ = [
    "DamageSeverity",
    "DamageZone",
    "DamageZoneObservation",
    "VehicleDamageRecord",
    "overall_severity",
    "AxleWeights",
    "BrakingDistance",
    "CollisionOutcome",
    "DeltaV",
    "NoCollision",
    "SpeedEstimate",
    "TimeToCollision",
]
