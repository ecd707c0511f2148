"""Configuration models — constants and evidence input types."""

from accident_recon.config.constants import (
    DEFAULT_CONSTANTS,
    PhysicalConstants,
    RoadCondition,
    VehicleClass,
    load_constants,
)
from accident_recon.config.evidence import CollisionPair, SkidEvidence

__all__ = [
    "DEFAULT_CONSTANTS",
    "PhysicalConstants",
    "RoadCondition",
    "VehicleClass",
    "load_constants",
    "CollisionPair",
    "SkidEvidence",
]
