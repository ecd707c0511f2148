"""Physical constants — process-wide, read-only configuration.

All working units are US customary: feet, pounds-force, seconds, slugs.
``DEFAULT_CONSTANTS`` is what every engine function uses unless a caller
passes its own instance (e.g. one loaded from a YAML override file).
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class RoadCondition(str, Enum):
    """Closed set of road surfaces with a tabulated friction coefficient."""

    DRY_ASPHALT = "DRY_ASPHALT"
    WET_ASPHALT = "WET_ASPHALT"
    SNOW = "SNOW"
    ICE = "ICE"
    GRAVEL = "GRAVEL"


class VehicleClass(str, Enum):
    """Body classes with a tabulated aerodynamic drag coefficient."""

    SEDAN = "SEDAN"
    SUV = "SUV"
    TRUCK = "TRUCK"


class PhysicalConstants(BaseModel):
    """Immutable constants bundle, initialised once at process start."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    gravity_fps2: float = Field(default=32.174, gt=0, description="Gravitational acceleration (ft/s²)")

    # --- Friction coefficients (drag factors) per road condition ---
    friction_dry_asphalt: float = Field(default=0.7, gt=0, le=1.0)
    friction_wet_asphalt: float = Field(default=0.5, gt=0, le=1.0)
    friction_snow: float = Field(default=0.3, gt=0, le=1.0)
    friction_ice: float = Field(default=0.15, gt=0, le=1.0)
    friction_gravel: float = Field(default=0.6, gt=0, le=1.0)

    # --- Aerodynamics ---
    air_density_slugs_ft3: float = Field(default=0.002378, gt=0, description="Sea-level air density (slugs/ft³)")
    drag_coefficient_sedan: float = Field(default=0.32, gt=0)
    drag_coefficient_suv: float = Field(default=0.35, gt=0)
    drag_coefficient_truck: float = Field(default=0.45, gt=0)

    def friction_for(self, condition: RoadCondition) -> float:
        """Friction coefficient for a road condition."""
        return {
            RoadCondition.DRY_ASPHALT: self.friction_dry_asphalt,
            RoadCondition.WET_ASPHALT: self.friction_wet_asphalt,
            RoadCondition.SNOW: self.friction_snow,
            RoadCondition.ICE: self.friction_ice,
            RoadCondition.GRAVEL: self.friction_gravel,
        }[RoadCondition(condition)]

    def drag_coefficient_for(self, vehicle_class: VehicleClass) -> float:
        """Aerodynamic drag coefficient for a vehicle body class."""
        return {
            VehicleClass.SEDAN: self.drag_coefficient_sedan,
            VehicleClass.SUV: self.drag_coefficient_suv,
            VehicleClass.TRUCK: self.drag_coefficient_truck,
        }[VehicleClass(vehicle_class)]


DEFAULT_CONSTANTS = PhysicalConstants()


def load_constants(path: str | Path) -> PhysicalConstants:
    """Load a YAML file of constant overrides on top of the defaults.

    The file is a flat mapping of ``PhysicalConstants`` field names to
    values.  Missing fields keep their defaults; unknown fields are
    rejected by pydantic.  An empty file yields ``PhysicalConstants()``.
    """
    path = Path(path)
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    constants = PhysicalConstants.model_validate(data)
    logger.info("Loaded physical constants from %s (%d overrides)", path, len(data))
    return constants
