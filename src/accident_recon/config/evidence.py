"""Transient evidence inputs — collision pairs and skid-mark measurements."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from accident_recon.config.constants import RoadCondition


class CollisionPair(BaseModel):
    """Two vehicles entering a collision; input to the delta-v calculation."""

    model_config = ConfigDict(frozen=True)

    weight1_lb: float = Field(..., gt=0, description="Vehicle 1 weight (lbf)")
    velocity1_mph: float = Field(..., description="Vehicle 1 pre-impact velocity (mph, signed along the line of impact)")
    weight2_lb: float = Field(..., gt=0, description="Vehicle 2 weight (lbf)")
    velocity2_mph: float = Field(default=0.0, description="Vehicle 2 pre-impact velocity (mph, signed)")
    restitution: float = Field(
        default=0.0, ge=0, le=1.0,
        description="Coefficient of restitution: 0 = perfectly inelastic, 1 = perfectly elastic",
    )


class SkidEvidence(BaseModel):
    """One measured skid mark, the base case for a speed sensitivity sweep."""

    model_config = ConfigDict(frozen=True)

    length_ft: float = Field(..., ge=0, description="Measured skid length (ft)")
    condition: RoadCondition = Field(default=RoadCondition.DRY_ASPHALT)
    grade_percent: float = Field(default=0.0, description="Road grade (%); positive = uphill")
    friction_override: float | None = Field(
        default=None, gt=0, le=1.0,
        description="Measured drag factor (e.g. from a test skid). "
                    "None = use the tabulated value for ``condition``.",
    )
