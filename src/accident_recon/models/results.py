"""Result types — the contract between the engine and report / UI layers.

Every result is a frozen pydantic model.  Values are returned unrounded so
that closed-form checks hold exactly; presentation layers round for display.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════
# Stopping / braking
# ═══════════════════════════════════════════════════════════════════════════

class BrakingDistance(BaseModel):
    """Perception-reaction plus braking distance for a stop from speed (ft)."""

    model_config = ConfigDict(frozen=True)

    reaction_distance_ft: float
    """Distance covered at constant speed during the driver's reaction time."""

    braking_distance_ft: float
    """v² / (2 × g × effective friction) once the brakes are applied."""

    total_distance_ft: float
    """reaction_distance_ft + braking_distance_ft."""


# ═══════════════════════════════════════════════════════════════════════════
# Collision
# ═══════════════════════════════════════════════════════════════════════════

class DeltaV(BaseModel):
    """Velocity-change magnitude of each vehicle in a two-body collision.

    Direction is discarded: consumers use delta-v as a severity / injury
    proxy, so only the magnitude is reported.
    """

    model_config = ConfigDict(frozen=True)

    vehicle1_delta_v_mph: float = Field(..., ge=0)
    vehicle2_delta_v_mph: float = Field(..., ge=0)


class TimeToCollision(BaseModel):
    """The vehicles are closing; contact occurs after ``seconds``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["collision"] = "collision"
    seconds: float = Field(..., ge=0)


class NoCollision(BaseModel):
    """The vehicles are not closing, so they never make contact."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["no_collision"] = "no_collision"


CollisionOutcome = Annotated[
    Union[TimeToCollision, NoCollision],
    Field(discriminator="kind"),
]
"""Either a finite time to contact or the explicit no-collision variant."""


# ═══════════════════════════════════════════════════════════════════════════
# Vehicle
# ═══════════════════════════════════════════════════════════════════════════

class AxleWeights(BaseModel):
    """Static weight carried by each axle (lbf)."""

    model_config = ConfigDict(frozen=True)

    front_lb: float
    rear_lb: float


# ═══════════════════════════════════════════════════════════════════════════
# Speed estimates
# ═══════════════════════════════════════════════════════════════════════════

class SpeedEstimate(BaseModel):
    """A speed derived from one evidence type, with its uncertainty band."""

    model_config = ConfigDict(frozen=True)

    method: str
    """Human label for the evidence path, e.g. 'Skid Mark Analysis'."""

    speed_mph: float = Field(..., ge=0)
    speed_fps: float = Field(..., ge=0)
    speed_kph: float = Field(..., ge=0)

    confidence: float = Field(..., ge=0, le=1.0)
    """Relative trust in this method (0–1), used to weight combinations."""

    range_low_mph: float = Field(..., ge=0)
    range_high_mph: float = Field(..., ge=0)
