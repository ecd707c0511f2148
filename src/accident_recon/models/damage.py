"""Vehicle damage value types.

Records are frozen: the aggregator in ``engine.damage`` produces a new
record for every edit, so callers can keep earlier versions for audit.
``VehicleDamageRecord.overall_severity`` is computed from the zone set on
access by ``overall_severity`` below and is never an input field.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ═══════════════════════════════════════════════════════════════════════════
# Enumerations
# ═══════════════════════════════════════════════════════════════════════════

class DamageZone(str, Enum):
    """Body regions an inspector can record damage against."""

    FRONT = "FRONT"
    FRONT_LEFT = "FRONT_LEFT"
    FRONT_RIGHT = "FRONT_RIGHT"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    REAR = "REAR"
    REAR_LEFT = "REAR_LEFT"
    REAR_RIGHT = "REAR_RIGHT"
    ROOF = "ROOF"
    UNDERCARRIAGE = "UNDERCARRIAGE"

    @property
    def label(self) -> str:
        """Lower-case display name, e.g. 'front left'."""
        return self.value.lower().replace("_", " ")


class DamageSeverity(IntEnum):
    """Ordinal damage scale, NONE < MINOR < ... < CATASTROPHIC."""

    NONE = 0
    MINOR = 1
    MODERATE = 2
    SEVERE = 3
    MAJOR = 4
    CATASTROPHIC = 5

    def escalate(self, levels: int = 1) -> DamageSeverity:
        """Move ``levels`` steps up the scale, capped at CATASTROPHIC."""
        target = min(self.value + levels, DamageSeverity.CATASTROPHIC.value)
        return DamageSeverity(max(target, DamageSeverity.NONE.value))

    @property
    def description(self) -> str:
        return _SEVERITY_DESCRIPTIONS[self]


_SEVERITY_DESCRIPTIONS: dict[DamageSeverity, str] = {
    DamageSeverity.NONE: "No visible damage",
    DamageSeverity.MINOR: "Minor scratches, scuffs, or small dents",
    DamageSeverity.MODERATE: "Significant dents, broken lights, or body panel damage",
    DamageSeverity.SEVERE: "Crushed body panels, frame damage, or major component failure",
    DamageSeverity.MAJOR: "Extensive structural damage, multiple systems compromised",
    DamageSeverity.CATASTROPHIC: "Total loss, severe structural collapse, fire damage",
}


# ═══════════════════════════════════════════════════════════════════════════
# Zone observation
# ═══════════════════════════════════════════════════════════════════════════

class DamageZoneObservation(BaseModel):
    """One inspector observation for one body zone."""

    model_config = ConfigDict(frozen=True)

    zone: DamageZone
    severity: DamageSeverity
    description: str = ""
    extent: float = Field(
        default=50.0, allow_inf_nan=False,
        description="Share of the zone affected (%). Clamped to 0–100.",
    )
    depth: float = Field(
        default=30.0, allow_inf_nan=False,
        description="Damage depth (0 = surface, 100 = structural). Clamped to 0–100.",
    )
    components: tuple[str, ...] = ()
    photo_ids: tuple[str, ...] = ()
    """Evidence photo references in the order they were attached."""
    estimated_cost: float | None = Field(default=None, ge=0, description="Repair estimate ($)")
    crush_depth_inches: float | None = Field(
        default=None, gt=0, allow_inf_nan=False,
        description="Measured residual crush (in); enables the crush-energy speed estimate",
    )
    notes: str | None = None

    @field_validator("extent", "depth")
    @classmethod
    def _clamp_percentage(cls, v: float) -> float:
        return max(0.0, min(100.0, v))


ESCALATION_ZONE_COUNT = 3


def overall_severity(zones: Iterable[DamageZoneObservation]) -> DamageSeverity:
    """Worst zone severity, one level higher when three or more zones are
    MODERATE or worse (capped at CATASTROPHIC).  NONE for no zones."""
    zones = list(zones)
    if not zones:
        return DamageSeverity.NONE

    worst = DamageSeverity(max(obs.severity for obs in zones))
    significant = sum(1 for obs in zones if obs.severity >= DamageSeverity.MODERATE)

    if significant >= ESCALATION_ZONE_COUNT:
        return worst.escalate()
    return worst


# ═══════════════════════════════════════════════════════════════════════════
# Vehicle damage record
# ═══════════════════════════════════════════════════════════════════════════

class VehicleDamageRecord(BaseModel):
    """All damage recorded for one vehicle."""

    model_config = ConfigDict(frozen=True)

    vehicle_id: str
    zones: tuple[DamageZoneObservation, ...] = ()
    """At most one observation per zone, in the order zones were first added."""
    is_drivable: bool = True
    airbags_deployed: bool = False
    fluid_leaks: tuple[str, ...] = ()
    total_estimated_cost: float | None = Field(default=None, ge=0, description="Total repair estimate ($)")
    notes: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("zones")
    @classmethod
    def _one_observation_per_zone(
        cls, v: tuple[DamageZoneObservation, ...],
    ) -> tuple[DamageZoneObservation, ...]:
        seen = [obs.zone for obs in v]
        if len(seen) != len(set(seen)):
            raise ValueError("each zone may have at most one observation")
        return v

    @field_validator("fluid_leaks")
    @classmethod
    def _dedupe_fluids(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(v))

    @computed_field
    @property
    def overall_severity(self) -> DamageSeverity:
        """Aggregated severity of the current zone set."""
        return overall_severity(self.zones)

    def zone(self, zone: DamageZone) -> DamageZoneObservation | None:
        """Observation recorded for ``zone``, or None."""
        for obs in self.zones:
            if obs.zone == zone:
                return obs
        return None
