"""Damage aggregation — per-zone observations → overall severity & total loss.

Every update returns a **new** ``VehicleDamageRecord`` with a refreshed
``updated_at``; the record passed in is never modified.

Overall severity:
  1. take the maximum zone severity (NONE for no zones)
  2. if three or more zones are MODERATE or worse, escalate one level,
     capped at CATASTROPHIC

Total loss (first matching rule wins):
  a. overall severity is CATASTROPHIC
  b. total estimated cost / vehicle value ≥ threshold (both known)
  c. three or more zones are SEVERE or worse
"""

from __future__ import annotations

import logging
import math

from accident_recon.config.constants import DEFAULT_CONSTANTS, PhysicalConstants
from accident_recon.engine.speed_estimates import estimate_from_damage
from accident_recon.errors import InvalidInput
from accident_recon.models.damage import (
    ESCALATION_ZONE_COUNT,
    DamageSeverity,
    DamageZone,
    DamageZoneObservation,
    VehicleDamageRecord,
    overall_severity,  # re-exported; the rule lives with the model
    utc_now,
)
from accident_recon.models.results import SpeedEstimate

logger = logging.getLogger(__name__)

TOTAL_LOSS_SEVERE_ZONE_COUNT = 3

ZONE_COMPONENTS: dict[DamageZone, tuple[str, ...]] = {
    DamageZone.FRONT: (
        "Front Bumper", "Grille", "Hood", "Headlights",
        "Radiator", "Engine", "Front Frame Rails", "Windshield",
    ),
    DamageZone.FRONT_LEFT: (
        "Left Front Fender", "Left Headlight", "Left Front Wheel",
        "Left Front Door", "Left Front Quarter Panel",
    ),
    DamageZone.FRONT_RIGHT: (
        "Right Front Fender", "Right Headlight", "Right Front Wheel",
        "Right Front Door", "Right Front Quarter Panel",
    ),
    DamageZone.LEFT: (
        "Left Doors", "Left Side Panels", "Left Side Mirrors",
        "Left Windows", "Left Rocker Panel",
    ),
    DamageZone.RIGHT: (
        "Right Doors", "Right Side Panels", "Right Side Mirrors",
        "Right Windows", "Right Rocker Panel",
    ),
    DamageZone.REAR: (
        "Rear Bumper", "Trunk/Tailgate", "Tail Lights",
        "Rear Window", "Rear Frame Rails", "Exhaust System",
    ),
    DamageZone.REAR_LEFT: (
        "Left Rear Fender", "Left Tail Light", "Left Rear Wheel",
        "Left Rear Door", "Left Rear Quarter Panel",
    ),
    DamageZone.REAR_RIGHT: (
        "Right Rear Fender", "Right Tail Light", "Right Rear Wheel",
        "Right Rear Door", "Right Rear Quarter Panel",
    ),
    DamageZone.ROOF: (
        "Roof Panel", "Sunroof", "Roof Rails", "A-Pillar", "B-Pillar", "C-Pillar",
    ),
    DamageZone.UNDERCARRIAGE: (
        "Frame", "Suspension", "Transmission", "Fuel Tank", "Exhaust System", "Drive Shaft",
    ),
}
"""Common components by zone, offered to inspectors as a checklist."""


# ═══════════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════════

def create_damage_record(vehicle_id: str) -> VehicleDamageRecord:
    """Empty record: no zones, drivable, airbags not deployed."""
    now = utc_now()
    return VehicleDamageRecord(vehicle_id=vehicle_id, created_at=now, updated_at=now)


def create_zone_observation(
    zone: DamageZone,
    severity: DamageSeverity,
    description: str = "",
    extent: float = 50.0,
    depth: float = 30.0,
    **details: object,
) -> DamageZoneObservation:
    """Observation with ``extent`` and ``depth`` clamped to 0–100.

    Extra keyword arguments (``components``, ``estimated_cost``,
    ``crush_depth_inches``, ``notes``...) are passed through to the model.
    """
    return DamageZoneObservation(
        zone=zone,
        severity=severity,
        description=description,
        extent=extent,
        depth=depth,
        **details,
    )


# ═══════════════════════════════════════════════════════════════════════════
# Aggregation
# ═══════════════════════════════════════════════════════════════════════════

def is_total_loss(
    record: VehicleDamageRecord,
    vehicle_value: float | None,
    cost_threshold: float = 0.75,
) -> bool:
    """Whether the vehicle should be written off.

    ``vehicle_value`` may be None when no valuation exists; the cost rule
    is then skipped.
    """
    if vehicle_value is not None and not math.isfinite(vehicle_value):
        raise InvalidInput("vehicle_value", vehicle_value, "must be a finite number")
    if vehicle_value is not None and vehicle_value < 0:
        raise InvalidInput("vehicle_value", vehicle_value, "must not be negative")
    if not math.isfinite(cost_threshold):
        raise InvalidInput("cost_threshold", cost_threshold, "must be a finite number")
    if cost_threshold <= 0:
        raise InvalidInput("cost_threshold", cost_threshold, "must be greater than zero")

    if record.overall_severity >= DamageSeverity.CATASTROPHIC:
        logger.debug("%s total loss: catastrophic severity", record.vehicle_id)
        return True

    cost = record.total_estimated_cost
    if cost is not None and vehicle_value:
        ratio = cost / vehicle_value
        if ratio >= cost_threshold:
            logger.debug(
                "%s total loss: repair ratio %.2f ≥ %.2f",
                record.vehicle_id, ratio, cost_threshold,
            )
            return True

    severe_zones = sum(1 for obs in record.zones if obs.severity >= DamageSeverity.SEVERE)
    if severe_zones >= TOTAL_LOSS_SEVERE_ZONE_COUNT:
        logger.debug("%s total loss: %d severe zones", record.vehicle_id, severe_zones)
        return True

    return False


def estimated_repair_cost(record: VehicleDamageRecord) -> float | None:
    """Sum of per-zone repair estimates, or None if no zone has one."""
    costs = [obs.estimated_cost for obs in record.zones if obs.estimated_cost is not None]
    return sum(costs) if costs else None


def impact_speed_estimate(
    record: VehicleDamageRecord,
    weight_lb: float,
    stiffness_lb_per_in: float = 150.0,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> SpeedEstimate | None:
    """Crush-energy speed estimate from the deepest measured crush.

    Returns None when no zone carries ``crush_depth_inches``.
    """
    depths = [obs.crush_depth_inches for obs in record.zones if obs.crush_depth_inches is not None]
    if not depths:
        return None
    return estimate_from_damage(max(depths), weight_lb, stiffness_lb_per_in, constants)


def damage_summary(record: VehicleDamageRecord) -> str:
    """Plain-English summary line for reports."""
    if not record.zones:
        return "No damage reported"

    zone_names = ", ".join(obs.zone.label for obs in record.zones)
    drivable = "Vehicle is drivable" if record.is_drivable else "Vehicle is not drivable"
    airbags = "Airbags deployed" if record.airbags_deployed else "Airbags not deployed"
    return f"{record.overall_severity.description} damage to {zone_names}. {drivable}. {airbags}."


# ═══════════════════════════════════════════════════════════════════════════
# Zone updates
# ═══════════════════════════════════════════════════════════════════════════

def _with_zones(
    record: VehicleDamageRecord,
    zones: tuple[DamageZoneObservation, ...],
) -> VehicleDamageRecord:
    return record.model_copy(update={"zones": zones, "updated_at": utc_now()})


def add_zone(record: VehicleDamageRecord, observation: DamageZoneObservation) -> VehicleDamageRecord:
    """Record ``observation``, replacing any earlier one for the same zone."""
    if record.zone(observation.zone) is not None:
        zones = tuple(
            observation if obs.zone == observation.zone else obs for obs in record.zones
        )
    else:
        zones = record.zones + (observation,)

    updated = _with_zones(record, zones)
    logger.debug(
        "%s: %s recorded as %s (overall %s)",
        record.vehicle_id, observation.zone.value,
        observation.severity.name, updated.overall_severity.name,
    )
    return updated


def remove_zone(record: VehicleDamageRecord, zone: DamageZone) -> VehicleDamageRecord:
    """Drop the observation for ``zone``; an absent zone is a no-op."""
    zones = tuple(obs for obs in record.zones if obs.zone != zone)
    if len(zones) != len(record.zones):
        logger.debug("%s: %s removed", record.vehicle_id, DamageZone(zone).value)
    return _with_zones(record, zones)


def add_photo(record: VehicleDamageRecord, zone: DamageZone, photo_id: str) -> VehicleDamageRecord:
    """Append ``photo_id`` to the zone's evidence list (duplicates kept)."""
    zones = tuple(
        obs.model_copy(update={"photo_ids": obs.photo_ids + (photo_id,)})
        if obs.zone == zone else obs
        for obs in record.zones
    )
    return _with_zones(record, zones)


def remove_photo(record: VehicleDamageRecord, zone: DamageZone, photo_id: str) -> VehicleDamageRecord:
    """Remove every occurrence of ``photo_id`` from the zone's evidence list."""
    zones = tuple(
        obs.model_copy(update={"photo_ids": tuple(p for p in obs.photo_ids if p != photo_id)})
        if obs.zone == zone else obs
        for obs in record.zones
    )
    return _with_zones(record, zones)


# ═══════════════════════════════════════════════════════════════════════════
# Flag updates
# ═══════════════════════════════════════════════════════════════════════════

def set_drivability(
    record: VehicleDamageRecord,
    is_drivable: bool,
    reason: str | None = None,
) -> VehicleDamageRecord:
    update: dict[str, object] = {"is_drivable": is_drivable, "updated_at": utc_now()}
    if reason:
        update["notes"] = f"Drivability: {reason}"
    return record.model_copy(update=update)


def set_airbag_deployed(record: VehicleDamageRecord, deployed: bool) -> VehicleDamageRecord:
    return record.model_copy(update={"airbags_deployed": deployed, "updated_at": utc_now()})


def add_fluid_leak(record: VehicleDamageRecord, fluid: str) -> VehicleDamageRecord:
    """Add ``fluid`` to the leak set; an already-listed fluid leaves the set as is."""
    leaks = record.fluid_leaks if fluid in record.fluid_leaks else record.fluid_leaks + (fluid,)
    return record.model_copy(update={"fluid_leaks": leaks, "updated_at": utc_now()})


def set_total_estimated_cost(
    record: VehicleDamageRecord,
    cost: float | None,
) -> VehicleDamageRecord:
    """Set (or clear, with None) the whole-vehicle repair estimate."""
    if cost is not None and cost < 0:
        raise InvalidInput("cost", cost, "must not be negative")
    return record.model_copy(update={"total_estimated_cost": cost, "updated_at": utc_now()})
