"""
Purpose: Central configuration for the demand field (single source of truth).
What it does:

Stores all tunable constants of the pheromone model:

MAX_INTENSITY = 100, MIN_INTENSITY = 0

DEFAULT_DECAY_RATE = 0.95 (5% evaporation per interval)

DECAY_INTERVAL = 60 seconds

INCREMENTS: REQUEST +5, MATCH_SUCCESS +10, MATCH_FAILED -3, CANCEL -2

INITIAL_INTENSITIES per zone id (30 when unlisted)

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .models import DemandAction


@dataclass(frozen=True)
class DemandPolicy:
    """
    Central configuration for the per-zone demand signal.
    """

    # --- Intensity bounds ---
    min_intensity: float = 0.0
    max_intensity: float = 100.0

    # --- Evaporation ---
    # Every zone is multiplied by its decay rate once per interval.
    # One global tick for all zones, not a timer per zone.
    default_decay_rate: float = 0.95
    decay_interval_seconds: float = 60.0

    # --- Deposits ---
    increments: Dict[DemandAction, float] = field(default_factory=lambda: {
        DemandAction.REQUEST: 5.0,
        DemandAction.MATCH_SUCCESS: 10.0,
        DemandAction.MATCH_FAILED: -3.0,
        DemandAction.CANCEL: -2.0,
    })

    # --- Seeding ---
    # Busy zones start warm so surge does not lag behind on a cold start.
    initial_intensities: Dict[str, float] = field(default_factory=lambda: {
        "ACG-CENTRO": 60.0,
        "ACG-TERMINAL": 75.0,
        "ACG-INDUSTRIAL": 40.0,
        "ACG-NORTE": 50.0,
        "ARU-CENTRO": 55.0,
        "ARU-AGRICOLA": 20.0,
        "VIA-ACG-ARU": 45.0,
    })
    default_initial_intensity: float = 30.0

    # --- Dashboards ---
    hot_zone_threshold: float = 60.0

    def clamp(self, intensity: float) -> float:
        return max(self.min_intensity, min(self.max_intensity, intensity))

    def increment_for(self, action: DemandAction | str) -> float:
        return self.increments.get(DemandAction(action), 0.0)

    def initial_intensity_for(self, zone_id: str) -> float:
        return self.clamp(self.initial_intensities.get(zone_id, self.default_initial_intensity))

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup.
        """
        if self.min_intensity < 0 or self.max_intensity <= self.min_intensity:
            raise ValueError("intensity bounds must satisfy 0 <= min < max")

        if not 0 < self.default_decay_rate < 1:
            raise ValueError("default_decay_rate must be in (0, 1)")

        if self.decay_interval_seconds <= 0:
            raise ValueError("decay_interval_seconds must be > 0")

        missing = [action.value for action in DemandAction if action not in self.increments]
        if missing:
            raise ValueError(f"increments missing for actions: {missing}")


def default_demand_policy() -> DemandPolicy:
    """
    Convenience factory for the default policy.
    """
    p = DemandPolicy()
    p.validate()
    return p
