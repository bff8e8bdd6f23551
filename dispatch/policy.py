"""
Purpose: Central configuration for candidate scoring.
What it does:

Stores the seven scoring weights (runtime-tunable):

w_distance = 0.30, w_eta = 0.25, w_rating = 0.15, w_acceptance = 0.10,
w_pheromone = 0.10, w_surge = 0.05, w_earnings = 0.05

Weights are an operational knob: they are NOT required to sum to 1.0.
Drift is reported at the boundary (merged/check_sum), never inside scoring.

Rule: No scoring logic here, just parameters.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping

logger = logging.getLogger(__name__)

WEIGHT_NAMES = (
    "distance",
    "eta",
    "rating",
    "acceptance",
    "pheromone",
    "surge",
    "earnings",
)


@dataclass(frozen=True)
class WeightVector:
    """
    Weights of the composite match score.
    Immutable: a runtime update produces a new vector via merged().
    """

    distance: float = 0.30
    eta: float = 0.25
    rating: float = 0.15
    acceptance: float = 0.10
    pheromone: float = 0.10
    surge: float = 0.05
    earnings: float = 0.05

    # How far the sum may drift from 1.0 before a warning is logged.
    sum_tolerance: float = 0.25

    @property
    def total(self) -> float:
        return sum(getattr(self, name) for name in WEIGHT_NAMES)

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in WEIGHT_NAMES}

    def merged(self, updates: Mapping[str, Any]) -> WeightVector:
        """
        Overlay a partial update on this vector.

        Unknown keys are ignored (and logged). Accepts both "distance" and the
        legacy "w_distance" spelling. The sum is not enforced.
        """
        known = {f.name for f in fields(self)}
        changes: Dict[str, float] = {}
        for key, value in updates.items():
            name = key[2:] if key.startswith("w_") else key
            if name not in known:
                logger.warning("Ignoring unknown weight %r", key)
                continue
            changes[name] = float(value)

        vector = replace(self, **changes)
        vector.check_sum()
        return vector

    def normalized(self) -> WeightVector:
        """
        Same proportions, scaled so the seven weights sum to 1.0.
        """
        total = self.total
        if total <= 0:
            return self
        return replace(self, **{name: getattr(self, name) / total for name in WEIGHT_NAMES})

    def check_sum(self) -> bool:
        """
        Warn (never raise) when the weights drift far from summing to 1.0.
        """
        total = self.total
        if abs(total - 1.0) > self.sum_tolerance:
            logger.warning("Scoring weights sum to %.3f (expected ~1.0): %s", total, self.as_dict())
            return False
        return True

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        for name in WEIGHT_NAMES:
            if getattr(self, name) < 0:
                raise ValueError(f"weight {name} must be >= 0")

        if self.sum_tolerance < 0:
            raise ValueError("sum_tolerance must be >= 0")

    def to_record(self) -> Dict[str, float]:
        return asdict(self)


def default_weights() -> WeightVector:
    """
    Convenience factory for the default weights.
    """
    w = WeightVector()
    w.validate()
    return w
