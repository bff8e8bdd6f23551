"""
Purpose: Domain models for matching requests and results.
What it does:
- RequestContext (passenger location + zone resolved at scoring time)
- ScoreBreakdown (the seven raw criteria)
- ScoredCandidate (candidate, score, breakdown, captured zone id, match state)
- MatchOutcome = ACCEPTED | COMPLETED | REJECTED | TIMEOUT

Rule: No scoring logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from drivers.models import Candidate
from zones.models import LatLon, Zone

from .state_machines.match_state import MatchState


class MatchOutcome(str, Enum):
    ACCEPTED = "ACCEPTED"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"
    TIMEOUT = "TIMEOUT"

    @property
    def is_success(self) -> bool:
        return self in (MatchOutcome.ACCEPTED, MatchOutcome.COMPLETED)


@dataclass(frozen=True)
class RequestContext:
    """
    A ride request as seen by the engine.
    `zone` is resolved once when the context is built and never recomputed.
    """
    location: LatLon
    zone: Optional[Zone] = None
    passenger_id: Optional[str] = None

    @property
    def zone_id(self) -> Optional[str]:
        return self.zone.id if self.zone else None


@dataclass(frozen=True)
class ScoreBreakdown:
    distance_km: float
    eta_minutes: float
    rating: float
    acceptance_rate: float
    pheromone: float
    surge_multiplier: float
    earnings_potential: float

    def as_dict(self) -> Dict[str, float]:
        return {
            "distance_km": self.distance_km,
            "eta_minutes": self.eta_minutes,
            "rating": self.rating,
            "acceptance_rate": self.acceptance_rate,
            "pheromone": self.pheromone,
            "surge_multiplier": self.surge_multiplier,
            "earnings_potential": self.earnings_potential,
        }


@dataclass
class ScoredCandidate:
    """
    Ephemeral ranking result. Callers that want to report an outcome later
    must keep it until then.

    `state` is the only field that changes after ranking; MatchSelector moves
    it to a terminal state exactly once.
    """
    candidate: Candidate
    score: float
    breakdown: ScoreBreakdown
    zone_id: Optional[str]
    state: MatchState = field(default=MatchState.SCORED, compare=False)

    @property
    def candidate_id(self) -> str:
        return self.candidate.id
