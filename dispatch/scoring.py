"""
Purpose: Ranking model (the "who is best" layer).
What it does:

Computes for each (candidate, request) pair:

distance_km = great-circle km(candidate -> passenger)

eta_minutes = distance_km / 30 km/h * 60

surge_multiplier = step(pheromone): <30 -> 1.0, <60 -> 1.2, <80 -> 1.5, else 1.8

earnings_potential = (2.5 + distance_km * 0.8) * surge_multiplier

Normalizes every criterion to [0, 1] and returns

total = 100 * sum(weight_i * normalized_i)

Rule: Scoring is a pure function of its four inputs. It does not read or
write the demand field and never validates weights.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from drivers.models import Candidate
from routing.distance import haversine_km

from .models import RequestContext, ScoreBreakdown
from .policy import WeightVector

# Average city speed used for ETA estimates.
AVERAGE_SPEED_KMH = 30.0

# Earnings model (USD).
BASE_FARE = 2.5
PER_KM_RATE = 0.8

# Earnings at or above this saturate the normalized criterion.
EARNINGS_CAP = 20.0

# (lower bound of intensity band, multiplier), highest band first.
SURGE_BANDS = (
    (80.0, 1.8),
    (60.0, 1.5),
    (30.0, 1.2),
)


@dataclass(frozen=True)
class ScoreResult:
    total: float
    breakdown: ScoreBreakdown
    normalized: Dict[str, float]


def eta_minutes(distance_km: float) -> float:
    return distance_km / AVERAGE_SPEED_KMH * 60


def surge_multiplier(pheromone: float) -> float:
    for lower_bound, multiplier in SURGE_BANDS:
        if pheromone >= lower_bound:
            return multiplier
    return 1.0


def estimate_earnings(distance_km: float, surge: float) -> float:
    return (BASE_FARE + distance_km * PER_KM_RATE) * surge


def build_breakdown(candidate: Candidate, context: RequestContext, demand_intensity: float) -> ScoreBreakdown:
    """
    Raw criteria for one candidate. The candidate must have a location.
    """
    if candidate.location is None:
        raise ValueError(f"Candidate {candidate.id} has no location")

    distance = haversine_km(candidate.location, context.location)
    surge = surge_multiplier(demand_intensity)

    return ScoreBreakdown(
        distance_km=distance,
        eta_minutes=eta_minutes(distance),
        rating=candidate.rating,
        acceptance_rate=candidate.acceptance_rate,
        pheromone=demand_intensity,
        surge_multiplier=surge,
        earnings_potential=estimate_earnings(distance, surge),
    )


def normalize(breakdown: ScoreBreakdown) -> Dict[str, float]:
    """
    Map each criterion to [0, 1], higher is better. Keys match WeightVector fields.
    """
    return {
        "distance": 1 / (1 + breakdown.distance_km),
        "eta": 1 / (1 + breakdown.eta_minutes / 10),
        "rating": breakdown.rating / 5,
        "acceptance": breakdown.acceptance_rate,
        "pheromone": breakdown.pheromone / 100,
        "surge": (breakdown.surge_multiplier - 1) / 1,
        "earnings": min(breakdown.earnings_potential / EARNINGS_CAP, 1.0),
    }


def score(
    candidate: Candidate,
    context: RequestContext,
    demand_intensity: float,
    weights: WeightVector,
) -> ScoreResult:
    """
    Composite score of a candidate for a request, on a 0-100 scale
    when the weights sum to 1.0.
    """
    breakdown = build_breakdown(candidate, context, demand_intensity)
    normalized = normalize(breakdown)

    weighted = sum(getattr(weights, name) * value for name, value in normalized.items())

    return ScoreResult(
        total=100 * weighted,
        breakdown=breakdown,
        normalized=normalized,
    )
