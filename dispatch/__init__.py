#Expose the high-level pipeline pieces:
#Candidate filtering (hard rules)
#Scoring / ranking (pure)
#MatchSelector orchestrator (find_best / find_top_k / record_outcome)

from .candidate_filter import build_base_candidates
from .models import MatchOutcome, RequestContext, ScoreBreakdown, ScoredCandidate
from .policy import WeightVector, default_weights
from .scoring import score, surge_multiplier, estimate_earnings
from .selector import MatchSelector #the main entry point for matching a request to a driver
from .state_machines.match_state import MatchState

__all__ = [
    "build_base_candidates",
    "MatchOutcome",
    "RequestContext",
    "ScoreBreakdown",
    "ScoredCandidate",
    "WeightVector",
    "default_weights",
    "score",
    "surge_multiplier",
    "estimate_earnings",
    "MatchSelector",
    "MatchState",
]
