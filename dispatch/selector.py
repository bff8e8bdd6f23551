"""
Purpose: Orchestrator / decision pipeline (the "glue").
What it does:
Accepts a ride request and a point-in-time candidate list, resolves the
passenger's zone, reads the demand field once, scores every candidate and
returns the best (or top k). Later, the caller reports the outcome and the
selector feeds it back into the demand field at the zone captured at
scoring time.

Rule: Selector owns the feedback loop; scoring stays pure and the demand
field owns its own locking.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Iterable, List, Mapping, Optional, Union

from demand.field import Clock, DemandField
from demand.models import DemandAction, DemandSignal
from demand.persistence import DemandSync
from drivers.models import Candidate
from routing.geofence import GeoIndex
from zones.models import LatLon

from .candidate_filter import build_base_candidates
from .models import MatchOutcome, RequestContext, ScoredCandidate
from .policy import WeightVector, default_weights
from .scoring import score
from .state_machines.match_state import MatchState, transition_match

logger = logging.getLogger(__name__)


class MatchSelector:
    """
    Ranks candidates for a request and records match outcomes.

    Thread-safe: the demand field serializes its own reads/writes and the
    weight vector is an immutable value swapped under a lock.
    """

    def __init__(
        self,
        demand_field: DemandField,
        *,
        geo_index: Optional[GeoIndex] = None,
        weights: Optional[WeightVector] = None,
        clock: Optional[Clock] = None,
        sync: Optional[DemandSync] = None,
        evaporate_on_read: bool = True,
        reinforce_on_find_best: bool = True,
        require_available: bool = False,
    ):
        self.demand_field = demand_field
        self.geo_index = geo_index or demand_field.geo_index
        self.clock = clock or demand_field.clock
        self.sync = sync
        self.evaporate_on_read = evaporate_on_read
        self.reinforce_on_find_best = reinforce_on_find_best
        self.require_available = require_available

        self._weights_lock = threading.Lock()
        self._match_lock = threading.Lock()
        self._weights = weights or default_weights()

    # --- Requests ---

    def build_context(self, location: LatLon, passenger_id: Optional[str] = None) -> RequestContext:
        """
        Capture the passenger's zone now; outcomes are recorded against it later.
        """
        return RequestContext(
            location=location,
            zone=self.geo_index.resolve_zone(location),
            passenger_id=passenger_id,
        )

    def find_best(self, context: RequestContext, candidates: Iterable[Candidate]) -> Optional[ScoredCandidate]:
        """
        Highest-scoring candidate, or None when nobody can be scored.

        With reinforce_on_find_best (default) a successful lookup deposits a
        REQUEST event in the request's zone. Turn it off to have the host call
        record_request() itself once it commits to a selection.
        """
        ranked = self._rank(context, candidates)
        if not ranked:
            return None

        best = ranked[0]
        if self.reinforce_on_find_best:
            self.record_request(best)
        return best

    def find_top_k(self, context: RequestContext, candidates: Iterable[Candidate], k: int = 3) -> List[ScoredCandidate]:
        """
        The k best candidates, best first. Never deposits.
        """
        if k <= 0:
            return []
        return self._rank(context, candidates)[:k]

    def _rank(self, context: RequestContext, candidates: Iterable[Candidate]) -> List[ScoredCandidate]:
        eligible = build_base_candidates(candidates, require_available=self.require_available)
        if not eligible:
            return []

        if self.evaporate_on_read:
            self.demand_field.evaporate(self.clock())

        # One read for the whole request so every candidate sees the same signal.
        intensity = self.demand_field.intensity_at(context.location)
        weights = self.get_weights()

        scored: List[ScoredCandidate] = []
        for candidate in eligible:
            result = score(candidate, context, intensity, weights)
            scored.append(
                ScoredCandidate(
                    candidate=candidate,
                    score=result.total,
                    breakdown=result.breakdown,
                    zone_id=context.zone_id,
                )
            )

        # Stable sort: equal scores keep provider order.
        scored.sort(key=lambda s: s.score, reverse=True)
        return scored

    # --- Feedback ---

    def record_request(self, scored: ScoredCandidate) -> Optional[float]:
        """
        Reinforce the request's zone with a REQUEST deposit.
        """
        if scored.zone_id is None:
            return None
        return self.demand_field.deposit(scored.zone_id, DemandAction.REQUEST, now=self.clock())

    def record_outcome(
        self,
        scored: ScoredCandidate,
        outcome: Union[MatchOutcome, str],
        completion_time: Optional[float] = None,
    ) -> MatchState:
        """
        Feed a match outcome back into the demand field.

        ACCEPTED/COMPLETED deposit MATCH_SUCCESS, REJECTED/TIMEOUT deposit
        MATCH_FAILED, always at scored.zone_id (the zone captured at scoring
        time, never re-resolved from where the driver is now).

        A result takes one outcome: reporting it again, or after release(),
        raises MatchStateException and deposits nothing.
        """
        outcome = MatchOutcome(outcome)
        action = DemandAction.MATCH_SUCCESS if outcome.is_success else DemandAction.MATCH_FAILED
        self._finish(scored, MatchState.OUTCOME_RECORDED)

        intensity = None
        if scored.zone_id is not None:
            intensity = self.demand_field.deposit(scored.zone_id, action, now=self.clock())

        logger.info(
            "Match result recorded: driver=%s zone=%s result=%s score=%.2f completion_time=%s intensity=%s",
            scored.candidate_id,
            scored.zone_id,
            outcome.value,
            scored.score,
            completion_time,
            intensity,
        )
        return scored.state

    def release(self, scored: ScoredCandidate) -> MatchState:
        """
        The caller is done with a result and will not report an outcome.
        Nothing is deposited.
        """
        self._finish(scored, MatchState.UNRECORDED)
        logger.debug("Match for driver %s released without outcome", scored.candidate_id)
        return scored.state

    def _finish(self, scored: ScoredCandidate, target: MatchState) -> None:
        with self._match_lock:
            scored.state = transition_match(scored.state, target)

    def record_cancel(self, zone_id: str) -> Optional[float]:
        """
        Passenger cancelled a request raised in `zone_id`.
        """
        return self.demand_field.deposit(zone_id, DemandAction.CANCEL, now=self.clock())

    # --- Host-managed maintenance ---

    def tick(self, now: Optional[datetime] = None) -> bool:
        """
        Periodic hook for the host: evaporate if due, then persist in the background.
        """
        evaporated = self.demand_field.evaporate(now or self.clock())
        if self.sync is not None:
            self.sync.schedule_save(self.demand_field)
        return evaporated

    # --- Dashboards ---

    def snapshot(self) -> List[DemandSignal]:
        return self.demand_field.snapshot()

    def hot_zones(self, threshold: Optional[float] = None) -> List[DemandSignal]:
        return self.demand_field.hot_zones(threshold)

    # --- Runtime tuning ---

    def get_weights(self) -> WeightVector:
        with self._weights_lock:
            return self._weights

    def set_weights(self, updates: Union[WeightVector, Mapping[str, float]]) -> WeightVector:
        """
        Merge a (partial) weight update over the current vector.
        The sum is not enforced; drift is only logged.
        """
        with self._weights_lock:
            if isinstance(updates, WeightVector):
                updates.check_sum()
                self._weights = updates
            else:
                self._weights = self._weights.merged(updates)
            logger.info("Scoring weights updated: %s", self._weights.as_dict())
            return self._weights
