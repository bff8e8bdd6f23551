#Purpose: Non-scoring hard eligibility filtering (rule gates).
#Builds the base candidate set before scoring.
#Typical responsibilities:
#has a known location at call time
#online/available (optional: the host usually pre-filters)
#Output: "rule-qualified" candidates, input order preserved (still not ranked).

from __future__ import annotations

from typing import Iterable, List

from drivers.models import Candidate, DriverStatus


def build_base_candidates(
        candidates: Iterable[Candidate],
        *,
        require_available: bool = False,
) -> List[Candidate]:
    """
    Drop candidates that cannot be scored.
    """
    eligible = []

    for candidate in candidates:
        #no location -> nothing to measure distance from
        if candidate.location is None:
            continue

        if require_available and candidate.status != DriverStatus.AVAILABLE:
            continue

        eligible.append(candidate)

    return eligible
