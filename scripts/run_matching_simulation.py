import csv
import logging
import os
import random
from datetime import datetime, timedelta, timezone
from typing import List

from demand.field import DemandField
from demand.heatmap import heatmap_frame
from dispatch.models import MatchOutcome
from dispatch.selector import MatchSelector
from drivers.models import Candidate
from routing.distance import offset_point
from zones.registry import default_registry

from scripts.generate_mock_drivers import generate_mock_drivers


class SimulatedClock:
    """
    Minute-stepping clock so the simulation exercises evaporation without real waits.
    """
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def load_candidates(filepath="mock_drivers_100.csv") -> List[Candidate]:
    candidates = []

    # Resolve the correct path depending on where the user runs the script from.
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    absolute_path = os.path.join(base_dir, filepath)

    if not os.path.exists(absolute_path):
        generate_mock_drivers(absolute_path, seed=7)

    with open(absolute_path, 'r') as file:
        reader = csv.DictReader(file)
        for row in reader:
            candidates.append(Candidate.from_record(row))
    return candidates


def run_simulation(requests_count=60, seed=7):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    rng = random.Random(seed)

    print("=== STARTING MATCHING SIMULATION ===")

    # 1. Load Data
    candidates = load_candidates()
    print(f"Loaded {len(candidates)} Candidates.\n")

    # 2. Configure System
    clock = SimulatedClock(datetime(2024, 1, 1, 7, 0, tzinfo=timezone.utc))
    registry = default_registry()
    field = DemandField(registry, clock=clock)
    selector = MatchSelector(field, clock=clock, require_available=True)

    zones = list(registry)
    outcomes = [MatchOutcome.ACCEPTED, MatchOutcome.COMPLETED, MatchOutcome.REJECTED, MatchOutcome.TIMEOUT]
    matched = 0

    # 3. Replay a stream of requests, one every ~20 seconds
    for i in range(requests_count):
        zone = rng.choice(zones)
        pickup = offset_point(
            zone.center,
            north_km=rng.uniform(-zone.radius_km, zone.radius_km) * 0.7,
            east_km=rng.uniform(-zone.radius_km, zone.radius_km) * 0.7,
        )

        context = selector.build_context(pickup, passenger_id=f"PAX-{i:03d}")
        # Drivers see a random subset of offers
        pool = rng.sample(candidates, k=min(25, len(candidates)))

        best = selector.find_best(context, pool)
        if best is None:
            print(f"[FAILED] Request {i} in {context.zone_id}: no candidates.")
        else:
            matched += 1
            outcome = rng.choices(outcomes, weights=[0.5, 0.2, 0.2, 0.1])[0]
            selector.record_outcome(best, outcome)
            print(
                f"[MATCH] Request {i} zone={context.zone_id} -> {best.candidate_id} "
                f"score={best.score:.1f} dist={best.breakdown.distance_km:.2f}km "
                f"surge={best.breakdown.surge_multiplier} outcome={outcome.value}"
            )

        clock.advance(20)
        selector.tick()

    # 4. Dashboard view
    print("\n=== SIMULATION COMPLETE ===")
    print(f"Requests matched: {matched} / {requests_count}")
    print("\n--- Demand Heatmap ---")
    print(heatmap_frame(field).to_string(index=False))


if __name__ == "__main__":
    run_simulation()
