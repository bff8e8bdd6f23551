import threading
from datetime import datetime, timedelta, timezone

import pytest

from demand.field import DemandField
from demand.models import DemandAction
from demand.policy import DemandPolicy
from zones.models import City, Zone, ZoneType
from zones.registry import ZoneRegistry


def make_zone(zone_id, lat=9.5, lng=-69.2, radius_km=1.0):
    return Zone(zone_id, zone_id, City.ACARIGUA, (lat, lng), radius_km, ZoneType.RESIDENTIAL)


def test_init_seeds_one_signal_per_zone(demand_field, registry, t0):
    snapshot = demand_field.snapshot()

    assert [s.zone_id for s in snapshot] == registry.ids()
    assert demand_field.intensity_of("ACG-CENTRO") == 60.0
    assert demand_field.intensity_of("ACG-TERMINAL") == 75.0
    assert demand_field.intensity_of("ARU-AGRICOLA") == 20.0
    assert all(s.decay_rate == 0.95 for s in snapshot)
    assert all(s.last_updated == t0 for s in snapshot)
    assert demand_field.last_decay_at == t0


def test_unlisted_zone_defaults_to_30(clock):
    field = DemandField(ZoneRegistry([make_zone("NEW-ZONE")]), clock=clock)
    assert field.intensity_of("NEW-ZONE") == 30.0


def test_single_decay_tick(demand_field, t0):
    """
    Zone seeded at 60 with decay rate 0.95, one tick, no deposits -> 57.
    """
    assert demand_field.evaporate(t0 + timedelta(seconds=60)) is True
    assert demand_field.intensity_of("ACG-CENTRO") == pytest.approx(57.0)
    assert demand_field.intensity_of("ACG-TERMINAL") == pytest.approx(71.25)


def test_evaporate_is_gated_by_interval(demand_field, t0):
    # Not due yet
    assert demand_field.evaporate(t0 + timedelta(seconds=59)) is False
    assert demand_field.intensity_of("ACG-CENTRO") == 60.0

    # Due: applied once
    assert demand_field.evaporate(t0 + timedelta(seconds=60)) is True
    after_first = demand_field.intensity_of("ACG-CENTRO")

    # Second call in the same interval is a no-op
    assert demand_field.evaporate(t0 + timedelta(seconds=90)) is False
    assert demand_field.intensity_of("ACG-CENTRO") == after_first
    assert demand_field.last_decay_at == t0 + timedelta(seconds=60)

    # Next interval counts from the last decay, not from init
    assert demand_field.evaporate(t0 + timedelta(seconds=120)) is True
    assert demand_field.intensity_of("ACG-CENTRO") == pytest.approx(60.0 * 0.95 * 0.95)


def test_deposit_increments(demand_field):
    assert demand_field.deposit("ACG-CENTRO", DemandAction.REQUEST) == 65.0
    assert demand_field.deposit("ACG-CENTRO", DemandAction.MATCH_SUCCESS) == 75.0
    assert demand_field.deposit("ACG-CENTRO", DemandAction.MATCH_FAILED) == 72.0
    assert demand_field.deposit("ACG-CENTRO", "CANCEL") == 70.0
    assert demand_field.deposit("ACG-CENTRO", DemandAction.REQUEST, extra_delta=2.5) == 77.5


def test_deposit_updates_last_updated(demand_field, clock, t0):
    later = clock.advance(15)
    demand_field.deposit("ACG-NORTE", DemandAction.REQUEST)

    assert demand_field.signal("ACG-NORTE").last_updated == later
    assert demand_field.signal("ACG-CENTRO").last_updated == t0


def test_intensity_is_clamped(demand_field):
    for _ in range(10):
        demand_field.deposit("ACG-TERMINAL", DemandAction.MATCH_SUCCESS)
    assert demand_field.intensity_of("ACG-TERMINAL") == 100.0

    demand_field.deposit("ACG-TERMINAL", DemandAction.CANCEL, extra_delta=-500)
    assert demand_field.intensity_of("ACG-TERMINAL") == 0.0

    assert all(0 <= s.intensity <= 100 for s in demand_field.snapshot())


def test_match_success_never_decreases(demand_field):
    previous = demand_field.intensity_of("ARU-CENTRO")
    for _ in range(8):
        current = demand_field.deposit("ARU-CENTRO", DemandAction.MATCH_SUCCESS)
        assert current >= previous
        previous = current
    assert previous == 100.0


def test_unknown_zone_deposit_is_a_no_op(demand_field):
    before = demand_field.snapshot()

    assert demand_field.deposit("UNKNOWN_ZONE", DemandAction.REQUEST) is None

    assert demand_field.snapshot() == before
    assert demand_field.intensity_of("UNKNOWN_ZONE") is None
    assert demand_field.signal("UNKNOWN_ZONE") is None


def test_snapshot_does_not_mutate_state(demand_field):
    first = demand_field.snapshot()
    first.clear()

    second = demand_field.snapshot()
    third = demand_field.snapshot()
    assert len(second) == 7
    assert second == third


def test_snapshot_entries_are_point_in_time(demand_field):
    before = demand_field.signal("ACG-CENTRO")
    demand_field.deposit("ACG-CENTRO", DemandAction.MATCH_SUCCESS)

    assert before.intensity == 60.0
    assert demand_field.signal("ACG-CENTRO").intensity == 70.0


def test_intensity_at_uses_nearest_zone(demand_field, registry):
    assert demand_field.intensity_at(registry.get("ARU-CENTRO").center) == 55.0

    # The terminal center resolves to ACG-CENTRO for deposits (first match),
    # but the demand read uses the nearest center.
    assert demand_field.intensity_at(registry.get("ACG-TERMINAL").center) == 75.0


def test_intensity_at_without_zones(clock):
    field = DemandField(ZoneRegistry([]), clock=clock)
    assert field.intensity_at((9.5, -69.2)) == 0.0
    assert field.snapshot() == []
    assert field.evaporate(clock.advance(120)) is True


def test_hot_zones_sorted_descending(demand_field):
    hot = demand_field.hot_zones(60)
    assert [s.zone_id for s in hot] == ["ACG-TERMINAL", "ACG-CENTRO"]

    # Default threshold comes from the policy (60)
    assert demand_field.hot_zones() == hot

    assert [s.zone_id for s in demand_field.hot_zones(101)] == []


def test_reset_restores_seeds(demand_field, clock):
    demand_field.deposit("ACG-CENTRO", DemandAction.MATCH_SUCCESS)
    later = clock.advance(300)

    demand_field.reset()

    assert demand_field.intensity_of("ACG-CENTRO") == 60.0
    assert demand_field.last_decay_at == later


def test_restore_applies_known_zones_only(demand_field):
    restored = demand_field.restore([
        {"zone_id": "ACG-CENTRO", "intensity": 12.5, "decay_rate": 0.9},
        {"zone_id": "ACG-NORTE", "intensity": 150, "last_updated": "2024-02-29T10:00:00+00:00"},
        {"zone_id": "GHOST", "intensity": 99},
        {"zone_id": "ARU-CENTRO"},
    ])

    assert restored == 2
    assert demand_field.intensity_of("ACG-CENTRO") == 12.5
    assert demand_field.signal("ACG-CENTRO").decay_rate == 0.9
    assert demand_field.intensity_of("ACG-NORTE") == 100.0
    assert demand_field.signal("ACG-NORTE").last_updated.year == 2024
    assert demand_field.intensity_of("ARU-CENTRO") == 55.0


def test_restore_is_all_or_nothing(demand_field):
    before = demand_field.snapshot()

    with pytest.raises(ValueError):
        demand_field.restore([
            {"zone_id": "ACG-CENTRO", "intensity": 12.0},
            {"zone_id": "ACG-NORTE", "intensity": "n/a"},
        ])

    assert demand_field.snapshot() == before
    assert demand_field.intensity_of("ACG-CENTRO") == 60.0


@pytest.mark.parametrize(
    "bad",
    [
        {"decay_rate": "fast"},
        {"last_updated": "yesterday"},
    ],
)
def test_restore_rejects_malformed_fields(demand_field, bad):
    with pytest.raises(ValueError):
        demand_field.restore([
            {"zone_id": "ARU-CENTRO", "intensity": 10.0},
            dict({"zone_id": "ACG-CENTRO", "intensity": 12.0}, **bad),
        ])

    assert demand_field.intensity_of("ARU-CENTRO") == 55.0


def test_restore_keeps_timestamp_it_cannot_read(demand_field, t0):
    demand_field.restore([
        {"zone_id": "ACG-CENTRO", "intensity": 12.0, "last_updated": 1709280000},
        {"zone_id": "ACG-NORTE", "intensity": 40.0, "last_updated": "2024-02-29T10:00:00"},
    ])

    centro = demand_field.signal("ACG-CENTRO")
    assert centro.intensity == 12.0
    assert centro.last_updated == t0
    assert centro.to_record()["last_updated"].startswith("2024-03-01T08:00:00")

    # Naive ISO strings are taken as UTC
    assert demand_field.signal("ACG-NORTE").last_updated == datetime(2024, 2, 29, 10, 0, tzinfo=timezone.utc)


def test_naive_datetimes_are_taken_as_utc(demand_field, t0):
    assert demand_field.evaporate(datetime(2024, 3, 1, 8, 0, 30)) is False
    assert demand_field.evaporate(datetime(2024, 3, 1, 8, 1)) is True
    assert demand_field.intensity_of("ACG-CENTRO") == pytest.approx(57.0)
    assert demand_field.last_decay_at == t0 + timedelta(seconds=60)

    demand_field.deposit("ACG-NORTE", DemandAction.REQUEST, now=datetime(2024, 3, 1, 8, 2))
    assert demand_field.signal("ACG-NORTE").last_updated.tzinfo is not None


def test_policy_validation():
    with pytest.raises(ValueError):
        DemandPolicy(default_decay_rate=1.0).validate()
    with pytest.raises(ValueError):
        DemandPolicy(decay_interval_seconds=0).validate()
    with pytest.raises(ValueError):
        DemandPolicy(increments={DemandAction.REQUEST: 5.0}).validate()


def test_field_rejects_invalid_policy(registry, clock):
    with pytest.raises(ValueError):
        DemandField(registry, policy=DemandPolicy(decay_interval_seconds=-1), clock=clock)


def test_concurrent_deposits_do_not_lose_updates(clock):
    field = DemandField(
        ZoneRegistry([make_zone("Z")]),
        policy=DemandPolicy(initial_intensities={"Z": 0.0}),
        clock=clock,
    )

    def worker():
        for _ in range(100):
            # +5 -4.9 -> +0.1 per deposit, far from both bounds
            field.deposit("Z", DemandAction.REQUEST, extra_delta=-4.9)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert field.intensity_of("Z") == pytest.approx(80.0, abs=1e-6)


def test_racing_evaporate_applies_once(demand_field, t0):
    due = t0 + timedelta(seconds=60)
    barrier = threading.Barrier(16)
    results = []
    results_lock = threading.Lock()

    def worker():
        barrier.wait()
        applied = demand_field.evaporate(due)
        with results_lock:
            results.append(applied)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 1
    assert demand_field.intensity_of("ACG-CENTRO") == pytest.approx(57.0)
