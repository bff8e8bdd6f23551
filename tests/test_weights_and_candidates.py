import pytest

from dispatch.candidate_filter import build_base_candidates
from dispatch.policy import WEIGHT_NAMES, WeightVector, default_weights
from drivers.models import Candidate, DriverStatus


def test_default_weights():
    weights = default_weights()
    assert weights.as_dict() == {
        "distance": 0.30,
        "eta": 0.25,
        "rating": 0.15,
        "acceptance": 0.10,
        "pheromone": 0.10,
        "surge": 0.05,
        "earnings": 0.05,
    }
    assert weights.total == pytest.approx(1.0)
    assert weights.check_sum() is True


def test_merged_accepts_legacy_prefix_and_keeps_the_rest():
    weights = default_weights().merged({"w_pheromone": 0.2, "w_distance": 0.2})

    assert weights.pheromone == 0.2
    assert weights.distance == 0.2
    assert weights.eta == 0.25


def test_merged_does_not_enforce_the_sum():
    weights = default_weights().merged({"rating": 3.0})
    assert weights.total == pytest.approx(3.85)
    assert weights.check_sum() is False


def test_normalized_sums_to_one():
    weights = WeightVector(2, 2, 1, 1, 1, 1, 2).normalized()
    assert weights.total == pytest.approx(1.0)
    assert weights.distance == pytest.approx(0.2)
    assert set(weights.as_dict()) == set(WEIGHT_NAMES)


def test_validate_rejects_negative_weights():
    with pytest.raises(ValueError):
        WeightVector(eta=-0.1).validate()


def test_candidate_factory_defaults():
    candidate = Candidate.new("d1", 9.55, -69.19)
    assert candidate.location == (9.55, -69.19)
    assert candidate.rating == 4.0
    assert candidate.acceptance_rate == 0.85
    assert candidate.status == DriverStatus.AVAILABLE

    assert Candidate.new("d2", lat=9.55).location is None
    assert Candidate.new("d3", 9.55, -69.19, rating=0.0).rating == 0.0


def test_candidate_from_provider_row():
    row = {"driver_id": "DRV-001", "lat": "9.56", "lng": "-69.2", "rating": "", "acceptance_rate": "0.7", "status": "offline"}
    candidate = Candidate.from_record(row)

    assert candidate.id == "DRV-001"
    assert candidate.location == (9.56, -69.2)
    assert candidate.rating == 4.0
    assert candidate.acceptance_rate == 0.7
    assert candidate.status == DriverStatus.OFFLINE

    no_gps = Candidate.from_record({"driver_id": "DRV-002", "lat": "", "lng": ""})
    assert not no_gps.has_location


def test_build_base_candidates():
    candidates = [
        Candidate.new("a", 9.55, -69.19),
        Candidate.new("b"),
        Candidate.new("c", 9.56, -69.2, status="paused"),
    ]

    assert [c.id for c in build_base_candidates(candidates)] == ["a", "c"]
    assert [c.id for c in build_base_candidates(candidates, require_available=True)] == ["a"]
    assert build_base_candidates([]) == []
