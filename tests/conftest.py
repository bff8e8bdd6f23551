from datetime import datetime, timedelta, timezone

import pytest

from demand.field import DemandField
from dispatch.selector import MatchSelector
from routing.geofence import GeoIndex
from zones.registry import default_registry


class FixedClock:
    """
    Manually advanced clock so decay gating is tested without real waits.
    """
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def t0():
    return datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(t0):
    return FixedClock(t0)


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def geo_index(registry):
    return GeoIndex(registry)


@pytest.fixture
def demand_field(registry, geo_index, clock):
    return DemandField(registry, geo_index=geo_index, clock=clock)


@pytest.fixture
def selector(demand_field, clock):
    return MatchSelector(demand_field, clock=clock)
