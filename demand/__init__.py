"""
Demand signal ("pheromone") package.

Public API:
- Domain models: DemandSignal, DemandAction
- DemandPolicy + default_demand_policy
- DemandField (the shared, decaying per-zone state)
- Persistence: HttpDemandStore, DemandSync, DemandStoreError

heatmap_frame lives in demand.heatmap (pulls in pandas and the scoring module).
"""
from .models import DemandSignal, DemandAction, utc_now
from .policy import DemandPolicy, default_demand_policy
from .field import DemandField
from .persistence import HttpDemandStore, DemandSync, DemandStoreError, PersistenceChannel

__all__ = [
    "DemandSignal",
    "DemandAction",
    "utc_now",
    "DemandPolicy",
    "default_demand_policy",
    "DemandField",
    "HttpDemandStore",
    "DemandSync",
    "DemandStoreError",
    "PersistenceChannel",
]
