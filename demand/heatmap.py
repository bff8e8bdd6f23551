"""
Purpose: Dashboard view of the demand field.
What it does:
Turns a DemandField snapshot into a pandas DataFrame (one row per zone)
with the surge multiplier each zone would currently apply, hottest first.
Read-only: built from snapshot(), never touches field state.
"""

from __future__ import annotations

import pandas as pd

from dispatch.scoring import surge_multiplier

from .field import DemandField

HEATMAP_COLUMNS = [
    "zone_id",
    "zone_name",
    "city",
    "lat",
    "lng",
    "intensity",
    "surge_multiplier",
    "last_updated",
]


def heatmap_frame(field: DemandField) -> pd.DataFrame:
    rows = []
    for signal in field.snapshot():
        rows.append({
            "zone_id": signal.zone_id,
            "zone_name": signal.zone_name,
            "city": signal.city,
            "lat": signal.lat,
            "lng": signal.lng,
            "intensity": signal.intensity,
            "surge_multiplier": surge_multiplier(signal.intensity),
            "last_updated": signal.last_updated,
        })

    frame = pd.DataFrame(rows, columns=HEATMAP_COLUMNS)
    return frame.sort_values("intensity", ascending=False, kind="stable").reset_index(drop=True)
