"""Truck ranking for cargo sets."""

from .selection_config import SelectionWeights
from .truck_selector import TruckSelector, RankedSelection, ScoredTruck, permit_penalty

__all__ = [
    "SelectionWeights",
    "TruckSelector",
    "RankedSelection",
    "ScoredTruck",
    "permit_penalty",
]
