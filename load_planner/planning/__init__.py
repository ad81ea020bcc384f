"""Manifest partitioning into annotated truck loads."""

from load_planner.models.load_plan import PlanningStrategy
from .cancellation import CancellationToken
from .load_planner import LoadPlanner, PlannerState, planning_order

__all__ = [
    "CancellationToken",
    "LoadPlanner",
    "PlannerState",
    "PlanningStrategy",
    "planning_order",
]
