"""Load plan data models.

This module provides TruckLoad and LoadPlan, the output of the LoadPlanner.
These are pure data containers, no planning logic included.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .cargo_item import CargoUnit
from .fit_result import FitResult
from .permit_requirement import PermitRequirement
from .securement import LoadingStep, LoadSecurement
from .truck_type import TruckType

#: Message shown to operators for cargo that no candidate truck can carry
UNPLACEABLE_MESSAGE = "does not fit any available equipment"


class PlanningStrategy(str, Enum):
    """How the planner picks a truck from each ranked selection."""
    RECOMMENDED = "recommended"  # best score, permits allowed
    LEGAL_ONLY = "legal_only"  # best score among trucks that need no permits


@dataclass
class TruckLoad:
    """One truck and the cargo units it carries.

    Attributes:
        index: Position of the load in the plan (1-based)
        truck: Assigned truck type
        units: Cargo units carried, in placement order
        fit: Feasible FitResult for exactly these units on this truck
        permits: Permit requirements along the route (empty without a route)
        truck_cost: Estimated truck cost (rate x route miles, or base rate)
        permit_cost: Estimated permit fees plus escort cost
        securement: Tie-down plan for the units carried
        loading_steps: Loading sequence for the crew
    """
    index: int
    truck: TruckType
    units: List[CargoUnit]
    fit: FitResult
    permits: List[PermitRequirement] = field(default_factory=list)
    truck_cost: float = 0.0
    permit_cost: float = 0.0
    securement: Optional[LoadSecurement] = None
    loading_steps: List[LoadingStep] = field(default_factory=list)

    @property
    def total_weight(self) -> float:
        """Cargo weight on this truck."""
        return sum(unit.weight for unit in self.units)

    @property
    def unit_ids(self) -> List[str]:
        """IDs of the units carried."""
        return [unit.unit_id for unit in self.units]

    @property
    def escort_count(self) -> int:
        """Most escorts any state on the route requires for this load."""
        return max((p.escort_count for p in self.permits), default=0)

    @property
    def is_legal(self) -> bool:
        """Whether the load moves without permits."""
        return self.fit.is_legal and not self.permits

    def __str__(self) -> str:
        """String representation with load summary."""
        permit_states = ", ".join(p.state_code for p in self.permits) or "none"
        return (
            f"Load {self.index}: {self.truck.name} ({self.truck.id}), "
            f"{len(self.units)} units, {self.total_weight:,.0f} lbs "
            f"({self.fit.utilization.weight_pct:.1f}% weight), "
            f"permits: {permit_states}, cost ${self.truck_cost:,.2f}"
        )


@dataclass
class LoadPlan:
    """Complete load plan for one manifest.

    Every cargo unit of the manifest is either in exactly one load or listed
    in `unplaceable`.

    Attributes:
        loads: Truck loads in the order they were planned
        unplaceable: Units that fit no candidate truck
        permits: Permit requirements across all loads, merged per state in
            route order
        total_estimated_cost: Sum of truck costs
        permit_cost_estimate: Sum of permit and escort cost estimates
        route_miles: Total route miles (0 without a route)
        warnings: Operator-facing notes collected while planning
        strategy: Truck choice strategy the plan was built with
    """
    loads: List[TruckLoad] = field(default_factory=list)
    unplaceable: List[CargoUnit] = field(default_factory=list)
    permits: List[PermitRequirement] = field(default_factory=list)
    total_estimated_cost: float = 0.0
    permit_cost_estimate: float = 0.0
    route_miles: float = 0.0
    warnings: List[str] = field(default_factory=list)
    strategy: PlanningStrategy = PlanningStrategy.RECOMMENDED

    @property
    def total_trucks(self) -> int:
        """Number of trucks used."""
        return len(self.loads)

    @property
    def total_units(self) -> int:
        """Units placed on trucks."""
        return sum(len(load.units) for load in self.loads)

    @property
    def total_weight(self) -> float:
        """Cargo weight placed on trucks."""
        return sum(load.total_weight for load in self.loads)

    @property
    def permit_load_count(self) -> int:
        """Loads that need permits."""
        return sum(1 for load in self.loads if not load.is_legal)

    @property
    def unplaceable_ids(self) -> List[str]:
        """IDs of units that could not be placed."""
        return [unit.unit_id for unit in self.unplaceable]

    def is_complete(self) -> bool:
        """Check if every unit was placed.

        Returns:
            True if nothing is unplaceable, False otherwise
        """
        return len(self.unplaceable) == 0

    def summary(self) -> str:
        """Operator-facing multi-line summary of the plan."""
        lines = [str(self)]
        for load in self.loads:
            lines.append(f"  {load}")
            for permit in load.permits:
                lines.append(f"    {permit}")
            if load.securement is not None:
                lines.append(f"    {load.securement}")
        for unit in self.unplaceable:
            lines.append(f"  {unit.unit_id}: {UNPLACEABLE_MESSAGE}")
        for warning in self.warnings:
            lines.append(f"  warning: {warning}")
        return "\n".join(lines)

    def __str__(self) -> str:
        """String representation with plan summary."""
        status = "COMPLETE" if self.is_complete() else f"PARTIAL ({len(self.unplaceable)} unplaceable)"
        return (
            f"LoadPlan: {self.total_trucks} trucks, {self.total_units} units, "
            f"{self.total_weight:,.0f} lbs, est. ${self.total_estimated_cost:,.2f} "
            f"+ ${self.permit_cost_estimate:,.2f} permits - {status}"
        )
