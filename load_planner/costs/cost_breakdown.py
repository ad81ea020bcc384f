"""Cost breakdown data models.

Data classes representing truck and permit cost components of a load plan.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class TransportCostBreakdown:
    """
    Truck cost breakdown by load.

    Attributes:
        total_cost: Total truck cost across all loads
        route_miles: Route miles the costs are based on (0 when no route)
        per_mile_basis: True when costs are rate x route miles, False when
            they are base rates per truck
        cost_by_load: Cost per load index
        load_details: Per-load cost details
    """
    total_cost: float = 0.0
    route_miles: float = 0.0
    per_mile_basis: bool = False
    cost_by_load: Dict[int, float] = field(default_factory=dict)
    load_details: List[Dict] = field(default_factory=list)

    def __str__(self) -> str:
        """String representation."""
        basis = f"{self.route_miles:,.0f} mi" if self.per_mile_basis else "base rates"
        return (
            f"Transport Cost: ${self.total_cost:,.2f} "
            f"({len(self.cost_by_load)} loads, {basis})"
        )


@dataclass
class PermitCostBreakdown:
    """
    Permit fee and escort cost estimate for one load along a route.

    Attributes:
        total_cost: Permit fees plus escort cost
        permit_fees: Sum of state permit fees
        escort_cost: Pilot car cost including mobilization
        escort_vehicles: Escort vehicles hired for the trip
        escort_days: Days the escorts are hired for
        escort_miles: Miles driven in states requiring escorts
        cost_by_state: Permit fee per state code
        state_details: Per-state fee details
    """
    total_cost: float = 0.0
    permit_fees: float = 0.0
    escort_cost: float = 0.0
    escort_vehicles: int = 0
    escort_days: int = 0
    escort_miles: float = 0.0
    cost_by_state: Dict[str, float] = field(default_factory=dict)
    state_details: List[Dict] = field(default_factory=list)

    def __str__(self) -> str:
        """String representation."""
        return (
            f"Permit Cost: ${self.total_cost:,.2f} "
            f"(fees ${self.permit_fees:,.2f}, escorts ${self.escort_cost:,.2f}: "
            f"{self.escort_vehicles} vehicles x {self.escort_days} days)"
        )
