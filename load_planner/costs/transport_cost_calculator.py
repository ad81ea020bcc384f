"""Transport cost calculator.

Truck cost of a load is the truck's cost per mile times the total route
miles. Without a route the base cost per mile is reported per truck.
"""

from typing import List

from load_planner.models.load_plan import TruckLoad
from load_planner.models.truck_type import TruckType
from .cost_breakdown import TransportCostBreakdown


class TransportCostCalculator:
    """
    Calculates truck costs for the loads of a plan.

    Example:
        calculator = TransportCostCalculator()
        breakdown = calculator.calculate_transport_cost(plan.loads, plan.route_miles)
        print(f"Total transport cost: ${breakdown.total_cost:,.2f}")
    """

    def load_cost(self, truck: TruckType, route_miles: float) -> float:
        """
        Cost of one truck over the route.

        Args:
            truck: Truck type used
            route_miles: Total route miles, 0 when no route is known

        Returns:
            cost_per_mile x route_miles, or cost_per_mile without a route
        """
        if route_miles > 0:
            return truck.cost_per_mile * route_miles
        return truck.cost_per_mile

    def calculate_transport_cost(
        self,
        loads: List[TruckLoad],
        route_miles: float = 0.0,
    ) -> TransportCostBreakdown:
        """
        Calculate truck cost for every load.

        Args:
            loads: Truck loads
            route_miles: Total route miles, 0 when no route is known

        Returns:
            Detailed transport cost breakdown
        """
        breakdown = TransportCostBreakdown(
            route_miles=route_miles,
            per_mile_basis=route_miles > 0,
        )

        for load in loads:
            cost = self.load_cost(load.truck, route_miles)
            breakdown.total_cost += cost
            breakdown.cost_by_load[load.index] = cost
            breakdown.load_details.append({
                "load_index": load.index,
                "truck_id": load.truck.id,
                "cost_per_mile": load.truck.cost_per_mile,
                "units": len(load.units),
                "total_cost": cost,
            })

        return breakdown
