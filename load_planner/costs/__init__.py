"""Cost estimation for load plans.

Key components:
- TransportCostBreakdown, PermitCostBreakdown: cost component data models
- TransportCostCalculator: truck cost per load over the route
- PermitCostCalculator: permit fees and pilot car cost along the route
- EscortCostRates: pilot car pricing configuration
"""

from .cost_breakdown import TransportCostBreakdown, PermitCostBreakdown
from .transport_cost_calculator import TransportCostCalculator
from .permit_cost_calculator import PermitCostCalculator, EscortCostRates

__all__ = [
    "TransportCostBreakdown",
    "PermitCostBreakdown",
    "TransportCostCalculator",
    "PermitCostCalculator",
    "EscortCostRates",
]
