"""Permit cost calculator.

Estimates what a load's permits and escorts cost along a route:
- Oversize base fee in every state requiring an oversize permit
- Overweight base fee plus a per-mile fee for the miles driven in the state
- Pilot cars for the trip, by the day, plus a mobilization fee per vehicle
"""

import math
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from load_planner.catalog.permit_rule_table import PermitRuleTable
from load_planner.constants import (
    ESCORT_MOBILIZATION_FEE,
    OVERSIZE_AVG_SPEED_MPH,
    OVERSIZE_DRIVING_HOURS_PER_DAY,
    PILOT_CAR_DAY_RATE,
)
from load_planner.models.permit_requirement import PermitRequirement
from .cost_breakdown import PermitCostBreakdown


class EscortCostRates(BaseModel):
    """
    Pilot car pricing.

    Attributes:
        pilot_car_day_rate: Cost per escort vehicle per day
        mobilization_fee: One-off fee per escort vehicle
        average_speed_mph: Average speed of an oversize move
        driving_hours_per_day: Driving hours per day (daylight moves)
    """
    pilot_car_day_rate: float = Field(default=PILOT_CAR_DAY_RATE, description="$/vehicle/day", ge=0)
    mobilization_fee: float = Field(default=ESCORT_MOBILIZATION_FEE, description="$/vehicle", ge=0)
    average_speed_mph: float = Field(default=OVERSIZE_AVG_SPEED_MPH, description="Average mph", gt=0)
    driving_hours_per_day: float = Field(
        default=OVERSIZE_DRIVING_HOURS_PER_DAY,
        description="Driving hours per day",
        gt=0,
        le=24
    )

    model_config = ConfigDict(frozen=True)

    @property
    def miles_per_day(self) -> float:
        """Miles an escorted load covers per day."""
        return self.average_speed_mph * self.driving_hours_per_day


class PermitCostCalculator:
    """
    Estimates permit fees and escort cost from permit requirements.

    Example:
        calculator = PermitCostCalculator(PermitRuleTable.default())
        breakdown = calculator.calculate_permit_cost(requirements)
        print(f"Permits and escorts: ${breakdown.total_cost:,.2f}")
    """

    def __init__(self, rule_table: PermitRuleTable, rates: Optional[EscortCostRates] = None):
        """
        Initialize permit cost calculator.

        Args:
            rule_table: Rule table supplying each state's fee schedule
            rates: Escort pricing (defaults if None)
        """
        self.rule_table = rule_table
        self.rates = rates or EscortCostRates()

    def calculate_permit_cost(self, requirements: List[PermitRequirement]) -> PermitCostBreakdown:
        """
        Estimate fees and escort cost for one load's requirements.

        Escort vehicles are hired once for the trip: the count is the highest
        any state requires and the days cover the miles driven in states
        that require escorts, at least one day.

        Args:
            requirements: Per-state requirements from the PermitCalculator

        Returns:
            Detailed permit cost breakdown
        """
        breakdown = PermitCostBreakdown()

        for requirement in requirements:
            fees = self.rule_table.get(requirement.state_code).fees
            fee = 0.0
            if requirement.is_oversize:
                fee += fees.oversize_base_fee
            if requirement.is_overweight:
                fee += fees.overweight_base_fee + fees.overweight_per_mile_fee * requirement.miles

            breakdown.permit_fees += fee
            breakdown.cost_by_state[requirement.state_code] = fee
            if requirement.escort_count > 0:
                breakdown.escort_miles += requirement.miles
            breakdown.escort_vehicles = max(breakdown.escort_vehicles, requirement.escort_count)

            breakdown.state_details.append({
                "state_code": requirement.state_code,
                "permits": [p.value for p in requirement.permits],
                "miles": requirement.miles,
                "permit_fee": fee,
                "escort_count": requirement.escort_count,
            })

        if breakdown.escort_vehicles > 0:
            breakdown.escort_days = max(
                1, math.ceil(breakdown.escort_miles / self.rates.miles_per_day)
            )
            breakdown.escort_cost = breakdown.escort_vehicles * (
                breakdown.escort_days * self.rates.pilot_car_day_rate
                + self.rates.mobilization_fee
            )

        breakdown.total_cost = breakdown.permit_fees + breakdown.escort_cost
        return breakdown
