"""Cargo securement planning.

Tie-down counts and working load limits follow the 49 CFR 393 rules used by
flatbed and heavy-haul carriers:
- one tie-down per 10 ft of cargo length, never fewer than two;
- at least 4, 6 or 8 tie-downs above 10,000, 20,000 and 40,000 lbs;
- short, heavy pieces (under 5 ft, over 5,000 lbs) get at least 4;
- the aggregate working load limit must reach half the cargo weight;
- pieces over 30,000 lbs also get four direct corner chains.

Over-the-top tie-downs are rated at their angle-adjusted (cosine) working
load limit.
"""

import logging
import math
from typing import List, Sequence

from load_planner.constants import (
    CORNER_TIE_DOWN_ANGLE,
    MIN_TIE_DOWNS,
    REQUIRED_WLL_FRACTION,
    SIDE_TIE_DOWN_ANGLE,
    TIE_DOWN_SPACING,
    WLL_CHAIN_1_2,
    WLL_CHAIN_3_8,
    WLL_STRAP_2IN,
    WLL_STRAP_4IN,
)
from load_planner.models.cargo_item import CargoGeometry, CargoUnit
from load_planner.models.securement import LoadSecurement, TieDownType, UnitSecurement

logger = logging.getLogger(__name__)

#: (weight above which, minimum tie-downs) steps
WEIGHT_TIE_DOWN_STEPS = [(10_000.0, 4), (20_000.0, 6), (40_000.0, 8)]

#: Weight above which pieces get direct corner chains
CORNER_CHAIN_WEIGHT = 30_000.0

#: Pieces shorter than this and heavier than SHORT_HEAVY_WEIGHT need 4 tie-downs
SHORT_PIECE_LENGTH = 60.0
SHORT_HEAVY_WEIGHT = 5_000.0


def effective_wll(rated_wll: float, angle_degrees: float) -> float:
    """Horizontal restraint of a tie-down at an angle from horizontal (lbs)."""
    return float(round(rated_wll * math.cos(math.radians(angle_degrees))))


class SecurementPlanner:
    """
    Plans tie-downs for cargo units.

    Example:
        planner = SecurementPlanner()
        securement = planner.plan_load(load.units)
        print(securement)
    """

    def required_tie_downs(self, unit: CargoUnit) -> int:
        """Minimum tie-down count for a unit's length and weight."""
        count = max(MIN_TIE_DOWNS, math.ceil(unit.length / TIE_DOWN_SPACING))
        for threshold, minimum in WEIGHT_TIE_DOWN_STEPS:
            if unit.weight > threshold:
                count = max(count, minimum)
        if unit.length < SHORT_PIECE_LENGTH and unit.weight > SHORT_HEAVY_WEIGHT:
            count = max(count, 4)
        return count

    def tie_down_type(self, weight: float) -> TieDownType:
        """Chains above 10,000 lbs, straps below."""
        return TieDownType.CHAIN if weight > 10_000 else TieDownType.STRAP

    def tie_down_wll(self, tie_down_type: TieDownType, weight: float) -> float:
        """Rated working load limit of the equipment chosen for a weight."""
        if tie_down_type == TieDownType.CHAIN:
            return WLL_CHAIN_1_2 if weight > 20_000 else WLL_CHAIN_3_8
        return WLL_STRAP_4IN if weight > 5_000 else WLL_STRAP_2IN

    def plan_unit(self, unit: CargoUnit) -> UnitSecurement:
        """
        Tie-down plan for one unit.

        Args:
            unit: Cargo unit

        Returns:
            UnitSecurement with counts, working load limits and notes
        """
        tie_down_type = self.tie_down_type(unit.weight)
        side_wll = self.tie_down_wll(tie_down_type, unit.weight)
        side_count = self.required_tie_downs(unit)
        corner_chains = 4 if unit.weight > CORNER_CHAIN_WEIGHT else 0

        rated = side_count * side_wll + corner_chains * WLL_CHAIN_1_2
        effective = (
            side_count * effective_wll(side_wll, SIDE_TIE_DOWN_ANGLE)
            + corner_chains * effective_wll(WLL_CHAIN_1_2, CORNER_TIE_DOWN_ANGLE)
        )

        return UnitSecurement(
            unit_id=unit.unit_id,
            tie_down_type=tie_down_type,
            side_tie_downs=side_count,
            side_wll=side_wll,
            corner_chains=corner_chains,
            rated_wll=rated,
            effective_wll=effective,
            required_wll=float(math.ceil(unit.weight * REQUIRED_WLL_FRACTION)),
            notes=self._notes(unit),
        )

    def plan_load(self, units: Sequence[CargoUnit]) -> LoadSecurement:
        """Tie-down plans for every unit on a truck."""
        securement = LoadSecurement(units=[self.plan_unit(unit) for unit in units])
        if not securement.is_compliant():
            logger.warning(
                f"{len(securement.non_compliant)} units need securement beyond the standard plan"
            )
        return securement

    @staticmethod
    def _notes(unit: CargoUnit) -> List[str]:
        notes = []
        if unit.geometry == CargoGeometry.CYLINDER:
            notes.append("Chock or cradle to prevent rolling")
        if unit.weight > 20_000:
            notes.append("Heavy piece: add blocking and bracing")
        if unit.fragile:
            notes.append("Fragile: pad tie-down contact points, do not overtighten")
        notes.append("Re-tension after the first 50 miles")
        return notes
