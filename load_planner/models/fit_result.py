"""Fit analysis result models.

This module provides the FitResult returned by the FitAnalyzer and the
placement details it carries. These are pure data containers, no fitting
logic included.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .envelope import LoadEnvelope
from .permit_requirement import PermitType


class FitFailureReason(str, Enum):
    """Why a cargo set does not fit a truck."""
    EXCEEDS_LENGTH = "exceeds_length"
    EXCEEDS_WIDTH = "exceeds_width"
    EXCEEDS_HEIGHT = "exceeds_height"
    EXCEEDS_WEIGHT = "exceeds_weight"
    EXCEEDS_AXLE_WEIGHT = "exceeds_axle_weight"


class FitFlag(str, Enum):
    """Handling notes attached to individual units of a feasible fit."""
    ROTATED = "rotated"
    IRREGULAR_APPROXIMATED = "irregular_approximated"
    CYLINDER_BOUNDING_BOX = "cylinder_bounding_box"
    OVERHANG = "overhang"


@dataclass(frozen=True)
class UnitPlacement:
    """
    Position and orientation of one unit on the deck.

    Coordinates: x runs from the front of the deck toward the rear, y from
    the left edge across the deck, z up from the deck surface.

    Attributes:
        unit_id: Placed unit
        item_id: Cargo item the unit belongs to
        x: Front edge position along the deck (in)
        y: Left edge position across the deck (in)
        z: Bottom position above the deck (in)
        length: Placed extent along the deck (in)
        width: Placed extent across the deck (in)
        height: Placed vertical extent (in)
        orientation: Index into the unit's candidate orientations (0 = as given)
        rotated: True when placed in an orientation other than as given
        shelf: Shelf index the unit's column stands in
        stacked_on: Unit directly beneath, None when on the deck
    """
    unit_id: str
    item_id: str
    x: float
    y: float
    z: float
    length: float
    width: float
    height: float
    orientation: int = 0
    rotated: bool = False
    shelf: int = 0
    stacked_on: Optional[str] = None

    @property
    def top(self) -> float:
        """Height of the unit's top above the deck."""
        return self.z + self.height

    @property
    def rear(self) -> float:
        """Rear edge position along the deck."""
        return self.x + self.length


@dataclass(frozen=True)
class FlaggedUnit:
    """A unit that needed special handling in a feasible fit."""
    unit_id: str
    flag: FitFlag
    note: str = ""


@dataclass(frozen=True)
class Utilization:
    """
    Deck utilization percentages (0-100, length may exceed 100 with overhang).

    Attributes:
        length_pct: Used length / deck length
        width_pct: Widest row / deck width
        height_pct: Tallest stack / deck height
        weight_pct: Total weight / max payload
        floor_area_pct: Floor footprint / deck area
        volume_pct: Cargo volume / deck volume
    """
    length_pct: float = 0.0
    width_pct: float = 0.0
    height_pct: float = 0.0
    weight_pct: float = 0.0
    floor_area_pct: float = 0.0
    volume_pct: float = 0.0

    @property
    def score_fraction(self) -> float:
        """Fraction (0-1) used when ranking trucks: max of floor area and weight."""
        return min(max(self.floor_area_pct, self.weight_pct) / 100.0, 1.0)


@dataclass(frozen=True)
class FitResult:
    """
    Outcome of fitting a cargo set onto one truck type.

    Attributes:
        truck_id: Truck type the cargo was fitted to
        feasible: Whether the cargo fits
        reason: Failure reason when infeasible
        detail: Human-readable explanation of the failure
        placements: Unit placements when feasible
        utilization: Deck utilization when feasible
        envelope: Cargo envelope (on-deck length/width/height, total weight)
        flagged: Units that needed special handling
        legal_exceedances: Permit types the envelope triggers against the
            truck's own legal thresholds
    """
    truck_id: str
    feasible: bool
    reason: Optional[FitFailureReason] = None
    detail: str = ""
    placements: List[UnitPlacement] = field(default_factory=list)
    utilization: Utilization = field(default_factory=Utilization)
    envelope: LoadEnvelope = field(default_factory=LoadEnvelope)
    flagged: List[FlaggedUnit] = field(default_factory=list)
    legal_exceedances: List[PermitType] = field(default_factory=list)

    @property
    def unit_ids(self) -> List[str]:
        """IDs of all placed units, in placement order."""
        return [p.unit_id for p in self.placements]

    @property
    def is_legal(self) -> bool:
        """Feasible and within the truck's no-permit thresholds."""
        return self.feasible and not self.legal_exceedances

    @classmethod
    def infeasible(cls, truck_id: str, reason: FitFailureReason, detail: str = "") -> "FitResult":
        """Build an infeasible result."""
        return cls(truck_id=truck_id, feasible=False, reason=reason, detail=detail)

    def __str__(self) -> str:
        """String representation."""
        if not self.feasible:
            return f"{self.truck_id}: does not fit ({self.reason.value}) {self.detail}".rstrip()
        return (
            f"{self.truck_id}: fits {len(self.placements)} units, "
            f"{self.utilization.floor_area_pct:.1f}% floor, "
            f"{self.utilization.weight_pct:.1f}% weight"
        )
