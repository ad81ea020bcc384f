"""Permit requirement data model: what one state requires for a load."""

from enum import Enum
from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field


class PermitType(str, Enum):
    """Permit kinds, each triggered independently."""
    OVERSIZE_LENGTH = "oversize_length"
    OVERSIZE_WIDTH = "oversize_width"
    OVERSIZE_HEIGHT = "oversize_height"
    OVERWEIGHT = "overweight"

    @property
    def is_oversize(self) -> bool:
        """True for the three dimension permits."""
        return self is not PermitType.OVERWEIGHT


#: Canonical permit ordering used in every result
PERMIT_ORDER = [
    PermitType.OVERSIZE_LENGTH,
    PermitType.OVERSIZE_WIDTH,
    PermitType.OVERSIZE_HEIGHT,
    PermitType.OVERWEIGHT,
]


class TravelRestriction(str, Enum):
    """Movement restrictions a state imposes on permitted loads."""
    DAYLIGHT_ONLY = "daylight_only"
    NO_WEEKEND = "no_weekend"
    NO_HOLIDAY = "no_holiday"


RESTRICTION_ORDER = [
    TravelRestriction.DAYLIGHT_ONLY,
    TravelRestriction.NO_WEEKEND,
    TravelRestriction.NO_HOLIDAY,
]


class EscortPosition(str, Enum):
    """Where a pilot vehicle runs relative to the load."""
    FRONT = "front"
    REAR = "rear"


class PermitRequirement(BaseModel):
    """
    Permits, escorts and restrictions one state requires for a load.

    Attributes:
        state_code: Jurisdiction code
        permits: Permit types required, in canonical order
        escort_count: Pilot vehicles required (0, 1 or 2)
        escort_positions: FRONT for one escort, FRONT and REAR for two
        travel_restrictions: Restrictions on when the load may move
        excess: Amount over the legal threshold per permit type (in or lbs)
        miles: Miles driven in the state
        superload: Load reaches the state's superload thresholds
        pole_car_required: Height excess requires a height pole car
        reasons: Human-readable explanation per permit
    """
    state_code: str = Field(..., description="Jurisdiction code")
    permits: List[PermitType] = Field(default_factory=list, description="Required permits")
    escort_count: int = Field(default=0, description="Pilot vehicles required", ge=0, le=2)
    escort_positions: List[EscortPosition] = Field(default_factory=list, description="Escort positions")
    travel_restrictions: List[TravelRestriction] = Field(
        default_factory=list,
        description="Travel restriction flags"
    )
    excess: Dict[PermitType, float] = Field(default_factory=dict, description="Excess over legal limit")
    miles: float = Field(default=0.0, description="Miles in state", ge=0)
    superload: bool = Field(default=False, description="Superload classification")
    pole_car_required: bool = Field(default=False, description="Height pole car required")
    reasons: List[str] = Field(default_factory=list, description="Permit reasons")

    model_config = ConfigDict(frozen=True)

    @property
    def requires_permit(self) -> bool:
        """True when at least one permit is needed."""
        return len(self.permits) > 0

    @property
    def is_oversize(self) -> bool:
        """True when any dimension permit is needed."""
        return any(p.is_oversize for p in self.permits)

    @property
    def is_overweight(self) -> bool:
        """True when an overweight permit is needed."""
        return PermitType.OVERWEIGHT in self.permits

    def __str__(self) -> str:
        """String representation."""
        permits = ", ".join(p.value for p in self.permits) or "none"
        restrictions = ", ".join(r.value for r in self.travel_restrictions)
        restriction_info = f" [{restrictions}]" if restrictions else ""
        return f"{self.state_code}: {permits}; escorts={self.escort_count}{restriction_info}"


def escort_positions_for(count: int) -> List[EscortPosition]:
    """Escort positions for an escort count."""
    if count <= 0:
        return []
    if count == 1:
        return [EscortPosition.FRONT]
    return [EscortPosition.FRONT, EscortPosition.REAR]
