"""State permit rule data models.

Each state publishes legal (no-permit) limits, escort-trigger bands expressed
as excess over those limits, travel restrictions and a permit fee schedule.
Dimensions are in inches, weights in pounds, fees in dollars.
"""

from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator

from load_planner.constants import (
    DEFAULT_SUPERLOAD_HEIGHT,
    DEFAULT_SUPERLOAD_LENGTH,
    DEFAULT_SUPERLOAD_WEIGHT,
    DEFAULT_SUPERLOAD_WIDTH,
)
from .permit_requirement import PermitType, TravelRestriction


class EscortBand(BaseModel):
    """
    Escort/restriction trigger for one dimension.

    A band is triggered when the load exceeds the state's legal threshold for
    `dimension` by at least `min_excess`. Example: a width band with
    min_excess=12 and escorts=1 means "+12 in over legal width needs one
    pilot car".

    Attributes:
        dimension: Permit type the band applies to
        min_excess: Excess over the legal threshold that triggers the band
        escorts: Pilot vehicles required once triggered (0-2)
        pole_car: Band requires a height pole car
        restrictions: Travel restrictions imposed once triggered
    """
    dimension: PermitType = Field(..., description="Dimension the band applies to")
    min_excess: float = Field(..., description="Triggering excess over legal limit", ge=0)
    escorts: int = Field(default=0, description="Escorts required", ge=0, le=2)
    pole_car: bool = Field(default=False, description="Height pole car required")
    restrictions: List[TravelRestriction] = Field(
        default_factory=list,
        description="Travel restrictions when triggered"
    )

    model_config = ConfigDict(frozen=True)


class PermitFeeSchedule(BaseModel):
    """Single-trip permit fees for a state (dollars)."""
    oversize_base_fee: float = Field(default=0.0, description="Oversize permit base fee", ge=0)
    overweight_base_fee: float = Field(default=0.0, description="Overweight permit base fee", ge=0)
    overweight_per_mile_fee: float = Field(default=0.0, description="Overweight fee per mile", ge=0)

    model_config = ConfigDict(frozen=True)


class SuperloadThresholds(BaseModel):
    """Absolute values at or above which a load is a superload."""
    length: float = Field(default=DEFAULT_SUPERLOAD_LENGTH, gt=0)
    width: float = Field(default=DEFAULT_SUPERLOAD_WIDTH, gt=0)
    height: float = Field(default=DEFAULT_SUPERLOAD_HEIGHT, gt=0)
    weight: float = Field(default=DEFAULT_SUPERLOAD_WEIGHT, gt=0)

    model_config = ConfigDict(frozen=True)


class StatePermitRules(BaseModel):
    """
    Permit rules for one jurisdiction.

    Attributes:
        state_code: Jurisdiction code (e.g., "TX")
        state_name: Display name
        legal_length: Legal length without permit (in)
        legal_width: Legal width without permit (in)
        legal_height: Legal overall height without permit (in)
        legal_weight: Legal gross weight without permit (lbs)
        escort_bands: Escort/restriction triggers, any order
        oversize_restrictions: Restrictions applied to every oversize permit
        fees: Single-trip fee schedule
        superload: Superload thresholds
    """
    state_code: str = Field(..., description="Jurisdiction code", min_length=1)
    state_name: str = Field(default="", description="State name")
    legal_length: float = Field(..., description="Legal length (in)", gt=0)
    legal_width: float = Field(..., description="Legal width (in)", gt=0)
    legal_height: float = Field(..., description="Legal height (in)", gt=0)
    legal_weight: float = Field(..., description="Legal gross weight (lbs)", gt=0)
    escort_bands: List[EscortBand] = Field(default_factory=list, description="Escort trigger bands")
    oversize_restrictions: List[TravelRestriction] = Field(
        default_factory=list,
        description="Restrictions for any oversize permit"
    )
    fees: PermitFeeSchedule = Field(default_factory=PermitFeeSchedule, description="Permit fees")
    superload: SuperloadThresholds = Field(
        default_factory=SuperloadThresholds,
        description="Superload thresholds"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("state_code")
    @classmethod
    def normalize_state_code(cls, v: str) -> str:
        """Upper-case and strip the state code."""
        return v.strip().upper()

    def legal_limit(self, permit_type: PermitType) -> float:
        """Legal threshold for a permit dimension."""
        return {
            PermitType.OVERSIZE_LENGTH: self.legal_length,
            PermitType.OVERSIZE_WIDTH: self.legal_width,
            PermitType.OVERSIZE_HEIGHT: self.legal_height,
            PermitType.OVERWEIGHT: self.legal_weight,
        }[permit_type]

    def superload_limit(self, permit_type: PermitType) -> float:
        """Superload threshold for a permit dimension."""
        return {
            PermitType.OVERSIZE_LENGTH: self.superload.length,
            PermitType.OVERSIZE_WIDTH: self.superload.width,
            PermitType.OVERSIZE_HEIGHT: self.superload.height,
            PermitType.OVERWEIGHT: self.superload.weight,
        }[permit_type]

    def bands_for(self, permit_type: PermitType) -> List[EscortBand]:
        """Escort bands for a dimension, ascending by triggering excess."""
        bands = [band for band in self.escort_bands if band.dimension == permit_type]
        return sorted(bands, key=lambda band: (band.min_excess, band.escorts))

    def __str__(self) -> str:
        """String representation."""
        name = self.state_name or self.state_code
        return (
            f"{name} ({self.state_code}): legal {self.legal_length:g}L x "
            f"{self.legal_width:g}W x {self.legal_height:g}H in, {self.legal_weight:,.0f} lbs"
        )
