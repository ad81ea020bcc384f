"""Truck and trailer configuration data model."""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from load_planner.constants import (
    FEDERAL_LEGAL_GROSS_WEIGHT,
    FEDERAL_LEGAL_HEIGHT,
    FEDERAL_LEGAL_WIDTH,
)


class TrailerCategory(str, Enum):
    """Trailer family."""
    FLATBED = "flatbed"
    STEP_DECK = "step_deck"
    LOWBOY = "lowboy"
    DOUBLE_DROP = "double_drop"
    RGN = "rgn"
    CONTAINER_CHASSIS = "container_chassis"
    CONESTOGA = "conestoga"
    DRY_VAN = "dry_van"
    LANDOLL = "landoll"
    MULTI_AXLE = "multi_axle"
    OTHER = "other"


class TruckType(BaseModel):
    """
    A truck/trailer configuration that can carry cargo.

    Reference data: owned by the TruckCatalog and never mutated by the engine.

    Attributes:
        id: Unique truck type identifier
        name: Display name
        category: Trailer family
        deck_length: Usable deck length (in)
        deck_width: Usable deck width (in)
        deck_height: Maximum cargo height above the deck (in)
        max_payload: Maximum cargo weight (lbs)
        legal_length: Cargo length that needs no permit (in)
        legal_width: Cargo width that needs no permit (in)
        legal_height: Cargo height above the deck that needs no permit (in)
        legal_weight: Cargo weight that needs no permit (lbs)
        axle_count: Number of load-bearing axles
        axle_weight_limit: Maximum weight a single piece may put on one axle (lbs)
        cost_per_mile: Relative base cost per mile
        deck_elevation: Height of the deck surface above the road (in)
        tare_weight: Empty weight of trailer and power unit (lbs)
        max_overhang: Rear overhang allowed beyond the deck (in)
    """
    id: str = Field(..., description="Unique truck type identifier", min_length=1)
    name: str = Field(..., description="Display name")
    category: TrailerCategory = Field(..., description="Trailer family")
    deck_length: float = Field(..., description="Deck length (in)", gt=0)
    deck_width: float = Field(..., description="Deck width (in)", gt=0)
    deck_height: float = Field(..., description="Cargo height capacity (in)", gt=0)
    max_payload: float = Field(..., description="Maximum cargo weight (lbs)", gt=0)
    legal_length: float = Field(..., description="No-permit cargo length (in)", gt=0)
    legal_width: float = Field(..., description="No-permit cargo width (in)", gt=0)
    legal_height: float = Field(..., description="No-permit cargo height (in)", gt=0)
    legal_weight: float = Field(..., description="No-permit cargo weight (lbs)", gt=0)
    axle_count: int = Field(default=2, description="Load-bearing axles", ge=1)
    axle_weight_limit: Optional[float] = Field(
        None,
        description="Per-axle weight limit (lbs), None for no check",
        gt=0
    )
    cost_per_mile: float = Field(default=0.0, description="Base cost per mile", ge=0)
    deck_elevation: float = Field(default=0.0, description="Deck height above road (in)", ge=0)
    tare_weight: float = Field(default=0.0, description="Trailer + power unit weight (lbs)", ge=0)
    max_overhang: float = Field(default=0.0, description="Allowed rear overhang (in)", ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def fill_legal_thresholds(cls, data: Any) -> Any:
        """Default omitted legal thresholds from federal limits."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        elevation = float(data.get("deck_elevation") or 0.0)
        tare = float(data.get("tare_weight") or 0.0)
        if data.get("legal_length") is None and data.get("deck_length") is not None:
            data["legal_length"] = data["deck_length"]
        if data.get("legal_width") is None:
            data["legal_width"] = FEDERAL_LEGAL_WIDTH
        if data.get("legal_height") is None:
            data["legal_height"] = max(FEDERAL_LEGAL_HEIGHT - elevation, 1.0)
        if data.get("legal_weight") is None:
            data["legal_weight"] = max(FEDERAL_LEGAL_GROSS_WEIGHT - tare, 1.0)
        return data

    @property
    def deck_area(self) -> float:
        """Deck floor area in square inches."""
        return self.deck_length * self.deck_width

    @property
    def deck_volume(self) -> float:
        """Deck cargo volume in cubic inches."""
        return self.deck_length * self.deck_width * self.deck_height

    @property
    def usable_length(self) -> float:
        """Deck length plus allowed overhang."""
        return self.deck_length + self.max_overhang

    def __str__(self) -> str:
        """String representation."""
        return (
            f"{self.name} ({self.id}) [{self.category.value}]: "
            f"{self.deck_length:g}x{self.deck_width:g}x{self.deck_height:g} in, "
            f"{self.max_payload:,.0f} lbs"
        )
