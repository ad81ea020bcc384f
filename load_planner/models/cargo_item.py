"""Cargo data models for load planning."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CargoGeometry(str, Enum):
    """Physical shape of a cargo piece."""
    BOX = "box"
    CYLINDER = "cylinder"
    IRREGULAR = "irregular"


class CargoUnit(BaseModel):
    """
    A single physical unit to be placed on a deck.

    Produced by expanding a CargoItem with quantity > 1 into identical units.

    Attributes:
        unit_id: Unique unit identifier ("<item id>#<n>")
        item_id: ID of the cargo item this unit came from
        length: Length in inches (the rolling axis for cylinders)
        width: Width in inches
        height: Height in inches
        weight: Weight in pounds
        geometry: Shape of the unit
        stackable: Whether the unit may be stacked and stacked upon
        fragile: Fragile units can't carry anything on top
    """
    unit_id: str = Field(..., description="Unique unit identifier")
    item_id: str = Field(..., description="Source cargo item ID")
    length: float = Field(..., description="Length (in)", gt=0)
    width: float = Field(..., description="Width (in)", gt=0)
    height: float = Field(..., description="Height (in)", gt=0)
    weight: float = Field(..., description="Weight (lbs)", gt=0)
    geometry: CargoGeometry = Field(default=CargoGeometry.BOX, description="Unit geometry")
    stackable: bool = Field(default=False, description="Can be stacked")
    fragile: bool = Field(default=False, description="Nothing may be placed on top")

    model_config = ConfigDict(frozen=True)

    @property
    def volume(self) -> float:
        """Bounding-box volume in cubic inches."""
        return self.length * self.width * self.height

    @property
    def footprint_area(self) -> float:
        """Area of the unit's base in its given orientation."""
        return self.length * self.width

    @property
    def dimensions(self) -> tuple:
        """(length, width, height) in the given orientation."""
        return (self.length, self.width, self.height)

    def can_stack(self) -> bool:
        """Whether this unit may take part in a stack at all."""
        return self.stackable and self.geometry != CargoGeometry.IRREGULAR

    def can_support(self) -> bool:
        """Whether another unit may be placed on top of this one."""
        return self.can_stack() and not self.fragile

    def __str__(self) -> str:
        """String representation."""
        return (
            f"{self.unit_id}: {self.length:g}x{self.width:g}x{self.height:g} in, "
            f"{self.weight:,.0f} lbs"
        )


class CargoItem(BaseModel):
    """
    A line of the cargo manifest.

    Attributes:
        id: Unique item identifier
        description: Optional free-text description
        length: Length in inches
        width: Width in inches
        height: Height in inches
        weight: Weight of one piece in pounds
        quantity: Number of identical pieces
        geometry: Shape of the piece (box, cylinder, irregular)
        stackable: Whether pieces may be stacked and stacked upon
        fragile: Fragile pieces can't carry anything on top
    """
    id: str = Field(..., description="Unique item identifier", min_length=1)
    description: Optional[str] = Field(None, description="Item description")
    length: float = Field(..., description="Length (in)", gt=0)
    width: float = Field(..., description="Width (in)", gt=0)
    height: float = Field(..., description="Height (in)", gt=0)
    weight: float = Field(..., description="Weight per piece (lbs)", gt=0)
    quantity: int = Field(default=1, description="Number of identical pieces", ge=1)
    geometry: CargoGeometry = Field(default=CargoGeometry.BOX, description="Item geometry")
    stackable: bool = Field(default=False, description="Can be stacked")
    fragile: bool = Field(default=False, description="Nothing may be placed on top")

    model_config = ConfigDict(frozen=True)

    @property
    def total_weight(self) -> float:
        """Weight of all pieces."""
        return self.weight * self.quantity

    @property
    def unit_volume(self) -> float:
        """Volume of a single piece in cubic inches."""
        return self.length * self.width * self.height

    def expand(self) -> List[CargoUnit]:
        """
        Expand the item into one CargoUnit per piece.

        Returns:
            List of `quantity` identical units, numbered from 1
        """
        return [
            CargoUnit(
                unit_id=f"{self.id}#{n}",
                item_id=self.id,
                length=self.length,
                width=self.width,
                height=self.height,
                weight=self.weight,
                geometry=self.geometry,
                stackable=self.stackable,
                fragile=self.fragile,
            )
            for n in range(1, self.quantity + 1)
        ]

    def __str__(self) -> str:
        """String representation."""
        label = f" ({self.description})" if self.description else ""
        return (
            f"{self.id}{label}: {self.quantity} x "
            f"{self.length:g}x{self.width:g}x{self.height:g} in, "
            f"{self.weight:,.0f} lbs each"
        )


def expand_manifest(items: List[CargoItem]) -> List[CargoUnit]:
    """
    Expand a manifest into individual cargo units.

    Args:
        items: Cargo items in manifest order

    Returns:
        Units in manifest order

    Raises:
        ValueError: If two items share an id
    """
    seen = set()
    units: List[CargoUnit] = []
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate cargo item id: {item.id}")
        seen.add(item.id)
        units.extend(item.expand())
    return units
