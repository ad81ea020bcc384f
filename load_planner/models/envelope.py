"""Load envelope: the overall bounding size and weight of a load."""

from pydantic import BaseModel, ConfigDict, Field

from .truck_type import TruckType


class LoadEnvelope(BaseModel):
    """
    Overall bounding length, width, height and total weight of a load.

    Attributes:
        length: Overall length (in)
        width: Overall width (in)
        height: Overall height (in)
        weight: Total weight (lbs)
    """
    length: float = Field(default=0.0, description="Overall length (in)", ge=0)
    width: float = Field(default=0.0, description="Overall width (in)", ge=0)
    height: float = Field(default=0.0, description="Overall height (in)", ge=0)
    weight: float = Field(default=0.0, description="Total weight (lbs)", ge=0)

    model_config = ConfigDict(frozen=True)

    def on_truck(self, truck: TruckType) -> "LoadEnvelope":
        """
        Transport envelope of this cargo envelope loaded on a truck.

        Height is measured from the road (adds deck elevation) and weight is
        gross (adds tare weight). Length and width are the cargo's.

        Args:
            truck: Truck carrying the cargo

        Returns:
            New envelope for permit checks
        """
        return LoadEnvelope(
            length=self.length,
            width=self.width,
            height=self.height + truck.deck_elevation,
            weight=self.weight + truck.tare_weight,
        )

    def __str__(self) -> str:
        """String representation."""
        return (
            f"{self.length:g}x{self.width:g}x{self.height:g} in, "
            f"{self.weight:,.0f} lbs"
        )
