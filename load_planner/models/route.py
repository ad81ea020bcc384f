"""Route data model: the ordered states a load travels through."""

from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator


class StateSegment(BaseModel):
    """
    One state traversed by a route, with the miles driven in it.

    Routing and geocoding are done by the caller; the engine only reads
    the ordered list of segments.

    Attributes:
        state_code: Jurisdiction code (e.g., "TX")
        miles_in_state: Miles driven in the state
    """
    state_code: str = Field(..., description="Jurisdiction code", min_length=1)
    miles_in_state: float = Field(default=0.0, description="Miles in state", ge=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("state_code")
    @classmethod
    def normalize_state_code(cls, v: str) -> str:
        """Upper-case and strip the state code."""
        return v.strip().upper()

    def __str__(self) -> str:
        """String representation."""
        return f"{self.state_code} ({self.miles_in_state:,.0f} mi)"


def route_miles(route: List[StateSegment]) -> float:
    """Total miles across all segments."""
    return sum(segment.miles_in_state for segment in route)
