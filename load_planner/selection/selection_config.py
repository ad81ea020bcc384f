"""Truck selection scoring configuration."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class SelectionWeights(BaseModel):
    """
    Weights of the truck ranking score (lower score is better).

    score = utilization * (1 - deck utilization)
          + cost * normalized cost per mile
          + permit * permit penalty

    The weights express an operator's cost-versus-compliance policy and are
    passed to the selector explicitly, never read from global state.

    Attributes:
        utilization: Weight on unused deck capacity
        cost: Weight on relative cost per mile
        permit: Weight on how far the load sits above the most permissive
            legal limits
        max_workers: Thread pool size for per-truck fit analysis (None lets
            the pool size follow the number of candidates)
    """
    utilization: float = Field(default=0.4, description="Unused capacity weight", ge=0)
    cost: float = Field(default=0.4, description="Relative cost weight", ge=0)
    permit: float = Field(default=0.2, description="Permit burden weight", ge=0)
    max_workers: Optional[int] = Field(None, description="Fit analysis worker threads", ge=1)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def validate_weights(self):
        """At least one weight must be positive."""
        if self.utilization == 0 and self.cost == 0 and self.permit == 0:
            raise ValueError("At least one selection weight must be positive")
        return self

    def __str__(self) -> str:
        """String representation."""
        return (
            f"SelectionWeights(utilization={self.utilization:g}, "
            f"cost={self.cost:g}, permit={self.permit:g})"
        )
