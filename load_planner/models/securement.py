"""Securement and loading instruction data models.

This module provides the tie-down plan and loading sequence attached to each
TruckLoad. These are pure data containers, no planning logic included.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class TieDownType(str, Enum):
    """Securement equipment."""
    STRAP = "strap"
    CHAIN = "chain"


@dataclass(frozen=True)
class UnitSecurement:
    """
    Tie-down plan for one cargo unit.

    Attributes:
        unit_id: Secured unit
        tie_down_type: Equipment used for the over-the-top tie-downs
        side_tie_downs: Over-the-top tie-downs along both sides
        side_wll: Rated working load limit of each side tie-down (lbs)
        corner_chains: Direct chains at the corners of very heavy pieces
        rated_wll: Sum of rated working load limits (lbs)
        effective_wll: Sum of angle-adjusted working load limits (lbs)
        required_wll: Aggregate working load limit the piece needs (lbs)
        notes: Handling notes for the crew
    """
    unit_id: str
    tie_down_type: TieDownType
    side_tie_downs: int
    side_wll: float
    corner_chains: int = 0
    rated_wll: float = 0.0
    effective_wll: float = 0.0
    required_wll: float = 0.0
    notes: List[str] = field(default_factory=list)

    @property
    def tie_down_count(self) -> int:
        """All tie-downs on the unit."""
        return self.side_tie_downs + self.corner_chains

    @property
    def chain_count(self) -> int:
        """Chains on the unit, corner chains included."""
        side_chains = self.side_tie_downs if self.tie_down_type == TieDownType.CHAIN else 0
        return side_chains + self.corner_chains

    @property
    def strap_count(self) -> int:
        """Straps on the unit."""
        return self.side_tie_downs if self.tie_down_type == TieDownType.STRAP else 0

    @property
    def is_compliant(self) -> bool:
        """Whether the effective working load limit covers the requirement."""
        return self.effective_wll >= self.required_wll


@dataclass
class LoadSecurement:
    """Tie-down plans for every unit on one truck."""
    units: List[UnitSecurement] = field(default_factory=list)

    @property
    def total_tie_downs(self) -> int:
        return sum(unit.tie_down_count for unit in self.units)

    @property
    def total_effective_wll(self) -> float:
        return sum(unit.effective_wll for unit in self.units)

    @property
    def total_required_wll(self) -> float:
        return sum(unit.required_wll for unit in self.units)

    @property
    def chain_count(self) -> int:
        return sum(unit.chain_count for unit in self.units)

    @property
    def strap_count(self) -> int:
        return sum(unit.strap_count for unit in self.units)

    @property
    def non_compliant(self) -> List[UnitSecurement]:
        """Units whose tie-downs fall short of the required working load limit."""
        return [unit for unit in self.units if not unit.is_compliant]

    def is_compliant(self) -> bool:
        """Check if every unit is adequately secured.

        Returns:
            True if no unit falls short, False otherwise
        """
        return not self.non_compliant

    def __str__(self) -> str:
        """String representation with securement totals."""
        return (
            f"Securement: {self.total_tie_downs} tie-downs "
            f"({self.chain_count} chains, {self.strap_count} straps), "
            f"effective WLL {self.total_effective_wll:,.0f} lbs "
            f"of {self.total_required_wll:,.0f} lbs required"
        )


@dataclass(frozen=True)
class LoadingStep:
    """
    One step of the loading sequence.

    Attributes:
        sequence: Step number (1-based)
        unit_id: Unit handled, or "ALL" for the closing securement step
        action: What to do ("Load", "Stack on <unit>", "Secure")
        position: Where on the deck
        notes: Handling notes
    """
    sequence: int
    unit_id: str
    action: str
    position: str
    notes: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        """String representation."""
        text = f"{self.sequence}. {self.action} {self.unit_id}: {self.position}"
        if self.notes:
            text += f" ({'; '.join(self.notes)})"
        return text
