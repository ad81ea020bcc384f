"""State permit and escort computation."""

from .permit_calculator import PermitCalculator, envelope_value, merge_requirements

__all__ = [
    "PermitCalculator",
    "envelope_value",
    "merge_requirements",
]
