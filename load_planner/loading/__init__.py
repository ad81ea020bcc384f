"""Securement and loading instructions for planned truck loads."""

from .loading_instructions import describe_position, loading_instructions
from .securement_planner import SecurementPlanner, effective_wll

__all__ = [
    "SecurementPlanner",
    "effective_wll",
    "loading_instructions",
    "describe_position",
]
