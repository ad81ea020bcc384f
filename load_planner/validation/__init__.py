"""Validation of cargo records entering the engine."""

from .cargo_validator import (
    CargoValidator,
    ValidationIssue,
    ValidationSeverity,
    DIMENSION_UNITS,
    WEIGHT_UNITS,
)

__all__ = [
    "CargoValidator",
    "ValidationIssue",
    "ValidationSeverity",
    "DIMENSION_UNITS",
    "WEIGHT_UNITS",
]
