"""Data models for the load planning engine."""

from .cargo_item import CargoItem, CargoUnit, CargoGeometry, expand_manifest
from .truck_type import TruckType, TrailerCategory
from .route import StateSegment, route_miles
from .envelope import LoadEnvelope
from .permit_requirement import (
    PermitType,
    PermitRequirement,
    TravelRestriction,
    EscortPosition,
    PERMIT_ORDER,
    RESTRICTION_ORDER,
    escort_positions_for,
)
from .permit_rule import EscortBand, PermitFeeSchedule, SuperloadThresholds, StatePermitRules
from .fit_result import FitResult, FitFailureReason, FitFlag, FlaggedUnit, UnitPlacement, Utilization
from .securement import TieDownType, UnitSecurement, LoadSecurement, LoadingStep
from .load_plan import TruckLoad, LoadPlan, PlanningStrategy, UNPLACEABLE_MESSAGE

__all__ = [
    # Cargo
    "CargoItem",
    "CargoUnit",
    "CargoGeometry",
    "expand_manifest",
    # Equipment
    "TruckType",
    "TrailerCategory",
    # Route and envelope
    "StateSegment",
    "route_miles",
    "LoadEnvelope",
    # Permits
    "PermitType",
    "PermitRequirement",
    "TravelRestriction",
    "EscortPosition",
    "PERMIT_ORDER",
    "RESTRICTION_ORDER",
    "escort_positions_for",
    "EscortBand",
    "PermitFeeSchedule",
    "SuperloadThresholds",
    "StatePermitRules",
    # Fit results
    "FitResult",
    "FitFailureReason",
    "FitFlag",
    "FlaggedUnit",
    "UnitPlacement",
    "Utilization",
    # Securement
    "TieDownType",
    "UnitSecurement",
    "LoadSecurement",
    "LoadingStep",
    # Plans
    "TruckLoad",
    "LoadPlan",
    "PlanningStrategy",
    "UNPLACEABLE_MESSAGE",
]
