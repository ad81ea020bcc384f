"""Load planning and truck selection engine.

Given a manifest of cargo items the engine finds which trucks can carry
them, ranks the candidates, splits the manifest across trucks when needed
and computes state-by-state oversize/overweight permits and escorts.
"""

from .catalog import PermitRuleTable, TruckCatalog
from .costs import EscortCostRates, PermitCostCalculator, TransportCostCalculator
from .exceptions import (
    CargoValidationError,
    LoadPlannerError,
    PlanningCancelledError,
    TruckNotFoundError,
    UnknownJurisdictionError,
)
from .fitting import FitAnalyzer
from .loading import SecurementPlanner
from .models import (
    CargoGeometry,
    CargoItem,
    CargoUnit,
    FitFailureReason,
    FitResult,
    LoadEnvelope,
    LoadPlan,
    LoadSecurement,
    LoadingStep,
    PermitRequirement,
    PermitType,
    StateSegment,
    TrailerCategory,
    TravelRestriction,
    TruckLoad,
    TruckType,
)
from .parsers import ReferenceDataParser
from .permits import PermitCalculator
from .planning import CancellationToken, LoadPlanner, PlannerState, PlanningStrategy
from .selection import RankedSelection, SelectionWeights, TruckSelector
from .validation import CargoValidator

__version__ = "0.1.0"

__all__ = [
    # Reference data
    "TruckCatalog",
    "PermitRuleTable",
    "ReferenceDataParser",
    # Components
    "FitAnalyzer",
    "PermitCalculator",
    "TruckSelector",
    "LoadPlanner",
    "SecurementPlanner",
    "CargoValidator",
    "TransportCostCalculator",
    "PermitCostCalculator",
    # Configuration
    "SelectionWeights",
    "EscortCostRates",
    "CancellationToken",
    "PlanningStrategy",
    # Models
    "CargoItem",
    "CargoUnit",
    "CargoGeometry",
    "TruckType",
    "TrailerCategory",
    "StateSegment",
    "LoadEnvelope",
    "FitResult",
    "FitFailureReason",
    "PermitRequirement",
    "PermitType",
    "TravelRestriction",
    "TruckLoad",
    "LoadPlan",
    "LoadSecurement",
    "LoadingStep",
    "RankedSelection",
    "PlannerState",
    # Errors
    "LoadPlannerError",
    "TruckNotFoundError",
    "UnknownJurisdictionError",
    "PlanningCancelledError",
    "CargoValidationError",
]
