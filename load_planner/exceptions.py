"""Exceptions raised by the load planning engine.

Only programmer and reference-data errors are raised. Infeasible fits and
unplaceable cargo are reported as data on the returned results.
"""

from typing import Dict, Optional


class LoadPlannerError(Exception):
    """Base exception for load planning errors with context."""

    def __init__(self, message: str, context: Optional[Dict] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with context."""
        msg = self.message
        if self.context:
            msg += "\n\nContext:"
            for key, value in self.context.items():
                msg += f"\n  {key}: {value}"
        return msg


class TruckNotFoundError(LoadPlannerError):
    """Raised when a truck type id is not in the catalog."""

    def __init__(self, truck_id: str, known_ids: Optional[list] = None):
        self.truck_id = truck_id
        context = {"truck_id": truck_id}
        if known_ids is not None:
            context["known_ids"] = ", ".join(known_ids)
        super().__init__(f"Truck type not found: {truck_id}", context)


class UnknownJurisdictionError(LoadPlannerError):
    """Raised when a route crosses a state with no permit rules.

    Permits can't be skipped for an unrecognized state, so quoting must stop
    until the rule table is updated.
    """

    def __init__(self, state_code: str, route_position: Optional[int] = None):
        self.state_code = state_code
        context = {"state_code": state_code}
        if route_position is not None:
            context["route_position"] = route_position
        super().__init__(f"No permit rules for jurisdiction '{state_code}'", context)


class PlanningCancelledError(LoadPlannerError):
    """Raised when the caller cancels a planning request."""

    def __init__(self, stage: str = "planning"):
        super().__init__("Load planning cancelled", {"stage": stage})


class CargoValidationError(LoadPlannerError):
    """Raised when extracted cargo items fail validation."""

    def __init__(self, message: str, issues: Optional[list] = None):
        self.issues = issues or []
        context = {}
        if self.issues:
            context["issues"] = "; ".join(str(issue) for issue in self.issues)
        super().__init__(message, context)
