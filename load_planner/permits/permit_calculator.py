"""Permit calculator: state-by-state permits and escorts for a load.

Each state is evaluated on its own rules only. For every dimension the
excess over the state's legal threshold decides whether a permit is needed
and which escort bands are triggered.
"""

import logging
from typing import Dict, List, Tuple

from load_planner.catalog.permit_rule_table import PermitRuleTable
from load_planner.constants import MAX_ESCORTS
from load_planner.exceptions import UnknownJurisdictionError
from load_planner.models.envelope import LoadEnvelope
from load_planner.models.permit_requirement import (
    PERMIT_ORDER,
    RESTRICTION_ORDER,
    PermitRequirement,
    PermitType,
    escort_positions_for,
)
from load_planner.models.permit_rule import StatePermitRules
from load_planner.models.route import StateSegment

logger = logging.getLogger(__name__)

_DIMENSION_LABELS = {
    PermitType.OVERSIZE_LENGTH: ("Length", "in"),
    PermitType.OVERSIZE_WIDTH: ("Width", "in"),
    PermitType.OVERSIZE_HEIGHT: ("Height", "in"),
    PermitType.OVERWEIGHT: ("Gross weight", "lbs"),
}


def envelope_value(envelope: LoadEnvelope, permit_type: PermitType) -> float:
    """Envelope measurement checked for a permit type."""
    return {
        PermitType.OVERSIZE_LENGTH: envelope.length,
        PermitType.OVERSIZE_WIDTH: envelope.width,
        PermitType.OVERSIZE_HEIGHT: envelope.height,
        PermitType.OVERWEIGHT: envelope.weight,
    }[permit_type]


class PermitCalculator:
    """
    Computes permit requirements along a route.

    Example:
        calculator = PermitCalculator(PermitRuleTable.default())
        route = [StateSegment(state_code="TX", miles_in_state=50),
                 StateSegment(state_code="OK", miles_in_state=30)]
        for requirement in calculator.compute_permits(envelope, route):
            print(requirement)
    """

    def __init__(self, rule_table: PermitRuleTable):
        """
        Initialize permit calculator.

        Args:
            rule_table: Per-state rules to evaluate against
        """
        self.rule_table = rule_table

    def compute_permits(
        self,
        envelope: LoadEnvelope,
        route: List[StateSegment],
    ) -> List[PermitRequirement]:
        """
        Permit requirements for every state on the route that needs one.

        All state codes are resolved before anything is evaluated, so an
        unknown state aborts the whole computation. A state visited more
        than once is evaluated once with its miles summed.

        Args:
            envelope: Overall transport envelope (height from the road,
                gross weight)
            route: States in travel order

        Returns:
            Requirements in route order, only for states needing a permit

        Raises:
            UnknownJurisdictionError: If any route state has no rules
        """
        resolved = self.resolve_route(route)

        requirements = []
        for rules, miles in resolved:
            requirement = self.evaluate_state(envelope, rules, miles)
            if requirement.requires_permit:
                requirements.append(requirement)

        logger.debug(
            f"Permits for {envelope} over {len(resolved)} states: "
            f"{[r.state_code for r in requirements]}"
        )
        return requirements

    def resolve_route(self, route: List[StateSegment]) -> List[Tuple[StatePermitRules, float]]:
        """
        Look up the rules of every route state.

        Args:
            route: States in travel order

        Returns:
            (rules, miles) per distinct state in order of first visit, miles
            summed over repeat visits

        Raises:
            UnknownJurisdictionError: If any route state has no rules
        """
        rules_by_state: Dict[str, StatePermitRules] = {}
        miles_by_state: Dict[str, float] = {}
        for position, segment in enumerate(route):
            rules = self.rule_table.find(segment.state_code)
            if rules is None:
                logger.error(
                    f"Route position {position} crosses unknown jurisdiction "
                    f"'{segment.state_code}'"
                )
                raise UnknownJurisdictionError(segment.state_code, route_position=position)
            rules_by_state.setdefault(rules.state_code, rules)
            miles_by_state[rules.state_code] = (
                miles_by_state.get(rules.state_code, 0.0) + segment.miles_in_state
            )
        return [(rules, miles_by_state[code]) for code, rules in rules_by_state.items()]

    def evaluate_state(
        self,
        envelope: LoadEnvelope,
        rules: StatePermitRules,
        miles: float = 0.0,
    ) -> PermitRequirement:
        """
        Requirement for one state, depending only on that state's rules.

        Args:
            envelope: Overall transport envelope
            rules: The state's rules
            miles: Miles driven in the state

        Returns:
            PermitRequirement, possibly with no permits
        """
        permits: List[PermitType] = []
        excess: Dict[PermitType, float] = {}
        reasons: List[str] = []
        escorts = 0
        pole_car = False
        restrictions = set()
        superload = False

        for permit_type in PERMIT_ORDER:
            value = envelope_value(envelope, permit_type)
            limit = rules.legal_limit(permit_type)
            if value >= rules.superload_limit(permit_type):
                superload = True
            over = value - limit
            if over <= 0:
                continue

            permits.append(permit_type)
            excess[permit_type] = over
            label, unit = _DIMENSION_LABELS[permit_type]
            reasons.append(f"{label} {value:,.6g} {unit} exceeds {limit:,.6g} {unit} legal limit")

            for band in rules.bands_for(permit_type):
                if over < band.min_excess:
                    continue
                escorts = max(escorts, band.escorts)
                pole_car = pole_car or band.pole_car
                restrictions.update(band.restrictions)

        if any(p.is_oversize for p in permits):
            restrictions.update(rules.oversize_restrictions)

        escorts = min(escorts, MAX_ESCORTS)
        return PermitRequirement(
            state_code=rules.state_code,
            permits=permits,
            escort_count=escorts,
            escort_positions=escort_positions_for(escorts),
            travel_restrictions=[r for r in RESTRICTION_ORDER if r in restrictions],
            excess=excess,
            miles=miles,
            superload=superload and bool(permits),
            pole_car_required=pole_car,
            reasons=reasons,
        )


def merge_requirements(
    groups: List[List[PermitRequirement]],
    route: List[StateSegment],
) -> List[PermitRequirement]:
    """
    Union of several loads' requirements, one per state in route order.

    Permits, restrictions and reasons are combined; escorts, excess and
    miles take the largest value any load needs.

    Args:
        groups: Requirement lists, one per load
        route: Route the requirements were computed for

    Returns:
        Merged requirements ordered by first visit on the route
    """
    by_state: Dict[str, List[PermitRequirement]] = {}
    for requirements in groups:
        for requirement in requirements:
            by_state.setdefault(requirement.state_code, []).append(requirement)

    order: List[str] = []
    for segment in route:
        if segment.state_code not in order:
            order.append(segment.state_code)
    order += sorted(code for code in by_state if code not in order)

    merged = []
    for state_code in order:
        if state_code not in by_state:
            continue
        same_state = by_state[state_code]
        permits = {p for r in same_state for p in r.permits}
        restrictions = {t for r in same_state for t in r.travel_restrictions}
        excess: Dict[PermitType, float] = {}
        for r in same_state:
            for permit_type, amount in r.excess.items():
                excess[permit_type] = max(excess.get(permit_type, 0.0), amount)
        reasons: List[str] = []
        for r in same_state:
            reasons.extend(reason for reason in r.reasons if reason not in reasons)
        escorts = max(r.escort_count for r in same_state)

        merged.append(PermitRequirement(
            state_code=state_code,
            permits=[p for p in PERMIT_ORDER if p in permits],
            escort_count=escorts,
            escort_positions=escort_positions_for(escorts),
            travel_restrictions=[t for t in RESTRICTION_ORDER if t in restrictions],
            excess={p: excess[p] for p in PERMIT_ORDER if p in excess},
            miles=max(r.miles for r in same_state),
            superload=any(r.superload for r in same_state),
            pole_car_required=any(r.pole_car_required for r in same_state),
            reasons=reasons,
        ))
    return merged
