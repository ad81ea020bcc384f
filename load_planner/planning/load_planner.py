"""Load planning: split a manifest into truck loads.

The planner works through a pool of unplaced cargo units:

1. Units that fit no candidate truck on their own are reported unplaceable.
2. If some truck carries the whole pool, that truck takes it and planning ends.
3. Otherwise the largest unit is dropped from the attempted set until the
   remaining set fits a truck. That set becomes a load, leaves the pool, and
   planning restarts on what is left.

Under the legal-only strategy every choice above is limited to trucks that
carry the cargo without permits. A unit no truck carries legally travels
alone on its best permitted truck.

With a route, every load gets its state permits and a permit cost estimate.
Every load gets a tie-down plan and a loading sequence.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from load_planner.catalog.permit_rule_table import PermitRuleTable
from load_planner.costs.permit_cost_calculator import EscortCostRates, PermitCostCalculator
from load_planner.costs.transport_cost_calculator import TransportCostCalculator
from load_planner.fitting.fit_analyzer import FitAnalyzer
from load_planner.models.cargo_item import CargoItem, CargoUnit, expand_manifest
from load_planner.models.fit_result import FitResult
from load_planner.loading.loading_instructions import loading_instructions
from load_planner.loading.securement_planner import SecurementPlanner
from load_planner.models.load_plan import UNPLACEABLE_MESSAGE, LoadPlan, PlanningStrategy, TruckLoad
from load_planner.models.route import StateSegment, route_miles
from load_planner.models.truck_type import TruckType
from load_planner.permits.permit_calculator import PermitCalculator, merge_requirements
from load_planner.selection.selection_config import SelectionWeights
from load_planner.selection.truck_selector import RankedSelection, ScoredTruck, TruckSelector
from .cancellation import CancellationToken

logger = logging.getLogger(__name__)


class PlannerState(str, Enum):
    """States of the planning loop."""
    PLANNING = "planning"
    TRUCK_FOUND = "truck_found"
    ITEM_UNPLACEABLE = "item_unplaceable"
    DONE = "done"


def planning_order(units: List[CargoUnit]) -> List[CargoUnit]:
    """Units sorted by volume, largest first, ties by unit id."""
    return sorted(units, key=lambda u: (-u.volume, u.unit_id))


class LoadPlanner:
    """
    Plans truck loads for a cargo manifest.

    Example:
        planner = LoadPlanner(PermitRuleTable.default())
        plan = planner.plan(manifest, TruckCatalog.default().list_types(), route)
        print(plan.summary())
    """

    def __init__(
        self,
        rule_table: PermitRuleTable,
        weights: Optional[SelectionWeights] = None,
        escort_rates: Optional[EscortCostRates] = None,
        analyzer: Optional[FitAnalyzer] = None,
    ):
        """
        Initialize load planner.

        Args:
            rule_table: State permit rules for permit computation and the
                selector's permit penalty
            weights: Truck selection weights
            escort_rates: Pilot car pricing for permit cost estimates
            analyzer: Fit analyzer shared with the selector
        """
        self.rule_table = rule_table
        self.analyzer = analyzer or FitAnalyzer()
        self.selector = TruckSelector(rule_table=rule_table, weights=weights, analyzer=self.analyzer)
        self.permit_calculator = PermitCalculator(rule_table)
        self.permit_cost_calculator = PermitCostCalculator(rule_table, escort_rates)
        self.transport_cost_calculator = TransportCostCalculator()
        self.securement_planner = SecurementPlanner()

    def plan(
        self,
        manifest: Sequence[CargoItem],
        candidates: Sequence[TruckType],
        route: Optional[List[StateSegment]] = None,
        cancel_token: Optional[CancellationToken] = None,
        strategy: PlanningStrategy = PlanningStrategy.RECOMMENDED,
    ) -> LoadPlan:
        """
        Plan truck loads for a manifest.

        Unplaceable cargo is part of the result, not an error.

        Args:
            manifest: Cargo items (quantities are expanded into units)
            candidates: Truck types available for this request
            route: States traversed in order with miles; None when unknown
            cancel_token: Token checked between planning steps
            strategy: How a truck is chosen from each ranked selection

        Returns:
            LoadPlan covering every unit exactly once

        Raises:
            UnknownJurisdictionError: If the route crosses a state with no rules
            PlanningCancelledError: If the token is cancelled
            ValueError: If two manifest items share an id
        """
        route = list(route or [])
        if route:
            self.permit_calculator.resolve_route(route)

        pool = planning_order(expand_manifest(list(manifest)))
        candidates = list(candidates)
        logger.info(
            f"Planning {len(pool)} units from {len(manifest)} items "
            f"on {len(candidates)} candidate trucks ({strategy.value})"
        )

        warnings: List[str] = []
        if not candidates:
            logger.warning("No candidate trucks supplied, every unit is unplaceable")
            warnings.append("No candidate trucks were supplied")

        pool, permit_only, unplaceable = self._screen_units(pool, candidates, strategy, cancel_token)

        loads: List[TruckLoad] = []
        for unit, choice in permit_only:
            loads.append(self._make_load(len(loads) + 1, choice.truck, [unit], choice.fit_result, route))
            warnings.append(f"{unit.unit_id} requires permits, no legal option")
            self._transition(PlannerState.TRUCK_FOUND, f"{choice.truck.id} takes {unit.unit_id} alone")

        prior_truck: Optional[TruckType] = None
        while pool:
            self._transition(PlannerState.PLANNING, f"{len(pool)} units in pool")
            self._check_cancelled(cancel_token, "selection")

            choice = self._choose(self.selector.select(pool, candidates), strategy)
            if choice is not None:
                loads.append(self._make_load(len(loads) + 1, choice.truck, pool, choice.fit_result, route))
                self._transition(PlannerState.TRUCK_FOUND, f"{choice.truck.id} takes all {len(pool)} units")
                pool = []
                break

            truck, subset, fit = self._reduce(pool, candidates, prior_truck, strategy, cancel_token)
            loads.append(self._make_load(len(loads) + 1, truck, subset, fit, route))
            self._transition(PlannerState.TRUCK_FOUND, f"{truck.id} takes {len(subset)} units")
            placed = {unit.unit_id for unit in subset}
            pool = [unit for unit in pool if unit.unit_id not in placed]
            prior_truck = truck

        self._transition(PlannerState.DONE, f"{len(loads)} loads, {len(unplaceable)} unplaceable")
        return self._build_plan(loads, unplaceable, route, warnings, strategy)

    def plan_options(
        self,
        manifest: Sequence[CargoItem],
        candidates: Sequence[TruckType],
        route: Optional[List[StateSegment]] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> List[LoadPlan]:
        """
        Recommended plan plus a legal-only alternative when it differs.

        The legal-only plan is offered when it needs fewer permitted loads or
        a different number of trucks than the recommended one.

        Returns:
            Plans, recommended first
        """
        recommended = self.plan(manifest, candidates, route, cancel_token)
        options = [recommended]
        if recommended.permit_load_count == 0:
            return options

        legal = self.plan(manifest, candidates, route, cancel_token, PlanningStrategy.LEGAL_ONLY)
        if (legal.permit_load_count < recommended.permit_load_count
                or legal.total_trucks != recommended.total_trucks):
            options.append(legal)
        logger.info(f"{len(options)} plan options")
        return options

    @staticmethod
    def _choose(selection: RankedSelection, strategy: PlanningStrategy) -> Optional[ScoredTruck]:
        """Best entry of a selection the strategy accepts."""
        if strategy == PlanningStrategy.LEGAL_ONLY:
            return next((entry for entry in selection if entry.fit_result.is_legal), None)
        return selection.best

    def _screen_units(
        self,
        pool: List[CargoUnit],
        candidates: List[TruckType],
        strategy: PlanningStrategy,
        cancel_token: Optional[CancellationToken],
    ):
        """
        Sort units by what can carry them alone.

        Returns:
            (units the strategy can place, (unit, permitted truck) pairs for
            units only a permitted truck carries, unplaceable units)
        """
        placeable: List[CargoUnit] = []
        permit_only = []
        unplaceable: List[CargoUnit] = []
        for unit in pool:
            self._check_cancelled(cancel_token, "screening")
            selection = self.selector.select([unit], candidates) if candidates else RankedSelection()
            if selection.is_empty():
                unplaceable.append(unit)
                self._transition(PlannerState.ITEM_UNPLACEABLE, f"{unit.unit_id} {UNPLACEABLE_MESSAGE}")
                logger.info(f"Unit {unit.unit_id} {UNPLACEABLE_MESSAGE}")
            elif self._choose(selection, strategy) is None:
                permit_only.append((unit, selection.best))
                logger.info(f"Unit {unit.unit_id} has no legal truck, using {selection.best.truck.id}")
            else:
                placeable.append(unit)
        return placeable, permit_only, unplaceable

    def _reduce(
        self,
        pool: List[CargoUnit],
        candidates: List[TruckType],
        prior_truck: Optional[TruckType],
        strategy: PlanningStrategy,
        cancel_token: Optional[CancellationToken],
    ):
        """
        Drop the largest units until the rest fits a truck.

        Each reduced set is tried on the truck of the previous load first,
        then against all candidates. Every unit in the pool fits some truck
        alone under the strategy, so the loop ends by the single smallest
        unit at the latest.

        Returns:
            (truck, units, fit result) of the first feasible subset
        """
        attempt = list(pool)
        while len(attempt) > 1:
            self._check_cancelled(cancel_token, "reduction")
            attempt = attempt[1:]

            if prior_truck is not None:
                fit = self.analyzer.analyze(attempt, prior_truck)
                accepted = fit.is_legal if strategy == PlanningStrategy.LEGAL_ONLY else fit.feasible
                if accepted:
                    return prior_truck, attempt, fit

            choice = self._choose(self.selector.select(attempt, candidates), strategy)
            if choice is not None:
                return choice.truck, attempt, choice.fit_result

        raise RuntimeError(f"Screened unit {attempt[0].unit_id} fits no candidate truck")

    def _make_load(
        self,
        index: int,
        truck: TruckType,
        units: List[CargoUnit],
        fit: FitResult,
        route: List[StateSegment],
    ) -> TruckLoad:
        by_id = {unit.unit_id: unit for unit in units}
        placed_units = [by_id[unit_id] for unit_id in fit.unit_ids]

        permits = []
        permit_cost = 0.0
        if route:
            permits = self.permit_calculator.compute_permits(fit.envelope.on_truck(truck), route)
            permit_cost = self.permit_cost_calculator.calculate_permit_cost(permits).total_cost

        load = TruckLoad(
            index=index,
            truck=truck,
            units=placed_units,
            fit=fit,
            permits=permits,
            truck_cost=self.transport_cost_calculator.load_cost(truck, route_miles(route)),
            permit_cost=permit_cost,
            securement=self.securement_planner.plan_load(placed_units),
            loading_steps=loading_instructions(placed_units, fit.placements, truck),
        )
        logger.info(f"Emitted {load}")
        return load

    def _build_plan(
        self,
        loads: List[TruckLoad],
        unplaceable: List[CargoUnit],
        route: List[StateSegment],
        warnings: List[str],
        strategy: PlanningStrategy,
    ) -> LoadPlan:
        for load in loads:
            if not load.securement.is_compliant():
                warnings.append(
                    f"Load {load.index} needs securement beyond the standard tie-down plan"
                )
            for requirement in load.permits:
                if requirement.superload:
                    warnings.append(
                        f"Load {load.index} is a superload in {requirement.state_code}, "
                        f"route survey required"
                    )
                if requirement.pole_car_required:
                    warnings.append(
                        f"Load {load.index} needs a height pole car in {requirement.state_code}"
                    )

        plan = LoadPlan(
            loads=loads,
            unplaceable=unplaceable,
            permits=merge_requirements([load.permits for load in loads], route) if route else [],
            total_estimated_cost=sum(load.truck_cost for load in loads),
            permit_cost_estimate=sum(load.permit_cost for load in loads),
            route_miles=route_miles(route),
            warnings=warnings,
            strategy=strategy,
        )
        logger.info(f"Planning finished: {plan}")
        return plan

    @staticmethod
    def _check_cancelled(cancel_token: Optional[CancellationToken], stage: str) -> None:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled(stage)

    @staticmethod
    def _transition(state: PlannerState, detail: str) -> None:
        logger.debug(f"{state.name}: {detail}")
