"""Truck selection: rank the trucks that can carry a cargo set.

Every candidate truck is fitted independently (in a thread pool), the
infeasible ones are dropped and the rest are ordered by a weighted score,
then by cost per mile, then by truck id.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

from load_planner.catalog.permit_rule_table import PermitRuleTable
from load_planner.constants import (
    FEDERAL_LEGAL_GROSS_WEIGHT,
    FEDERAL_LEGAL_HEIGHT,
    FEDERAL_LEGAL_LENGTH,
    FEDERAL_LEGAL_WIDTH,
)
from load_planner.fitting.fit_analyzer import CargoInput, FitAnalyzer, to_units
from load_planner.models.envelope import LoadEnvelope
from load_planner.models.fit_result import FitResult
from load_planner.models.truck_type import TruckType
from .selection_config import SelectionWeights

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredTruck:
    """
    A feasible truck with its fit and ranking score.

    Attributes:
        truck: Candidate truck type
        fit_result: Feasible fit of the cargo on this truck
        score: Weighted score, lower is better
        utilization: Deck utilization fraction used for scoring (0-1)
        normalized_cost: Cost per mile relative to the most expensive feasible truck
        permit_penalty: Relative excess over the most permissive legal limits
    """
    truck: TruckType
    fit_result: FitResult
    score: float
    utilization: float = 0.0
    normalized_cost: float = 0.0
    permit_penalty: float = 0.0

    def __str__(self) -> str:
        """String representation."""
        return (
            f"{self.truck.id}: score {self.score:.4f} "
            f"(util {self.utilization:.1%}, cost {self.normalized_cost:.2f}, "
            f"permit {self.permit_penalty:.3f})"
        )


@dataclass
class RankedSelection:
    """
    Feasible trucks in rank order, best first.

    An empty selection means no candidate can carry the cargo; it is a
    result, not an error.

    Attributes:
        entries: Ranked feasible trucks
        rejected: Infeasible fit results keyed by truck id
    """
    entries: List[ScoredTruck] = field(default_factory=list)
    rejected: Dict[str, FitResult] = field(default_factory=dict)

    @property
    def best(self) -> Optional[ScoredTruck]:
        """Top-ranked truck, None when nothing fits."""
        return self.entries[0] if self.entries else None

    @property
    def truck_ids(self) -> List[str]:
        """Truck ids in rank order."""
        return [entry.truck.id for entry in self.entries]

    def is_empty(self) -> bool:
        """Check if no candidate truck fits."""
        return len(self.entries) == 0

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ScoredTruck]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> ScoredTruck:
        return self.entries[index]

    def __str__(self) -> str:
        """String representation."""
        if not self.entries:
            return f"RankedSelection: no feasible truck ({len(self.rejected)} rejected)"
        return f"RankedSelection: {', '.join(self.truck_ids)} ({len(self.rejected)} rejected)"


def permit_penalty(envelope: LoadEnvelope, limits: LoadEnvelope) -> float:
    """
    Sum of relative excesses of an envelope over legal limits.

    Zero when the envelope is within every limit.
    """
    penalty = 0.0
    for value, limit in (
        (envelope.length, limits.length),
        (envelope.width, limits.width),
        (envelope.height, limits.height),
        (envelope.weight, limits.weight),
    ):
        if limit > 0 and value > limit:
            penalty += (value - limit) / limit
    return penalty


class TruckSelector:
    """
    Ranks candidate trucks for a cargo set.

    Example:
        selector = TruckSelector(rule_table=PermitRuleTable.default())
        selection = selector.select(items, catalog.list_types())
        if selection.is_empty():
            print("does not fit any available equipment")
        else:
            print(f"Best truck: {selection.best.truck.name}")
    """

    def __init__(
        self,
        rule_table: Optional[PermitRuleTable] = None,
        weights: Optional[SelectionWeights] = None,
        analyzer: Optional[FitAnalyzer] = None,
    ):
        """
        Initialize truck selector.

        Args:
            rule_table: Rules whose most permissive legal limits drive the
                permit penalty (federal limits when None)
            weights: Default scoring weights, overridable per call
            analyzer: Fit analyzer to use
        """
        self.weights = weights or SelectionWeights()
        self.analyzer = analyzer or FitAnalyzer()
        if rule_table is not None:
            self.permissive_limits = rule_table.most_permissive_limits()
        else:
            self.permissive_limits = LoadEnvelope(
                length=FEDERAL_LEGAL_LENGTH,
                width=FEDERAL_LEGAL_WIDTH,
                height=FEDERAL_LEGAL_HEIGHT,
                weight=FEDERAL_LEGAL_GROSS_WEIGHT,
            )

    def select(
        self,
        items: Sequence[CargoInput],
        candidates: Sequence[TruckType],
        weights: Optional[SelectionWeights] = None,
    ) -> RankedSelection:
        """
        Rank the candidate trucks that can carry the cargo.

        Args:
            items: Cargo items or units
            candidates: Truck types to consider
            weights: Scoring weights for this call (selector default if None)

        Returns:
            RankedSelection of feasible trucks, best first
        """
        weights = weights or self.weights
        if not candidates:
            logger.warning("Truck selection called with no candidate trucks")
            return RankedSelection()

        units = to_units(items)
        results = self._analyze_all(units, candidates, weights)

        feasible = []
        rejected: Dict[str, FitResult] = {}
        for truck, result in zip(candidates, results):
            if result.feasible:
                feasible.append((truck, result))
            else:
                rejected[truck.id] = result

        if not feasible:
            logger.debug(f"No feasible truck for {len(units)} units among {len(candidates)} candidates")
            return RankedSelection(rejected=rejected)

        max_cost = max(truck.cost_per_mile for truck, _ in feasible)
        entries = []
        for truck, result in feasible:
            utilization = result.utilization.score_fraction
            normalized_cost = truck.cost_per_mile / max_cost if max_cost > 0 else 0.0
            penalty = permit_penalty(result.envelope.on_truck(truck), self.permissive_limits)
            score = (
                weights.utilization * (1.0 - utilization)
                + weights.cost * normalized_cost
                + weights.permit * penalty
            )
            entries.append(ScoredTruck(
                truck=truck,
                fit_result=result,
                score=score,
                utilization=utilization,
                normalized_cost=normalized_cost,
                permit_penalty=penalty,
            ))

        entries.sort(key=lambda e: (e.score, e.truck.cost_per_mile, e.truck.id))
        selection = RankedSelection(entries=entries, rejected=rejected)
        logger.debug(f"Selected for {len(units)} units: {selection}")
        return selection

    def _analyze_all(
        self,
        units: list,
        candidates: Sequence[TruckType],
        weights: SelectionWeights,
    ) -> List[FitResult]:
        """Fit the units on every candidate, results in candidate order."""
        workers = len(candidates)
        if weights.max_workers is not None:
            workers = min(workers, weights.max_workers)
        if workers <= 1:
            return [self.analyzer.analyze(units, truck) for truck in candidates]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda truck: self.analyzer.analyze(units, truck), candidates))
