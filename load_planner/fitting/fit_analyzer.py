"""Fit analysis: does a cargo set fit a truck, and how.

The analyzer screens each unit against the empty deck, checks weights, then
runs the shelf packer. It never raises for infeasible cargo: the outcome is
a FitResult with `feasible=False` and a reason code.
"""

import logging
from typing import List, Sequence, Union

from load_planner.models.cargo_item import CargoGeometry, CargoItem, CargoUnit
from load_planner.models.envelope import LoadEnvelope
from load_planner.models.fit_result import (
    FitFailureReason,
    FitFlag,
    FitResult,
    FlaggedUnit,
    UnitPlacement,
    Utilization,
)
from load_planner.models.permit_requirement import PERMIT_ORDER, PermitType
from load_planner.models.truck_type import TruckType
from .orientations import candidate_orientations
from .shelf_packer import ShelfPacker

logger = logging.getLogger(__name__)

CargoInput = Union[CargoItem, CargoUnit]


def to_units(items: Sequence[CargoInput]) -> List[CargoUnit]:
    """Quantity-expand CargoItems; CargoUnits pass through unchanged."""
    units: List[CargoUnit] = []
    for item in items:
        if isinstance(item, CargoItem):
            units.extend(item.expand())
        else:
            units.append(item)
    return units


class FitAnalyzer:
    """
    Decides whether cargo fits a truck deck.

    Checks run in order and stop at the first failure:
    1. Empty cargo is trivially feasible.
    2. Each unit must fit the empty deck in some orientation.
    3. No unit may exceed the truck's per-axle weight limit.
    4. Total weight must not exceed the truck's payload.
    5. The shelf packer must place every unit.

    Example:
        analyzer = FitAnalyzer()
        result = analyzer.analyze(items, truck)
        if result.feasible:
            print(f"{result.utilization.weight_pct:.1f}% of payload used")
        else:
            print(f"Does not fit: {result.reason.value}")
    """

    def analyze(self, items: Sequence[CargoInput], truck: TruckType) -> FitResult:
        """
        Fit cargo onto one truck type.

        Args:
            items: Cargo items (quantity-expanded here) or units
            truck: Truck type to fit onto

        Returns:
            FitResult, feasible or with a failure reason
        """
        units = to_units(items)
        if not units:
            return FitResult(truck_id=truck.id, feasible=True)

        for unit in units:
            failure = self._screen_unit(unit, truck)
            if failure is not None:
                logger.debug(f"{unit.unit_id} can't fit {truck.id}: {failure.detail}")
                return failure

        if truck.axle_weight_limit is not None:
            for unit in units:
                if unit.weight > truck.axle_weight_limit:
                    return FitResult.infeasible(
                        truck.id,
                        FitFailureReason.EXCEEDS_AXLE_WEIGHT,
                        f"{unit.unit_id} weighs {unit.weight:,.0f} lbs, "
                        f"axle limit {truck.axle_weight_limit:,.0f} lbs",
                    )

        total_weight = sum(unit.weight for unit in units)
        if total_weight > truck.max_payload:
            return FitResult.infeasible(
                truck.id,
                FitFailureReason.EXCEEDS_WEIGHT,
                f"total {total_weight:,.0f} lbs exceeds payload {truck.max_payload:,.0f} lbs",
            )

        outcome = ShelfPacker(truck).pack(units)
        if not outcome.success:
            logger.debug(
                f"Shelf packing failed on {truck.id} at {outcome.failed_unit.unit_id} "
                f"({len(outcome.placements)}/{len(units)} placed)"
            )
            return FitResult.infeasible(
                truck.id,
                FitFailureReason.EXCEEDS_LENGTH,
                f"{outcome.failed_unit.unit_id} does not fit within "
                f"{truck.usable_length:g} in of deck",
            )

        return self._build_result(units, outcome.placements, truck)

    def _screen_unit(self, unit: CargoUnit, truck: TruckType):
        """Infeasible result when the unit fits the empty deck in no orientation."""
        orientations = candidate_orientations(unit)

        if not any(w <= truck.deck_width for _, w, _ in orientations):
            return FitResult.infeasible(
                truck.id,
                FitFailureReason.EXCEEDS_WIDTH,
                f"{unit.unit_id} is wider than the {truck.deck_width:g} in deck in every orientation",
            )
        if not any(w <= truck.deck_width and h <= truck.deck_height for _, w, h in orientations):
            return FitResult.infeasible(
                truck.id,
                FitFailureReason.EXCEEDS_HEIGHT,
                f"{unit.unit_id} is taller than {truck.deck_height:g} in in every orientation "
                f"that fits the deck width",
            )
        if not any(
            l <= truck.usable_length and w <= truck.deck_width and h <= truck.deck_height
            for l, w, h in orientations
        ):
            return FitResult.infeasible(
                truck.id,
                FitFailureReason.EXCEEDS_LENGTH,
                f"{unit.unit_id} is longer than {truck.usable_length:g} in",
            )
        return None

    def _build_result(
        self,
        units: List[CargoUnit],
        placements: List[UnitPlacement],
        truck: TruckType,
    ) -> FitResult:
        by_id = {unit.unit_id: unit for unit in units}

        total_weight = sum(unit.weight for unit in units)
        envelope = LoadEnvelope(
            length=max(p.rear for p in placements),
            width=max(p.y + p.width for p in placements),
            height=max(p.top for p in placements),
            weight=total_weight,
        )

        floor_area = sum(p.length * p.width for p in placements if p.z == 0)
        cargo_volume = sum(unit.volume for unit in units)
        utilization = Utilization(
            length_pct=envelope.length / truck.deck_length * 100,
            width_pct=envelope.width / truck.deck_width * 100,
            height_pct=envelope.height / truck.deck_height * 100,
            weight_pct=total_weight / truck.max_payload * 100,
            floor_area_pct=floor_area / truck.deck_area * 100,
            volume_pct=cargo_volume / truck.deck_volume * 100,
        )

        flagged: List[FlaggedUnit] = []
        for placement in placements:
            unit = by_id[placement.unit_id]
            if placement.rotated:
                flagged.append(FlaggedUnit(
                    unit.unit_id, FitFlag.ROTATED,
                    f"placed as {placement.length:g}x{placement.width:g}x{placement.height:g} in",
                ))
            if unit.geometry == CargoGeometry.IRREGULAR:
                flagged.append(FlaggedUnit(
                    unit.unit_id, FitFlag.IRREGULAR_APPROXIMATED,
                    "treated as a non-stackable bounding box",
                ))
            elif unit.geometry == CargoGeometry.CYLINDER:
                flagged.append(FlaggedUnit(
                    unit.unit_id, FitFlag.CYLINDER_BOUNDING_BOX,
                    "placed as its bounding box, rolling axis horizontal",
                ))
            if placement.rear > truck.deck_length:
                flagged.append(FlaggedUnit(
                    unit.unit_id, FitFlag.OVERHANG,
                    f"overhangs the deck by {placement.rear - truck.deck_length:g} in",
                ))

        result = FitResult(
            truck_id=truck.id,
            feasible=True,
            placements=placements,
            utilization=utilization,
            envelope=envelope,
            flagged=flagged,
            legal_exceedances=legal_exceedances(envelope, truck),
        )
        logger.debug(f"Fit on {truck.id}: {result}")
        return result


def legal_exceedances(envelope: LoadEnvelope, truck: TruckType) -> List[PermitType]:
    """Permit types a cargo envelope triggers against a truck's legal thresholds."""
    values = {
        PermitType.OVERSIZE_LENGTH: (envelope.length, truck.legal_length),
        PermitType.OVERSIZE_WIDTH: (envelope.width, truck.legal_width),
        PermitType.OVERSIZE_HEIGHT: (envelope.height, truck.legal_height),
        PermitType.OVERWEIGHT: (envelope.weight, truck.legal_weight),
    }
    return [pt for pt in PERMIT_ORDER if values[pt][0] > values[pt][1]]
