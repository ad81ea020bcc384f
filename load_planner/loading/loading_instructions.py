"""Loading sequence for a planned truck load.

Units go on from the rear of the deck forward, floor before stack, left to
right. The sequence closes with a step securing the whole load.
"""

from typing import Dict, List, Sequence

from load_planner.models.cargo_item import CargoUnit
from load_planner.models.fit_result import UnitPlacement
from load_planner.models.securement import LoadingStep
from load_planner.models.truck_type import TruckType


def describe_position(placement: UnitPlacement, layer: int, truck: TruckType) -> str:
    """Deck position in crew terms, e.g. "front, driver side, on deck"."""
    along = placement.x + placement.length / 2
    if along < truck.deck_length / 3:
        lengthwise = "front"
    elif along > truck.deck_length * 2 / 3:
        lengthwise = "rear"
    else:
        lengthwise = "middle"

    across = placement.y + placement.width / 2
    if across < truck.deck_width / 3:
        side = "driver side"
    elif across > truck.deck_width * 2 / 3:
        side = "passenger side"
    else:
        side = "center"

    level = "on deck" if layer == 0 else f"layer {layer + 1}"
    return f"{lengthwise}, {side}, {level}"


def loading_instructions(
    units: Sequence[CargoUnit],
    placements: Sequence[UnitPlacement],
    truck: TruckType,
) -> List[LoadingStep]:
    """
    Step-by-step loading sequence.

    Args:
        units: Units on the truck
        placements: Their placements from the fit
        truck: Truck carrying them

    Returns:
        One step per placement in loading order, then a closing "Secure" step
    """
    by_id = {unit.unit_id: unit for unit in units}
    ordered = sorted(placements, key=lambda p: (-p.x, p.z, p.y, p.unit_id))

    layers: Dict[str, int] = {}
    steps: List[LoadingStep] = []
    for sequence, placement in enumerate(ordered, 1):
        unit = by_id[placement.unit_id]
        layer = layers[placement.stacked_on] + 1 if placement.stacked_on else 0
        layers[placement.unit_id] = layer

        notes = []
        if placement.rotated:
            notes.append(
                f"turned to {placement.length:g}x{placement.width:g}x{placement.height:g} in"
            )
        if unit.fragile:
            notes.append("fragile, handle with care")
        if not unit.can_support():
            notes.append("nothing goes on top")

        steps.append(LoadingStep(
            sequence=sequence,
            unit_id=placement.unit_id,
            action=f"Stack on {placement.stacked_on}" if placement.stacked_on else "Load",
            position=describe_position(placement, layer, truck),
            notes=notes,
        ))

    if steps:
        steps.append(LoadingStep(
            sequence=len(steps) + 1,
            unit_id="ALL",
            action="Secure",
            position="entire load",
            notes=["check tie-downs against the securement plan"],
        ))
    return steps
