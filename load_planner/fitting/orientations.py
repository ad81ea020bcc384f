"""Candidate orientations for cargo units.

An orientation is a (length, width, height) triple: extent along the deck,
across the deck and vertically. Index 0 is always the unit as given.
"""

from typing import List, Tuple

from load_planner.models.cargo_item import CargoGeometry, CargoUnit
from load_planner.models.truck_type import TruckType

Orientation = Tuple[float, float, float]


def candidate_orientations(unit: CargoUnit) -> List[Orientation]:
    """
    Orientations a unit may be placed in, in preference order.

    Boxes may take any of the six axis-aligned rotations. Cylinders keep
    their rolling axis (length) horizontal, which leaves four. Irregular
    units are never rotated.

    Args:
        unit: Cargo unit

    Returns:
        Distinct orientations, the given one first
    """
    l, w, h = unit.length, unit.width, unit.height
    if unit.geometry == CargoGeometry.IRREGULAR:
        return [(l, w, h)]

    rotations = [(l, w, h), (w, l, h), (l, h, w), (h, l, w)]
    if unit.geometry == CargoGeometry.BOX:
        rotations += [(w, h, l), (h, w, l)]

    distinct: List[Orientation] = []
    for rotation in rotations:
        if rotation not in distinct:
            distinct.append(rotation)
    return distinct


def fits_deck(orientation: Orientation, truck: TruckType) -> bool:
    """Whether a single oriented unit fits the empty deck."""
    length, width, height = orientation
    return (
        length <= truck.usable_length
        and width <= truck.deck_width
        and height <= truck.deck_height
    )


def deck_orientations(unit: CargoUnit, truck: TruckType) -> List[Tuple[int, Orientation]]:
    """
    Orientations of a unit that fit the empty deck, with their indices.

    Returns:
        (orientation index, orientation) pairs in preference order
    """
    return [
        (index, orientation)
        for index, orientation in enumerate(candidate_orientations(unit))
        if fits_deck(orientation, truck)
    ]
