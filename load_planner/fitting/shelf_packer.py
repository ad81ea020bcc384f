"""Shelf packing of cargo units onto a deck.

Units are laid out front to back in shelves. Within a shelf units stand in
columns side by side across the deck (left to right); a column is one unit
on the deck with further stackable units on top of it. A shelf is as deep
as its longest unit and a column as wide as its widest unit.

Units are taken in a fixed order (item id, then unit number) and every shelf
and every column is a consecutive run of that order. Among all such layouts,
with each unit in any of its candidate orientations, the packer finds one of
least total shelf depth. Neither the order nor the layout rules depend on
unit sizes, so enlarging a unit never makes an unpackable set packable.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from load_planner.constants import MAX_SHELF_UNITS, MAX_STACK_UNITS
from load_planner.models.cargo_item import CargoUnit
from load_planner.models.fit_result import UnitPlacement
from load_planner.models.truck_type import TruckType
from .orientations import Orientation, deck_orientations

#: (orientation index, orientation) pair
Option = Tuple[int, Orientation]


class OrientationSet(str, Enum):
    """Orientations a packing pass may use."""
    AS_GIVEN = "as_given"
    UPRIGHT = "upright"
    ALL = "all"


@dataclass
class PackingOutcome:
    """
    Result of a packing attempt.

    Attributes:
        success: True when every unit was placed
        placements: Placements in packing order (for a failure, the longest
            packable leading run of units)
        failed_unit: First unit that could not be added when unsuccessful
    """
    success: bool
    placements: List[UnitPlacement] = field(default_factory=list)
    failed_unit: Optional[CargoUnit] = None


@dataclass
class _ColumnLayout:
    """Units start..end-1 stacked bottom to top with their orientations."""
    start: int
    end: int
    width: float
    options: List[Option]


@dataclass
class _ShelfLayout:
    depth: float
    width: float
    columns: List[_ColumnLayout]


def _unit_number(unit: CargoUnit) -> int:
    _, _, suffix = unit.unit_id.rpartition("#")
    return int(suffix) if suffix.isdigit() else 0


def packing_order(units: List[CargoUnit]) -> List[CargoUnit]:
    """Units sorted by item id, then unit number, then unit id."""
    return sorted(units, key=lambda u: (u.item_id, _unit_number(u), u.unit_id))


def unit_options(unit: CargoUnit, truck: TruckType, orientation_set: OrientationSet) -> List[Option]:
    """Orientations of a unit fitting the empty deck, limited to an orientation set."""
    options = []
    for index, orientation in deck_orientations(unit, truck):
        if orientation_set == OrientationSet.AS_GIVEN and index != 0:
            continue
        if orientation_set == OrientationSet.UPRIGHT and orientation[2] != unit.height:
            continue
        options.append((index, orientation))
    return options


def _lowest_within(per_unit: List[List[Option]], width_limit: float) -> Optional[List[Option]]:
    """Lowest option of each unit no wider than the limit, None if a unit has none."""
    chosen = []
    for options in per_unit:
        narrow = [option for option in options if option[1][1] <= width_limit]
        if not narrow:
            return None
        chosen.append(min(narrow, key=lambda option: (option[1][2], option[0])))
    return chosen


class _ShelfSearch:
    """
    Least-depth shelf layout of an ordered unit list.

    `best[k]` holds (total depth, start of the last shelf) of the shallowest
    layout of the first k units, or None when they don't fit the deck.
    """

    def __init__(
        self,
        units: List[CargoUnit],
        truck: TruckType,
        options: List[List[Option]],
        max_shelf_units: int,
        max_stack_units: int,
    ):
        self.units = units
        self.truck = truck
        self.options = options
        self.max_shelf_units = max_shelf_units
        self.max_stack_units = max_stack_units
        self.best: List[Optional[Tuple[float, int]]] = []
        self._columns: Dict[Tuple[int, int, float], Optional[_ColumnLayout]] = {}
        self._shelves: Dict[int, Dict[int, _ShelfLayout]] = {}

    def run(self) -> int:
        """
        Fill the prefix table.

        Returns:
            Number of leading units that fit the deck together
        """
        count = len(self.units)
        limit = self.truck.usable_length
        self.best = [None] * (count + 1)
        self.best[0] = (0.0, 0)

        for end in range(1, count + 1):
            # Later shelf starts first: on equal depth the last shelf stays short
            for start in range(end - 1, max(0, end - self.max_shelf_units) - 1, -1):
                shelf = self._shelf(start, end)
                if shelf is None:
                    continue
                total = self.best[start][0] + shelf.depth
                if total <= limit and (self.best[end] is None or total < self.best[end][0]):
                    self.best[end] = (total, start)
            if self.best[end] is None:
                return end - 1
        return count

    def layout(self, count: int) -> List[_ShelfLayout]:
        """Shelves of the best layout of the first `count` units, front to back."""
        shelves = []
        end = count
        while end > 0:
            start = self.best[end][1]
            shelves.append(self._shelves[start][end])
            end = start
        shelves.reverse()
        return shelves

    def _shelf(self, start: int, end: int) -> Optional[_ShelfLayout]:
        if start not in self._shelves:
            self._shelves[start] = self._shelf_layouts(start)
        return self._shelves[start].get(end)

    def _shelf_layouts(self, start: int) -> Dict[int, _ShelfLayout]:
        """Shallowest layout of every shelf starting at `start`, keyed by end index."""
        if not self.options[start]:
            return {}
        stop = min(len(self.units), start + self.max_shelf_units)
        floor = min(option[1][0] for option in self.options[start])
        depths = sorted({
            option[1][0]
            for index in range(start, stop)
            for option in self.options[index]
            if option[1][0] >= floor
        })

        layouts: Dict[int, _ShelfLayout] = {}
        reached = start
        for depth in depths:
            for end, layout in enumerate(self._fill_shelf(start, stop, depth), start + 1):
                if end > reached:
                    layouts[end] = layout
                    reached = end
            if reached == stop:
                break
        return layouts

    def _fill_shelf(self, start: int, stop: int, depth: float) -> List[_ShelfLayout]:
        """
        Narrowest layouts of units start..end-1 in one shelf of the given depth.

        Returns one layout per end index, from start+1 up to the first end that
        no longer fits the deck width.
        """
        narrowest: Dict[int, Tuple[float, List[_ColumnLayout]]] = {start: (0.0, [])}
        layouts = []
        for end in range(start + 1, stop + 1):
            choice = None
            for first in range(end - 1, max(start, end - self.max_stack_units) - 1, -1):
                column = self._column(first, end, depth)
                if column is None:
                    break
                width, columns = narrowest[first]
                width += column.width
                if choice is None or width < choice[0]:
                    choice = (width, columns + [column])
            if choice is None or choice[0] > self.truck.deck_width:
                break
            narrowest[end] = choice
            layouts.append(_ShelfLayout(depth=depth, width=choice[0], columns=choice[1]))
        return layouts

    def _column(self, first: int, end: int, depth: float) -> Optional[_ColumnLayout]:
        key = (first, end, depth)
        if key not in self._columns:
            self._columns[key] = self._build_column(first, end, depth)
        return self._columns[key]

    def _build_column(self, first: int, end: int, depth: float) -> Optional[_ColumnLayout]:
        """Narrowest stack of units first..end-1 within the shelf depth and deck height."""
        units = self.units[first:end]
        if len(units) > 1:
            if not all(unit.can_support() for unit in units[:-1]):
                return None
            if not all(unit.can_stack() for unit in units[1:]):
                return None

        per_unit = [
            [option for option in self.options[index] if option[1][0] <= depth]
            for index in range(first, end)
        ]
        if not all(per_unit):
            return None

        for width_limit in sorted({option[1][1] for options in per_unit for option in options}):
            chosen = _lowest_within(per_unit, width_limit)
            if chosen is None:
                continue
            if sum(option[1][2] for option in chosen) <= self.truck.deck_height:
                return _ColumnLayout(
                    start=first,
                    end=end,
                    width=max(option[1][1] for option in chosen),
                    options=chosen,
                )
        return None


class ShelfPacker:
    """
    Shelf packer for one truck deck.

    Packing is deterministic: the same units on the same truck always give
    the same placements, whatever order they are passed in. Whether a set
    packs is decided over all candidate orientations; the placements come
    from the first of as-given, upright and all orientations that packs.

    Example:
        outcome = ShelfPacker(truck).pack(units)
        if outcome.success:
            for placement in outcome.placements:
                print(placement.unit_id, placement.x, placement.y, placement.z)
    """

    def __init__(
        self,
        truck: TruckType,
        max_shelf_units: int = MAX_SHELF_UNITS,
        max_stack_units: int = MAX_STACK_UNITS,
    ):
        self.truck = truck
        self.max_shelf_units = max_shelf_units
        self.max_stack_units = max_stack_units

    def pack(self, units: List[CargoUnit]) -> PackingOutcome:
        """
        Place all units on the deck.

        Args:
            units: Units to place, any order

        Returns:
            PackingOutcome with placements, or the first unit that did not fit
        """
        ordered = packing_order(units)
        if not ordered:
            return PackingOutcome(success=True)

        search = self._search(ordered, OrientationSet.AS_GIVEN)
        if search.run() < len(ordered):
            full = self._search(ordered, OrientationSet.ALL)
            packed = full.run()
            if packed < len(ordered):
                return PackingOutcome(
                    success=False,
                    placements=self._placements(ordered, full.layout(packed)),
                    failed_unit=ordered[packed],
                )
            search = self._search(ordered, OrientationSet.UPRIGHT)
            if search.run() < len(ordered):
                search = full

        return PackingOutcome(
            success=True,
            placements=self._placements(ordered, search.layout(len(ordered))),
        )

    def _search(self, ordered: List[CargoUnit], orientation_set: OrientationSet) -> _ShelfSearch:
        options = [unit_options(unit, self.truck, orientation_set) for unit in ordered]
        return _ShelfSearch(ordered, self.truck, options, self.max_shelf_units, self.max_stack_units)

    @staticmethod
    def _placements(ordered: List[CargoUnit], shelves: List[_ShelfLayout]) -> List[UnitPlacement]:
        placements: List[UnitPlacement] = []
        x = 0.0
        for shelf_index, shelf in enumerate(shelves):
            y = 0.0
            for column in shelf.columns:
                z = 0.0
                below = None
                for unit, (index, (length, width, height)) in zip(
                    ordered[column.start:column.end], column.options
                ):
                    placements.append(UnitPlacement(
                        unit_id=unit.unit_id,
                        item_id=unit.item_id,
                        x=x,
                        y=y,
                        z=z,
                        length=length,
                        width=width,
                        height=height,
                        orientation=index,
                        rotated=index != 0,
                        shelf=shelf_index,
                        stacked_on=below,
                    ))
                    z += height
                    below = unit.unit_id
                y += column.width
            x += shelf.depth
        return placements
