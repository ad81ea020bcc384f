"""Truck catalog: read-only registry of truck/trailer types."""

import logging
from typing import Dict, Iterable, List, Optional

from load_planner.exceptions import TruckNotFoundError
from load_planner.models.truck_type import TrailerCategory, TruckType
from .default_fleet import default_fleet

logger = logging.getLogger(__name__)


class TruckCatalog:
    """
    Queryable registry of TruckType records.

    The catalog is built once from reference data (the built-in fleet or a
    workbook read by ReferenceDataParser) and never mutated afterwards.

    Example:
        catalog = TruckCatalog.default()
        flatbeds = catalog.list_types(category=TrailerCategory.FLATBED)
        truck = catalog.get_by_id("flatbed-48")
    """

    def __init__(self, truck_types: Iterable[TruckType]):
        """
        Initialize catalog.

        Args:
            truck_types: Truck types in catalog order

        Raises:
            ValueError: If two truck types share an id
        """
        self._types: List[TruckType] = []
        self._by_id: Dict[str, TruckType] = {}
        for truck in truck_types:
            if truck.id in self._by_id:
                raise ValueError(f"Duplicate truck type id: {truck.id}")
            self._types.append(truck)
            self._by_id[truck.id] = truck

    @classmethod
    def default(cls) -> "TruckCatalog":
        """Catalog backed by the built-in reference fleet."""
        return cls(default_fleet())

    def list_types(
        self,
        category: Optional[TrailerCategory] = None,
        min_payload: Optional[float] = None,
        min_deck_length: Optional[float] = None,
    ) -> List[TruckType]:
        """
        List truck types matching all given filters, in catalog order.

        Args:
            category: Only this trailer family
            min_payload: Only trucks carrying at least this weight (lbs)
            min_deck_length: Only decks at least this long (in)

        Returns:
            Matching truck types (empty list if none match)
        """
        result = []
        for truck in self._types:
            if category is not None and truck.category != category:
                continue
            if min_payload is not None and truck.max_payload < min_payload:
                continue
            if min_deck_length is not None and truck.deck_length < min_deck_length:
                continue
            result.append(truck)
        return result

    def get_by_id(self, truck_id: str) -> TruckType:
        """
        Look up a truck type.

        Raises:
            TruckNotFoundError: If the id is not in the catalog
        """
        try:
            return self._by_id[truck_id]
        except KeyError:
            logger.warning(f"Unknown truck type requested: {truck_id}")
            raise TruckNotFoundError(truck_id, known_ids=list(self._by_id)) from None

    def __contains__(self, truck_id: object) -> bool:
        return truck_id in self._by_id

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self):
        return iter(self._types)

    def __str__(self) -> str:
        """String representation."""
        return f"TruckCatalog: {len(self._types)} truck types"
