"""Cargo-to-deck fit analysis."""

from .fit_analyzer import FitAnalyzer, legal_exceedances, to_units
from .orientations import candidate_orientations, deck_orientations
from .shelf_packer import OrientationSet, ShelfPacker, PackingOutcome, packing_order, unit_options

__all__ = [
    "FitAnalyzer",
    "legal_exceedances",
    "to_units",
    "candidate_orientations",
    "deck_orientations",
    "OrientationSet",
    "ShelfPacker",
    "PackingOutcome",
    "packing_order",
    "unit_options",
]
